"""LLM integration."""

from parley.infrastructure.llm.client import LLMClient
from parley.infrastructure.llm.conversation_summarizer import (
    LLMConversationSummarizer,
)
from parley.infrastructure.llm.exceptions import (
    LLMAuthenticationError,
    LLMError,
    LLMRateLimitError,
    LLMTimeoutError,
)
from parley.infrastructure.llm.prompt_builder import SystemPromptBuilder

__all__ = [
    "LLMAuthenticationError",
    "LLMClient",
    "LLMConversationSummarizer",
    "LLMError",
    "LLMRateLimitError",
    "LLMTimeoutError",
    "SystemPromptBuilder",
]
