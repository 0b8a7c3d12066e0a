"""LLM-based conversation summarizer implementation."""

import logging

from parley.domain.entities import Conversation
from parley.infrastructure.llm.client import LLMClient
from parley.infrastructure.llm.templates import create_jinja_env

logger = logging.getLogger(__name__)


class LLMConversationSummarizer:
    """Condenses a conversation into a few paragraphs with the LLM."""

    def __init__(self, client: LLMClient, max_paragraphs: int = 5) -> None:
        """Initialize the summarizer.

        Args:
            client: LLM client for text generation.
            max_paragraphs: Upper bound on the summary length.
        """
        self._client = client
        self._max_paragraphs = max_paragraphs
        self._template = create_jinja_env().get_template(
            "summarize_conversation.j2"
        )

    async def summarize(self, conversation: Conversation) -> str:
        """Summarize the whole history of a conversation.

        The summary keeps any request made in the latest user message so the
        next reply can still answer it.

        Args:
            conversation: Conversation to condense.

        Returns:
            Summary text.

        Raises:
            LLMError: If the completion fails.
        """
        prompt = self._template.render(
            transcript=conversation.serialize(),
            max_paragraphs=self._max_paragraphs,
        )
        logger.info(
            "Summarizing conversation: user=%s turns=%d tokens=%d",
            conversation.user_id,
            len(conversation),
            conversation.token_usage,
        )
        result = await self._client.complete([{"role": "user", "content": prompt}])
        return result.text.strip()
