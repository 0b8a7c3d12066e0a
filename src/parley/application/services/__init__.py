"""Application services."""

from parley.application.services.attachment_summarizer import AttachmentSummarizer
from parley.application.services.conversation_store import (
    ConversationStore,
    UserLockRegistry,
)
from parley.application.services.message_normalizer import MessageNormalizer

__all__ = [
    "AttachmentSummarizer",
    "ConversationStore",
    "MessageNormalizer",
    "UserLockRegistry",
]
