"""Domain services."""

from parley.domain.services.annotation import AnnotationSummary, trim_annotation
from parley.domain.services.protocols import (
    CompletionClient,
    ContentFetcher,
    ConversationSummarizer,
    ImageAnnotator,
    MessagingService,
    ObjectStorage,
    Transcriber,
)
from parley.domain.services.reply_chunker import ReplyChunks, chunk_reply

__all__ = [
    "AnnotationSummary",
    "CompletionClient",
    "ContentFetcher",
    "ConversationSummarizer",
    "ImageAnnotator",
    "MessagingService",
    "ObjectStorage",
    "ReplyChunks",
    "Transcriber",
    "chunk_reply",
    "trim_annotation",
]
