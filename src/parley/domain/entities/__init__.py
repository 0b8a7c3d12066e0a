"""Domain entities."""

from parley.domain.entities.conversation import Conversation
from parley.domain.entities.fetched_content import FetchedContent
from parley.domain.entities.llm_result import CompletionResult
from parley.domain.entities.message import Attachment, DirectMessage
from parley.domain.entities.normalized_input import NormalizedInput
from parley.domain.entities.turn import Role, Turn
from parley.domain.entities.user import User

__all__ = [
    "Attachment",
    "CompletionResult",
    "Conversation",
    "DirectMessage",
    "FetchedContent",
    "NormalizedInput",
    "Role",
    "Turn",
    "User",
]
