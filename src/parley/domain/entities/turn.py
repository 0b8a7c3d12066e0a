"""Turn entity."""

from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    """Role of a turn in a conversation."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Turn:
    """One role-tagged message in a conversation.

    Attributes:
        role: Who produced the turn.
        content: Text of the turn.
    """

    role: Role
    content: str

    def to_dict(self) -> dict[str, str]:
        """Convert to an OpenAI-format message.

        Returns:
            {"role": ..., "content": ...} dict.
        """
        return {"role": self.role.value, "content": self.content}

    def serialize(self) -> str:
        """Serialize as a single "{role}: {content}" transcript line."""
        return f"{self.role.value}: {self.content}\n"
