"""Conversation entity."""

from dataclasses import dataclass, field, replace

from parley.domain.entities.turn import Role, Turn


@dataclass(frozen=True)
class Conversation:
    """Ordered turn history of one user.

    Instances are immutable; every mutation returns a new Conversation,
    which lets callers keep a snapshot and put it back.

    Attributes:
        user_id: Identity of the user the conversation belongs to.
        turns: Turns in append order. The first turn is the system preamble.
        token_usage: total_tokens reported by the latest completion made
            for this conversation.
    """

    user_id: str
    turns: tuple[Turn, ...] = field(default_factory=tuple)
    token_usage: int = 0

    @classmethod
    def start(cls, user_id: str, system_prompt: str) -> "Conversation":
        """Create a conversation holding only the system preamble.

        Args:
            user_id: User identity.
            system_prompt: Rendered system preamble.

        Returns:
            New Conversation with one system turn.
        """
        return cls(user_id=user_id, turns=(Turn(Role.SYSTEM, system_prompt),))

    def append(self, turn: Turn) -> "Conversation":
        """Return a copy with the turn appended."""
        return replace(self, turns=(*self.turns, turn))

    def with_token_usage(self, total_tokens: int) -> "Conversation":
        """Return a copy with the token usage replaced."""
        return replace(self, token_usage=total_tokens)

    def to_messages(self) -> list[dict[str, str]]:
        """Convert turns to OpenAI-format messages."""
        return [turn.to_dict() for turn in self.turns]

    def serialize(self) -> str:
        """Serialize the whole history as "{role}: {content}" lines."""
        return "".join(turn.serialize() for turn in self.turns)

    def __len__(self) -> int:
        return len(self.turns)
