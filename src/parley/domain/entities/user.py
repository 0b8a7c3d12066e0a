"""User entity."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class User:
    """User entity (platform-independent).

    Attributes:
        id: Platform-specific user ID.
        name: Display name.
        is_bot: Whether the user is a bot.
        profile: Raw identity record from the platform, given to the model
            as JSON.
    """

    id: str
    name: str
    is_bot: bool = False
    profile: dict[str, Any] = field(default_factory=dict, hash=False, compare=False)

    def identity(self) -> dict[str, Any]:
        """Identity record used in prompts.

        Returns:
            The platform profile, or a minimal record if none is known.
        """
        if self.profile:
            return self.profile
        return {"id": self.id, "name": self.name, "is_bot": self.is_bot}
