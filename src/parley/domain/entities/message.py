"""Direct message entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from parley.domain.entities.user import User


@dataclass(frozen=True)
class Attachment:
    """File attached to a message.

    Attributes:
        name: File name.
        url: Where the file can be downloaded.
        content_type: Declared MIME type.
        size: Size in bytes.
    """

    name: str
    url: str
    content_type: str | None = None
    size: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Metadata record embedded in the prompt."""
        return {
            "name": self.name,
            "url": self.url,
            "contentType": self.content_type,
            "size": self.size,
        }


@dataclass(frozen=True)
class DirectMessage:
    """One inbound direct message.

    Attributes:
        id: Platform-specific message ID.
        channel_id: Direct-message channel to reply in.
        user: Author.
        text: Message text with platform markup removed.
        timestamp: When the message was sent.
        attachments: Attached files in platform order.
    """

    id: str
    channel_id: str
    user: User
    text: str
    timestamp: datetime
    attachments: tuple[Attachment, ...] = field(default_factory=tuple)
