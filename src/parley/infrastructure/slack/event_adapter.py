"""Slack event adapter."""

import re
from datetime import datetime, timezone
from typing import Any

from slack_sdk.web.async_client import AsyncWebClient

from parley.domain.entities import Attachment, DirectMessage, User

# <https://example.com|label> or <https://example.com>
LINK_MARKUP_PATTERN = re.compile(r"<(https?://[^|>]+)(?:\|[^>]*)?>")

_HTML_ENTITIES = (("&lt;", "<"), ("&gt;", ">"), ("&amp;", "&"))


def unwrap_slack_markup(text: str) -> str:
    """Convert Slack message markup back to plain text.

    Link markup is replaced by the bare URL and the three characters Slack
    escapes are restored.

    Args:
        text: Text as received from Slack.

    Returns:
        Plain text.
    """
    text = LINK_MARKUP_PATTERN.sub(r"\1", text)
    for entity, char in _HTML_ENTITIES:
        text = text.replace(entity, char)
    return text


class SlackEventAdapter:
    """Convert Slack events to domain entities.

    This adapter translates Slack-specific event payloads into
    platform-independent domain entities. It also caches user
    information to minimize Slack API calls.
    """

    def __init__(self, client: AsyncWebClient) -> None:
        """Initialize the adapter.

        Args:
            client: Slack AsyncWebClient for fetching user info.
        """
        self._client = client
        self._users: dict[str, User] = {}

    async def to_message(self, event: dict[str, Any]) -> DirectMessage:
        """Convert a Slack message event to a DirectMessage entity.

        Args:
            event: Slack message event payload.

        Returns:
            DirectMessage entity.
        """
        user = await self._get_or_fetch_user(event["user"])
        ts = event["ts"]
        timestamp = datetime.fromtimestamp(float(ts), tz=timezone.utc)

        return DirectMessage(
            id=ts,
            channel_id=event["channel"],
            user=user,
            text=unwrap_slack_markup(event.get("text", "")),
            timestamp=timestamp,
            attachments=self.to_attachments(event.get("files", [])),
        )

    def to_attachments(self, files: list[dict[str, Any]]) -> tuple[Attachment, ...]:
        """Convert Slack file objects to attachments.

        Files without a download URL (deleted or hidden) are skipped.

        Args:
            files: "files" list of a message event.

        Returns:
            Attachments in the order Slack lists them.
        """
        attachments = []
        for file in files:
            url = file.get("url_private_download") or file.get("url_private")
            if not url:
                continue
            attachments.append(
                Attachment(
                    name=file.get("name") or file.get("title") or "",
                    url=url,
                    content_type=file.get("mimetype"),
                    size=file.get("size"),
                )
            )
        return tuple(attachments)

    async def _get_or_fetch_user(self, user_id: str) -> User:
        """Get user from cache or fetch from Slack API.

        Args:
            user_id: Slack user ID.

        Returns:
            User entity.
        """
        cached_user = self._users.get(user_id)
        if cached_user is not None:
            return cached_user

        user_info = await self._client.users_info(user=user_id)
        user_data = user_info["user"]

        user = User(
            id=user_data["id"],
            name=user_data["name"],
            is_bot=user_data.get("is_bot", False),
            profile=dict(user_data),
        )
        self._users[user_id] = user
        return user
