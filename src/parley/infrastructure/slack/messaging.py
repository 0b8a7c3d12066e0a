"""Slack messaging service."""

import logging

from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from parley.domain.entities import User

logger = logging.getLogger(__name__)

TYPING_REACTION = "eyes"


class SlackMessagingService:
    """Slack implementation of MessagingService.

    This class implements the MessagingService protocol for Slack,
    providing message sending capabilities. Slack has no typing indicator
    for bots, so a reaction on the incoming message stands in for it.
    """

    def __init__(self, client: AsyncWebClient) -> None:
        """Initialize the service.

        Args:
            client: Slack AsyncWebClient instance.
        """
        self._client = client
        self._bot_user: User | None = None

    async def send_message(self, channel_id: str, text: str) -> None:
        """Send a message to a Slack channel.

        Args:
            channel_id: Target channel ID.
            text: Message content.

        Raises:
            SlackApiError: If the API call fails.
        """
        await self._client.chat_postMessage(channel=channel_id, text=text)

    async def send_typing(self, channel_id: str, message_id: str) -> None:
        """React to a message to show a reply is being prepared.

        Args:
            channel_id: Channel of the message.
            message_id: Timestamp of the message.
        """
        try:
            await self._client.reactions_add(
                channel=channel_id,
                timestamp=message_id,
                name=TYPING_REACTION,
            )
        except SlackApiError as e:
            error_code = (
                e.response.get("error", "") if e.response is not None else ""
            )
            if error_code != "already_reacted":
                raise

    async def get_bot_user(self) -> User:
        """Get the bot's own user record.

        Returns:
            The bot user, with its Slack profile.

        Note:
            The result is cached after the first call.
        """
        if self._bot_user is None:
            auth = await self._client.auth_test()
            user_info = await self._client.users_info(user=auth["user_id"])
            user_data = user_info["user"]
            self._bot_user = User(
                id=user_data["id"],
                name=user_data.get("name", ""),
                is_bot=True,
                profile=dict(user_data),
            )
        return self._bot_user
