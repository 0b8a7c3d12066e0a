"""Tests for SlackMessagingService."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from slack_sdk.errors import SlackApiError

from parley.infrastructure.slack import SlackMessagingService


class TestSlackMessagingService:
    """SlackMessagingService tests."""

    @pytest.fixture
    def mock_client(self) -> MagicMock:
        """Create mock Slack AsyncWebClient."""
        client = MagicMock()
        client.chat_postMessage = AsyncMock()
        client.reactions_add = AsyncMock()
        client.auth_test = AsyncMock(return_value={"user_id": "UBOT123"})
        client.users_info = AsyncMock(
            return_value={
                "user": {
                    "id": "UBOT123",
                    "name": "parley",
                    "is_bot": True,
                    "tz": "UTC",
                }
            }
        )
        return client

    @pytest.fixture
    def service(self, mock_client: MagicMock) -> SlackMessagingService:
        """Create service instance."""
        return SlackMessagingService(client=mock_client)

    async def test_send_message(
        self, service: SlackMessagingService, mock_client: MagicMock
    ) -> None:
        """Test sending a message."""
        await service.send_message(channel_id="D123456", text="Hello, world!")

        mock_client.chat_postMessage.assert_awaited_once_with(
            channel="D123456",
            text="Hello, world!",
        )

    async def test_send_message_error_propagates(
        self, service: SlackMessagingService, mock_client: MagicMock
    ) -> None:
        """Test that API errors are not swallowed."""
        mock_client.chat_postMessage.side_effect = SlackApiError(
            message="error", response={"ok": False, "error": "channel_not_found"}
        )

        with pytest.raises(SlackApiError):
            await service.send_message(channel_id="D123456", text="Hello")

    async def test_send_typing_adds_reaction(
        self, service: SlackMessagingService, mock_client: MagicMock
    ) -> None:
        """Test that the typing indicator is an eyes reaction."""
        await service.send_typing("D123456", "1700000000.000100")

        mock_client.reactions_add.assert_awaited_once_with(
            channel="D123456",
            timestamp="1700000000.000100",
            name="eyes",
        )

    async def test_send_typing_already_reacted(
        self, service: SlackMessagingService, mock_client: MagicMock
    ) -> None:
        """Test that an existing reaction is not an error."""
        mock_client.reactions_add.side_effect = SlackApiError(
            message="error", response={"ok": False, "error": "already_reacted"}
        )

        await service.send_typing("D123456", "1700000000.000100")

    async def test_send_typing_other_error(
        self, service: SlackMessagingService, mock_client: MagicMock
    ) -> None:
        """Test that other reaction errors propagate."""
        mock_client.reactions_add.side_effect = SlackApiError(
            message="error", response={"ok": False, "error": "missing_scope"}
        )

        with pytest.raises(SlackApiError):
            await service.send_typing("D123456", "1700000000.000100")

    async def test_get_bot_user(
        self, service: SlackMessagingService, mock_client: MagicMock
    ) -> None:
        """Test getting the bot's user record."""
        bot = await service.get_bot_user()

        assert bot.id == "UBOT123"
        assert bot.name == "parley"
        assert bot.is_bot is True
        assert bot.identity()["tz"] == "UTC"
        mock_client.users_info.assert_awaited_once_with(user="UBOT123")

    async def test_get_bot_user_is_cached(
        self, service: SlackMessagingService, mock_client: MagicMock
    ) -> None:
        """Test that the bot user is fetched only once."""
        first = await service.get_bot_user()
        second = await service.get_bot_user()

        assert first is second
        mock_client.auth_test.assert_awaited_once()
