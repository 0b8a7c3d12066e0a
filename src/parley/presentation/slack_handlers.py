"""Slack event handlers."""

import logging
from typing import Any

from slack_bolt.async_app import AsyncApp

from parley.application.use_cases import ReplyToDirectMessageUseCase
from parley.infrastructure.slack import SlackEventAdapter

logger = logging.getLogger(__name__)

# Message subtypes that carry something the user said
_HANDLED_SUBTYPES = frozenset({None, "file_share"})


def is_direct_message(event: dict[str, Any], bot_user_id: str) -> bool:
    """Check if an event is a direct message from someone other than the bot.

    Args:
        event: Slack message event payload.
        bot_user_id: The bot's user ID.

    Returns:
        True if the event should be answered.
    """
    if event.get("channel_type") != "im":
        return False
    if event.get("subtype") not in _HANDLED_SUBTYPES:
        return False
    if event.get("bot_id"):
        return False
    user_id = event.get("user")
    return bool(user_id) and user_id != bot_user_id


def register_handlers(
    app: AsyncApp,
    reply_use_case: ReplyToDirectMessageUseCase,
    event_adapter: SlackEventAdapter,
    bot_user_id: str,
) -> None:
    """Register Slack event handlers.

    Args:
        app: AsyncApp instance.
        reply_use_case: Use case for answering direct messages.
        event_adapter: Adapter for converting events to entities.
        bot_user_id: The bot's user ID.
    """

    @app.event("message")
    async def handle_message(event: dict) -> None:
        """Handle message events.

        Answers direct messages; every other message is ignored.

        Args:
            event: Slack event payload.
        """
        if not is_direct_message(event, bot_user_id):
            return

        logger.info(
            "Processing direct message: ts=%s, subtype=%s, channel=%s",
            event.get("ts"),
            event.get("subtype"),
            event.get("channel"),
        )

        try:
            message = await event_adapter.to_message(event)
        except Exception:
            logger.exception("Error converting event to message")
            return

        try:
            await reply_use_case.execute(message)
        except Exception:
            logger.exception("Error handling message event")
