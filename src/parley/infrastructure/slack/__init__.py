"""Slack integration."""

from parley.infrastructure.slack.client import SlackAppRunner, create_slack_app
from parley.infrastructure.slack.event_adapter import (
    SlackEventAdapter,
    unwrap_slack_markup,
)
from parley.infrastructure.slack.messaging import SlackMessagingService

__all__ = [
    "SlackAppRunner",
    "SlackEventAdapter",
    "SlackMessagingService",
    "create_slack_app",
    "unwrap_slack_markup",
]
