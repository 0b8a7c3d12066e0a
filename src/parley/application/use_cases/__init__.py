"""Use cases."""

from parley.application.use_cases.reply_to_direct_message import (
    APOLOGY_MESSAGE,
    ReplyToDirectMessageUseCase,
)

__all__ = ["APOLOGY_MESSAGE", "ReplyToDirectMessageUseCase"]
