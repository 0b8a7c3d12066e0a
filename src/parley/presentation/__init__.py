"""Presentation layer."""

from parley.presentation.slack_handlers import is_direct_message, register_handlers

__all__ = ["is_direct_message", "register_handlers"]
