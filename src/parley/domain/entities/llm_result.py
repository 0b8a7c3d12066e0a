"""LLM result entities."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CompletionResult:
    """Chat completion result.

    Attributes:
        text: Content of the top choice.
        total_tokens: Token usage reported for the call.
    """

    text: str
    total_tokens: int = 0
