"""Normalized input entity."""

from dataclasses import dataclass, field

from parley.domain.exceptions import IngestionError


@dataclass(frozen=True)
class NormalizedInput:
    """What the user said, flattened into one text payload.

    Attributes:
        text: Message text with fetched links and attachment summaries
            folded in, or the voice transcript.
        failures: Enrichment steps that failed and were left out.
    """

    text: str
    failures: tuple[IngestionError, ...] = field(default_factory=tuple)

    @property
    def is_degraded(self) -> bool:
        """Check if any enrichment step was left out."""
        return bool(self.failures)
