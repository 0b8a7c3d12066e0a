"""Google Cloud integration."""

from parley.infrastructure.google.speech import GoogleSpeechTranscriber
from parley.infrastructure.google.storage import GCSObjectStorage
from parley.infrastructure.google.vision import GoogleVisionAnnotator

__all__ = ["GCSObjectStorage", "GoogleSpeechTranscriber", "GoogleVisionAnnotator"]
