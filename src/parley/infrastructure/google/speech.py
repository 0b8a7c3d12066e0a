"""Google Cloud Speech-to-Text transcriber."""

import logging

import httpx
from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud import speech

from parley.config import MediaConfig
from parley.domain.exceptions import TranscriptionError, UploadError
from parley.domain.services.protocols import ObjectStorage
from parley.infrastructure.http import MediaDownloader

logger = logging.getLogger(__name__)

SCRATCH_SUFFIX = ".ogg"


def build_recognition_config(config: MediaConfig) -> speech.RecognitionConfig:
    """Build the recognition parameters from media settings.

    Raises:
        ValueError: If the audio encoding is not a known encoding name.
    """
    try:
        encoding = speech.RecognitionConfig.AudioEncoding[config.audio_encoding]
    except KeyError as e:
        raise ValueError(f"Unknown audio encoding: {config.audio_encoding}") from e
    return speech.RecognitionConfig(
        encoding=encoding,
        sample_rate_hertz=config.audio_sample_rate_hertz,
        language_code=config.audio_language_code,
    )


class GoogleSpeechTranscriber:
    """Transcriber backed by Cloud Speech-to-Text.

    The audio is downloaded to a scratch file, staged in object storage,
    and recognized from there. Audio parameters come from configuration.
    """

    def __init__(
        self,
        client: speech.SpeechAsyncClient,
        storage: ObjectStorage,
        downloader: MediaDownloader,
        config: MediaConfig,
        timeout_seconds: float = 60.0,
    ) -> None:
        """Initialize the transcriber.

        Args:
            client: Speech async client.
            storage: Object storage for staging audio.
            downloader: Downloader for attachment files.
            config: Media settings (audio encoding, rate, language).
            timeout_seconds: Timeout of the recognize call.

        Raises:
            ValueError: If the configured audio encoding is unknown.
        """
        self._client = client
        self._storage = storage
        self._downloader = downloader
        self._recognition_config = build_recognition_config(config)
        self._timeout = timeout_seconds

    async def transcribe(self, url: str) -> str:
        """Transcribe a remote audio file.

        Args:
            url: Audio location.

        Returns:
            Top alternative of each result joined by newlines, in order.
            Empty if no speech was recognized.

        Raises:
            TranscriptionError: If the download, upload or recognition fails.
        """
        uri = await self._stage(url)

        try:
            response = await self._client.recognize(
                config=self._recognition_config,
                audio=speech.RecognitionAudio(uri=uri),
                retry=None,
                timeout=self._timeout,
            )
        except (GoogleAPIError, GoogleAuthError) as e:
            logger.warning("Speech API error: %s - %s", uri, e)
            raise TranscriptionError(url, f"Speech API error for {url}") from e

        transcription = "\n".join(
            result.alternatives[0].transcript
            for result in response.results
            if result.alternatives
        )
        logger.info("Transcription: %s", transcription)
        return transcription

    async def _stage(self, url: str) -> str:
        """Copy the remote audio into object storage.

        Returns:
            URI of the staged object.
        """
        try:
            async with self._downloader.scratch_file(url, SCRATCH_SUFFIX) as path:
                return await self._storage.upload(path)
        except httpx.HTTPError as e:
            logger.warning("Audio download failed: %s - %s", url, e)
            raise TranscriptionError(url, f"Could not download audio {url}") from e
        except OSError as e:
            logger.warning("Audio scratch file failed: %s - %s", url, e)
            raise TranscriptionError(url, f"Could not store audio {url}") from e
        except UploadError as e:
            raise TranscriptionError(url, f"Could not stage audio {url}") from e
