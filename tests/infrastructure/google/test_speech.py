"""Tests for GoogleSpeechTranscriber."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from google.api_core.exceptions import InvalidArgument
from google.auth.exceptions import RefreshError
from google.cloud import speech

from parley.config import MediaConfig
from parley.domain.exceptions import TranscriptionError, UploadError
from parley.infrastructure.google import GoogleSpeechTranscriber
from parley.infrastructure.google.speech import build_recognition_config
from parley.infrastructure.http import MediaDownloader

URL = "https://files.example.com/voice-message.ogg"


def _result(transcript: str) -> speech.SpeechRecognitionResult:
    return speech.SpeechRecognitionResult(
        alternatives=[
            speech.SpeechRecognitionAlternative(transcript=transcript),
            speech.SpeechRecognitionAlternative(transcript="ignored"),
        ]
    )


@pytest.fixture
def scratch_path(tmp_path: Path) -> Path:
    """Path handed out by the fake scratch file."""
    return tmp_path / "0123abcd.ogg"


@pytest.fixture
def mock_downloader(scratch_path: Path) -> MagicMock:
    """Create mock MediaDownloader with a scratch file context."""
    downloader = MagicMock()
    downloader.scratch_urls = []

    @asynccontextmanager
    async def scratch_file(url: str, suffix: str) -> AsyncIterator[Path]:
        downloader.scratch_urls.append((url, suffix))
        yield scratch_path

    downloader.scratch_file = scratch_file
    return downloader


@pytest.fixture
def mock_storage() -> MagicMock:
    """Create mock ObjectStorage."""
    storage = MagicMock()
    storage.upload = AsyncMock(return_value="gs://parley-audio/0123abcd.ogg")
    return storage


@pytest.fixture
def mock_client() -> MagicMock:
    """Create mock SpeechAsyncClient."""
    client = MagicMock()
    client.recognize = AsyncMock(
        return_value=speech.RecognizeResponse(
            results=[_result("what is"), _result("the weather")]
        )
    )
    return client


@pytest.fixture
def transcriber(
    mock_client: MagicMock,
    mock_storage: MagicMock,
    mock_downloader: MagicMock,
) -> GoogleSpeechTranscriber:
    """Create transcriber instance."""
    return GoogleSpeechTranscriber(
        client=mock_client,
        storage=mock_storage,
        downloader=mock_downloader,
        config=MediaConfig(),
        timeout_seconds=20.0,
    )


class TestGoogleSpeechTranscriber:
    """GoogleSpeechTranscriber tests."""

    async def test_transcribe(self, transcriber: GoogleSpeechTranscriber) -> None:
        """Test that top alternatives are joined by newlines."""
        assert await transcriber.transcribe(URL) == "what is\nthe weather"

    async def test_audio_is_staged(
        self,
        transcriber: GoogleSpeechTranscriber,
        mock_downloader: MagicMock,
        mock_storage: MagicMock,
        mock_client: MagicMock,
        scratch_path: Path,
    ) -> None:
        """Test that the audio goes through the scratch file and storage."""
        await transcriber.transcribe(URL)

        assert mock_downloader.scratch_urls == [(URL, ".ogg")]
        mock_storage.upload.assert_awaited_once_with(scratch_path)
        audio = mock_client.recognize.call_args.kwargs["audio"]
        assert audio.uri == "gs://parley-audio/0123abcd.ogg"

    async def test_recognition_config(
        self, transcriber: GoogleSpeechTranscriber, mock_client: MagicMock
    ) -> None:
        """Test the audio parameters sent to the API."""
        await transcriber.transcribe(URL)

        call_kwargs = mock_client.recognize.call_args.kwargs
        config = call_kwargs["config"]
        assert config.encoding == speech.RecognitionConfig.AudioEncoding.OGG_OPUS
        assert config.sample_rate_hertz == 48000
        assert config.language_code == "en-US"
        assert call_kwargs["retry"] is None
        assert call_kwargs["timeout"] == 20.0

    async def test_configured_audio_parameters(
        self,
        mock_client: MagicMock,
        mock_storage: MagicMock,
        mock_downloader: MagicMock,
    ) -> None:
        """Test that audio parameters come from configuration."""
        transcriber = GoogleSpeechTranscriber(
            client=mock_client,
            storage=mock_storage,
            downloader=mock_downloader,
            config=MediaConfig(
                audio_encoding="LINEAR16",
                audio_sample_rate_hertz=16000,
                audio_language_code="ja-JP",
            ),
        )

        await transcriber.transcribe(URL)

        config = mock_client.recognize.call_args.kwargs["config"]
        assert config.encoding == speech.RecognitionConfig.AudioEncoding.LINEAR16
        assert config.sample_rate_hertz == 16000
        assert config.language_code == "ja-JP"

    async def test_no_speech(
        self, transcriber: GoogleSpeechTranscriber, mock_client: MagicMock
    ) -> None:
        """Test that silence transcribes to an empty string."""
        mock_client.recognize.return_value = speech.RecognizeResponse()

        assert await transcriber.transcribe(URL) == ""

    async def test_download_error(
        self, transcriber: GoogleSpeechTranscriber, mock_client: MagicMock
    ) -> None:
        """Test that download failures are transcription errors."""

        @asynccontextmanager
        async def failing(url: str, suffix: str) -> AsyncIterator[Path]:
            raise httpx.ConnectError("refused")
            yield  # pragma: no cover

        transcriber._downloader.scratch_file = failing

        with pytest.raises(TranscriptionError):
            await transcriber.transcribe(URL)

        mock_client.recognize.assert_not_awaited()

    async def test_upload_error(
        self,
        transcriber: GoogleSpeechTranscriber,
        mock_storage: MagicMock,
        mock_client: MagicMock,
    ) -> None:
        """Test that staging failures are transcription errors."""
        mock_storage.upload.side_effect = UploadError("0123abcd.ogg")

        with pytest.raises(TranscriptionError) as exc_info:
            await transcriber.transcribe(URL)

        assert exc_info.value.source == URL
        mock_client.recognize.assert_not_awaited()

    async def test_api_error(
        self, transcriber: GoogleSpeechTranscriber, mock_client: MagicMock
    ) -> None:
        """Test that API failures are transcription errors."""
        mock_client.recognize.side_effect = InvalidArgument("bad audio")

        with pytest.raises(TranscriptionError):
            await transcriber.transcribe(URL)

    async def test_auth_error(
        self, transcriber: GoogleSpeechTranscriber, mock_client: MagicMock
    ) -> None:
        """Test that credential failures are transcription errors."""
        mock_client.recognize.side_effect = RefreshError("token expired")

        with pytest.raises(TranscriptionError) as exc_info:
            await transcriber.transcribe(URL)

        assert exc_info.value.source == URL

    async def test_scratch_file_error(
        self,
        transcriber: GoogleSpeechTranscriber,
        mock_storage: MagicMock,
        mock_client: MagicMock,
    ) -> None:
        """Test that a failing scratch file is a transcription error."""

        @asynccontextmanager
        async def failing(url: str, suffix: str) -> AsyncIterator[Path]:
            raise PermissionError("read-only file system")
            yield  # pragma: no cover

        transcriber._downloader.scratch_file = failing

        with pytest.raises(TranscriptionError) as exc_info:
            await transcriber.transcribe(URL)

        assert exc_info.value.source == URL
        mock_storage.upload.assert_not_awaited()
        mock_client.recognize.assert_not_awaited()

    async def test_unusable_scratch_dir(
        self,
        tmp_path: Path,
        mock_client: MagicMock,
        mock_storage: MagicMock,
    ) -> None:
        """Test that a scratch directory under a regular file fails cleanly."""
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        transcriber = GoogleSpeechTranscriber(
            client=mock_client,
            storage=mock_storage,
            downloader=MediaDownloader(scratch_dir=blocker / "scratch"),
            config=MediaConfig(),
        )

        with pytest.raises(TranscriptionError):
            await transcriber.transcribe(URL)

        mock_storage.upload.assert_not_awaited()


class TestBuildRecognitionConfig:
    """build_recognition_config tests."""

    def test_unknown_encoding(self) -> None:
        """Test that an unknown encoding name is rejected."""
        with pytest.raises(ValueError, match="NOPE"):
            build_recognition_config(MediaConfig(audio_encoding="NOPE"))

    def test_transcriber_rejects_unknown_encoding(
        self,
        mock_client: MagicMock,
        mock_storage: MagicMock,
        mock_downloader: MagicMock,
    ) -> None:
        """Test that the transcriber cannot be built with a bad encoding."""
        with pytest.raises(ValueError):
            GoogleSpeechTranscriber(
                client=mock_client,
                storage=mock_storage,
                downloader=mock_downloader,
                config=MediaConfig(audio_encoding="NOPE"),
            )
