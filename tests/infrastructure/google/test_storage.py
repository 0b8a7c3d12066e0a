"""Tests for GCSObjectStorage."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from google.api_core.exceptions import Forbidden

from parley.domain.exceptions import UploadError
from parley.infrastructure.google import GCSObjectStorage
from parley.infrastructure.google.storage import CACHE_CONTROL


@pytest.fixture
def mock_client() -> MagicMock:
    """Create mock storage Client."""
    return MagicMock()


@pytest.fixture
def audio_file(tmp_path: Path) -> Path:
    """Create a local file to upload."""
    path = tmp_path / "0123abcd.ogg"
    path.write_bytes(b"OggS")
    return path


class TestGCSObjectStorage:
    """GCSObjectStorage tests."""

    async def test_upload(self, mock_client: MagicMock, audio_file: Path) -> None:
        """Test uploading a file under its own name."""
        storage = GCSObjectStorage(mock_client, "parley-audio", timeout_seconds=12.0)

        uri = await storage.upload(audio_file)

        assert uri == "gs://parley-audio/0123abcd.ogg"
        mock_client.bucket.assert_called_once_with("parley-audio")
        mock_client.bucket.return_value.blob.assert_called_once_with("0123abcd.ogg")
        blob = mock_client.bucket.return_value.blob.return_value
        assert blob.cache_control == CACHE_CONTROL
        blob.upload_from_filename.assert_called_once_with(
            str(audio_file), timeout=12.0
        )

    def test_cache_control(self) -> None:
        """Test the cache policy of uploaded objects."""
        assert CACHE_CONTROL == "public, max-age=31536000"

    async def test_upload_error(self, mock_client: MagicMock, audio_file: Path) -> None:
        """Test that upload failures are upload errors."""
        blob = mock_client.bucket.return_value.blob.return_value
        blob.upload_from_filename.side_effect = Forbidden("denied")
        storage = GCSObjectStorage(mock_client, "parley-audio")

        with pytest.raises(UploadError) as exc_info:
            await storage.upload(audio_file)

        assert exc_info.value.source == str(audio_file)
