"""Google Cloud Storage object storage."""

import asyncio
import logging
from pathlib import Path

from google.cloud import storage

from parley.domain.exceptions import UploadError

logger = logging.getLogger(__name__)

CACHE_CONTROL = "public, max-age=31536000"


class GCSObjectStorage:
    """ObjectStorage backed by a Cloud Storage bucket."""

    def __init__(
        self,
        client: storage.Client,
        bucket_name: str,
        timeout_seconds: float = 60.0,
    ) -> None:
        """Initialize the storage.

        Args:
            client: Cloud Storage client.
            bucket_name: Bucket receiving uploads.
            timeout_seconds: Timeout of each upload.
        """
        self._client = client
        self._bucket_name = bucket_name
        self._timeout = timeout_seconds

    async def upload(self, path: Path) -> str:
        """Upload a local file under its own name.

        Args:
            path: Local file.

        Returns:
            gs:// URI of the uploaded object.

        Raises:
            UploadError: If the upload fails.
        """
        object_name = path.name
        try:
            await asyncio.to_thread(self._upload, path, object_name)
        except Exception as e:
            logger.warning("Upload failed: %s - %s", path, e)
            raise UploadError(str(path), f"Could not upload {path.name}") from e

        logger.info("%s uploaded to %s", path, self._bucket_name)
        return f"gs://{self._bucket_name}/{object_name}"

    def _upload(self, path: Path, object_name: str) -> None:
        blob = self._client.bucket(self._bucket_name).blob(object_name)
        blob.cache_control = CACHE_CONTROL
        blob.upload_from_filename(str(path), timeout=self._timeout)
