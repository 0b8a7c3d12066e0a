"""Download of message attachments."""

import logging
import tempfile
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiofiles
import httpx

logger = logging.getLogger(__name__)


class MediaDownloader:
    """Downloads attachment files from the messaging platform.

    Platform file URLs usually need the bot's credentials, so every
    request carries the configured headers.
    """

    def __init__(
        self,
        headers: dict[str, str] | None = None,
        timeout_seconds: float = 30.0,
        scratch_dir: str | Path | None = None,
    ) -> None:
        """Initialize the downloader.

        Args:
            headers: Headers sent with every download (e.g. Authorization).
            timeout_seconds: Timeout for each download.
            scratch_dir: Directory for scratch files. Defaults to the
                system temporary directory.
        """
        self._headers = dict(headers or {})
        self._timeout = timeout_seconds
        self._scratch_dir = Path(scratch_dir or tempfile.gettempdir())

    async def fetch_bytes(self, url: str) -> bytes:
        """Download a file into memory.

        Args:
            url: File URL.

        Returns:
            File content.

        Raises:
            httpx.HTTPError: If the download fails.
        """
        async with httpx.AsyncClient(
            headers=self._headers, follow_redirects=True
        ) as client:
            response = await client.get(url, timeout=self._timeout)
            response.raise_for_status()
            return response.content

    @asynccontextmanager
    async def scratch_file(self, url: str, suffix: str) -> AsyncIterator[Path]:
        """Download a file to a uniquely named scratch file.

        The file is removed when the context exits, whether the body
        succeeded or raised.

        Args:
            url: File URL.
            suffix: Extension of the scratch file, e.g. ".ogg".

        Yields:
            Path of the downloaded file.

        Raises:
            httpx.HTTPError: If the download fails.
            OSError: If the scratch file cannot be written.
        """
        self._scratch_dir.mkdir(parents=True, exist_ok=True)
        path = self._scratch_dir / f"{uuid.uuid4().hex}{suffix}"
        try:
            async with httpx.AsyncClient(
                headers=self._headers, follow_redirects=True
            ) as client:
                async with client.stream("GET", url, timeout=self._timeout) as response:
                    response.raise_for_status()
                    async with aiofiles.open(path, "wb") as f:
                        async for chunk in response.aiter_bytes():
                            await f.write(chunk)
            logger.debug("File downloaded to %s", path)
            yield path
        finally:
            path.unlink(missing_ok=True)
            logger.debug("Removed scratch file %s", path)
