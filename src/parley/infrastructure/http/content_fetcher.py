"""Embedded link fetcher."""

import json
import logging

import httpx

from parley.config import LinkEmbedConfig
from parley.domain.entities import FetchedContent
from parley.domain.exceptions import FetchError

logger = logging.getLogger(__name__)

_JSON_CONTENT_TYPE = "application/json"


class HttpContentFetcher:
    """Fetches links embedded in messages with httpx.

    Only responses whose Content-Type starts with one of the allowed types
    are accepted. The match is case-sensitive against the header as
    received; a missing header never matches.
    """

    def __init__(
        self,
        config: LinkEmbedConfig,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            config: Link embedding settings.
            client: Shared AsyncClient. A short-lived client is created per
                request when omitted.
        """
        self._config = config
        self._client = client

    async def fetch(self, url: str) -> FetchedContent:
        """Fetch a link and serialize its body.

        JSON bodies are re-serialized compactly; other allowed types are
        returned as text. Bodies longer than max_content_length are cut.

        Args:
            url: Link found in the message text.

        Returns:
            The fetched content.

        Raises:
            FetchError: On network errors, HTTP error statuses, disallowed or
                missing content types, or unparsable JSON.
        """
        logger.info("Link fetch: %s", url)
        response = await self._get(url)

        content_type = response.headers.get("content-type")
        if not self.is_allowed(content_type):
            logger.info("Link not embedded (content-type=%s): %s", content_type, url)
            raise FetchError(url, f"Content type {content_type!r} is not allowed")

        body = self._serialize(url, response, content_type)
        if len(body) > self._config.max_content_length:
            body = body[: self._config.max_content_length]

        logger.info("Link fetch success: %s (%d chars)", url, len(body))
        return FetchedContent(url=url, content_type=content_type, body=body)

    def is_allowed(self, content_type: str | None) -> bool:
        """Check a Content-Type header against the allow-list.

        Args:
            content_type: Header value, or None if the header is missing.

        Returns:
            True if the header starts with an allowed type.
        """
        if not content_type:
            return False
        return any(
            content_type.startswith(allowed)
            for allowed in self._config.allowed_content_types
        )

    async def _get(self, url: str) -> httpx.Response:
        try:
            if self._client is not None:
                response = await self._client.get(
                    url, timeout=self._config.timeout_seconds
                )
            else:
                async with httpx.AsyncClient(follow_redirects=True) as client:
                    response = await client.get(
                        url, timeout=self._config.timeout_seconds
                    )
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning("Link fetch timeout: %s", url)
            raise FetchError(url, f"Timed out fetching {url}") from e
        except httpx.HTTPStatusError as e:
            logger.warning("Link fetch HTTP error: %s - %s", url, e)
            raise FetchError(url, f"HTTP error fetching {url}") from e
        except httpx.RequestError as e:
            logger.warning("Link fetch request error: %s - %s", url, e)
            raise FetchError(url, f"Request error fetching {url}") from e
        return response

    @staticmethod
    def _serialize(url: str, response: httpx.Response, content_type: str) -> str:
        if not content_type.startswith(_JSON_CONTENT_TYPE):
            return response.text
        try:
            data = response.json()
        except ValueError as e:
            logger.warning("Link returned invalid JSON: %s", url)
            raise FetchError(url, f"Invalid JSON from {url}") from e
        return json.dumps(data, ensure_ascii=False, separators=(",", ":"))
