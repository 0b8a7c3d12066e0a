"""Google Cloud Vision image annotator."""

import logging
from typing import Any

import httpx
from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud import vision

from parley.domain.exceptions import AnnotationError
from parley.domain.services.annotation import AnnotationSummary, trim_annotation
from parley.infrastructure.http import MediaDownloader

logger = logging.getLogger(__name__)

LABEL_MAX_RESULTS = 6
WEB_MAX_RESULTS = 2


def build_features() -> list[vision.Feature]:
    """Features requested for every image."""
    return [
        vision.Feature(type_=vision.Feature.Type.TEXT_DETECTION),
        vision.Feature(type_=vision.Feature.Type.IMAGE_PROPERTIES),
        vision.Feature(
            type_=vision.Feature.Type.LABEL_DETECTION,
            max_results=LABEL_MAX_RESULTS,
        ),
        vision.Feature(
            type_=vision.Feature.Type.WEB_DETECTION,
            max_results=WEB_MAX_RESULTS,
        ),
    ]


class GoogleVisionAnnotator:
    """ImageAnnotator backed by the Cloud Vision API.

    The image is downloaded through the platform-authenticated downloader
    and sent inline, since platform file URLs are not publicly readable.
    """

    def __init__(
        self,
        client: vision.ImageAnnotatorAsyncClient,
        downloader: MediaDownloader,
        timeout_seconds: float = 60.0,
    ) -> None:
        """Initialize the annotator.

        Args:
            client: Vision async client.
            downloader: Downloader for attachment files.
            timeout_seconds: Timeout of the annotate call.
        """
        self._client = client
        self._downloader = downloader
        self._timeout = timeout_seconds

    async def annotate(self, url: str) -> AnnotationSummary:
        """Annotate an image in one request, without retries.

        Args:
            url: Image location.

        Returns:
            Trimmed annotation summary.

        Raises:
            AnnotationError: If the download, the API call, or the
                annotation itself fails.
        """
        try:
            content = await self._downloader.fetch_bytes(url)
        except httpx.HTTPError as e:
            logger.warning("Image download failed: %s - %s", url, e)
            raise AnnotationError(url, f"Could not download image {url}") from e

        request = vision.AnnotateImageRequest(
            image=vision.Image(content=content),
            features=build_features(),
        )
        try:
            batch = await self._client.batch_annotate_images(
                requests=[request],
                retry=None,
                timeout=self._timeout,
            )
        except (GoogleAPIError, GoogleAuthError) as e:
            logger.warning("Vision API error: %s - %s", url, e)
            raise AnnotationError(url, f"Vision API error for {url}") from e

        if not batch.responses:
            raise AnnotationError(url, f"Vision API returned no result for {url}")

        raw = vision.AnnotateImageResponse.to_dict(
            batch.responses[0],
            preserving_proto_field_name=False,
        )
        error = raw.pop("error", None) or {}
        if error.get("code"):
            logger.warning("Image annotation failed: %s - %s", url, error)
            raise AnnotationError(
                url, f"Annotation failed for {url}: {error.get('message', '')}"
            )

        logger.info("Image annotated: %s", url)
        return trim_annotation(_drop_empty(raw))


def _drop_empty(response: dict[str, Any]) -> dict[str, Any]:
    return {
        key: value
        for key, value in response.items()
        if value not in (None, "", [], {})
    }
