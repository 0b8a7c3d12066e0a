"""Folds one inbound message into a single text payload."""

import json
import logging
import re
from collections.abc import Iterable, Sequence

from parley.application.services.attachment_summarizer import AttachmentSummarizer
from parley.domain.entities import Attachment, NormalizedInput
from parley.domain.exceptions import (
    AnnotationError,
    FetchError,
    IngestionError,
    TranscriptionError,
)
from parley.domain.services import ContentFetcher, Transcriber
from parley.infrastructure.llm.exceptions import LLMError

logger = logging.getLogger(__name__)

URL_PATTERN = re.compile(r"\bhttps?://\S+")

LINK_PREFIX = (
    "|SYSTEM|The user has embedded a link (url={url}). "
    "The content is as follows:\n\n"
)
ATTACHMENTS_HEADER = (
    "\n\n|SYSTEM|The user has attached files. "
    "Information about each of the files is listed below:\n\n"
)


def find_links(text: str) -> list[str]:
    """Find URL-shaped tokens in message text.

    Args:
        text: Message text.

    Returns:
        Distinct links in order of first appearance.
    """
    return list(dict.fromkeys(URL_PATTERN.findall(text)))


def format_attachment(index: int, attachment: Attachment, summary: str | None) -> str:
    """Format the prompt block describing one attachment.

    Args:
        index: 1-based position of the attachment.
        attachment: Attachment metadata.
        summary: Natural-language summary, or None if unavailable.

    Returns:
        Attachment block.
    """
    return (
        f"File #{index}: Here is JSON data describing the file: "
        f"{json.dumps(attachment.to_dict(), ensure_ascii=False)}. "
        "Here is a summary of the contents of the file: "
        f"{json.dumps(summary, ensure_ascii=False)}."
    )


class MessageNormalizer:
    """Turns message text and attachments into what the user said.

    Embedded links with an allowed content type are inlined, image
    attachments are summarized, and a voice message replaces everything
    with its transcript. Enrichment failures never abort the message;
    they are left out and reported in NormalizedInput.failures.
    """

    def __init__(
        self,
        content_fetcher: ContentFetcher,
        attachment_summarizer: AttachmentSummarizer,
        transcriber: Transcriber,
        voice_message_names: Iterable[str] = ("voice-message.ogg",),
    ) -> None:
        """Initialize the normalizer.

        Args:
            content_fetcher: Fetcher for embedded links.
            attachment_summarizer: Summarizer for image attachments.
            transcriber: Transcriber for voice messages.
            voice_message_names: File names identifying a voice message.
        """
        self._content_fetcher = content_fetcher
        self._attachment_summarizer = attachment_summarizer
        self._transcriber = transcriber
        self._voice_message_names = frozenset(voice_message_names)

    async def normalize(
        self,
        text: str,
        attachments: Sequence[Attachment] = (),
    ) -> NormalizedInput:
        """Normalize one message.

        Args:
            text: Raw message text.
            attachments: Attachments in platform order.

        Returns:
            The flattened input and the failures that were left out.
        """
        failures: list[IngestionError] = []
        content = await self._embed_links(text, failures)

        if not attachments:
            return NormalizedInput(text=content, failures=tuple(failures))

        content += ATTACHMENTS_HEADER
        for index, attachment in enumerate(attachments, start=1):
            if self.is_voice_message(attachment):
                try:
                    transcript = await self._transcriber.transcribe(attachment.url)
                except TranscriptionError as e:
                    logger.warning(
                        "Voice message not transcribed, listing it as a file: %s",
                        e,
                    )
                    failures.append(e)
                else:
                    # The transcript is the whole turn; everything else is dropped
                    return NormalizedInput(text=transcript)
                summary = None
            else:
                summary = await self._summarize(attachment, failures)

            content += format_attachment(index, attachment, summary)

        return NormalizedInput(text=content, failures=tuple(failures))

    def is_voice_message(self, attachment: Attachment) -> bool:
        """Check if an attachment is a voice message."""
        return attachment.name in self._voice_message_names

    async def _embed_links(self, text: str, failures: list[IngestionError]) -> str:
        bodies: dict[str, str] = {}
        for link in find_links(text):
            try:
                fetched = await self._content_fetcher.fetch(link)
            except FetchError as e:
                logger.info("Could not embed link: %s", link)
                failures.append(e)
                continue
            bodies[link] = fetched.body

        if not bodies:
            return text

        # Substitute at the matched positions of the original text only
        def substitute(match: re.Match[str]) -> str:
            link = match.group(0)
            if link not in bodies:
                return link
            return LINK_PREFIX.format(url=link) + bodies[link]

        return URL_PATTERN.sub(substitute, text)

    async def _summarize(
        self,
        attachment: Attachment,
        failures: list[IngestionError],
    ) -> str | None:
        try:
            return await self._attachment_summarizer.summarize_image(attachment.url)
        except AnnotationError as e:
            logger.warning("Error annotating image %s: %s", attachment.url, e)
            failures.append(e)
        except LLMError as e:
            logger.warning("Error summarizing image %s: %s", attachment.url, e)
            failures.append(AnnotationError(attachment.url, str(e)))
        return None
