"""Domain service protocols."""

from pathlib import Path
from typing import Any, Protocol

from parley.domain.entities import CompletionResult, Conversation, FetchedContent


class MessagingService(Protocol):
    """Messaging abstraction (platform-independent).

    This protocol defines the interface for sending messages
    to any messaging platform (Slack, Discord, etc.).
    """

    async def send_message(self, channel_id: str, text: str) -> None:
        """Send a message to a channel.

        Args:
            channel_id: Target channel ID.
            text: Message content.
        """
        ...

    async def send_typing(self, channel_id: str, message_id: str) -> None:
        """Signal that a reply to a message is being prepared.

        Args:
            channel_id: Channel of the message.
            message_id: Message being answered.
        """
        ...


class CompletionClient(Protocol):
    """Chat completion abstraction."""

    async def complete(
        self,
        messages: list[dict[str, str]],
        **kwargs: Any,
    ) -> CompletionResult:
        """Execute chat completion.

        Args:
            messages: OpenAI-format message list.
            **kwargs: Additional parameters.

        Returns:
            Top choice content and token usage.

        Raises:
            LLMError: If the completion fails for any reason.
        """
        ...


class ContentFetcher(Protocol):
    """Retrieves the content behind a link found in a message."""

    async def fetch(self, url: str) -> FetchedContent:
        """Fetch a link.

        Args:
            url: Link found in the message text.

        Returns:
            The fetched content.

        Raises:
            FetchError: If the link can't be fetched or its content type
                is not allowed.
        """
        ...


class ImageAnnotator(Protocol):
    """Describes an image as structured annotations."""

    async def annotate(self, url: str) -> dict[str, Any]:
        """Annotate an image.

        Args:
            url: Image location.

        Returns:
            Trimmed annotation summary.

        Raises:
            AnnotationError: If annotation fails.
        """
        ...


class Transcriber(Protocol):
    """Turns a remote audio file into text."""

    async def transcribe(self, url: str) -> str:
        """Transcribe an audio file.

        Args:
            url: Audio location.

        Returns:
            Transcript, possibly empty.

        Raises:
            TranscriptionError: If any step fails.
        """
        ...


class ObjectStorage(Protocol):
    """Object storage used to stage audio for transcription."""

    async def upload(self, path: Path) -> str:
        """Upload a local file.

        Args:
            path: Local file to upload. Its name becomes the object name.

        Returns:
            URI of the uploaded object.

        Raises:
            UploadError: If the upload fails.
        """
        ...


class ConversationSummarizer(Protocol):
    """Condenses a conversation history."""

    async def summarize(self, conversation: Conversation) -> str:
        """Summarize a conversation.

        Args:
            conversation: Conversation to condense.

        Returns:
            Summary text.

        Raises:
            LLMError: If summarization fails.
        """
        ...
