"""Image attachment summarization."""

import logging

from parley.domain.services import CompletionClient, ImageAnnotator
from parley.infrastructure.llm.templates import create_jinja_env

logger = logging.getLogger(__name__)


class AttachmentSummarizer:
    """Describes image attachments in natural language.

    The annotator produces structured annotations, which the completion
    model then narrates like a person would.
    """

    def __init__(self, annotator: ImageAnnotator, client: CompletionClient) -> None:
        """Initialize the summarizer.

        Args:
            annotator: Image annotation service.
            client: Completion client used to narrate the annotations.
        """
        self._annotator = annotator
        self._client = client
        self._template = create_jinja_env().get_template("describe_image.j2")

    async def summarize_image(self, url: str) -> str:
        """Summarize an image.

        Args:
            url: Image location.

        Returns:
            Natural-language description.

        Raises:
            AnnotationError: If annotation fails.
            LLMError: If the completion fails.
        """
        annotation = await self._annotator.annotate(url)
        prompt = self._template.render(annotation=annotation)
        result = await self._client.complete([{"role": "user", "content": prompt}])
        logger.debug("Image summary for %s: %s", url, result.text)
        return result.text
