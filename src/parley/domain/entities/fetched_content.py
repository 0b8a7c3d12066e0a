"""Fetched link content entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FetchedContent:
    """Body of a link embedded in a message.

    Attributes:
        url: The link as it appeared in the message.
        content_type: Content-Type header of the response.
        body: Serialized response body.
    """

    url: str
    content_type: str
    body: str
