"""Split outbound replies into transport-sized pieces."""

import math
from collections.abc import Iterator


class ReplyChunks:
    """Fixed-size, non-overlapping slices of a reply.

    Iterating is lazy and can be repeated; each iteration starts over
    from the first chunk. Concatenating the chunks gives back the text.
    """

    def __init__(self, text: str, max_size: int) -> None:
        """Initialize the chunk sequence.

        Args:
            text: Reply text to split.
            max_size: Maximum length of each chunk.

        Raises:
            ValueError: If max_size is not positive.
        """
        if max_size <= 0:
            raise ValueError(f"max_size must be positive, got {max_size}")
        self._text = text
        self._max_size = max_size

    def __iter__(self) -> Iterator[str]:
        for i in range(len(self)):
            yield self._text[i * self._max_size : (i + 1) * self._max_size]

    def __len__(self) -> int:
        return math.ceil(len(self._text) / self._max_size)


def chunk_reply(text: str, max_size: int) -> ReplyChunks:
    """Split a reply into chunks of at most max_size characters.

    Args:
        text: Reply text.
        max_size: Maximum chunk length.

    Returns:
        Restartable iterable of chunks.
    """
    return ReplyChunks(text, max_size)
