"""Tests for the reply chunker."""

import math

import pytest

from parley.domain.services import ReplyChunks, chunk_reply


class TestChunkReply:
    """chunk_reply tests."""

    def test_short_text_is_single_chunk(self) -> None:
        """Test that text shorter than the limit is sent as is."""
        assert list(chunk_reply("hello", 2000)) == ["hello"]

    def test_empty_text_has_no_chunks(self) -> None:
        """Test that empty text yields nothing."""
        chunks = chunk_reply("", 10)

        assert list(chunks) == []
        assert len(chunks) == 0

    def test_length_not_multiple_of_size(self) -> None:
        """Test fixed-stride slicing when the last chunk is short."""
        text = "abcdefghij" * 2 + "xyz"  # 23 characters

        chunks = list(chunk_reply(text, 10))

        assert chunks == ["abcdefghij", "abcdefghij", "xyz"]

    def test_length_multiple_of_size(self) -> None:
        """Test fixed-stride slicing when the text divides evenly."""
        text = "0123456789" * 3

        chunks = list(chunk_reply(text, 10))

        assert chunks == ["0123456789"] * 3

    @pytest.mark.parametrize("length", [1, 7, 1999, 2000, 2001, 4000, 4001, 10000])
    @pytest.mark.parametrize("max_size", [1, 3, 2000])
    def test_chunks_cover_text_exactly(self, length: int, max_size: int) -> None:
        """Test that chunks rebuild the text and respect the size limit."""
        text = "".join(chr(ord("a") + i % 26) for i in range(length))

        chunks = list(chunk_reply(text, max_size))

        assert "".join(chunks) == text
        assert len(chunks) == math.ceil(length / max_size)
        assert all(len(chunk) == max_size for chunk in chunks[:-1])
        assert 0 < len(chunks[-1]) <= max_size

    def test_iteration_is_restartable(self) -> None:
        """Test that the chunks can be iterated more than once."""
        chunks = chunk_reply("a" * 25, 10)

        assert list(chunks) == list(chunks)
        assert len(chunks) == 3

    def test_iteration_is_lazy(self) -> None:
        """Test that chunks are produced on demand."""
        iterator = iter(chunk_reply("abcdef", 2))

        assert next(iterator) == "ab"
        assert next(iterator) == "cd"

    @pytest.mark.parametrize("max_size", [0, -1])
    def test_non_positive_size_raises(self, max_size: int) -> None:
        """Test that a non-positive size is rejected."""
        with pytest.raises(ValueError):
            ReplyChunks("text", max_size)
