"""Unit tests for token-limit text chunking."""

from __future__ import annotations

import pytest

from kittenvoice.errors import TokenLimitExceeded
from kittenvoice.text import split_by_token_limit


def _word_count(text: str) -> int:
    return len(text.split())


def test_words_are_grouped_greedily_under_the_limit() -> None:
    """Words should be packed into chunks that never exceed the limit."""

    assert split_by_token_limit("a b c d e", 3, _word_count) == ["a b c", "d e"]


def test_blank_text_yields_no_chunks() -> None:
    """Whitespace-only text should produce no chunks."""

    assert split_by_token_limit("   ", 3, _word_count) == []


def test_oversized_word_is_split_by_characters() -> None:
    """A word exceeding the limit alone is split character by character."""

    assert split_by_token_limit("ab abcdefg hi", 3, len) == ["ab", "abc", "def", "g", "hi"]


def test_long_text_chunks_respect_a_five_hundred_token_limit() -> None:
    """Text well above 500 tokens must be split into chunks of at most 500 tokens."""

    text = " ".join(f"word{index}" for index in range(400))
    chunks = split_by_token_limit(text, 500, len)

    assert len(chunks) > 1
    assert all(len(chunk) <= 500 for chunk in chunks)
    assert " ".join(chunks) == text


def test_unsplittable_character_raises() -> None:
    """A single character above the limit cannot be chunked."""

    with pytest.raises(TokenLimitExceeded) as exc_info:
        split_by_token_limit("abc", 2, lambda text: 10)

    assert exc_info.value.stage == "tokenize"
