"""Token-limit text chunking."""

from __future__ import annotations

from collections.abc import Callable

from ..errors import TokenLimitExceeded


def split_by_token_limit(
    text: str,
    max_token_count: int,
    get_token_count: Callable[[str], int],
) -> list[str]:
    """Greedily group whitespace-separated words into chunks under the token limit.

    A word that alone exceeds the limit is split character by character.

    Raises:
        TokenLimitExceeded: If a single character exceeds the limit.
    """

    trimmed = text.strip()
    if not trimmed:
        return []

    chunks: list[str] = []
    current = ""
    for word in trimmed.split():
        candidate = word if not current else f"{current} {word}"
        if get_token_count(candidate) <= max_token_count:
            current = candidate
            continue

        if current:
            chunks.append(current)
            current = ""

        if get_token_count(word) <= max_token_count:
            current = word
            continue

        chunks.extend(_split_word_by_characters(word, max_token_count, get_token_count))

    if current:
        chunks.append(current)
    return chunks


def _split_word_by_characters(
    word: str,
    max_token_count: int,
    get_token_count: Callable[[str], int],
) -> list[str]:
    pieces: list[str] = []
    current = ""
    for char in word:
        candidate = current + char
        if get_token_count(candidate) <= max_token_count:
            current = candidate
            continue
        if not current:
            raise TokenLimitExceeded(
                f"Input word `{word}` cannot be split to satisfy the model token limit "
                f"{max_token_count}."
            )
        pieces.append(current)
        current = char
    if current:
        pieces.append(current)
    return pieces
