"""Unit tests for English number verbalization."""

from __future__ import annotations

from kittenvoice.text.number_words import normalize_digits, number_to_words


def test_number_to_words_reads_small_and_compound_values() -> None:
    """Numbers below one thousand should use teens, tens and hundreds."""

    assert number_to_words("0") == "zero"
    assert number_to_words("7") == "seven"
    assert number_to_words("13") == "thirteen"
    assert number_to_words("40") == "forty"
    assert number_to_words("99") == "ninety nine"
    assert number_to_words("305") == "three hundred five"


def test_number_to_words_applies_scale_names() -> None:
    """Scale words should be emitted for each non-zero group."""

    assert number_to_words("1234") == "one thousand two hundred thirty four"
    assert number_to_words("2000000") == "two million"
    assert number_to_words("1000001") == "one million one"


def test_number_to_words_handles_leading_zeros_and_empty_input() -> None:
    """Leading zeros should be ignored and empty input should read as zero."""

    assert normalize_digits("000") == "0"
    assert normalize_digits("0042") == "42"
    assert number_to_words("0042") == "forty two"
    assert number_to_words("") == "zero"


def test_number_to_words_reads_oversized_values_digit_by_digit() -> None:
    """Values beyond the 64-bit range should be spelled one digit at a time."""

    digits = "1" + "0" * 20
    assert number_to_words(digits) == " ".join(["one"] + ["zero"] * 20)
