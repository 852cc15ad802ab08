"""English number verbalization used by G2P and currency reading."""

from __future__ import annotations


_DIGIT_WORDS = (
    "zero", "one", "two", "three", "four",
    "five", "six", "seven", "eight", "nine",
)
_TEEN_WORDS = (
    "ten", "eleven", "twelve", "thirteen", "fourteen",
    "fifteen", "sixteen", "seventeen", "eighteen", "nineteen",
)
_TENS_WORDS = (
    "", "", "twenty", "thirty", "forty",
    "fifty", "sixty", "seventy", "eighty", "ninety",
)
_SCALES = (
    (10**18, "quintillion"),
    (10**15, "quadrillion"),
    (10**12, "trillion"),
    (10**9, "billion"),
    (10**6, "million"),
    (10**3, "thousand"),
)
# Values at or above this bound are read digit by digit.
_MAX_VERBALIZED = 2**64


def normalize_digits(digits: str) -> str:
    """Strip leading zeros, keeping a single `0` for all-zero input."""

    trimmed = digits.lstrip("0")
    return trimmed or "0"


def number_to_words(digits: str) -> str:
    """Convert a string of decimal digits into English words.

    Args:
        digits: Decimal digit characters, possibly with leading zeros.

    Returns:
        Words such as ``"one thousand two hundred thirty four"``.
    """

    if not digits:
        return "zero"
    normalized = normalize_digits(digits)
    if not normalized.isdecimal():
        return ""

    value = int(normalized)
    if value >= _MAX_VERBALIZED:
        return " ".join(_DIGIT_WORDS[int(digit)] for digit in normalized)
    return _value_to_words(value)


def _value_to_words(value: int) -> str:
    if value == 0:
        return "zero"

    parts: list[str] = []
    for scale, name in _SCALES:
        if value >= scale:
            parts.append(f"{_under_thousand(value // scale)} {name}")
            value %= scale
    if value > 0:
        parts.append(_under_thousand(value))
    return " ".join(parts)


def _under_thousand(value: int) -> str:
    if value >= 100:
        hundreds = f"{_DIGIT_WORDS[value // 100]} hundred"
        remainder = value % 100
        return hundreds if remainder == 0 else f"{hundreds} {_under_hundred(remainder)}"
    return _under_hundred(value)


def _under_hundred(value: int) -> str:
    if value < 10:
        return _DIGIT_WORDS[value]
    if value < 20:
        return _TEEN_WORDS[value - 10]
    tens, ones = divmod(value, 10)
    return _TENS_WORDS[tens] if ones == 0 else f"{_TENS_WORDS[tens]} {_DIGIT_WORDS[ones]}"
