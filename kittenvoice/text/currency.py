"""Currency expression verbalization.

Responsibilities:
- Recognize currency amounts written with a symbol (`$12.50`, `12€`), an ISO
  code glued to the amount (`USD12`) or split over two tokens (`USD 12`,
  `12 EUR`).
- Disambiguate grouping and decimal separators and speak the amount as
  English words with singular or plural unit names.

Key types:
- `CurrencyDescriptor`: unit names for one currency.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .number_words import normalize_digits, number_to_words


@dataclass(frozen=True, slots=True)
class CurrencyDescriptor:
    """Spoken unit names for one currency."""

    singular_major: str
    plural_major: str
    singular_minor: str
    plural_minor: str
    supports_minor: bool = True


_DOLLAR = CurrencyDescriptor("dollar", "dollars", "cent", "cents")
_EURO = CurrencyDescriptor("euro", "euros", "cent", "cents")
_POUND = CurrencyDescriptor("pound", "pounds", "penny", "pence")
_KRONE = CurrencyDescriptor("krone", "kroner", "ore", "ore")
_YUAN = CurrencyDescriptor("yuan", "yuan", "fen", "fen")

_SYMBOL_DESCRIPTORS: dict[str, CurrencyDescriptor] = {
    "$": _DOLLAR,
    "€": _EURO,
    "£": _POUND,
}

_CODE_DESCRIPTORS: dict[str, CurrencyDescriptor] = {
    "USD": _DOLLAR,
    "EUR": _EURO,
    "GBP": _POUND,
    "JPY": CurrencyDescriptor("yen", "yen", "", "", supports_minor=False),
    "AUD": _DOLLAR,
    "CAD": _DOLLAR,
    "NZD": _DOLLAR,
    "SGD": _DOLLAR,
    "HKD": _DOLLAR,
    "CHF": CurrencyDescriptor("franc", "francs", "centime", "centimes"),
    "SEK": CurrencyDescriptor("krona", "kronor", "ore", "ore"),
    "NOK": _KRONE,
    "DKK": _KRONE,
    "CNY": _YUAN,
    "RMB": _YUAN,
    "INR": CurrencyDescriptor("rupee", "rupees", "paise", "paise"),
}

_LEADING_ENVELOPE = frozenset("\"'([{")
_TRAILING_ENVELOPE = frozenset("\"')]}.,!?;:")


@dataclass(frozen=True, slots=True)
class _ParsedAmount:
    major_digits: str
    minor_units: int = 0
    has_minor_part: bool = False
    is_negative: bool = False


def try_convert_currency_at_position(
    words: Sequence[str],
    index: int,
) -> tuple[str, int] | None:
    """Convert a currency expression starting at `words[index]`.

    Args:
        words: Whitespace-separated tokens of the input text.
        index: Position of the candidate first token.

    Returns:
        Tuple of spoken words and the number of consumed tokens (1 or 2), or
        `None` when no currency expression starts at `index`.
    """

    spoken = try_convert_currency_token(words[index])
    if spoken is not None:
        return spoken, 1

    if index + 1 >= len(words):
        return None

    first = _trim_envelope(words[index])
    second = _trim_envelope(words[index + 1])
    if not first or not second:
        return None

    spoken = _convert_code_amount_pair(first, second) or _convert_code_amount_pair(second, first)
    if spoken is None:
        return None
    return spoken, 2


def try_convert_currency_token(token: str) -> str | None:
    """Convert one token such as `$12.50`, `-€3` or `USD12` to spoken words."""

    core = _trim_envelope(token)
    if not core:
        return None

    explicit_negative = False
    if core[0] in "-+":
        explicit_negative = core[0] == "-"
        core = core[1:]

    extracted = _extract_currency_and_amount(core)
    if extracted is None:
        return None
    descriptor, amount_text = extracted

    amount = _parse_amount(amount_text)
    if amount is None or _rejects_minor(descriptor, amount):
        return None

    spoken = _build_words(descriptor, amount, explicit_negative or amount.is_negative)
    return spoken or None


def _convert_code_amount_pair(code_token: str, amount_token: str) -> str | None:
    is_negative = False
    code = code_token
    if code[0] in "-+":
        is_negative = code[0] == "-"
        code = code[1:]
    if len(code) < 3 or not code.isalpha():
        return None

    descriptor = _CODE_DESCRIPTORS.get(code.upper())
    if descriptor is None:
        return None

    amount = _parse_amount(amount_token)
    if amount is None or _rejects_minor(descriptor, amount):
        return None

    spoken = _build_words(descriptor, amount, is_negative or amount.is_negative)
    return spoken or None


def _trim_envelope(token: str) -> str:
    """Strip quotes, brackets and trailing punctuation around a token."""

    core = token.strip()
    start = 0
    end = len(core)
    while start < end and core[start] in _LEADING_ENVELOPE:
        start += 1
    while end > start and core[end - 1] in _TRAILING_ENVELOPE:
        end -= 1
    return core[start:end]


def _extract_currency_and_amount(token: str) -> tuple[CurrencyDescriptor, str] | None:
    if len(token) < 2:
        return None

    descriptor = _SYMBOL_DESCRIPTORS.get(token[0])
    if descriptor is not None:
        amount = token[1:]
        return (descriptor, amount) if amount.strip() else None

    descriptor = _SYMBOL_DESCRIPTORS.get(token[-1])
    if descriptor is not None:
        amount = token[:-1]
        return (descriptor, amount) if amount.strip() else None

    split = _split_code_and_amount(token)
    if split is None:
        return None
    code, amount = split
    descriptor = _CODE_DESCRIPTORS.get(code.upper())
    if descriptor is None:
        return None
    return descriptor, amount


def _split_code_and_amount(token: str) -> tuple[str, str] | None:
    """Split `USD12` or `12USD` into code and amount text."""

    if len(token) < 4:
        return None

    leading = 0
    while leading < len(token) and token[leading].isalpha():
        leading += 1
    if 3 <= leading < len(token):
        return token[:leading], token[leading:]

    trailing = 0
    while trailing < len(token) and token[len(token) - 1 - trailing].isalpha():
        trailing += 1
    if 3 <= trailing < len(token):
        return token[len(token) - trailing:], token[: len(token) - trailing]
    return None


def _parse_amount(amount: str) -> _ParsedAmount | None:
    """Parse an amount, deciding which separator (if any) is the decimal point."""

    text = amount.strip()
    if not text:
        return None

    is_negative = False
    if text[0] in "-+":
        is_negative = text[0] == "-"
        text = text[1:]
    if not text:
        return None

    has_dot = "." in text
    has_comma = "," in text

    if not has_dot and not has_comma:
        parsed = _parse_with_separators(text, group=None, decimal=None)
    elif has_dot and has_comma:
        # The separator that appears last is the decimal point.
        if text.rfind(",") > text.rfind("."):
            parsed = _parse_with_separators(text, group=".", decimal=",")
        else:
            parsed = _parse_with_separators(text, group=",", decimal=".")
    else:
        separator = "." if has_dot else ","
        if text.count(separator) == 1:
            index = text.index(separator)
            digits_after = len(text) - index - 1
            parsed = None
            if digits_after == 3 and index > 0:
                parsed = _parse_with_separators(text, group=separator, decimal=None)
            if parsed is None and digits_after <= 2:
                parsed = _parse_with_separators(text, group=None, decimal=separator)
        else:
            parsed = _parse_with_separators(text, group=separator, decimal=None)

    if parsed is None:
        return None
    major_digits, minor_units, has_minor_part = parsed
    return _ParsedAmount(major_digits, minor_units, has_minor_part, is_negative)


def _parse_with_separators(
    amount: str,
    *,
    group: str | None,
    decimal: str | None,
) -> tuple[str, int, bool] | None:
    allowed = {separator for separator in (group, decimal) if separator}
    if any(not char.isdecimal() and char not in allowed for char in amount):
        return None

    major_part = amount
    minor_part = ""
    has_minor_part = False
    if decimal is not None and decimal in amount:
        major_part, _, minor_part = amount.partition(decimal)
        if decimal in minor_part:
            return None
        has_minor_part = True

    major_digits = _normalize_grouped_digits(major_part or "0", group)
    if major_digits is None:
        return None

    if not has_minor_part or not minor_part:
        return major_digits, 0, has_minor_part

    if len(minor_part) > 2 or not minor_part.isdecimal():
        return None
    minor_units = int(minor_part) * 10 if len(minor_part) == 1 else int(minor_part)
    return major_digits, minor_units, has_minor_part


def _normalize_grouped_digits(value: str, group: str | None) -> str | None:
    if not value.strip():
        return None

    if group is None or group not in value:
        return normalize_digits(value) if value.isdecimal() else None

    groups = value.split(group)
    for index, chunk in enumerate(groups):
        if not chunk or not chunk.isdecimal():
            return None
        if index == 0 and len(chunk) > 3:
            return None
        if index > 0 and len(chunk) != 3:
            return None
    return normalize_digits("".join(groups))


def _rejects_minor(descriptor: CurrencyDescriptor, amount: _ParsedAmount) -> bool:
    return not descriptor.supports_minor and amount.has_minor_part and amount.minor_units > 0


def _build_words(descriptor: CurrencyDescriptor, amount: _ParsedAmount, is_negative: bool) -> str:
    major_is_zero = amount.major_digits == "0"
    include_minor = descriptor.supports_minor and amount.has_minor_part and amount.minor_units > 0

    parts: list[str] = []
    if is_negative:
        parts.append("minus")

    if not major_is_zero or not include_minor:
        parts.append(number_to_words(amount.major_digits))
        parts.append(
            descriptor.singular_major if amount.major_digits == "1" else descriptor.plural_major
        )

    if include_minor:
        if not major_is_zero:
            parts.append("and")
        parts.append(number_to_words(str(amount.minor_units)))
        parts.append(
            descriptor.singular_minor if amount.minor_units == 1 else descriptor.plural_minor
        )
    return " ".join(parts)
