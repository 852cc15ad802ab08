"""Value normalization for speaker config files and `KITTENVOICE_*` variables.

YAML and JSON configs, environment variables and CLI options all deliver
loosely typed values. These helpers turn them into the strings, booleans and
numbers that `ModelConfig` and `SynthesisTimingOptions` hold, raising
`ValueError` with the offending field name when a value cannot be used.
"""

from __future__ import annotations


_BOOLEAN_TOKENS = {
    "1": True,
    "true": True,
    "yes": True,
    "on": True,
    "0": False,
    "false": False,
    "no": False,
    "off": False,
}


def normalize_optional_string(value: object) -> str | None:
    """Return a voice name, file name or ARPAbet entry stripped of whitespace.

    Blank entries (an unset `KITTENVOICE_VOICE`, an empty override value)
    come back as `None` so callers can fall back to their defaults.
    """

    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_permissive_boolean(value: object) -> bool | None:
    """Read a flag such as `timing.inflection_enabled`.

    YAML booleans pass through; strings accept `true/false`, `yes/no`,
    `on/off` and `1/0` in any case. Anything else gives `None` so the config
    loader can report the field.
    """

    if isinstance(value, bool):
        return value
    normalized = normalize_optional_string(value)
    if normalized is None:
        return None
    return _BOOLEAN_TOKENS.get(normalized.lower())


def parse_non_negative_float(value: object, field_name: str) -> float:
    """Parse a finite non-negative float from a config or CLI value.

    Raises:
        ValueError: If the value is not a number or is negative.
    """

    if isinstance(value, bool):
        raise ValueError(f"`{field_name}` must be a non-negative number.")
    normalized = normalize_optional_string(value)
    if normalized is None:
        raise ValueError(f"`{field_name}` must be a non-negative number.")
    try:
        parsed = float(normalized)
    except ValueError as exc:
        raise ValueError(f"`{field_name}` must be a non-negative number.") from exc
    if parsed != parsed or parsed in (float("inf"), float("-inf")) or parsed < 0:
        raise ValueError(f"`{field_name}` must be a non-negative number.")
    return parsed


def parse_positive_int(value: object, field_name: str) -> int:
    """Parse a strictly positive integer from a config or CLI value."""

    if isinstance(value, bool):
        raise ValueError(f"`{field_name}` must be a positive integer.")
    if isinstance(value, int):
        parsed = value
    else:
        normalized = normalize_optional_string(value)
        if normalized is None:
            raise ValueError(f"`{field_name}` must be a positive integer.")
        try:
            parsed = int(normalized)
        except ValueError as exc:
            raise ValueError(f"`{field_name}` must be a positive integer.") from exc
    if parsed <= 0:
        raise ValueError(f"`{field_name}` must be a positive integer.")
    return parsed
