"""SSML subset parsing into speech segments.

Responsibilities:
- Detect SSML input and fall back to one plain segment for ordinary text.
- Walk the markup with an immutable prosody state and emit one
  `SpeechSegment` per non-blank text node.
- Interpret `break`, `prosody`, `emphasis`, `voice`, `say-as`, `emotion`
  and `express-as`; unknown elements are transparent.

Key types:
- `SsmlTag`: closed set of recognized element names.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, replace
from enum import Enum

from ..errors import SsmlParseError
from ..models import SpeechSegment


DEFAULT_BREAK_MS = 500.0
EMPHASIS_SPEED = 0.85
EMPHASIS_VOLUME = 1.3
MAX_SSML_EMOTION_INTENSITY = 1.6

_DURATION_PATTERN = re.compile(r"([\d.]+)\s*(ms|s)", re.IGNORECASE)
_PERCENT_PATTERN = re.compile(r"([\d.]+)\s*%")
_SEMITONES_PATTERN = re.compile(r"([+-]?[\d.]+)\s*st", re.IGNORECASE)

_RATE_KEYWORDS = {
    "x-slow": 0.5,
    "slow": 0.75,
    "medium": 1.0,
    "fast": 1.25,
    "x-fast": 1.5,
}
_VOLUME_KEYWORDS = {
    "x-soft": 0.25,
    "soft": 0.5,
    "medium": 1.0,
    "loud": 1.5,
    "x-loud": 2.0,
}
_PITCH_KEYWORDS = {
    "x-low": -4.0,
    "low": -2.0,
    "medium": 0.0,
    "high": 2.0,
    "x-high": 4.0,
}
_INTENSITY_KEYWORDS = {
    "x-weak": 0.6,
    "weak": 0.8,
    "medium": 1.0,
    "strong": 1.25,
    "x-strong": 1.5,
}

_EMOTION_NAME_ATTRIBUTES = ("name", "emotion", "style", "type")
_EMOTION_INTENSITY_ATTRIBUTES = ("intensity", "level", "styledegree")


class SsmlTag(str, Enum):
    """Recognized SSML element names."""

    SPEAK = "speak"
    BREAK = "break"
    PROSODY = "prosody"
    EMPHASIS = "emphasis"
    VOICE = "voice"
    SAY_AS = "say-as"
    EMOTION = "emotion"
    EXPRESS_AS = "express-as"
    UNKNOWN = "unknown"

    @classmethod
    def from_element_name(cls, name: str) -> SsmlTag:
        """Resolve an element name, ignoring case and any XML namespace."""

        local = name.rsplit("}", 1)[-1].strip().lower()
        try:
            return cls(local)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True, slots=True)
class _ProsodyState:
    speed: float = 1.0
    volume: float = 1.0
    pitch: float = 0.0
    voice: str | None = None
    emphasis: bool = False
    emotion: str | None = None
    emotion_intensity: float = 1.0

    def text_segment(self, text: str) -> SpeechSegment:
        return SpeechSegment(
            text=text,
            speed=self.speed * EMPHASIS_SPEED if self.emphasis else self.speed,
            volume=self.volume * EMPHASIS_VOLUME if self.emphasis else self.volume,
            pitch_shift=self.pitch,
            voice=self.voice,
            emphasis=self.emphasis,
            emotion=self.emotion,
            emotion_intensity=self.emotion_intensity,
        )


def is_ssml(text: str) -> bool:
    """Return whether `text` looks like SSML markup."""

    return text.lstrip().startswith("<")


def parse(text: str) -> list[SpeechSegment]:
    """Parse SSML (or plain text) into speech segments.

    Args:
        text: SSML document, SSML fragment or plain text.

    Returns:
        Ordered segments. Plain text yields exactly one default segment.

    Raises:
        SsmlParseError: If the markup is not well-formed XML.
    """

    trimmed = text.strip()
    if not trimmed.startswith("<"):
        return [SpeechSegment(text=trimmed)]

    if not trimmed.lower().startswith("<speak"):
        trimmed = f"<speak>{trimmed}</speak>"

    try:
        root = ET.fromstring(trimmed)
    except ET.ParseError as exc:
        raise SsmlParseError(f"Malformed SSML: {exc}.") from exc

    segments: list[SpeechSegment] = []
    _walk(root, _ProsodyState(), segments)
    return segments


def _walk(element: ET.Element, state: _ProsodyState, segments: list[SpeechSegment]) -> None:
    """Emit segments for `element`'s text, children and their tails in document order."""

    _emit_text(element.text, state, segments)
    for child in element:
        _visit_child(child, state, segments)
        _emit_text(child.tail, state, segments)


def _emit_text(text: str | None, state: _ProsodyState, segments: list[SpeechSegment]) -> None:
    if text is None:
        return
    stripped = text.strip()
    if stripped:
        segments.append(state.text_segment(stripped))


def _visit_child(child: ET.Element, state: _ProsodyState, segments: list[SpeechSegment]) -> None:
    tag = SsmlTag.from_element_name(child.tag)

    if tag is SsmlTag.BREAK:
        segments.append(SpeechSegment(break_before_ms=parse_duration_ms(child.get("time"))))
    elif tag is SsmlTag.PROSODY:
        _walk(
            child,
            replace(
                state,
                speed=parse_rate(child.get("rate"), state.speed),
                volume=parse_volume(child.get("volume"), state.volume),
                pitch=parse_pitch(child.get("pitch"), state.pitch),
            ),
            segments,
        )
    elif tag is SsmlTag.EMPHASIS:
        _walk(child, replace(state, emphasis=True), segments)
    elif tag is SsmlTag.VOICE:
        name = child.get("name")
        _walk(child, replace(state, voice=name if name is not None else state.voice), segments)
    elif tag is SsmlTag.SAY_AS:
        inner = "".join(child.itertext()).strip()
        interpret_as = (child.get("interpret-as") or "").strip().lower()
        if interpret_as == "spell-out":
            inner = ", ".join(inner)
        segments.append(
            SpeechSegment(
                text=inner,
                speed=state.speed,
                volume=state.volume,
                pitch_shift=state.pitch,
                voice=state.voice,
                emotion=state.emotion,
                emotion_intensity=state.emotion_intensity,
            )
        )
    elif tag in (SsmlTag.EMOTION, SsmlTag.EXPRESS_AS):
        _walk(
            child,
            replace(
                state,
                emotion=_emotion_name(child, state.emotion),
                emotion_intensity=parse_emotion_intensity(
                    _first_attribute(child, _EMOTION_INTENSITY_ATTRIBUTES),
                    state.emotion_intensity,
                ),
            ),
            segments,
        )
    else:
        _walk(child, state, segments)


def _first_attribute(element: ET.Element, names: tuple[str, ...]) -> str | None:
    for name in names:
        value = element.get(name)
        if value is not None:
            return value
    return None


def _emotion_name(element: ET.Element, current: str | None) -> str | None:
    value = _first_attribute(element, _EMOTION_NAME_ATTRIBUTES)
    if value is None or not value.strip():
        return current
    return value.strip()


def parse_duration_ms(value: str | None) -> float:
    """Parse a break duration such as `250ms` or `1.5s`; default 500 ms."""

    if value is None:
        return DEFAULT_BREAK_MS
    match = _DURATION_PATTERN.search(value)
    if match is None:
        return DEFAULT_BREAK_MS
    amount = _to_float(match.group(1))
    if amount is None:
        return DEFAULT_BREAK_MS
    return amount if match.group(2).lower() == "ms" else amount * 1000.0


def parse_rate(value: str | None, current: float) -> float:
    """Apply a prosody `rate` keyword or percentage to `current`."""

    if not value:
        return current
    factor = _RATE_KEYWORDS.get(value.lower())
    if factor is not None:
        return current * factor
    return _apply_percentage(value, current)


def parse_volume(value: str | None, current: float) -> float:
    """Apply a prosody `volume` keyword or percentage to `current`."""

    if not value:
        return current
    keyword = value.lower()
    if keyword == "silent":
        return 0.0
    factor = _VOLUME_KEYWORDS.get(keyword)
    if factor is not None:
        return current * factor
    return _apply_percentage(value, current)


def parse_pitch(value: str | None, current: float) -> float:
    """Apply a prosody `pitch` keyword or `+Nst` offset to `current` semitones."""

    if not value:
        return current
    offset = _PITCH_KEYWORDS.get(value.lower())
    if offset is not None:
        return current + offset
    match = _SEMITONES_PATTERN.search(value)
    if match is None:
        return current
    semitones = _to_float(match.group(1))
    return current if semitones is None else current + semitones


def parse_emotion_intensity(value: str | None, current: float) -> float:
    """Apply an emotion intensity keyword, percentage or scalar, clamped to [0, 1.6]."""

    if value is None or not value.strip():
        return current

    normalized = value.strip().lower()
    if normalized == "none":
        parsed = 0.0
    elif normalized in _INTENSITY_KEYWORDS:
        parsed = current * _INTENSITY_KEYWORDS[normalized]
    elif normalized.endswith("%"):
        parsed = _apply_percentage(normalized, current)
    else:
        scalar = _to_float(normalized)
        parsed = current if scalar is None else current * scalar

    return min(max(parsed, 0.0), MAX_SSML_EMOTION_INTENSITY)


def _apply_percentage(value: str, current: float) -> float:
    match = _PERCENT_PATTERN.search(value)
    if match is None:
        return current
    percent = _to_float(match.group(1))
    return current if percent is None else current * percent / 100.0


def _to_float(value: str) -> float | None:
    try:
        return float(value)
    except ValueError:
        return None
