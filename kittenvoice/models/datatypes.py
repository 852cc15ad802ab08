"""Core datatypes shared across kittenvoice modules.

Responsibilities:
- Represent immutable records exchanged between segmentation and synthesis.
- Provide explicit typing for deterministic, testable synthesis stages.

Key types:
- `SpeechSegment`, `InflectionIntent`, `PlainTextPauseSegment`,
  and `EmotionResolution`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class SpeechSegment:
    """A span of text with the prosody state it was emitted under.

    Attributes:
        text: Text content to synthesize; blank for break-only segments.
        speed: Speed multiplier (1.0 = normal), from prosody rate and emphasis.
        volume: Volume multiplier (1.0 = normal), from prosody volume and emphasis.
        pitch_shift: Pitch offset in semitones (0 = unchanged).
        voice: Voice override, or `None` to use the speaker default.
        break_before_ms: Silence inserted before this segment, in milliseconds.
        emphasis: Whether the text was emitted under an `<emphasis>` element.
        emotion: Emotion/style label, or `None` for neutral delivery.
        emotion_intensity: Emotion intensity multiplier (1.0 = default).
    """

    text: str = ""
    speed: float = 1.0
    volume: float = 1.0
    pitch_shift: float = 0.0
    voice: str | None = None
    break_before_ms: float = 0.0
    emphasis: bool = False
    emotion: str | None = None
    emotion_intensity: float = 1.0

    @property
    def is_break(self) -> bool:
        """Whether this segment carries no speakable text."""

        return not self.text.strip()


class InflectionIntent(str, Enum):
    """Sentence-final intent detected from terminal punctuation."""

    NONE = "none"
    STATEMENT = "statement"
    QUESTION = "question"
    EXCLAMATION = "exclamation"


@dataclass(frozen=True, slots=True)
class PlainTextPauseSegment:
    """Text followed by the pause that should be inserted after it."""

    text: str
    pause_after_ms: float = 0.0
    intent: InflectionIntent = InflectionIntent.NONE


@dataclass(frozen=True, slots=True)
class EmotionResolution:
    """Resolved emotion modifiers and style selection for one segment.

    Attributes:
        distortion_prone: Whether the canonical emotion needs artifact guards.
        volume_multiplier: Linear volume factor.
        pitch_semitones: Pitch offset in semitones.
        speed_multiplier: Speaking-rate factor.
        style_row: Style-matrix row for the emotion bucket, or `None`.
        style_blend: Blend weight toward `style_row` (0 keeps the base row).
    """

    distortion_prone: bool = False
    volume_multiplier: float = 1.0
    pitch_semitones: float = 0.0
    speed_multiplier: float = 1.0
    style_row: int | None = None
    style_blend: float = 0.0
