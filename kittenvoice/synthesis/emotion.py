"""Emotion label resolution into prosody modifiers and style-row selection.

Responsibilities:
- Canonicalize emotion labels through an alias table.
- Scale per-emotion volume, pitch and speed profiles by the effective intensity.
- Pick an intensity bucket from the emotion's style rows and a blend weight,
  with tighter limits for emotions that tend to distort.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import NamedTuple

from ..models import EmotionResolution


MAX_EFFECTIVE_INTENSITY = 2.5
MAX_APPLIED_INTENSITY = 2.0
MIN_ACTIVE_INTENSITY = 0.001
MAX_EMOTION_PITCH = 0.75
DISTORTION_PRONE_BLEND_CAP = 0.36


class EmotionProfile(NamedTuple):
    """Volume, pitch (semitones) and speed of an emotion at intensity 1.0."""

    volume: float
    pitch: float
    speed: float


EMOTION_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "joyful": "happy",
        "cheerful": "happy",
        "mad": "angry",
        "furious": "angry",
        "depressed": "sad",
        "melancholy": "sad",
        "relaxed": "calm",
        "serene": "calm",
        "fear": "fearful",
    }
)

EMOTION_PROFILES: Mapping[str, EmotionProfile] = MappingProxyType(
    {
        "neutral": EmotionProfile(1.00, 0.00, 1.00),
        "happy": EmotionProfile(1.01, 0.20, 1.10),
        "excited": EmotionProfile(1.02, 0.25, 1.10),
        "sad": EmotionProfile(0.90, -0.25, 0.90),
        "angry": EmotionProfile(1.03, 0.25, 1.10),
        "calm": EmotionProfile(0.94, -0.14, 0.92),
        "fearful": EmotionProfile(1.01, 0.25, 1.10),
    }
)

EMOTION_STYLE_ROWS: Mapping[str, tuple[int, ...]] = MappingProxyType(
    {
        "neutral": (0,),
        "happy": (12, 20, 28),
        "excited": (30, 42, 56),
        "sad": (68, 80, 96),
        "angry": (104, 118, 132),
        "calm": (6, 10, 14),
        "fearful": (144, 160, 176),
    }
)

DISTORTION_PRONE_EMOTIONS = frozenset({"excited", "fearful", "angry"})


def canonicalize_emotion(label: str) -> str:
    """Lowercase, trim and resolve aliases such as `joyful` -> `happy`."""

    normalized = label.strip().lower()
    return EMOTION_ALIASES.get(normalized, normalized)


def effective_intensity(segment_intensity: float, expressiveness: float) -> float:
    """Combine segment intensity with the speaker's expressiveness scalar."""

    scaled = segment_intensity * max(0.0, expressiveness)
    return min(max(scaled, 0.0), MAX_EFFECTIVE_INTENSITY)


def resolve_emotion(
    label: str | None,
    segment_intensity: float,
    expressiveness: float,
) -> EmotionResolution:
    """Resolve an emotion label into modifiers and style selection.

    Args:
        label: Emotion label from markup, possibly an alias or blank.
        segment_intensity: Intensity carried by the segment.
        expressiveness: Speaker-wide expressiveness multiplier.

    Returns:
        Identity modifiers with no style row for blank or unknown labels and
        negligible intensity; otherwise the scaled profile and style bucket.
    """

    if label is None or not label.strip():
        return EmotionResolution()

    canonical = canonicalize_emotion(label)
    distortion_prone = canonical in DISTORTION_PRONE_EMOTIONS
    intensity = min(effective_intensity(segment_intensity, expressiveness), MAX_APPLIED_INTENSITY)
    if intensity <= MIN_ACTIVE_INTENSITY:
        return EmotionResolution(distortion_prone=distortion_prone)

    profile = EMOTION_PROFILES.get(canonical, EMOTION_PROFILES["neutral"])
    pitch = min(max(profile.pitch * intensity, -MAX_EMOTION_PITCH), MAX_EMOTION_PITCH)

    style_row: int | None = None
    style_blend = 0.0
    rows = EMOTION_STYLE_ROWS.get(canonical)
    if rows:
        style_row, style_blend = _select_style(rows, intensity, distortion_prone)

    return EmotionResolution(
        distortion_prone=distortion_prone,
        volume_multiplier=1.0 + (profile.volume - 1.0) * intensity,
        pitch_semitones=pitch,
        speed_multiplier=1.0 + (profile.speed - 1.0) * intensity,
        style_row=style_row,
        style_blend=style_blend,
    )


def _select_style(
    rows: tuple[int, ...],
    intensity: float,
    distortion_prone: bool,
) -> tuple[int, float]:
    last = len(rows) - 1
    if intensity < 0.9:
        bucket = 0
    elif intensity < 1.25:
        bucket = min(1, last)
    else:
        bucket = last

    blend = min(max(0.22 + intensity * 0.20, 0.22), 0.62)
    if distortion_prone:
        if bucket == last and len(rows) > 1:
            bucket = last - 1
        blend = min(blend, DISTORTION_PRONE_BLEND_CAP)
    return rows[bucket], blend
