"""SSML segment synthesis with emotion and prosody effects.

Responsibilities:
- Render break silences and spoken segments in document order.
- Resolve each segment's emotion into speed, style row and post-inference effects.
- Guard distortion-prone emotions with tighter volume, pitch and saturation limits.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

import numpy as np

from ..audio.waveform import (
    apply_peak_limiter,
    apply_pitch_shift,
    apply_soft_clip,
    apply_volume,
    concatenate,
    generate_silence,
)
from ..models import EmotionResolution, SpeechSegment
from .emotion import resolve_emotion


DISTORTION_PRONE_PITCH_SCALE = 0.12
DISTORTION_PRONE_PITCH_THRESHOLD = 0.30
PITCH_THRESHOLD = 0.10
DISTORTION_PRONE_MAX_VOLUME = 1.08
MAX_VOLUME = 1.20
DISTORTION_PRONE_SOFT_CLIP_DRIVE = 1.08


class TextSynthesizerWithSettings(Protocol):
    """Render text with an explicit voice, speed and optional style row."""

    def __call__(
        self,
        text: str,
        voice: str,
        speed: float,
        style_row: int | None,
        style_blend: float,
    ) -> np.ndarray:
        ...


def synthesize_segments(
    segments: Sequence[SpeechSegment],
    *,
    default_voice: str,
    default_speed: float,
    expressiveness: float,
    sample_rate: int,
    synthesize_text: TextSynthesizerWithSettings,
) -> np.ndarray:
    """Synthesize parsed SSML segments into one waveform.

    Args:
        segments: Segments produced by the SSML parser.
        default_voice: Voice used when a segment carries no override.
        default_speed: Base speaking rate multiplied by segment and emotion speed.
        expressiveness: Speaker-wide emotion intensity multiplier.
        sample_rate: Output sample rate.
        synthesize_text: Callable rendering one text span.

    Returns:
        Concatenated waveform, empty when nothing audible was produced.
    """

    audio_segments: list[np.ndarray] = []
    for segment in segments:
        if segment.break_before_ms > 0:
            audio_segments.append(generate_silence(sample_rate, segment.break_before_ms))
        if segment.is_break:
            continue

        emotion = resolve_emotion(segment.emotion, segment.emotion_intensity, expressiveness)
        voice = segment.voice or default_voice
        speed = default_speed * segment.speed * emotion.speed_multiplier

        audio = synthesize_text(segment.text, voice, speed, emotion.style_row, emotion.style_blend)
        if audio.size == 0:
            continue
        audio_segments.append(apply_ssml_effects(audio, segment, emotion, sample_rate))

    if not audio_segments:
        return np.zeros(0, dtype=np.float32)
    return concatenate(audio_segments)


def apply_ssml_effects(
    audio: np.ndarray,
    segment: SpeechSegment,
    emotion: EmotionResolution,
    sample_rate: int,
) -> np.ndarray:
    """Apply volume, pitch, saturation and limiting for one rendered segment."""

    prone = emotion.distortion_prone
    max_volume = DISTORTION_PRONE_MAX_VOLUME if prone else MAX_VOLUME
    volume = min(max(segment.volume * emotion.volume_multiplier, 0.0), max_volume)

    emotion_pitch = emotion.pitch_semitones * DISTORTION_PRONE_PITCH_SCALE if prone else emotion.pitch_semitones
    pitch = segment.pitch_shift + emotion_pitch
    pitch_threshold = DISTORTION_PRONE_PITCH_THRESHOLD if prone else PITCH_THRESHOLD

    processed = apply_volume(audio, volume)
    if abs(pitch) > pitch_threshold:
        processed = apply_pitch_shift(processed, sample_rate, pitch)
    if prone:
        processed = apply_soft_clip(processed, DISTORTION_PRONE_SOFT_CLIP_DRIVE)
    return apply_peak_limiter(processed)
