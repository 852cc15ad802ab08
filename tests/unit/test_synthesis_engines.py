"""Unit tests for pause, chunk and SSML synthesis orchestration."""

from __future__ import annotations

import numpy as np
import pytest

from kittenvoice.models import SpeechSegment, SynthesisTimingOptions
from kittenvoice.ssml import parse
from kittenvoice.synthesis import (
    apply_ssml_effects,
    ensure_trailing_punctuation,
    resolve_emotion,
    synthesize_chunked,
    synthesize_segments,
    synthesize_with_text_pauses,
)

SAMPLE_RATE = 24000
UNIT_SAMPLES = 100


def _samples_for_ms(milliseconds: float) -> int:
    return int(SAMPLE_RATE * milliseconds / 1000.0)


class RecordingSynthesizer:
    """Segment synthesizer returning a fixed-length block per call."""

    def __init__(self, length: int = UNIT_SAMPLES) -> None:
        self.length = length
        self.texts: list[str] = []

    def __call__(self, text: str, style_row: int | None, style_blend: float) -> np.ndarray:
        self.texts.append(text)
        return np.full(self.length, 0.25, dtype=np.float32)


def test_ensure_trailing_punctuation() -> None:
    """A period is appended only when sentence punctuation is missing."""

    assert ensure_trailing_punctuation("Hi") == "Hi."
    assert ensure_trailing_punctuation("Hi!  ") == "Hi!"
    assert ensure_trailing_punctuation("Hi  ") == "Hi."
    assert ensure_trailing_punctuation("   ") == ""


def test_pause_synthesis_inserts_silence_between_spoken_spans() -> None:
    """Pauses go between spans; the trailing pause after the last span is dropped."""

    timing = SynthesisTimingOptions()
    synthesizer = RecordingSynthesizer()

    audio = synthesize_with_text_pauses(
        "Hello, world. How are you?",
        None,
        1.0,
        sample_rate=SAMPLE_RATE,
        timing=timing,
        synthesize_segment=synthesizer,
    )

    assert synthesizer.texts == ["Hello", "world.", "How are you?"]
    assert audio.size == (
        3 * UNIT_SAMPLES
        + _samples_for_ms(timing.comma_pause_ms)
        + _samples_for_ms(timing.period_pause_ms)
    )
    comma_silence = audio[UNIT_SAMPLES : UNIT_SAMPLES + _samples_for_ms(timing.comma_pause_ms)]
    assert not comma_silence.any()


def test_pauses_after_empty_spans_accumulate() -> None:
    """Consecutive cues merge their pauses before the next spoken span."""

    timing = SynthesisTimingOptions()

    audio = synthesize_with_text_pauses(
        "One... — two",
        None,
        1.0,
        sample_rate=SAMPLE_RATE,
        timing=timing,
        synthesize_segment=RecordingSynthesizer(),
    )

    merged_ms = timing.ellipsis_pause_ms + timing.em_dash_pause_ms
    assert audio.size == 2 * UNIT_SAMPLES + _samples_for_ms(merged_ms)


def test_aggregated_pause_is_capped() -> None:
    """Merged pauses never exceed `max_aggregated_pause_ms`."""

    timing = SynthesisTimingOptions(max_aggregated_pause_ms=200.0)

    audio = synthesize_with_text_pauses(
        "One, , , two",
        None,
        1.0,
        sample_rate=SAMPLE_RATE,
        timing=timing,
        synthesize_segment=RecordingSynthesizer(),
    )

    assert audio.size == 2 * UNIT_SAMPLES + _samples_for_ms(200.0)


def test_leading_pause_is_not_inserted() -> None:
    """Pauses before the first spoken span are dropped."""

    audio = synthesize_with_text_pauses(
        ", hello",
        None,
        1.0,
        sample_rate=SAMPLE_RATE,
        timing=SynthesisTimingOptions(),
        synthesize_segment=RecordingSynthesizer(),
    )

    assert audio.size == UNIT_SAMPLES


def test_chunked_synthesis_joins_chunks_with_configured_pause() -> None:
    """Total length is the chunk audio plus one join pause between chunks."""

    timing = SynthesisTimingOptions()
    synthesizer = RecordingSynthesizer(length=50)
    text = " ".join(f"w{index}" for index in range(10))

    audio = synthesize_chunked(
        text,
        3,
        sample_rate=SAMPLE_RATE,
        timing=timing,
        get_token_count=lambda chunk: len(chunk.split()),
        synthesize_segment=synthesizer,
        style_row=None,
        style_blend=1.0,
    )

    assert synthesizer.texts == ["w0 w1 w2", "w3 w4 w5", "w6 w7 w8", "w9"]
    assert audio.size == 4 * 50 + 3 * _samples_for_ms(timing.chunk_join_pause_ms)


def test_segment_synthesis_applies_breaks_voice_speed_and_emotion() -> None:
    """SSML segments carry their voice, combined speed and emotion style row."""

    calls: list[tuple[str, str, float, int | None, float]] = []

    def synthesize_text(
        text: str, voice: str, speed: float, style_row: int | None, style_blend: float
    ) -> np.ndarray:
        calls.append((text, voice, speed, style_row, style_blend))
        return np.full(UNIT_SAMPLES, 0.25, dtype=np.float32)

    segments = parse(
        '<speak>Hi<break time="100ms"/>'
        '<voice name="Luna"><prosody rate="slow"><emotion name="happy">there</emotion></prosody></voice>'
        "</speak>"
    )

    audio = synthesize_segments(
        segments,
        default_voice="Bella",
        default_speed=1.2,
        expressiveness=1.0,
        sample_rate=SAMPLE_RATE,
        synthesize_text=synthesize_text,
    )

    happy = resolve_emotion("happy", 1.0, 1.0)
    assert calls[0] == ("Hi", "Bella", pytest.approx(1.2), None, 0.0)
    text, voice, speed, style_row, style_blend = calls[1]
    assert (text, voice) == ("there", "Luna")
    assert speed == pytest.approx(1.2 * 0.75 * happy.speed_multiplier)
    assert style_row == happy.style_row
    assert style_blend == pytest.approx(happy.style_blend)
    ratio = 2.0 ** (happy.pitch_semitones / 12.0)
    shifted_size = int(int(UNIT_SAMPLES / ratio) * (1.0 / ratio))
    assert audio.size == UNIT_SAMPLES + _samples_for_ms(100.0) + shifted_size


def test_segment_synthesis_with_zero_expressiveness_skips_emotion() -> None:
    """Expressiveness 0 disables emotion speed and style selection."""

    calls: list[tuple[float, int | None]] = []

    def synthesize_text(
        text: str, voice: str, speed: float, style_row: int | None, style_blend: float
    ) -> np.ndarray:
        calls.append((speed, style_row))
        return np.zeros(0, dtype=np.float32)

    audio = synthesize_segments(
        parse('<speak><emotion name="angry">No</emotion></speak>'),
        default_voice="Bella",
        default_speed=1.0,
        expressiveness=0.0,
        sample_rate=SAMPLE_RATE,
        synthesize_text=synthesize_text,
    )

    assert calls == [(1.0, None)]
    assert audio.size == 0


def test_ssml_effects_cap_volume_and_guard_distortion_prone_emotions() -> None:
    """Volume is capped per emotion class and output stays under the limiter peak."""

    audio = np.full(1000, 0.5, dtype=np.float32)
    loud = SpeechSegment(text="x", volume=2.0)

    neutral = apply_ssml_effects(audio, loud, resolve_emotion(None, 1.0, 1.0), SAMPLE_RATE)
    angry = apply_ssml_effects(audio, loud, resolve_emotion("angry", 1.0, 1.0), SAMPLE_RATE)

    assert np.max(np.abs(neutral)) == pytest.approx(0.6)
    # Prone emotions cap volume at 1.08 before soft clipping.
    assert 0.54 < np.max(np.abs(angry)) <= 0.92 + 1e-6
