"""Unit tests for waveform effects."""

from __future__ import annotations

import numpy as np
import pytest

from kittenvoice.audio import (
    apply_peak_limiter,
    apply_pitch_shift,
    apply_soft_clip,
    apply_volume,
    concatenate,
    generate_silence,
)
from kittenvoice.audio.waveform import peak, resample, time_stretch

SAMPLE_RATE = 24000


def _tone(frequency: float, seconds: float = 1.0, amplitude: float = 0.5) -> np.ndarray:
    time = np.arange(int(SAMPLE_RATE * seconds), dtype=np.float32) / SAMPLE_RATE
    return (amplitude * np.sin(2.0 * np.pi * frequency * time)).astype(np.float32)


def _dominant_frequency(samples: np.ndarray) -> float:
    spectrum = np.abs(np.fft.rfft(samples))
    frequencies = np.fft.rfftfreq(samples.size, d=1.0 / SAMPLE_RATE)
    return float(frequencies[int(np.argmax(spectrum))])


def test_volume_is_bounded_and_unity_is_a_no_op() -> None:
    """Gain hard-clips to [-1, 1] and unity gain returns the input unchanged."""

    tone = _tone(220.0, amplitude=0.8)
    louder = apply_volume(tone, 3.0)

    assert np.max(np.abs(louder)) <= 1.0
    assert apply_volume(tone, 1.0005) is tone
    assert peak(apply_volume(tone, 0.5)) == pytest.approx(peak(tone) * 0.5, rel=1e-5)


def test_peak_limiter_is_idempotent() -> None:
    """Limiting twice equals limiting once, and quiet input is untouched."""

    tone = _tone(220.0, amplitude=1.5)
    once = apply_peak_limiter(tone)
    twice = apply_peak_limiter(once)

    assert peak(once) == pytest.approx(0.92, rel=1e-5)
    np.testing.assert_allclose(once, twice, rtol=1e-6)
    quiet = _tone(220.0, amplitude=0.3)
    assert apply_peak_limiter(quiet) is quiet


def test_soft_clip_keeps_full_scale_and_compresses() -> None:
    """Saturation maps ±1 to ±1 and never increases the peak beyond full scale."""

    samples = np.array([-1.0, -0.5, 0.0, 0.5, 1.0], dtype=np.float32)
    clipped = apply_soft_clip(samples, 1.5)

    assert clipped[0] == pytest.approx(-1.0, abs=1e-6)
    assert clipped[-1] == pytest.approx(1.0, abs=1e-6)
    assert clipped[2] == 0.0
    assert apply_soft_clip(samples, 1.0) is samples


def test_pitch_shift_up_one_octave_doubles_frequency() -> None:
    """+12 semitones should move a 220 Hz tone close to 440 Hz."""

    tone = _tone(220.0)
    shifted = apply_pitch_shift(tone, SAMPLE_RATE, 12.0)

    # Frame phase offsets in the overlap-add move the peak by under one 100 Hz frame rate.
    assert 380.0 <= _dominant_frequency(shifted) <= 500.0


def test_pitch_shift_output_length_scales_by_inverse_ratio_squared() -> None:
    """Resample by the ratio, then stretch by its inverse: +12 st quarters the length."""

    tone = _tone(220.0)

    assert apply_pitch_shift(tone, SAMPLE_RATE, 12.0).size == 6000
    assert apply_pitch_shift(tone, SAMPLE_RATE, -12.0).size == 96000


def test_pitch_shift_below_threshold_is_a_no_op() -> None:
    """Negligible shifts return the input as is."""

    tone = _tone(220.0, seconds=0.1)
    assert apply_pitch_shift(tone, SAMPLE_RATE, 0.001) is tone


def test_resample_and_time_stretch_lengths() -> None:
    """Resampling by 2 halves the length; stretching by 2 doubles it."""

    tone = _tone(220.0, seconds=0.5)

    assert resample(tone, 2.0).size == tone.size // 2
    assert time_stretch(tone, SAMPLE_RATE, 2.0).size == tone.size * 2


def test_silence_and_concatenation() -> None:
    """Silence length follows the duration; concatenation keeps order."""

    silence = generate_silence(SAMPLE_RATE, 250.0)

    assert silence.size == 6000
    assert not silence.any()
    assert generate_silence(SAMPLE_RATE, -5.0).size == 0
    joined = concatenate([np.ones(2, dtype=np.float32), silence[:3], np.full(1, 0.5, dtype=np.float32)])
    np.testing.assert_array_equal(joined, np.array([1, 1, 0, 0, 0, 0.5], dtype=np.float32))
    assert concatenate([]).size == 0
