"""Waveform effects on mono float32 sample arrays.

Responsibilities:
- Provide gain, saturation, limiting and pitch-shift effects used after inference.
- Generate silence and concatenate segments into one waveform.

All functions return new arrays and leave their input untouched.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np


NEAR_SILENCE_PEAK = 1e-6
DEFAULT_LIMITER_PEAK = 0.92
STRETCH_WINDOW_DIVISOR = 25  # 40 ms analysis windows


def as_waveform(samples: Sequence[float] | np.ndarray) -> np.ndarray:
    """Return `samples` as a 1-D float32 array."""

    return np.asarray(samples, dtype=np.float32).reshape(-1)


def peak(samples: np.ndarray) -> float:
    """Absolute peak amplitude, `0.0` for empty input."""

    if samples.size == 0:
        return 0.0
    return float(np.max(np.abs(samples)))


def apply_volume(samples: np.ndarray, volume: float) -> np.ndarray:
    """Scale by `volume` and hard-clip to [-1, 1]; unity gain is a no-op."""

    if abs(volume - 1.0) < 0.001:
        return samples
    return np.clip(samples * np.float32(volume), -1.0, 1.0).astype(np.float32)


def apply_soft_clip(samples: np.ndarray, drive: float = 1.10) -> np.ndarray:
    """Arctangent saturation normalized so that full scale maps to full scale."""

    if samples.size == 0 or drive <= 1.0:
        return samples
    norm = np.arctan(np.float32(drive))
    return (np.arctan(samples * np.float32(drive)) / norm).astype(np.float32)


def apply_peak_limiter(samples: np.ndarray, max_abs: float = DEFAULT_LIMITER_PEAK) -> np.ndarray:
    """Apply uniform gain reduction when the peak exceeds `max_abs`."""

    current = peak(samples)
    if current <= max_abs or current < NEAR_SILENCE_PEAK:
        return samples
    return (samples * np.float32(max_abs / current)).astype(np.float32)


def apply_pitch_shift(samples: np.ndarray, sample_rate: int, semitones: float) -> np.ndarray:
    """Shift pitch by `semitones` with a resample followed by an overlap-add stretch.

    The signal is resampled by `ratio = 2 ** (semitones / 12)` and then
    stretched by `1 / ratio`, so the output holds `1 / ratio**2` times as many
    samples as the input (a quarter for +12 st, four times for -12 st).
    """

    if abs(semitones) < 0.01 or samples.size == 0:
        return samples
    ratio = 2.0 ** (semitones / 12.0)
    pitched = resample(samples, ratio)
    return time_stretch(pitched, sample_rate, 1.0 / ratio)


def resample(samples: np.ndarray, ratio: float) -> np.ndarray:
    """Linear-interpolation resample; `ratio > 1` shortens and raises pitch."""

    new_length = int(samples.size / ratio)
    if new_length <= 0:
        return np.zeros(0, dtype=np.float32)
    positions = np.arange(new_length, dtype=np.float64) * ratio
    source = np.arange(samples.size, dtype=np.float64)
    return np.interp(positions, source, samples).astype(np.float32)


def time_stretch(samples: np.ndarray, sample_rate: int, stretch_ratio: float) -> np.ndarray:
    """Overlap-add time stretch with 40 ms Hann windows at 50% input overlap.

    The output is `stretch_ratio` times as long as the input and is
    normalized by the accumulated window weight.
    """

    if abs(stretch_ratio - 1.0) < 0.01:
        return samples

    window_size = sample_rate // STRETCH_WINDOW_DIVISOR
    hop_in = max(1, window_size // 2)
    hop_out = max(1, int(hop_in * stretch_ratio))
    output_length = int(samples.size * stretch_ratio)
    result = np.zeros(output_length, dtype=np.float64)
    weights = np.zeros(output_length, dtype=np.float64)
    if window_size <= 0:
        return result.astype(np.float32)

    window = 0.5 * (1.0 - np.cos(2.0 * np.pi * np.arange(window_size) / window_size))
    in_pos = 0
    out_pos = 0
    while in_pos + window_size <= samples.size and out_pos + window_size <= output_length:
        result[out_pos : out_pos + window_size] += samples[in_pos : in_pos + window_size] * window
        weights[out_pos : out_pos + window_size] += window
        in_pos += hop_in
        out_pos += hop_out

    covered = weights > 0.001
    result[covered] /= weights[covered]
    return result.astype(np.float32)


def generate_silence(sample_rate: int, duration_ms: float) -> np.ndarray:
    """Return `duration_ms` of zero samples."""

    count = max(0, int(sample_rate * duration_ms / 1000.0))
    return np.zeros(count, dtype=np.float32)


def concatenate(segments: Sequence[np.ndarray]) -> np.ndarray:
    """Join segments in order into one waveform."""

    if not segments:
        return np.zeros(0, dtype=np.float32)
    return np.concatenate([as_waveform(segment) for segment in segments]).astype(np.float32)
