"""Deterministic post-processing for raw inference output.

Responsibilities:
- Define explicit trim, normalization and fade defaults.
- Trim trailing low-energy audio, pad a short tail of silence, normalize the
  peak and apply linear fades.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .waveform import NEAR_SILENCE_PEAK


@dataclass(frozen=True, slots=True)
class PostprocessPolicy:
    """Deterministic waveform post-processing policy.

    Attributes:
        target_peak_ratio: Absolute peak of the normalized output.
        silence_threshold_ratio: Fraction of the loudest window RMS treated as speech.
        analysis_window_ms: RMS window length for tail trimming.
        tail_margin_windows: Windows kept after the last active window.
        trailing_silence_ms: Silence appended after trimming.
        fade_in_ms: Linear fade-in length.
        fade_out_ms: Linear fade-out length.
    """

    target_peak_ratio: float = 0.95
    silence_threshold_ratio: float = 0.02
    analysis_window_ms: int = 20
    tail_margin_windows: int = 3
    trailing_silence_ms: int = 200
    fade_in_ms: int = 10
    fade_out_ms: int = 150


class AudioPostProcessor:
    """Waveform post-processing service."""

    def __init__(self, sample_rate: int, policy: PostprocessPolicy | None = None) -> None:
        """Initialize postprocessor with explicit deterministic defaults."""

        self._sample_rate = sample_rate
        self._policy = policy if policy is not None else PostprocessPolicy()

    @property
    def policy(self) -> PostprocessPolicy:
        return self._policy

    def process_audio(self, samples: np.ndarray) -> np.ndarray:
        """Apply trim, padding, normalization and fades in deterministic order."""

        trimmed = self.trim_tail(samples)
        if trimmed.size == 0:
            return trimmed

        padded = np.concatenate(
            [trimmed, np.zeros(self._ms_to_samples(self._policy.trailing_silence_ms), dtype=np.float32)]
        )
        normalized = self.normalize(padded)
        return self._apply_fades(normalized)

    def trim_tail(self, samples: np.ndarray) -> np.ndarray:
        """Drop trailing audio whose window RMS stays below the activity threshold."""

        window = self._ms_to_samples(self._policy.analysis_window_ms)
        if window == 0 or samples.size < window:
            return samples

        full_windows = samples.size // window
        head = samples[: full_windows * window].astype(np.float64).reshape(full_windows, window)
        peak_rms = float(np.sqrt(np.mean(head**2, axis=1)).max())
        if peak_rms < NEAR_SILENCE_PEAK:
            return samples

        threshold = peak_rms * self._policy.silence_threshold_ratio
        start = samples.size - window
        while start >= 0:
            block = samples[start : start + window].astype(np.float64)
            if np.sqrt(np.mean(block**2)) > threshold:
                end = start + window * (1 + self._policy.tail_margin_windows)
                return samples[: min(end, samples.size)]
            start -= window
        return samples

    def normalize(self, samples: np.ndarray) -> np.ndarray:
        """Scale so that the absolute peak equals the policy target."""

        if samples.size == 0:
            return samples
        current = float(np.max(np.abs(samples)))
        if current <= 0:
            return samples
        return (samples * np.float32(self._policy.target_peak_ratio / current)).astype(np.float32)

    def _apply_fades(self, samples: np.ndarray) -> np.ndarray:
        result = samples.astype(np.float32, copy=True)
        fade_in = min(self._ms_to_samples(self._policy.fade_in_ms), result.size)
        if fade_in > 0:
            result[:fade_in] *= np.arange(fade_in, dtype=np.float32) / fade_in
        fade_out = min(self._ms_to_samples(self._policy.fade_out_ms), result.size)
        if fade_out > 0:
            result[result.size - fade_out :] *= (np.arange(fade_out, dtype=np.float32) / fade_out)[::-1]
        return result

    def _ms_to_samples(self, milliseconds: int) -> int:
        return self._sample_rate * milliseconds // 1000
