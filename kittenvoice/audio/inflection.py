"""Sentence-final pitch inflection for questions and exclamations."""

from __future__ import annotations

import numpy as np

from ..models import InflectionIntent, SynthesisTimingOptions
from .waveform import STRETCH_WINDOW_DIVISOR, apply_peak_limiter, apply_pitch_shift


class TailInflector:
    """Raise the pitch of the last spoken window of a sentence.

    Questions rise by `question_inflection_semitones`. Exclamations rise by
    the smaller `exclamation_inflection_semitones` and ramp their gain up to
    `exclamation_gain`. The shifted tail is cross-faded linearly over the
    original so that the onset of the window is unchanged.
    """

    def __init__(self, sample_rate: int, timing: SynthesisTimingOptions) -> None:
        self._sample_rate = sample_rate
        self._timing = timing

    def apply(self, samples: np.ndarray, intent: InflectionIntent) -> np.ndarray:
        if not self._timing.inflection_enabled or samples.size == 0:
            return samples
        if intent is InflectionIntent.QUESTION:
            semitones = self._timing.question_inflection_semitones
        elif intent is InflectionIntent.EXCLAMATION:
            semitones = self._timing.exclamation_inflection_semitones
        else:
            return samples

        active = np.flatnonzero(np.abs(samples) > self._timing.inflection_activity_threshold)
        if active.size == 0:
            return samples

        end = int(active[-1]) + 1
        window = int(self._sample_rate * self._timing.inflection_window_ms / 1000.0)
        start = max(0, end - window)
        # The overlap-add stretch needs at least two analysis windows.
        if end - start < 2 * (self._sample_rate // STRETCH_WINDOW_DIVISOR):
            return samples

        tail = samples[start:end]
        shifted = _fit_length(apply_pitch_shift(tail, self._sample_rate, semitones), tail.size)
        if intent is InflectionIntent.EXCLAMATION:
            shifted = shifted * np.linspace(1.0, self._timing.exclamation_gain, tail.size, dtype=np.float32)

        crossfade = np.linspace(0.0, 1.0, tail.size, dtype=np.float32)
        result = samples.astype(np.float32, copy=True)
        result[start:end] = tail * (1.0 - crossfade) + shifted * crossfade
        return apply_peak_limiter(result)


def _fit_length(samples: np.ndarray, length: int) -> np.ndarray:
    if samples.size >= length:
        return samples[:length]
    return np.concatenate([samples, np.zeros(length - samples.size, dtype=np.float32)])
