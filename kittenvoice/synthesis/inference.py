"""Acoustic-model inference boundary."""

from __future__ import annotations

from typing import Protocol

import numpy as np


class InferenceBackend(Protocol):
    """Contract for neural acoustic model backends."""

    def infer(self, token_ids: np.ndarray, style: np.ndarray, speed: float) -> np.ndarray:
        """Return a mono float32 waveform for int64 `token_ids` and a float32 style row."""
