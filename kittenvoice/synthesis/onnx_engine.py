"""ONNX Runtime adapter for KittenTTS / Kokoro-style models.

Responsibilities:
- Cache one inference session per absolute model path for the process lifetime.
- Serialize `run` calls per session so each handle serves one request at a time.
- Shape token ids, style row and speed into the model's named inputs.
"""

from __future__ import annotations

from pathlib import Path
from threading import Lock

import numpy as np
import onnxruntime as rt


WAVEFORM_OUTPUT = "waveform"


class _CachedSession:
    def __init__(self, session: rt.InferenceSession) -> None:
        self.session = session
        self.lock = Lock()


class OnnxInferenceEngine:
    """Run the acoustic model through a cached `onnxruntime.InferenceSession`."""

    _sessions: dict[str, _CachedSession] = {}
    _sessions_lock = Lock()

    def __init__(self, model_path: Path, providers: list[str] | None = None) -> None:
        if not model_path.is_file():
            raise FileNotFoundError(f"Model file not found: {model_path}")
        self._model_path = model_path.resolve()
        self._providers = providers or ["CPUExecutionProvider"]

    @property
    def model_path(self) -> Path:
        return self._model_path

    def infer(self, token_ids: np.ndarray, style: np.ndarray, speed: float) -> np.ndarray:
        """Run one inference and return the flattened float32 waveform."""

        cached = self._session()
        inputs = {
            "input_ids": np.asarray(token_ids, dtype=np.int64).reshape(1, -1),
            "style": np.asarray(style, dtype=np.float32).reshape(1, -1),
            "speed": np.array([speed], dtype=np.float32),
        }
        with cached.lock:
            outputs = cached.session.run([WAVEFORM_OUTPUT], inputs)
        return np.asarray(outputs[0], dtype=np.float32).reshape(-1)

    def _session(self) -> _CachedSession:
        key = str(self._model_path)
        with self._sessions_lock:
            cached = self._sessions.get(key)
            if cached is None:
                cached = _CachedSession(
                    rt.InferenceSession(key, providers=self._providers)
                )
                self._sessions[key] = cached
        return cached
