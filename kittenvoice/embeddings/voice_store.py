"""Per-voice style matrices and style-vector selection.

Responsibilities:
- Hold one float32 `[rows, cols]` style matrix per voice, loaded lazily from
  a numpy `.npz` archive or supplied in memory.
- Select a row by index, by token count or as a blend of two rows, with
  every row index normalized into range by modulo.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from threading import Lock

import numpy as np

from ..errors import VoiceNotFoundError


def normalize_row_index(row: int, rows: int) -> int:
    """Map any integer (negative included) into `[0, rows)`; `0` when `rows <= 0`."""

    if rows <= 0:
        return 0
    return row % rows


def select_row_for_token_count(token_count: int, rows: int, row_offset: int = 0) -> int:
    """Pick the length-conditioned style row for a token sequence."""

    if rows <= 0:
        return 0
    return normalize_row_index(max(1, token_count - 1) + row_offset, rows)


class VoiceStore:
    """Voice name -> style matrix lookup."""

    def __init__(
        self,
        matrices: Mapping[str, np.ndarray] | None = None,
        *,
        archive_path: Path | None = None,
    ) -> None:
        self._matrices: dict[str, np.ndarray] = {
            name: _as_style_matrix(matrix) for name, matrix in (matrices or {}).items()
        }
        self._archive_path = archive_path
        self._lock = Lock()

    @classmethod
    def from_npz(cls, path: Path) -> VoiceStore:
        """Create a store backed by a `.npz` archive of `<voice>.npy` matrices.

        Raises:
            FileNotFoundError: If `path` does not exist.
        """

        if not path.is_file():
            raise FileNotFoundError(f"Voices archive not found: {path}")
        return cls(archive_path=path)

    @property
    def source(self) -> str:
        return str(self._archive_path) if self._archive_path is not None else "in-memory voice store"

    def voices(self) -> list[str]:
        """List voice names available in memory and in the archive."""

        names = set(self._matrices)
        if self._archive_path is not None:
            with np.load(self._archive_path) as archive:
                names.update(archive.files)
        return sorted(names)

    def embedding(self, voice: str) -> np.ndarray:
        """Return the full `[rows, cols]` matrix for `voice`.

        Raises:
            VoiceNotFoundError: If neither memory nor the archive holds `voice`.
        """

        with self._lock:
            cached = self._matrices.get(voice)
            if cached is not None:
                return cached
            if self._archive_path is not None:
                with np.load(self._archive_path) as archive:
                    if voice in archive.files:
                        matrix = _as_style_matrix(archive[voice])
                        self._matrices[voice] = matrix
                        return matrix
        raise VoiceNotFoundError(voice, self.source)

    def load_row(self, voice: str, row: int = 0) -> np.ndarray:
        """Return one style row as a flat float32 vector."""

        matrix = self.embedding(voice)
        return matrix[normalize_row_index(row, matrix.shape[0])].copy()

    def load_for_token_count(self, voice: str, token_count: int, row_offset: int = 0) -> np.ndarray:
        """Return the style row selected from the token-sequence length."""

        matrix = self.embedding(voice)
        return matrix[select_row_for_token_count(token_count, matrix.shape[0], row_offset)].copy()

    def load_blended(
        self,
        voice: str,
        target_row: int,
        blend: float,
        base_row: int = 0,
    ) -> np.ndarray:
        """Blend `base_row` toward `target_row`; `blend=0` is the base, `1` the target."""

        matrix = self.embedding(voice)
        rows = matrix.shape[0]
        base = matrix[normalize_row_index(base_row, rows)]
        target = matrix[normalize_row_index(target_row, rows)]
        t = np.float32(min(max(blend, 0.0), 1.0))
        return (base * (np.float32(1.0) - t) + target * t).astype(np.float32)


def _as_style_matrix(matrix: np.ndarray) -> np.ndarray:
    """Coerce stored embeddings to a 2-D float32 matrix."""

    array = np.asarray(matrix, dtype=np.float32)
    if array.ndim == 1:
        return array.reshape(1, -1)
    if array.ndim > 2:
        return array.reshape(array.shape[0], -1)
    return array
