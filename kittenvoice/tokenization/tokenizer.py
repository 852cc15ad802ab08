"""Phoneme tokenizer for Kokoro-style models.

Responsibilities:
- Load the symbol vocabulary from a Hugging Face style `tokenizer.json`.
- Map IPA characters to model ids, dropping symbols outside the vocabulary.
- Wrap id sequences with the boundary token and reject ids the model cannot embed.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path

from ..errors import TokenLimitExceeded
from ..text.g2p import EnglishToIpa


BOUNDARY_SYMBOL = "$"


class KokoroTokenizer:
    """Convert text to model token ids through G2P and a character vocabulary."""

    def __init__(
        self,
        vocab: Mapping[str, int],
        g2p: EnglishToIpa | None = None,
        vocab_size: int | None = None,
    ) -> None:
        self._vocab = dict(vocab)
        self._g2p = g2p or EnglishToIpa()
        self._boundary_id = self._vocab.get(BOUNDARY_SYMBOL, 0)
        self._vocab_size = vocab_size if vocab_size is not None else len(self._vocab)

    @classmethod
    def load(cls, path: Path, g2p: EnglishToIpa | None = None) -> KokoroTokenizer:
        """Load `model.vocab` from a `tokenizer.json` file.

        Raises:
            FileNotFoundError: If `path` does not exist.
            ValueError: If the file has no `model.vocab` mapping.
        """

        if not path.is_file():
            raise FileNotFoundError(f"Tokenizer file not found: {path}")

        payload = json.loads(path.read_text(encoding="utf-8"))
        model = payload.get("model") if isinstance(payload, dict) else None
        vocab = model.get("vocab") if isinstance(model, dict) else None
        if not isinstance(vocab, dict):
            raise ValueError(f"Tokenizer file `{path}` has no `model.vocab` mapping.")
        return cls({str(symbol): int(token_id) for symbol, token_id in vocab.items()}, g2p)

    @property
    def vocab_size(self) -> int:
        return self._vocab_size

    @property
    def boundary_id(self) -> int:
        return self._boundary_id

    @property
    def g2p(self) -> EnglishToIpa:
        return self._g2p

    def process(self, text: str) -> list[int]:
        """Phonemize `text` and tokenize the resulting IPA string."""

        return self.tokenize(self._g2p.convert(text))

    def tokenize(self, phonemes: str) -> list[int]:
        """Tokenize an IPA string, wrapped with boundary ids on both ends.

        Raises:
            TokenLimitExceeded: If any id falls outside the vocabulary size.
        """

        ids = [self._boundary_id]
        ids.extend(self._vocab[char] for char in phonemes if char in self._vocab)
        ids.append(self._boundary_id)

        for token_id in ids:
            if token_id < 0 or token_id >= self._vocab_size:
                raise TokenLimitExceeded(
                    f"Token id {token_id} is outside the model vocabulary of size "
                    f"{self._vocab_size}."
                )
        return ids
