"""Shared pytest fixtures for the full kittenvoice test suite."""

from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import pytest

from kittenvoice import Speaker
from kittenvoice.config import ModelConfig
from kittenvoice.embeddings import VoiceStore
from kittenvoice.tokenization import KokoroTokenizer

SAMPLE_RATE = 24000
STYLE_ROWS = 200
STYLE_COLUMNS = 8
ARCHIVE_VOICE = "expr-voice-2-f"

_PUNCTUATION = ';:,.!?¡¿—…"«»“” '
_LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
_IPA = (
    "ɑɐɒæɓʙβɔɕçɗɖðʤəɘɚɛɜɝɞɟʄɡɠɢʛɦɧħɥʜɨɪʝɭɬɫɮʟɱɯɰŋɳɲɴøɵɸθœɶʘɹɺɾɻʀʁɽʂʃʈʧʉʊʋⱱʌɣɤʍχʎʏʑʐʒʔʡʕʢ"
    "ǀǁǂǃˈˌːˑʼʴʰʱʲʷˠˤ˞↓↑→↗↘'̩ᵻ"
)


def _kokoro_vocab() -> dict[str, int]:
    symbols = ["$", *dict.fromkeys(_PUNCTUATION + _LETTERS + _IPA)]
    return {symbol: index for index, symbol in enumerate(symbols)}


class SineBackend:
    """Inference stand-in returning a 220 Hz tone of 25 ms per input token."""

    def __init__(self, samples_per_token: int = 600, amplitude: float = 0.5) -> None:
        self.samples_per_token = samples_per_token
        self.amplitude = amplitude
        self.calls: list[tuple[np.ndarray, np.ndarray, float]] = []

    def infer(self, token_ids: np.ndarray, style: np.ndarray, speed: float) -> np.ndarray:
        self.calls.append((np.array(token_ids), np.array(style), speed))
        length = len(token_ids) * self.samples_per_token
        time = np.arange(length, dtype=np.float32) / SAMPLE_RATE
        return (self.amplitude * np.sin(2.0 * np.pi * 220.0 * time)).astype(np.float32)


def _style_matrix() -> np.ndarray:
    """Row `i` is filled with `i / 1000` so tests can tell which row was used."""

    rows = np.arange(STYLE_ROWS, dtype=np.float32)[:, None] / 1000.0
    return np.repeat(rows, STYLE_COLUMNS, axis=1)


@pytest.fixture
def kokoro_vocab() -> dict[str, int]:
    """Provide a Kokoro-style symbol vocabulary covering the generated IPA."""

    return _kokoro_vocab()


@pytest.fixture
def tokenizer(kokoro_vocab: dict[str, int]) -> KokoroTokenizer:
    """Provide a tokenizer with the default G2P configuration."""

    return KokoroTokenizer(kokoro_vocab)


@pytest.fixture
def style_matrix() -> np.ndarray:
    """Provide the row-identifying style matrix."""

    return _style_matrix()


@pytest.fixture
def voice_store(style_matrix: np.ndarray) -> VoiceStore:
    """Provide an in-memory voice store with a single archive voice."""

    return VoiceStore({ARCHIVE_VOICE: style_matrix})


@pytest.fixture
def sine_backend() -> SineBackend:
    """Provide a recording sine-wave inference backend."""

    return SineBackend()


@pytest.fixture
def model_config(tmp_path: Path) -> ModelConfig:
    """Provide a model config aliasing `Bella` to the archive voice."""

    return ModelConfig(
        model_path=tmp_path / "model.onnx",
        voices_path=tmp_path / "voices.npz",
        cmu_dict_path=tmp_path / "cmudict.dict",
        tokenizer_path=tmp_path / "tokenizer.json",
        voice_aliases={"Bella": ARCHIVE_VOICE},
    )


@pytest.fixture
def speaker(
    model_config: ModelConfig,
    tokenizer: KokoroTokenizer,
    voice_store: VoiceStore,
    sine_backend: SineBackend,
) -> Speaker:
    """Provide a speaker wired to the fake backend and in-memory voices."""

    return Speaker(model_config, tokenizer, voice_store, sine_backend)


@pytest.fixture
def assets_dir(tmp_path: Path, kokoro_vocab: dict[str, int], style_matrix: np.ndarray) -> Path:
    """Provide an on-disk assets directory with config, tokenizer, voices and lexicon."""

    assets = tmp_path / "assets"
    assets.mkdir()
    (assets / "config.yaml").write_text(
        f"""
model_file: model.onnx
voices: voices.npz
voice_aliases:
  Bella: {ARCHIVE_VOICE}
pronunciation_overrides:
  kitten: K IH1 T AH0 N
speed: 1.1
timing:
  comma_pause_ms: 120
""".strip(),
        encoding="utf-8",
    )
    (assets / "tokenizer.json").write_text(
        json.dumps({"model": {"vocab": kokoro_vocab}}, ensure_ascii=False),
        encoding="utf-8",
    )
    np.savez(assets / "voices.npz", **{ARCHIVE_VOICE: style_matrix})
    (assets / "cmudict.dict").write_text(
        ";;; test lexicon\nhello HH AH0 L OW1\nhello(1) HH EH0 L OW1\nworld W ER1 L D\n",
        encoding="utf-8",
    )
    (assets / "model.onnx").write_bytes(b"placeholder")
    return assets
