"""Speaker facade for kittenvoice.

Responsibilities:
- Hold mutable speaker settings (voice, speed, expressiveness, timing).
- Snapshot settings into an immutable request record at the start of each call.
- Route plain text and SSML to the synthesis engines and write WAV output.

Key types:
- `Speaker`: public entry point for synthesis.
- `SynthesisRequest`: immutable per-call snapshot of speaker settings.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

import numpy as np

from . import ssml
from .audio.output import write_wav
from .config import ConfigLoader, ModelConfig, parse_positive_speed
from .embeddings import VoiceStore
from .models import SynthesisTimingOptions
from .parsing import parse_non_negative_float
from .synthesis import InferenceBackend, TextSynthesisEngine, synthesize_segments
from .telemetry import RunLogger
from .text import CmuPronunciationLexicon, EnglishToIpa, G2PConfig
from .tokenization import KokoroTokenizer

_T = TypeVar("_T")


@dataclass(frozen=True, slots=True)
class SynthesisRequest:
    """Speaker settings captured when a synthesis call starts."""

    voice: str
    speed: float
    expressiveness: float
    timing: SynthesisTimingOptions


class Speaker:
    """Synthesize speech from plain text or SSML."""

    def __init__(
        self,
        config: ModelConfig,
        tokenizer: KokoroTokenizer,
        voice_store: VoiceStore,
        backend: InferenceBackend,
        logger: RunLogger | None = None,
    ) -> None:
        self._config = config
        self._logger = logger
        self._engine = TextSynthesisEngine(
            tokenizer,
            voice_store,
            backend,
            sample_rate=config.sample_rate,
            max_input_tokens=config.max_input_tokens,
            voice_aliases=config.voice_aliases,
            logger=logger,
        )
        self._voice = config.voice
        self._speed = config.speed
        self._expressiveness = config.expressiveness
        self._timing = config.timing

    @classmethod
    def from_assets(
        cls,
        assets_dir: Path,
        env: Mapping[str, str] | None = None,
        logger: RunLogger | None = None,
    ) -> Speaker:
        """Load config, lexicon, tokenizer, voices and the ONNX model from `assets_dir`.

        Raises:
            FileNotFoundError: If the config, tokenizer, voices or model file is missing.
            ValueError: If the config file is invalid.
        """

        from .synthesis.onnx_engine import OnnxInferenceEngine

        config = ConfigLoader.apply_env(ConfigLoader.from_assets_dir(assets_dir), env)
        lexicon = CmuPronunciationLexicon.load(config.cmu_dict_path)
        g2p_config = G2PConfig.create(
            overrides=config.pronunciation_overrides,
            lexicon=lexicon,
        )
        tokenizer = KokoroTokenizer.load(config.tokenizer_path, EnglishToIpa(g2p_config))
        voice_store = VoiceStore.from_npz(config.voices_path)
        backend = OnnxInferenceEngine(config.model_path)
        return cls(config, tokenizer, voice_store, backend, logger=logger)

    @property
    def config(self) -> ModelConfig:
        return self._config

    @property
    def sample_rate(self) -> int:
        return self._engine.sample_rate

    @property
    def voice(self) -> str:
        return self._voice

    @voice.setter
    def voice(self, value: str) -> None:
        name = value.strip()
        if not name:
            raise ValueError("`voice` must be a non-empty string.")
        self._voice = name

    @property
    def speed(self) -> float:
        return self._speed

    @speed.setter
    def speed(self, value: float) -> None:
        self._speed = parse_positive_speed(value, "speed")

    @property
    def expressiveness(self) -> float:
        """Emotion intensity multiplier; 0 disables SSML emotion styling."""

        return self._expressiveness

    @expressiveness.setter
    def expressiveness(self, value: float) -> None:
        self._expressiveness = parse_non_negative_float(value, "expressiveness")

    @property
    def timing(self) -> SynthesisTimingOptions:
        return self._timing

    @timing.setter
    def timing(self, value: SynthesisTimingOptions) -> None:
        self._timing = value

    def snapshot(self) -> SynthesisRequest:
        """Capture the current settings for one synthesis call."""

        return SynthesisRequest(
            voice=self._voice,
            speed=self._speed,
            expressiveness=self._expressiveness,
            timing=self._timing,
        )

    def synthesize(self, text: str) -> np.ndarray:
        """Synthesize plain text into a float32 waveform at `sample_rate`.

        Empty or whitespace-only input yields an empty waveform.
        """

        request = self.snapshot()
        if not text.strip():
            return np.zeros(0, dtype=np.float32)
        return self._run_stage("synthesize", lambda: self._synthesize_text(text, request))

    def synthesize_ssml(self, markup: str) -> np.ndarray:
        """Parse SSML markup and synthesize its segments in document order.

        Raises:
            SsmlParseError: If the markup is not well-formed.
        """

        request = self.snapshot()
        segments = self._run_stage("parse", lambda: ssml.parse(markup))

        def synthesize_text(
            text: str, voice: str, speed: float, style_row: int | None, style_blend: float
        ) -> np.ndarray:
            return self._engine.synthesize(
                text,
                voice=voice,
                speed=speed,
                timing=request.timing,
                style_row=style_row,
                style_blend=style_blend,
            )

        return self._run_stage(
            "synthesize",
            lambda: synthesize_segments(
                segments,
                default_voice=request.voice,
                default_speed=request.speed,
                expressiveness=request.expressiveness,
                sample_rate=self.sample_rate,
                synthesize_text=synthesize_text,
            ),
            segments=len(segments),
        )

    def say(self, text: str, output_path: Path) -> Path | None:
        """Synthesize text (SSML detected automatically) and write a 16-bit WAV.

        Returns:
            The written path, or `None` when the input produced no audio.
        """

        audio = self.synthesize_ssml(text) if ssml.is_ssml(text) else self.synthesize(text)
        if audio.size == 0:
            return None
        return write_wav(output_path, audio, self.sample_rate)

    def _synthesize_text(self, text: str, request: SynthesisRequest) -> np.ndarray:
        return self._engine.synthesize(
            text,
            voice=request.voice,
            speed=request.speed,
            timing=request.timing,
        )

    def _run_stage(self, stage: str, action: Callable[[], _T], **context: object) -> _T:
        """Run one stage with start/complete/failure logging."""

        if self._logger is not None:
            self._logger.log_stage_start(stage)
        try:
            result = action()
        except Exception as exc:
            if self._logger is not None:
                self._logger.log_stage_failure(stage, type(exc).__name__)
            raise
        if self._logger is not None:
            self._logger.log_stage_complete(stage, **context)
        return result
