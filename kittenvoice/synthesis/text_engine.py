"""Plain-text synthesis orchestration.

Responsibilities:
- Split text on punctuation pauses and stitch spoken spans with aggregated silence.
- Keep every inference request inside the model token budget by chunking.
- Select the style vector, run inference and post-process each unit.

Key types:
- `SegmentSynthesizer`: callable that renders one pause-free text unit.
- `TextSynthesisEngine`: binds tokenizer, voice store and inference backend.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from functools import partial
from typing import Protocol

import numpy as np

from ..audio.inflection import TailInflector
from ..audio.postprocess import AudioPostProcessor
from ..audio.waveform import NEAR_SILENCE_PEAK, concatenate, generate_silence, peak
from ..embeddings import VoiceStore
from ..models import InflectionIntent, SynthesisTimingOptions
from ..telemetry import RunLogger
from ..text.chunking import split_by_token_limit
from ..text.pauses import contains_pause_cue, split_by_pause_cues
from ..tokenization import KokoroTokenizer
from .inference import InferenceBackend


SENTENCE_END_PUNCTUATION = ".!?;:,"
_INFLECTED_INTENTS = (InflectionIntent.QUESTION, InflectionIntent.EXCLAMATION)


class SegmentSynthesizer(Protocol):
    """Render one pause-free unit of text with an optional emotion style row."""

    def __call__(self, text: str, style_row: int | None, style_blend: float) -> np.ndarray:
        ...


def _empty() -> np.ndarray:
    return np.zeros(0, dtype=np.float32)


def ensure_trailing_punctuation(text: str) -> str:
    """Append `.` unless the text already ends with sentence punctuation."""

    trimmed = text.rstrip()
    if trimmed and trimmed[-1] not in SENTENCE_END_PUNCTUATION:
        trimmed += "."
    return trimmed


def synthesize_with_text_pauses(
    text: str,
    style_row: int | None,
    style_blend: float,
    *,
    sample_rate: int,
    timing: SynthesisTimingOptions,
    synthesize_segment: SegmentSynthesizer,
    inflector: TailInflector | None = None,
    logger: RunLogger | None = None,
) -> np.ndarray:
    """Synthesize pause-separated spans and join them with aggregated silences.

    Pauses that follow empty spans accumulate, capped at
    `timing.max_aggregated_pause_ms`, and are only inserted between two
    audible spans.
    """

    segments = split_by_pause_cues(text, timing)
    if logger is not None:
        logger.log_event("pause", "split", segments=len(segments))

    audio_segments: list[np.ndarray] = []
    pending_pause_ms = 0.0

    for segment in segments:
        spoken_text = segment.text.strip()
        if spoken_text:
            if audio_segments and pending_pause_ms > 0:
                audio_segments.append(generate_silence(sample_rate, pending_pause_ms))

            spoken = synthesize_segment(spoken_text, style_row, style_blend)
            if spoken.size > 0:
                if inflector is not None and segment.intent in _INFLECTED_INTENTS:
                    spoken = inflector.apply(spoken, segment.intent)
                audio_segments.append(spoken)
            pending_pause_ms = 0.0

        if segment.pause_after_ms > 0:
            pending_pause_ms = min(
                pending_pause_ms + segment.pause_after_ms,
                timing.max_aggregated_pause_ms,
            )

    return concatenate(audio_segments) if audio_segments else _empty()


def synthesize_chunked(
    text: str,
    max_input_tokens: int,
    *,
    sample_rate: int,
    timing: SynthesisTimingOptions,
    get_token_count: Callable[[str], int],
    synthesize_segment: SegmentSynthesizer,
    style_row: int | None,
    style_blend: float,
    logger: RunLogger | None = None,
) -> np.ndarray:
    """Synthesize token-limited chunks joined by `timing.chunk_join_pause_ms`."""

    chunks = split_by_token_limit(text, max_input_tokens, get_token_count)
    if logger is not None:
        logger.log_event("chunk", "split", chunks=len(chunks))
    audio_chunks: list[np.ndarray] = []
    for chunk in chunks:
        chunk_audio = synthesize_segment(chunk, style_row, style_blend)
        if chunk_audio.size == 0:
            continue
        if audio_chunks:
            audio_chunks.append(generate_silence(sample_rate, timing.chunk_join_pause_ms))
        audio_chunks.append(chunk_audio)
    return concatenate(audio_chunks) if audio_chunks else _empty()


class TextSynthesisEngine:
    """Turn text units into post-processed waveforms through the inference backend."""

    def __init__(
        self,
        tokenizer: KokoroTokenizer,
        voice_store: VoiceStore,
        backend: InferenceBackend,
        *,
        sample_rate: int,
        max_input_tokens: int,
        voice_aliases: Mapping[str, str] | None = None,
        postprocessor: AudioPostProcessor | None = None,
        logger: RunLogger | None = None,
    ) -> None:
        self._tokenizer = tokenizer
        self._voice_store = voice_store
        self._backend = backend
        self._sample_rate = sample_rate
        self._max_input_tokens = max_input_tokens
        self._voice_aliases = {
            name.lower(): target for name, target in (voice_aliases or {}).items()
        }
        self._postprocessor = postprocessor or AudioPostProcessor(sample_rate)
        self._logger = logger

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def tokenizer(self) -> KokoroTokenizer:
        return self._tokenizer

    def resolve_voice(self, voice: str) -> str:
        """Map a friendly voice name through the alias table; unknown names pass through."""

        return self._voice_aliases.get(voice.lower(), voice)

    def token_count(self, text: str) -> int:
        """Token count of `text` as it would be sent to the model."""

        return len(self._tokenizer.process(ensure_trailing_punctuation(text)))

    def synthesize(
        self,
        text: str,
        *,
        voice: str,
        speed: float,
        timing: SynthesisTimingOptions,
        style_row: int | None = None,
        style_blend: float = 1.0,
    ) -> np.ndarray:
        """Synthesize one text unit, splitting on pause cues when present."""

        synthesize_unit = partial(self._synthesize_unit, voice=voice, speed=speed, timing=timing)
        if contains_pause_cue(text):
            return synthesize_with_text_pauses(
                text,
                style_row,
                style_blend,
                sample_rate=self._sample_rate,
                timing=timing,
                synthesize_segment=synthesize_unit,
                inflector=TailInflector(self._sample_rate, timing),
                logger=self._logger,
            )
        return synthesize_unit(text, style_row, style_blend)

    def _synthesize_unit(
        self,
        text: str,
        style_row: int | None,
        style_blend: float,
        *,
        voice: str,
        speed: float,
        timing: SynthesisTimingOptions,
    ) -> np.ndarray:
        """Pause-free path: tokenize, chunk if needed, infer and post-process."""

        normalized = ensure_trailing_punctuation(text)
        if not normalized:
            return _empty()

        token_ids = self._tokenizer.process(normalized)
        if len(token_ids) > self._max_input_tokens:
            return synthesize_chunked(
                text,
                self._max_input_tokens,
                sample_rate=self._sample_rate,
                timing=timing,
                get_token_count=self.token_count,
                synthesize_segment=partial(
                    self._synthesize_unit, voice=voice, speed=speed, timing=timing
                ),
                style_row=style_row,
                style_blend=style_blend,
                logger=self._logger,
            )

        resolved_voice = self.resolve_voice(voice)
        if style_row is not None:
            style = self._voice_store.load_blended(
                resolved_voice,
                style_row,
                style_blend,
                base_row=max(1, len(token_ids) - 1),
            )
        else:
            style = self._voice_store.load_for_token_count(resolved_voice, len(token_ids))

        audio = np.asarray(
            self._backend.infer(np.asarray(token_ids, dtype=np.int64), style, speed),
            dtype=np.float32,
        ).reshape(-1)
        if audio.size == 0 or peak(audio) < NEAR_SILENCE_PEAK:
            return _empty()
        return self._postprocessor.process_audio(audio)
