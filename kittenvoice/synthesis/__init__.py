"""Synthesis orchestration.

The ONNX Runtime adapter lives in `kittenvoice.synthesis.onnx_engine` and is
imported only where a real model is loaded.
"""

from .emotion import resolve_emotion
from .inference import InferenceBackend
from .ssml_engine import apply_ssml_effects, synthesize_segments
from .text_engine import (
    SegmentSynthesizer,
    TextSynthesisEngine,
    ensure_trailing_punctuation,
    synthesize_chunked,
    synthesize_with_text_pauses,
)

__all__ = [
    "InferenceBackend",
    "SegmentSynthesizer",
    "TextSynthesisEngine",
    "apply_ssml_effects",
    "ensure_trailing_punctuation",
    "resolve_emotion",
    "synthesize_chunked",
    "synthesize_segments",
    "synthesize_with_text_pauses",
]
