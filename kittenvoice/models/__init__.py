"""Shared typed data models for kittenvoice.

This package contains dataclasses used across synthesis modules to avoid
cross-module coupling and circular imports.
"""

from .datatypes import (
    EmotionResolution,
    InflectionIntent,
    PlainTextPauseSegment,
    SpeechSegment,
)
from .timing import DEFAULT_TIMING, SynthesisTimingOptions

__all__ = [
    "DEFAULT_TIMING",
    "EmotionResolution",
    "InflectionIntent",
    "PlainTextPauseSegment",
    "SpeechSegment",
    "SynthesisTimingOptions",
]
