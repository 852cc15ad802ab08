"""Waveform DSP, post-processing and WAV output."""

from .inflection import TailInflector
from .output import write_wav
from .postprocess import AudioPostProcessor, PostprocessPolicy
from .waveform import (
    apply_peak_limiter,
    apply_pitch_shift,
    apply_soft_clip,
    apply_volume,
    concatenate,
    generate_silence,
)

__all__ = [
    "AudioPostProcessor",
    "PostprocessPolicy",
    "TailInflector",
    "apply_peak_limiter",
    "apply_pitch_shift",
    "apply_soft_clip",
    "apply_volume",
    "concatenate",
    "generate_silence",
    "write_wav",
]
