"""Top-level package for kittenvoice.

This package turns English text or SSML into speech with a KittenTTS /
Kokoro-style ONNX acoustic model. The main entry point is `Speaker`.
"""

from .speaker import Speaker

__all__ = ["Speaker", "__version__"]

__version__ = "0.1.0"
