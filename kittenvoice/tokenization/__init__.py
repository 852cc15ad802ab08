"""Model tokenization."""

from .tokenizer import KokoroTokenizer

__all__ = ["KokoroTokenizer"]
