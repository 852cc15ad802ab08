"""SSML segmentation."""

from .parser import SsmlTag, is_ssml, parse

__all__ = ["SsmlTag", "is_ssml", "parse"]
