"""Text normalization, G2P and segmentation helpers."""

from .chunking import split_by_token_limit
from .g2p import EnglishToIpa, G2PConfig, merge_overrides
from .lexicon import CmuPronunciationLexicon
from .pauses import contains_pause_cue, split_by_pause_cues

__all__ = [
    "CmuPronunciationLexicon",
    "EnglishToIpa",
    "G2PConfig",
    "contains_pause_cue",
    "merge_overrides",
    "split_by_pause_cues",
    "split_by_token_limit",
]
