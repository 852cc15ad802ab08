"""Voice style embeddings."""

from .voice_store import VoiceStore, normalize_row_index, select_row_for_token_count

__all__ = ["VoiceStore", "normalize_row_index", "select_row_for_token_count"]
