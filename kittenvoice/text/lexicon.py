"""CMU pronouncing dictionary reader."""

from __future__ import annotations

from pathlib import Path


class CmuPronunciationLexicon:
    """Case-insensitive word -> ARPAbet lookup loaded from a CMUdict flat file."""

    def __init__(self, entries: dict[str, str] | None = None) -> None:
        self._entries: dict[str, str] = {}
        for word, arpabet in (entries or {}).items():
            key = normalize_entry_key(word).lower()
            if key and key not in self._entries and arpabet.strip():
                self._entries[key] = arpabet.strip()

    def __len__(self) -> int:
        return len(self._entries)

    @classmethod
    def load(cls, path: Path | None) -> CmuPronunciationLexicon:
        """Load entries from `path`; a missing file yields an empty lexicon.

        Lines starting with `;;;` are comments. Alternate pronunciations such
        as `READ(1)` collapse onto their base word and the first entry wins.
        """

        lexicon = cls()
        if path is None or not path.is_file():
            return lexicon

        with path.open("r", encoding="utf-8", errors="replace") as handle:
            for line in handle:
                lexicon._add_line(line.rstrip("\r\n"))
        return lexicon

    def _add_line(self, line: str) -> None:
        if not line.strip() or line.startswith(";;;"):
            return
        first_space = line.find(" ")
        if first_space < 1:
            return

        key = normalize_entry_key(line[:first_space]).lower()
        if not key or key in self._entries:
            return
        arpabet = line[first_space + 1 :].strip()
        if arpabet:
            self._entries[key] = arpabet

    def try_get(self, word: str) -> str | None:
        """Return the ARPAbet transcription for `word`, or `None` when unknown."""

        key = normalize_entry_key(word).lower()
        if not key:
            return None
        return self._entries.get(key)


def normalize_entry_key(value: str) -> str:
    """Drop CMU-style numeric variant suffixes such as `(1)` from a headword."""

    trimmed = value.strip()
    if not trimmed:
        return ""
    open_paren = trimmed.rfind("(")
    if open_paren <= 0 or not trimmed.endswith(")"):
        return trimmed
    variant = trimmed[open_paren + 1 : -1]
    return trimmed[:open_paren] if variant.isdecimal() else trimmed
