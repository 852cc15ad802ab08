"""English grapheme-to-phoneme conversion.

Responsibilities:
- Convert English text into IPA compatible with the Kokoro/KittenTTS vocabulary.
- Verbalize numbers and currency amounts before phonemization.
- Resolve pronunciations through overrides, the CMU lexicon and spelling rules,
  in that order.

Key types:
- `G2PConfig`: explicit pronunciation sources passed to the converter.
- `EnglishToIpa`: the converter.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .arpabet import arpabet_to_ipa
from .currency import try_convert_currency_at_position, try_convert_currency_token
from .fallback_g2p import fallback_to_ipa
from .lexicon import CmuPronunciationLexicon
from .number_words import number_to_words


TRAILING_PUNCTUATION = ".,!?;:"
HYPHEN_SEPARATORS = ("-", "‐", "‑", "‒", "–")

# Words whose dictionary or rule-based pronunciation reads poorly.
BUILT_IN_OVERRIDES: Mapping[str, str] = MappingProxyType(
    {
        "ssml": "EH1 S EH1 S EH1 M EH1 L",
        "tts": "T IY1 T IY1 EH1 S",
    }
)

_RE_PREFIX_ARPABET = "R IY0"


def merge_overrides(user_overrides: Mapping[str, str] | None) -> dict[str, str]:
    """Merge user ARPAbet overrides over the built-in table.

    Keys are matched case-insensitively. Entries with a blank word or blank
    transcription are ignored.
    """

    merged = {word.lower(): arpabet for word, arpabet in BUILT_IN_OVERRIDES.items()}
    for word, arpabet in (user_overrides or {}).items():
        key = (word or "").strip().lower()
        value = (arpabet or "").strip()
        if key and value:
            merged[key] = value
    return merged


@dataclass(frozen=True, slots=True)
class G2PConfig:
    """Pronunciation sources consulted by `EnglishToIpa`."""

    overrides: Mapping[str, str] = field(default_factory=lambda: merge_overrides(None))
    lexicon: CmuPronunciationLexicon = field(default_factory=CmuPronunciationLexicon)

    @classmethod
    def create(
        cls,
        *,
        overrides: Mapping[str, str] | None = None,
        lexicon: CmuPronunciationLexicon | None = None,
    ) -> G2PConfig:
        """Build a config from user overrides and an optional loaded lexicon."""

        return cls(
            overrides=MappingProxyType(merge_overrides(overrides)),
            lexicon=lexicon or CmuPronunciationLexicon(),
        )


class EnglishToIpa:
    """Convert English text to IPA phonemes."""

    def __init__(self, config: G2PConfig | None = None) -> None:
        self._config = config or G2PConfig.create()

    @property
    def config(self) -> G2PConfig:
        return self._config

    def convert(self, text: str) -> str:
        """Convert `text` to IPA, preserving one trailing punctuation mark."""

        normalized = text.strip()
        trailing = ""
        if normalized and normalized[-1] in TRAILING_PUNCTUATION:
            trailing = normalized[-1]
            normalized = normalized[:-1]

        words = normalized.split()
        converted: list[str] = []
        index = 0
        while index < len(words):
            currency = try_convert_currency_at_position(words, index)
            if currency is not None:
                spoken, consumed = currency
                converted.append(self._words_to_phonemes(spoken))
                index += consumed
                continue
            converted.append(self._convert_token(words[index]))
            index += 1

        return " ".join(converted) + trailing

    def _convert_token(self, token: str) -> str:
        spoken_currency = try_convert_currency_token(token)
        if spoken_currency is not None:
            return self._words_to_phonemes(spoken_currency)

        hyphenated = self._convert_hyphenated(token)
        if hyphenated is not None:
            return hyphenated

        clean = _clean_word(token)
        if not clean:
            return ""
        if clean.isdecimal():
            return self._convert_number(clean)
        return self._convert_lexical(clean)

    def _convert_hyphenated(self, token: str) -> str | None:
        """Convert `well-known` style compounds part by part, or `None` if not a compound."""

        if not any(separator in token for separator in HYPHEN_SEPARATORS):
            return None

        unified = token
        for separator in HYPHEN_SEPARATORS[1:]:
            unified = unified.replace(separator, HYPHEN_SEPARATORS[0])
        raw_parts = [part.strip() for part in unified.split(HYPHEN_SEPARATORS[0])]
        raw_parts = [part for part in raw_parts if part]
        if len(raw_parts) < 2:
            return None

        converted: list[str] = []
        for position, part in enumerate(raw_parts):
            clean = _clean_word(part)
            if not clean:
                continue
            if position == 0 and clean.lower() == "re":
                # "re-" as a prefix reads as "ree", unlike standalone "re".
                phonemes = arpabet_to_ipa(_RE_PREFIX_ARPABET)
            elif clean.isdecimal():
                phonemes = self._convert_number(clean)
            else:
                phonemes = self._convert_lexical(clean)
            if phonemes:
                converted.append(phonemes)

        if len(converted) < 2:
            return None
        return ", ".join(converted)

    def _convert_number(self, digits: str) -> str:
        words = number_to_words(digits)
        if not words.strip():
            return ""
        return self._words_to_phonemes(words)

    def _words_to_phonemes(self, words: str) -> str:
        return " ".join(self._convert_lexical(word) for word in words.split())

    def _convert_lexical(self, clean: str) -> str:
        override = self._config.overrides.get(clean.lower())
        if override is not None:
            return arpabet_to_ipa(override)

        arpabet = self._config.lexicon.try_get(clean)
        if arpabet is not None:
            return arpabet_to_ipa(arpabet)

        return fallback_to_ipa(clean)


def _clean_word(word: str) -> str:
    """Keep letters, digits and apostrophes."""

    return "".join(char for char in word if char.isalnum() or char == "'")
