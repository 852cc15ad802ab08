"""Rule-based English spelling-to-IPA fallback for out-of-lexicon words.

The rules are intentionally small: longest-match digraphs and trigraphs,
doubled-consonant collapse, silent final ``e`` and context-sensitive ``c``
and ``y``. They exist so that names and rare words still produce speech.
"""

from __future__ import annotations


_VOWELS = "aeiou"

# Longest match first.
_MULTI_LETTER_RULES = (
    ("igh", "aɪ"),
    ("th", "θ"),
    ("sh", "ʃ"),
    ("ch", "tʃ"),
    ("ng", "ŋ"),
    ("ph", "f"),
    ("wh", "w"),
    ("ck", "k"),
    ("gh", ""),
    ("ee", "iː"),
    ("oo", "uː"),
    ("ou", "aʊ"),
    ("ow", "oʊ"),
    ("ai", "eɪ"),
    ("ay", "eɪ"),
    ("ea", "iː"),
    ("oa", "oʊ"),
)

_SINGLE_LETTERS = {
    "a": "æ",
    "b": "b",
    "d": "d",
    "e": "ɛ",
    "f": "f",
    "g": "ɡ",
    "h": "h",
    "i": "ɪ",
    "j": "dʒ",
    "k": "k",
    "l": "l",
    "m": "m",
    "n": "n",
    "o": "ɑː",
    "p": "p",
    "q": "k",
    "r": "ɹ",
    "s": "s",
    "t": "t",
    "u": "ʌ",
    "v": "v",
    "w": "w",
    "x": "ks",
    "z": "z",
}


def fallback_to_ipa(word: str) -> str:
    """Approximate the IPA pronunciation of an English word from its spelling."""

    lower = word.lower()
    result: list[str] = []
    index = 0
    while index < len(lower):
        ipa, index = _match_rule(lower, index)
        result.append(ipa)
    return "".join(result)


def _match_rule(word: str, index: int) -> tuple[str, int]:
    """Return the IPA for the rule matching at `index` and the next scan index."""

    char = word[index]
    following = word[index + 1] if index + 1 < len(word) else ""

    if char == following and char not in _VOWELS:
        return "", index + 1

    for pattern, ipa in _MULTI_LETTER_RULES:
        if word.startswith(pattern, index):
            return ipa, index + len(pattern)

    if char == "e" and index == len(word) - 1:
        return "", index + 1

    if char == "c":
        return ("s" if following in ("e", "i", "y") and following else "k"), index + 1
    if char == "y":
        return ("j" if index == 0 else "iː"), index + 1
    return _SINGLE_LETTERS.get(char, ""), index + 1
