"""ARPAbet to IPA conversion with stress marks and vowel reduction."""

from __future__ import annotations


_ARPABET_TO_IPA = {
    "AA": "ɑː", "AE": "æ", "AH": "ʌ", "AO": "ɔː",
    "AW": "aʊ", "AY": "aɪ", "EH": "ɛ", "ER": "ɜːɹ",
    "EY": "eɪ", "IH": "ɪ", "IY": "iː", "OW": "oʊ",
    "OY": "ɔɪ", "UH": "ʊ", "UW": "uː",
    "B": "b", "CH": "tʃ", "D": "d", "DH": "ð",
    "F": "f", "G": "ɡ", "HH": "h", "JH": "dʒ",
    "K": "k", "L": "l", "M": "m", "N": "n",
    "NG": "ŋ", "P": "p", "R": "ɹ", "S": "s",
    "SH": "ʃ", "T": "t", "TH": "θ", "V": "v",
    "W": "w", "Y": "j", "Z": "z", "ZH": "ʒ",
}

# Unstressed vowels collapse to reduced variants instead of their full quality.
_UNSTRESSED_VOWELS = {
    "AH": "ə", "IH": "ɪ", "AO": "ə", "AA": "ə",
    "EH": "ə", "UH": "ə", "ER": "ɚ",
}

PRIMARY_STRESS = "ˈ"
SECONDARY_STRESS = "ˌ"


def arpabet_to_ipa(arpabet: str) -> str:
    """Convert a space-separated ARPAbet transcription such as ``"K AE1 T"`` to IPA."""

    result: list[str] = []
    for phone in arpabet.split():
        stress = -1
        base = phone.upper()
        if base and base[-1].isdigit():
            stress = int(base[-1])
            base = base[:-1]

        if stress == 1:
            result.append(PRIMARY_STRESS)
        elif stress == 2:
            result.append(SECONDARY_STRESS)

        if stress == 0 and base in _UNSTRESSED_VOWELS:
            result.append(_UNSTRESSED_VOWELS[base])
        elif base in _ARPABET_TO_IPA:
            result.append(_ARPABET_TO_IPA[base])
    return "".join(result)
