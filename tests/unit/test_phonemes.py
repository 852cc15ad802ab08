"""Unit tests for ARPAbet conversion, spelling fallback and the CMU lexicon."""

from __future__ import annotations

from pathlib import Path

from kittenvoice.text.arpabet import PRIMARY_STRESS, SECONDARY_STRESS, arpabet_to_ipa
from kittenvoice.text.fallback_g2p import fallback_to_ipa
from kittenvoice.text.lexicon import CmuPronunciationLexicon, normalize_entry_key


def test_arpabet_to_ipa_marks_stress_before_the_vowel() -> None:
    """Primary and secondary stress digits should become IPA stress marks."""

    assert arpabet_to_ipa("K AE1 T") == f"k{PRIMARY_STRESS}æt"
    assert arpabet_to_ipa("AE2 T") == f"{SECONDARY_STRESS}æt"


def test_arpabet_to_ipa_reduces_unstressed_vowels() -> None:
    """Stress-0 vowels with a reduced variant should use it."""

    assert arpabet_to_ipa("HH AH0 L OW1") == f"həl{PRIMARY_STRESS}oʊ"
    assert arpabet_to_ipa("B ER0") == "bɚ"


def test_arpabet_to_ipa_ignores_unknown_phones_and_case() -> None:
    """Unknown phones are dropped and lowercase input is accepted."""

    assert arpabet_to_ipa("k ae1 t XX") == f"k{PRIMARY_STRESS}æt"
    assert arpabet_to_ipa("") == ""


def test_fallback_applies_multi_letter_rules_and_silent_e() -> None:
    """Digraphs, trigraphs and a silent final `e` should be honored."""

    assert fallback_to_ipa("night") == "naɪt"
    assert fallback_to_ipa("ship") == "ʃɪp"
    assert fallback_to_ipa("cake") == "kæk"


def test_fallback_handles_soft_c_initial_y_and_doubled_consonants() -> None:
    """Context-sensitive letters should pick the expected sound."""

    assert fallback_to_ipa("city") == "sɪtiː"
    assert fallback_to_ipa("yes") == "jɛs"
    assert fallback_to_ipa("Bell") == "bɛl"


def test_lexicon_load_skips_comments_and_keeps_first_variant(tmp_path: Path) -> None:
    """Comment lines are skipped and the first pronunciation of a word wins."""

    dictionary = tmp_path / "cmudict.dict"
    dictionary.write_text(
        ";;; comment line\n"
        "READ R EH1 D\n"
        "read(1) R IY1 D\n"
        "\n"
        "cat K AE1 T\n",
        encoding="utf-8",
    )

    lexicon = CmuPronunciationLexicon.load(dictionary)

    assert len(lexicon) == 2
    assert lexicon.try_get("read") == "R EH1 D"
    assert lexicon.try_get("READ") == "R EH1 D"
    assert lexicon.try_get("Cat") == "K AE1 T"
    assert lexicon.try_get("dog") is None
    assert lexicon.try_get("   ") is None


def test_lexicon_load_missing_file_yields_empty_lexicon(tmp_path: Path) -> None:
    """A missing dictionary file disables lookups instead of failing."""

    lexicon = CmuPronunciationLexicon.load(tmp_path / "missing.dict")

    assert len(lexicon) == 0
    assert lexicon.try_get("cat") is None
    assert len(CmuPronunciationLexicon.load(None)) == 0


def test_normalize_entry_key_strips_only_numeric_variants() -> None:
    """Only `(n)` suffixes with digits are variant markers."""

    assert normalize_entry_key("read(2)") == "read"
    assert normalize_entry_key("smile(s)") == "smile(s)"
    assert normalize_entry_key("(1)") == "(1)"
    assert normalize_entry_key("  ") == ""
