"""Unit tests for plain-text pause segmentation."""

from __future__ import annotations

from kittenvoice.models import InflectionIntent, PlainTextPauseSegment, SynthesisTimingOptions
from kittenvoice.text import contains_pause_cue, split_by_pause_cues

TIMING = SynthesisTimingOptions()


def _rows(text: str) -> list[tuple[str, float, InflectionIntent]]:
    return [
        (segment.text, segment.pause_after_ms, segment.intent)
        for segment in split_by_pause_cues(text, TIMING)
    ]


def test_sentence_with_comma_period_and_question() -> None:
    """Commas, periods and question marks should each produce their pause."""

    assert _rows("Hello, world. How are you?") == [
        ("Hello", TIMING.comma_pause_ms, InflectionIntent.NONE),
        (" world.", TIMING.period_pause_ms, InflectionIntent.STATEMENT),
        (" How are you?", TIMING.question_pause_ms, InflectionIntent.QUESTION),
        ("", 0.0, InflectionIntent.NONE),
    ]


def test_split_always_ends_with_an_empty_zero_pause_segment() -> None:
    """Plain text without cues yields one segment with no pause."""

    assert split_by_pause_cues("no cues here", TIMING) == [
        PlainTextPauseSegment("no cues here", 0.0, InflectionIntent.NONE)
    ]
    assert split_by_pause_cues("", TIMING) == [PlainTextPauseSegment("", 0.0)]


def test_ellipsis_variants_and_em_dash() -> None:
    """Three dots, the ellipsis character and em dashes pause without intent."""

    assert _rows("Wait... what") == [
        ("Wait", TIMING.ellipsis_pause_ms, InflectionIntent.NONE),
        (" what", 0.0, InflectionIntent.NONE),
    ]
    assert _rows("Wait…") == [
        ("Wait", TIMING.ellipsis_pause_ms, InflectionIntent.NONE),
        ("", 0.0, InflectionIntent.NONE),
    ]
    assert _rows("yes—no") == [
        ("yes", TIMING.em_dash_pause_ms, InflectionIntent.NONE),
        ("no", 0.0, InflectionIntent.NONE),
    ]


def test_repeated_cues_scale_the_pause_up_to_four_times() -> None:
    """Runs of the same cue multiply the pause, capped at four repetitions."""

    assert _rows("Hi!!")[0] == ("Hi!", TIMING.exclamation_pause_ms * 2, InflectionIntent.EXCLAMATION)
    assert _rows("Stop!!!!!!")[0][1] == TIMING.exclamation_pause_ms * 4
    assert _rows("a\n\nb")[0] == ("a", TIMING.newline_pause_ms * 2, InflectionIntent.NONE)
    assert _rows("a\r\nb")[0] == ("a", TIMING.newline_pause_ms, InflectionIntent.NONE)


def test_numeric_separators_and_urls_do_not_pause() -> None:
    """Digits around `.`/`,`/`:`, dotted names and URL schemes stay in one span."""

    assert _rows("Pay 1,000 at 3.14 by 10:30 now") == [
        ("Pay 1,000 at 3.14 by 10:30 now", 0.0, InflectionIntent.NONE)
    ]
    assert _rows("see https://example.com now") == [
        ("see https://example.com now", 0.0, InflectionIntent.NONE)
    ]


def test_semicolon_and_colon_pause() -> None:
    """Semicolons and colons pause with their configured durations."""

    assert _rows("one; two: three") == [
        ("one", TIMING.semicolon_pause_ms, InflectionIntent.NONE),
        (" two", TIMING.colon_pause_ms, InflectionIntent.NONE),
        (" three", 0.0, InflectionIntent.NONE),
    ]


def test_abbreviation_period_is_treated_as_sentence_end() -> None:
    """Abbreviations such as `Mr.` are split like sentence ends (known limitation)."""

    assert _rows("Mr. Smith") == [
        ("Mr.", TIMING.period_pause_ms, InflectionIntent.STATEMENT),
        (" Smith", 0.0, InflectionIntent.NONE),
    ]


def test_contains_pause_cue() -> None:
    """Cue detection should cover punctuation, dashes, ellipses and line breaks."""

    assert contains_pause_cue("Hello, world")
    assert contains_pause_cue("line\nbreak")
    assert contains_pause_cue("dash—here")
    assert not contains_pause_cue("plain words only")


def test_round_trip_preserves_spoken_characters() -> None:
    """Segment texts plus their cue characters should rebuild the spoken content."""

    text = "First, second; third. Fourth? Fifth!"
    joined = "".join(segment.text for segment in split_by_pause_cues(text, TIMING))

    assert joined.replace(" ", "") == text.replace(",", "").replace(";", "").replace(" ", "")
