"""Unit tests for CLI rendering helpers and runtime logging."""

from __future__ import annotations

import io

import pytest
import typer

from kittenvoice.cli_rendering import (
    exit_with_command_error,
    format_pause_segment,
    format_speech_segment,
)
from kittenvoice.errors import SsmlParseError
from kittenvoice.models import InflectionIntent, PlainTextPauseSegment, SpeechSegment
from kittenvoice.telemetry import RunLogger


def test_exit_with_command_error_renders_stage_error_with_hint(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Stage errors print the stage, detail and hint before exiting with code 1."""

    with pytest.raises(typer.Exit) as exc_info:
        exit_with_command_error("say", SsmlParseError("Malformed SSML: mismatched tag."))

    captured = capsys.readouterr()
    assert exc_info.value.exit_code == 1
    assert "say failed at stage `ssml`: Malformed SSML: mismatched tag." in captured.err
    assert "Hint: Check that every SSML tag is closed" in captured.err


def test_exit_with_command_error_renders_non_stage_fallback(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Other exceptions print their message only."""

    with pytest.raises(typer.Exit) as exc_info:
        exit_with_command_error("phonemize", FileNotFoundError("Tokenizer file not found: x"))

    captured = capsys.readouterr()
    assert exc_info.value.exit_code == 1
    assert "phonemize failed: Tokenizer file not found: x" in captured.err
    assert "Hint:" not in captured.err


def test_segment_formatting() -> None:
    """Segments render as compact rows with only non-default fields."""

    assert format_speech_segment(SpeechSegment(break_before_ms=250.0)) == "break ms=250"
    assert format_speech_segment(SpeechSegment(text="Hi")) == "text='Hi'"
    assert (
        format_speech_segment(
            SpeechSegment(text="Hi", voice="Luna", emotion="happy", emotion_intensity=1.25)
        )
        == "text='Hi' voice=Luna emotion=happy intensity=1.25"
    )
    assert (
        format_pause_segment(PlainTextPauseSegment(" world.", 200.0, InflectionIntent.STATEMENT))
        == "text=' world.' pause_ms=200 intent=statement"
    )


def test_run_logger_emits_deterministic_sanitized_lines() -> None:
    """Log lines carry the stage, event and sorted, shell-safe context."""

    sink = io.StringIO()
    logger = RunLogger(sink=sink, level="DEBUG")

    logger.log_stage_start("synthesize")
    logger.log_event("chunk", "split", chunks=3, voice="Bella voice")
    logger.log_stage_failure("parse", "SsmlParseError")
    logger.log_stage_complete("synthesize", segments=2)

    assert sink.getvalue().splitlines() == [
        "[synth] level=INFO stage=synthesize event=start",
        "[synth] level=DEBUG stage=chunk event=split chunks=3 voice=Bella_voice",
        "[synth] level=ERROR stage=parse event=failure error_type=SsmlParseError",
        "[synth] level=INFO stage=synthesize event=complete segments=2",
    ]


def test_run_logger_filters_below_level() -> None:
    """Debug events are dropped at the default INFO level."""

    sink = io.StringIO()
    logger = RunLogger(sink=sink)

    logger.log_event("pause", "split", segments=4)
    logger.log_stage_start("parse")

    assert sink.getvalue().splitlines() == ["[synth] level=INFO stage=parse event=start"]
