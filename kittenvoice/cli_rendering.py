"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics
and segmentation listings.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import NoReturn

import typer

from .errors import SynthesisStageError
from .models import PlainTextPauseSegment, SpeechSegment


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Report a failed `say`, `phonemize` or `segments` run and exit with code 1.

    Synthesis errors name the stage that broke (`ssml`, `tokenize` or `voice`)
    and print their hint in yellow, for example a missing voice alias.
    Config and file errors such as a missing `config.yaml` print their message
    only.
    """

    if not isinstance(exc, SynthesisStageError):
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    typer.secho(
        f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
        fg=typer.colors.RED,
        err=True,
    )
    if exc.hint:
        typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    raise typer.Exit(code=1) from exc


def _format_number(value: float) -> str:
    return f"{value:g}"


def format_speech_segment(segment: SpeechSegment) -> str:
    """Render one SSML segment as a compact `key=value` row."""

    if segment.is_break:
        return f"break ms={_format_number(segment.break_before_ms)}"

    fields = [f"text={segment.text!r}"]
    if segment.break_before_ms > 0:
        fields.append(f"break_before_ms={_format_number(segment.break_before_ms)}")
    if segment.voice:
        fields.append(f"voice={segment.voice}")
    if segment.speed != 1.0:
        fields.append(f"speed={_format_number(segment.speed)}")
    if segment.volume != 1.0:
        fields.append(f"volume={_format_number(segment.volume)}")
    if segment.pitch_shift != 0.0:
        fields.append(f"pitch={_format_number(segment.pitch_shift)}st")
    if segment.emphasis:
        fields.append("emphasis")
    if segment.emotion:
        fields.append(f"emotion={segment.emotion}")
        fields.append(f"intensity={_format_number(segment.emotion_intensity)}")
    return " ".join(fields)


def format_pause_segment(segment: PlainTextPauseSegment) -> str:
    """Render one plain-text pause segment as a compact `key=value` row."""

    return (
        f"text={segment.text!r} pause_ms={_format_number(segment.pause_after_ms)} "
        f"intent={segment.intent.value}"
    )


def echo_speech_segments(segments: Sequence[SpeechSegment]) -> None:
    """Print SSML segments in document order."""

    for segment in segments:
        typer.echo(format_speech_segment(segment))


def echo_pause_segments(segments: Sequence[PlainTextPauseSegment]) -> None:
    """Print plain-text pause segments in input order."""

    for segment in segments:
        typer.echo(format_pause_segment(segment))
