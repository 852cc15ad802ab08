"""Command-line interface for kittenvoice.

Responsibilities:
- Expose user-facing commands for synthesis, phonemization and segmentation.
- Apply CLI overrides on top of environment and config-file speaker defaults.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .cli_rendering import echo_pause_segments, echo_speech_segments, exit_with_command_error
from .config import ConfigLoader
from .models import DEFAULT_TIMING
from .speaker import Speaker
from .ssml import is_ssml, parse
from .telemetry.logger import RunLogger
from .text import CmuPronunciationLexicon, EnglishToIpa, G2PConfig, split_by_pause_cues

app = typer.Typer(
    name="kittenvoice",
    no_args_is_help=True,
    help="kittenvoice CLI.",
)


def _load_speaker(assets_dir: Path, verbose: bool = False) -> Speaker:
    """Load a speaker with runtime logging from a model assets directory.

    `verbose` lowers the log level to DEBUG so chunk and pause split events show.
    """

    level = "DEBUG" if verbose else "INFO"
    return Speaker.from_assets(assets_dir, logger=RunLogger(level=level))


def _load_phonemizer(assets_dir: Path | None) -> EnglishToIpa:
    """Build the G2P converter, using the assets' lexicon and overrides when given."""

    if assets_dir is None:
        return EnglishToIpa()
    config = ConfigLoader.from_assets_dir(assets_dir)
    return EnglishToIpa(
        G2PConfig.create(
            overrides=config.pronunciation_overrides,
            lexicon=CmuPronunciationLexicon.load(config.cmu_dict_path),
        )
    )


@app.command("say")
def say_command(
    text: Annotated[str, typer.Argument(help="Plain text or SSML markup to speak.")],
    assets: Annotated[
        Path,
        typer.Option("--assets", help="Model assets directory containing `config.yaml`."),
    ],
    out: Annotated[Path, typer.Option("--out", help="Output WAV file path.")],
    voice: Annotated[
        str | None,
        typer.Option("--voice", help="Voice name or alias (overrides config and env)."),
    ] = None,
    speed: Annotated[
        float | None,
        typer.Option("--speed", help="Speaking rate, greater than zero."),
    ] = None,
    expressiveness: Annotated[
        float | None,
        typer.Option(
            "--expressiveness",
            help="Emotion intensity multiplier; `0` disables SSML emotion styling.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Also log chunk and pause split events."),
    ] = False,
) -> None:
    """Synthesize TEXT and write a 16-bit mono WAV file."""

    try:
        speaker = _load_speaker(assets, verbose=verbose)
        if voice is not None:
            speaker.voice = voice
        if speed is not None:
            speaker.speed = speed
        if expressiveness is not None:
            speaker.expressiveness = expressiveness
        written = speaker.say(text, out)
    except Exception as exc:
        exit_with_command_error("say", exc)

    if written is None:
        typer.echo("No audio produced; nothing written.")
        return
    typer.echo(f"Audio: {written}")


@app.command("phonemize")
def phonemize_command(
    text: Annotated[str, typer.Argument(help="English text to convert to IPA.")],
    assets: Annotated[
        Path | None,
        typer.Option(
            "--assets",
            help="Model assets directory; enables its CMU lexicon and pronunciation overrides.",
        ),
    ] = None,
) -> None:
    """Print the IPA transcription of TEXT."""

    try:
        phonemes = _load_phonemizer(assets).convert(text)
    except Exception as exc:
        exit_with_command_error("phonemize", exc)

    typer.echo(phonemes)


@app.command("segments")
def segments_command(
    text: Annotated[str, typer.Argument(help="Plain text or SSML markup to segment.")],
) -> None:
    """Print the SSML or punctuation-pause segmentation of TEXT, one segment per line."""

    try:
        if is_ssml(text):
            echo_speech_segments(parse(text))
        else:
            echo_pause_segments(split_by_pause_cues(text, DEFAULT_TIMING))
    except Exception as exc:
        exit_with_command_error("segments", exc)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
