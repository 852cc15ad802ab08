"""Pause and inflection timing settings for synthesis orchestration."""

from __future__ import annotations

from dataclasses import dataclass, fields


@dataclass(frozen=True, slots=True)
class SynthesisTimingOptions:
    """Pause durations (milliseconds) and tail-inflection parameters.

    Attributes:
        newline_pause_ms: Pause per line break.
        ellipsis_pause_ms: Pause per ellipsis (`...` or `…`).
        em_dash_pause_ms: Pause per em dash.
        comma_pause_ms: Pause after a comma.
        semicolon_pause_ms: Pause after a semicolon.
        colon_pause_ms: Pause after a colon.
        period_pause_ms: Pause after a sentence-ending period.
        question_pause_ms: Pause after a question mark.
        exclamation_pause_ms: Pause after an exclamation mark.
        max_aggregated_pause_ms: Upper bound for consecutive pauses merged together.
        chunk_join_pause_ms: Silence between token-limited chunks.
        inflection_enabled: Whether question/exclamation tails are inflected.
        question_inflection_semitones: Upward shift applied to question tails.
        exclamation_inflection_semitones: Upward shift applied to exclamation tails.
        exclamation_gain: Final gain reached by the exclamation tail ramp.
        inflection_window_ms: Length of the inflected tail window.
        inflection_activity_threshold: Absolute amplitude treated as speech.
    """

    newline_pause_ms: float = 220.0
    ellipsis_pause_ms: float = 280.0
    em_dash_pause_ms: float = 170.0
    comma_pause_ms: float = 90.0
    semicolon_pause_ms: float = 140.0
    colon_pause_ms: float = 140.0
    period_pause_ms: float = 200.0
    question_pause_ms: float = 240.0
    exclamation_pause_ms: float = 220.0
    max_aggregated_pause_ms: float = 1200.0
    chunk_join_pause_ms: float = 40.0
    inflection_enabled: bool = True
    question_inflection_semitones: float = 0.9
    exclamation_inflection_semitones: float = 0.45
    exclamation_gain: float = 1.12
    inflection_window_ms: float = 240.0
    inflection_activity_threshold: float = 0.02

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Return the accepted option names, used to validate config mappings."""

        return tuple(field.name for field in fields(cls))


DEFAULT_TIMING = SynthesisTimingOptions()
