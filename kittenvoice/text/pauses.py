"""Plain-text pause segmentation.

Responsibilities:
- Detect punctuation and line-break cues that should become audible pauses.
- Split text into `PlainTextPauseSegment` records carrying the pause that
  follows each span and the sentence-final inflection intent.

Precedence at each scan position: em dash, period/ellipsis, `…`, `?`, `!`,
comma, semicolon, colon, line breaks. Everything else accumulates into the
current span. A final (possibly empty) segment always terminates the list.
"""

from __future__ import annotations

from ..models import InflectionIntent, PlainTextPauseSegment, SynthesisTimingOptions


EM_DASH = "—"
ELLIPSIS = "…"
_PAUSE_CUE_CHARS = frozenset(("\r", "\n", ELLIPSIS, EM_DASH, ",", ";", ":", ".", "?", "!"))
_MAX_PAUSE_REPEAT = 4


def contains_pause_cue(text: str) -> bool:
    """Return whether `text` contains any character that triggers a pause split."""

    return any(char in _PAUSE_CUE_CHARS for char in text) or "..." in text


def split_by_pause_cues(
    text: str,
    timing: SynthesisTimingOptions,
) -> list[PlainTextPauseSegment]:
    """Split `text` into spans separated by punctuation pauses.

    Args:
        text: Plain input text.
        timing: Pause durations used for each cue.

    Returns:
        Ordered segments; the last one always has zero pause and no intent.
    """

    segments: list[PlainTextPauseSegment] = []
    current: list[str] = []
    index = 0
    length = len(text)

    def flush(pause_ms: float, intent: InflectionIntent = InflectionIntent.NONE) -> None:
        segments.append(PlainTextPauseSegment("".join(current), pause_ms, intent))
        current.clear()

    while index < length:
        char = text[index]

        if char == EM_DASH:
            count, index = _consume_run(text, index, EM_DASH)
            flush(_scale(timing.em_dash_pause_ms, count))
            continue

        if char == ".":
            if text.startswith("...", index):
                count, index = _consume_run(text, index, ".")
                flush(_scale(timing.ellipsis_pause_ms, max(1, count // 3)))
                current.append("." * (count % 3))
                continue

            if _is_intra_numeric(text, index) or _is_dot_joiner(text, index):
                current.append(".")
                index += 1
                continue

            count, index = _consume_run(text, index, ".")
            current.append(".")
            flush(_scale(timing.period_pause_ms, count), InflectionIntent.STATEMENT)
            continue

        if char == ELLIPSIS:
            count, index = _consume_run(text, index, ELLIPSIS)
            flush(_scale(timing.ellipsis_pause_ms, count))
            continue

        if char == "?":
            count, index = _consume_run(text, index, "?")
            current.append("?")
            flush(_scale(timing.question_pause_ms, count), InflectionIntent.QUESTION)
            continue

        if char == "!":
            count, index = _consume_run(text, index, "!")
            current.append("!")
            flush(_scale(timing.exclamation_pause_ms, count), InflectionIntent.EXCLAMATION)
            continue

        if char == "," and not _is_intra_numeric(text, index):
            count, index = _consume_run(text, index, ",")
            flush(_scale(timing.comma_pause_ms, count))
            continue

        if char == ";":
            count, index = _consume_run(text, index, ";")
            flush(_scale(timing.semicolon_pause_ms, count))
            continue

        if char == ":" and not _is_intra_numeric(text, index) and not _is_url_scheme(text, index):
            count, index = _consume_run(text, index, ":")
            flush(_scale(timing.colon_pause_ms, count))
            continue

        if char in "\r\n":
            breaks = 0
            while index < length and text[index] in "\r\n":
                if text[index] == "\r" and index + 1 < length and text[index + 1] == "\n":
                    index += 1
                breaks += 1
                index += 1
            flush(_scale(timing.newline_pause_ms, breaks))
            continue

        current.append(char)
        index += 1

    flush(0.0)
    return segments


def _consume_run(text: str, index: int, token: str) -> tuple[int, int]:
    """Return the length of the run of `token` at `index` and the index after it."""

    end = index
    while end < len(text) and text[end] == token:
        end += 1
    return end - index, end


def _scale(base_ms: float, count: int) -> float:
    return base_ms * min(max(count, 1), _MAX_PAUSE_REPEAT)


def _is_intra_numeric(text: str, index: int) -> bool:
    if index <= 0 or index >= len(text) - 1:
        return False
    return text[index - 1].isdigit() and text[index + 1].isdigit()


def _is_url_scheme(text: str, index: int) -> bool:
    if index < 2 or index + 2 >= len(text):
        return False
    return text[index + 1] == "/" and text[index + 2] == "/" and text[index - 1].isalpha()


def _is_dot_joiner(text: str, index: int) -> bool:
    if index <= 0 or index >= len(text) - 1:
        return False
    return _is_joiner_char(text[index - 1]) and _is_joiner_char(text[index + 1])


def _is_joiner_char(char: str) -> bool:
    return char.isalnum() or char == "-"
