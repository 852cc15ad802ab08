"""Domain exceptions for synthesis and CLI diagnostics."""

from __future__ import annotations


class SynthesisStageError(RuntimeError):
    """Raised when a specific synthesis stage fails."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped synthesis error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint


class SsmlParseError(SynthesisStageError):
    """Raised when SSML markup is not well-formed XML."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            stage="ssml",
            detail=detail,
            hint="Check that every SSML tag is closed and attribute values are quoted.",
        )


class TokenLimitExceeded(SynthesisStageError):
    """Raised when token ids cannot satisfy the model vocabulary or input limit."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            stage="tokenize",
            detail=detail,
            hint="Verify that tokenizer.json and the model file belong to the same release.",
        )


class VoiceNotFoundError(SynthesisStageError):
    """Raised when a voice name has no style matrix in the voice archive."""

    def __init__(self, voice: str, source: str) -> None:
        super().__init__(
            stage="voice",
            detail=f"Voice `{voice}` not found in {source}.",
            hint="Use a voice name present in the voices archive or add a `voice_aliases` entry.",
        )
        self.voice = voice
