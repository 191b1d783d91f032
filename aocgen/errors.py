"""Exception hierarchy for aocgen.

Evaluation failures are returned as values on ``EvaluationResult.error``
rather than raised, so the evaluation classes below are also plain data
carriers with a readable ``str()``.
"""

from __future__ import annotations

__all__ = [
    "AocgenError",
    "EvaluationError",
    "UnsupportedLanguageError",
    "ExecutionError",
    "EvaluationTimeoutError",
    "ChallengeNotFoundError",
    "DownloadError",
    "GenerationError",
    "ResponseShapeError",
]


class AocgenError(RuntimeError):
    """Base class for all aocgen errors."""


class EvaluationError(AocgenError):
    """An evaluation could not produce a judged verdict."""


class UnsupportedLanguageError(EvaluationError):
    def __init__(self, language: str) -> None:
        super().__init__(f"unsupported language: {language}")
        self.language = language


class ExecutionError(EvaluationError):
    """The solution could not be started or exited abnormally."""

    def __init__(self, message: str, stderr: str = "") -> None:
        super().__init__(message)
        self.stderr = stderr


class EvaluationTimeoutError(EvaluationError):
    def __init__(self, timeout: float) -> None:
        super().__init__(f"process killed as timeout reached ({timeout:g}s)")
        self.timeout = timeout


class ChallengeNotFoundError(AocgenError):
    def __init__(self, name: str) -> None:
        super().__init__(f"challenge not found: {name}")
        self.name = name


class DownloadError(AocgenError):
    """Fetching a challenge from the puzzle site failed."""


class GenerationError(AocgenError):
    """The model did not produce usable code."""


class ResponseShapeError(GenerationError):
    """A provider response matched none of the known JSON shapes."""
