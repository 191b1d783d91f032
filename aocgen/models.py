"""Data models for aocgen."""

from __future__ import annotations

import enum
from dataclasses import asdict, dataclass, field
from pathlib import Path

from aocgen.errors import EvaluationError


class FailureKind(enum.Enum):
    NONE = "NONE"
    TIMEOUT = "TIMEOUT"
    EXECUTION_ERROR = "EXECUTION_ERROR"


@dataclass
class Challenge:
    name: str
    input: str = ""
    answer: str = ""
    task: str = ""
    solution: str = ""
    solution_lang: str = ""
    year: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> Challenge:
        return cls(
            name=data["name"],
            input=data.get("input", ""),
            answer=data.get("answer", ""),
            task=data.get("task", ""),
            solution=data.get("solution", ""),
            solution_lang=data.get("solution_lang", ""),
            year=int(data.get("year") or 0),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class EvaluationRequest:
    source_path: Path
    language: str
    expected_answer: str
    timeout: float = 20.0  # seconds

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout!r}")
        object.__setattr__(self, "source_path", Path(self.source_path))


@dataclass
class ExecutionResult:
    stdout: str
    stderr: str
    exit_code: int
    timed_out: bool = False
    pid: int | None = None
    duration: float = 0.0  # seconds
    start_error: str = ""  # set when no process could be spawned

    @property
    def output(self) -> str:
        """Combined stdout and stderr, the text the judge looks at."""
        return self.stdout + self.stderr

    @property
    def failure_kind(self) -> FailureKind:
        if self.timed_out:
            return FailureKind.TIMEOUT
        if self.start_error or self.exit_code != 0:
            return FailureKind.EXECUTION_ERROR
        return FailureKind.NONE


@dataclass
class EvaluationResult:
    matched: bool
    output: str = ""
    error: EvaluationError | None = None
    failure_kind: FailureKind = FailureKind.NONE
    execution: ExecutionResult | None = field(default=None, repr=False)

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error
