"""Abstract executor interface for running solution programs."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from aocgen.models import ExecutionResult


@runtime_checkable
class CodeExecutor(Protocol):
    def run(
        self,
        command: Sequence[str],
        timeout: float,
        cwd: str | Path | None = None,
    ) -> ExecutionResult: ...
