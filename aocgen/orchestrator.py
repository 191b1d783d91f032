"""Evaluate a solution file: resolve its runtime, run it, judge the output."""

from __future__ import annotations

import sys
import threading
from contextlib import nullcontext
from pathlib import Path

from aocgen.config import Config
from aocgen.errors import (
    EvaluationTimeoutError,
    ExecutionError,
    UnsupportedLanguageError,
)
from aocgen.executor import LocalExecutor
from aocgen.executor_base import CodeExecutor
from aocgen.judge import Judge
from aocgen.models import (
    Challenge,
    EvaluationRequest,
    EvaluationResult,
    ExecutionResult,
    FailureKind,
)
from aocgen.runtimes import invocation_for

_STDERR_EXCERPT = 2000


class Orchestrator:
    def __init__(
        self,
        config: Config,
        executor: CodeExecutor | None = None,
        judge: Judge | None = None,
    ) -> None:
        self.config = config
        self._executor: CodeExecutor = executor or LocalExecutor(config.max_output_bytes)
        self._judge = judge or Judge()
        self._slots = (
            threading.BoundedSemaphore(config.max_concurrent)
            if config.max_concurrent
            else None
        )

    def evaluate(self, request: EvaluationRequest) -> EvaluationResult:
        source = request.source_path.resolve()
        try:
            command = invocation_for(request.language, source)
        except UnsupportedLanguageError as e:
            return EvaluationResult(matched=False, error=e)

        if not source.is_file():
            return EvaluationResult(
                matched=False,
                error=ExecutionError(f"solution file not found: {request.source_path}"),
                failure_kind=FailureKind.EXECUTION_ERROR,
            )

        self._log(f"Running {' '.join(command)} (timeout {request.timeout:g}s)")
        with self._slots or nullcontext():
            execution = self._executor.run(
                command,
                request.timeout,
                cwd=source.parent,
            )
        self._log(f"Finished in {execution.duration:.2f}s with exit code {execution.exit_code}")

        kind = execution.failure_kind
        if kind is FailureKind.TIMEOUT:
            return EvaluationResult(
                matched=False,
                output=execution.output,
                error=EvaluationTimeoutError(request.timeout),
                failure_kind=kind,
                execution=execution,
            )
        if kind is FailureKind.EXECUTION_ERROR:
            return EvaluationResult(
                matched=False,
                output=execution.output,
                error=_execution_error(execution),
                failure_kind=kind,
                execution=execution,
            )

        matched = self._judge.judge(execution.output, request.expected_answer)
        return EvaluationResult(matched=matched, output=execution.output, execution=execution)

    def evaluate_challenge(
        self,
        challenge: Challenge,
        source_path: str | Path,
        language: str,
        timeout: float | None = None,
    ) -> EvaluationResult:
        request = EvaluationRequest(
            source_path=Path(source_path),
            language=language,
            expected_answer=challenge.answer,
            timeout=timeout or self.config.evaluation_timeout,
        )
        self._log(f"Evaluating {challenge.name} ({language}): {request.source_path}")
        return self.evaluate(request)

    def _log(self, message: str) -> None:
        if self.config.verbose:
            print(message, file=sys.stderr)


def _execution_error(execution: ExecutionResult) -> ExecutionError:
    if execution.start_error:
        return ExecutionError(execution.start_error, stderr=execution.stderr)
    stderr = execution.stderr.strip()
    if execution.exit_code < 0:
        message = f"process killed by signal {-execution.exit_code}"
    else:
        message = f"process finished with exit code {execution.exit_code}"
    if stderr:
        message += f": {stderr[-_STDERR_EXCERPT:]}"
    return ExecutionError(message, stderr=execution.stderr)
