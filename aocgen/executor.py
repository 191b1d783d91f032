"""Subprocess-based solution runner with a wall-clock timeout."""

from __future__ import annotations

import os
import select
import signal
import subprocess
import threading
import time
from collections.abc import Sequence
from pathlib import Path
from typing import BinaryIO

from aocgen.models import ExecutionResult

DEFAULT_MAX_OUTPUT_BYTES = 1024 * 1024  # per stream

_POSIX = os.name == "posix"
# waitid with WNOWAIT lets the watcher see the exit without reaping.
_WAITID = _POSIX and hasattr(os, "waitid")
_READ_CHUNK = 64 * 1024
# How long drain threads may keep reading after the child is reaped. A
# descendant that escaped the process group can hold a pipe open forever.
_DRAIN_GRACE = 2.0


class LocalExecutor:
    """Runs solution programs as local child processes."""

    def __init__(self, max_output_bytes: int = DEFAULT_MAX_OUTPUT_BYTES) -> None:
        self.max_output_bytes = max_output_bytes

    def run(
        self,
        command: Sequence[str],
        timeout: float,
        cwd: str | Path | None = None,
    ) -> ExecutionResult:
        return run_process(command, timeout, cwd=cwd, max_output_bytes=self.max_output_bytes)


class _Capture:
    """Bounded in-memory sink for one output stream."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        self.dropped = 0
        self._chunks: list[bytes] = []
        self._size = 0
        self._sealed = False
        self._lock = threading.Lock()

    def feed(self, data: bytes) -> None:
        with self._lock:
            if self._sealed:
                return
            kept = data[: max(self.limit - self._size, 0)]
            if kept:
                self._chunks.append(kept)
                self._size += len(kept)
            self.dropped += len(data) - len(kept)

    def text(self) -> str:
        """Seal the capture and return what it holds.

        Data fed after the first call is discarded, so the result does not
        change under a drain thread that outlived its grace period.
        """
        with self._lock:
            self._sealed = True
            text = b"".join(self._chunks).decode("utf-8", errors="replace")
        if self.dropped:
            text += f"\n... [output truncated, {self.dropped} bytes omitted]"
        return text


def run_process(
    command: Sequence[str],
    timeout: float,
    cwd: str | Path | None = None,
    max_output_bytes: int = DEFAULT_MAX_OUTPUT_BYTES,
) -> ExecutionResult:
    """Run *command* once and kill it if it outlives *timeout* seconds.

    The child gets its own process group so that toolchain wrappers such as
    ``go run`` cannot leave the compiled program behind when killed. A
    watcher thread blocks on the child's exit and sets an event; this thread
    waits on that event with the timeout, whichever comes first decides the
    outcome. The watcher leaves the child unreaped, so its pid still names
    our group when the group is killed. Only then is the child reaped.
    """
    argv = [str(part) for part in command]
    started = time.monotonic()
    try:
        proc = subprocess.Popen(
            argv,
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            start_new_session=_POSIX,
        )
    except OSError as e:
        return ExecutionResult(
            stdout="",
            stderr=str(e),
            exit_code=-1,
            start_error=f"failed to start command {argv[0]!r}: {e}",
        )

    wake_r, wake_w = os.pipe() if _POSIX else (None, None)
    stdout = _Capture(max_output_bytes)
    stderr = _Capture(max_output_bytes)
    drains = [
        threading.Thread(target=_drain, args=(proc.stdout, stdout, wake_r), daemon=True),
        threading.Thread(target=_drain, args=(proc.stderr, stderr, wake_r), daemon=True),
    ]
    for t in drains:
        t.start()

    exited = threading.Event()
    watcher = threading.Thread(target=_watch, args=(proc, exited), daemon=True)
    watcher.start()

    timed_out = not exited.wait(timeout)
    # Sweep the group on both paths: on timeout to stop the child, on a
    # normal exit to stop anything it left running in the background.
    _kill(proc)
    proc.wait()
    watcher.join()
    for t in drains:
        t.join(_DRAIN_GRACE)
    if wake_w is not None:
        if any(t.is_alive() for t in drains):
            os.write(wake_w, b"\0")
            for t in drains:
                t.join()
        os.close(wake_w)
        os.close(wake_r)

    return ExecutionResult(
        stdout=stdout.text(),
        stderr=stderr.text(),
        exit_code=proc.returncode,
        timed_out=timed_out,
        pid=proc.pid,
        duration=time.monotonic() - started,
    )


def _watch(proc: subprocess.Popen, exited: threading.Event) -> None:
    if _WAITID:
        try:
            os.waitid(os.P_PID, proc.pid, os.WEXITED | os.WNOWAIT)
        except ChildProcessError:
            # run_process reaped it after a timeout before we got here
            pass
    else:
        proc.wait()
    exited.set()


def _drain(stream: BinaryIO, capture: _Capture, wake: int | None) -> None:
    """Copy *stream* into *capture* until EOF or until *wake* is readable."""
    fd = stream.fileno()
    with stream:
        while True:
            if wake is not None:
                ready, _, _ = select.select([fd, wake], [], [])
                if wake in ready:
                    break
            chunk = os.read(fd, _READ_CHUNK)
            if not chunk:
                break
            capture.feed(chunk)


def _kill(proc: subprocess.Popen) -> None:
    """SIGKILL the child's process group, or the child itself off POSIX."""
    if proc.returncode is not None:
        # Reaped already, so the pid may have been reused.
        return
    if _POSIX:
        try:
            os.killpg(proc.pid, signal.SIGKILL)
        except (ProcessLookupError, PermissionError):
            pass
    else:
        proc.kill()
