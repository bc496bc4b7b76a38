"""Subprocess runner for git invocations."""

from __future__ import annotations

import logging
import subprocess
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from sgit.errors import GitCommandError, SpawnFailed
from sgit.git.hints import suggest_hint

logger = logging.getLogger(__name__)

GIT_EXECUTABLE = "git"


class InvokeMode(str, Enum):
    """How the standard streams of one git invocation are wired."""

    VISIBLE = "visible"
    CAPTURED_QUIET = "captured-quiet"
    CAPTURED_ALL = "captured-all"


# (stdout, stderr) per mode; stderr is always captured so failures can be hinted.
_STREAMS = {
    InvokeMode.VISIBLE: (None, subprocess.PIPE),
    InvokeMode.CAPTURED_QUIET: (subprocess.DEVNULL, subprocess.PIPE),
    InvokeMode.CAPTURED_ALL: (subprocess.PIPE, subprocess.PIPE),
}


@dataclass(frozen=True)
class ExecResult:
    """Result envelope for one git invocation."""

    argv: tuple[str, ...]
    cwd: Path | None
    returncode: int
    stdout: str
    stderr: str

    @property
    def args(self) -> tuple[str, ...]:
        """Arguments without the executable name."""
        return self.argv[1:]

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """stderr followed by stdout; git reports merge conflicts and empty commits on stdout."""
        return "\n".join(part for part in (self.stderr.strip(), self.stdout.strip()) if part)


class GitRunner:
    """Runs git by its fixed executable name, one subprocess per call.

    `invoke` never raises on a non-zero exit; `run` does, wrapping the result
    in a `GitCommandError` with a remediation hint attached. Neither retries.
    """

    def __init__(self, executable: str = GIT_EXECUTABLE, cwd: Path | None = None):
        self.executable = executable
        self.cwd = cwd

    def invoke(
        self,
        args: Sequence[str],
        *,
        mode: InvokeMode = InvokeMode.CAPTURED_ALL,
        cwd: Path | None = None,
    ) -> ExecResult:
        argv = [self.executable, *args]
        workdir = cwd or self.cwd
        stdout, stderr = _STREAMS[mode]
        logger.debug("running %s (mode=%s, cwd=%s)", " ".join(argv), mode.value, workdir or ".")
        try:
            completed = subprocess.run(
                argv,
                cwd=workdir,
                stdout=stdout,
                stderr=stderr,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as exc:
            raise SpawnFailed(args) from exc

        result = ExecResult(
            argv=tuple(argv),
            cwd=Path(workdir) if workdir else None,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
        logger.debug("%s exited with %d", " ".join(argv), result.returncode)
        if mode is InvokeMode.VISIBLE and result.succeeded and result.stderr:
            sys.stderr.write(result.stderr)
        return result

    def run(
        self,
        args: Sequence[str],
        *,
        mode: InvokeMode = InvokeMode.CAPTURED_QUIET,
        cwd: Path | None = None,
    ) -> ExecResult:
        """Invoke git and raise `GitCommandError` on a non-zero exit."""
        result = self.invoke(args, mode=mode, cwd=cwd)
        if not result.succeeded:
            raise GitCommandError(result, hint=suggest_hint(result.output, result.args))
        return result
