"""Error taxonomy for sgit commands."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sgit.git.exec import ExecResult

NOT_IN_REPO_HINT = "not in a git repository - run 'sgit init' or cd into a repo first"


class SgitError(RuntimeError):
    """Base class for errors reported to the user as `error: ...` lines."""


class SpawnFailed(SgitError):
    """Raised when the git executable cannot be launched."""

    def __init__(self, args: Sequence[str]):
        rendered = " ".join(args)
        super().__init__(f"failed to execute git {rendered} - is git installed?")


class NotInRepository(SgitError):
    """Raised when a command needs a repository and none is found."""

    def __init__(self, message: str = NOT_IN_REPO_HINT):
        super().__init__(message)


class UsageError(SgitError):
    """Raised for invalid flag combinations or input, before git runs."""


class PromptAborted(SgitError):
    """Raised when the user cancels an interactive prompt."""


def format_output(output: str) -> str:
    trimmed = output.strip()
    if not trimmed:
        return ""
    return "\n  " + trimmed.replace("\n", "\n  ")


class GitCommandError(SgitError):
    """Raised when git exits non-zero; carries the result and a remediation hint."""

    def __init__(self, result: ExecResult, hint: str | None = None):
        rendered = " ".join(result.args)
        message = f"git {rendered} failed:{format_output(result.stderr if result.stderr.strip() else result.stdout)}"
        if hint:
            message = f"{message}\n  hint: {hint}"
        super().__init__(message)
        self.result = result
        self.hint = hint
