"""Read-only repository queries: root, presence, branches, history."""

from __future__ import annotations

from pathlib import Path

from sgit.errors import NotInRepository, SgitError
from sgit.git.exec import GitRunner, InvokeMode


def check_in_repo(git: GitRunner) -> None:
    """Pre-flight check run before every command except `init`."""
    result = git.invoke(["rev-parse", "--git-dir"], mode=InvokeMode.CAPTURED_ALL)
    if not result.succeeded:
        raise NotInRepository()


def get_repo_root(git: GitRunner) -> Path:
    """Resolve the top-level directory of the current repository."""
    result = git.invoke(["rev-parse", "--show-toplevel"], mode=InvokeMode.CAPTURED_ALL)
    if result.succeeded:
        root = result.stdout.strip()
        if not root:
            raise NotInRepository()
        return Path(root)
    if "not a git repository" in result.stderr.lower():
        raise NotInRepository()
    raise SgitError(f"failed to get repo root: {result.stderr.strip()}")


def get_branches(git: GitRunner) -> list[str]:
    """Local branch names, one per line, blank lines dropped."""
    result = git.run(["branch", "--format=%(refname:short)"], mode=InvokeMode.CAPTURED_ALL)
    return [line.strip() for line in result.stdout.splitlines() if line.strip()]


def get_current_branch(git: GitRunner) -> str:
    """Return the checked-out branch, or an empty string when HEAD is detached."""
    result = git.run(["branch", "--show-current"], mode=InvokeMode.CAPTURED_ALL)
    return result.stdout.strip()


def has_commits(git: GitRunner) -> bool:
    """True when HEAD points at a commit (an unborn branch has none)."""
    result = git.invoke(["log", "--oneline", "-n", "1"], mode=InvokeMode.CAPTURED_ALL)
    return result.succeeded and bool(result.stdout.strip())
