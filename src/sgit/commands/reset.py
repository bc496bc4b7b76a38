"""Reset workflow: discard staged, unstaged or untracked changes."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

from sgit.commands.common import Outcome, apply_plan, pick_paths, report_done, report_noop
from sgit.git.exec import GitRunner
from sgit.git.plan import CommandPlan
from sgit.git.repo import get_repo_root
from sgit.git.status import (
    FileClass,
    classify,
    find_entry,
    staged_paths,
    uncommitted_paths,
    unstaged_paths,
    untracked_paths,
)
from sgit.prompts import Prompter

logger = logging.getLogger(__name__)

RESET_MENU = (
    "All files",
    "Staged files only",
    "Unstaged changes only",
    "Tracked files only",
    "Untracked files only",
    "Custom files",
)


class ResetScope(IntEnum):
    ALL = 0
    STAGED = 1
    UNSTAGED = 2
    TRACKED = 3
    UNTRACKED = 4
    CUSTOM = 5


@dataclass(frozen=True)
class ResetRequest:
    all: bool = False
    staged: bool = False
    unstaged: bool = False
    tracked: bool = False
    untracked: bool = False

    @property
    def interactive(self) -> bool:
        return not (self.all or self.staged or self.unstaged or self.tracked or self.untracked)

    @property
    def scope(self) -> ResetScope | None:
        """Flag-selected scope; when several flags are given the broadest wins."""
        if self.all:
            return ResetScope.ALL
        if self.staged:
            return ResetScope.STAGED
        if self.unstaged:
            return ResetScope.UNSTAGED
        if self.tracked:
            return ResetScope.TRACKED
        if self.untracked:
            return ResetScope.UNTRACKED
        return None


def _reset_all(git: GitRunner, prompter: Prompter) -> Outcome:
    return apply_plan(git, CommandPlan("All files reset.").then("reset", "--hard").then("clean", "-fd"))


def _reset_staged(git: GitRunner, prompter: Prompter) -> Outcome:
    if not staged_paths(git):
        return report_noop("No staged files to reset.")
    return apply_plan(git, CommandPlan("Staged files reset.").then("restore", "--staged", "."))


def _reset_unstaged(git: GitRunner, prompter: Prompter) -> Outcome:
    if not unstaged_paths(git):
        return report_noop("No unstaged changes to reset.")
    return apply_plan(git, CommandPlan("Unstaged changes reset.").then("restore", "."))


def _reset_tracked(git: GitRunner, prompter: Prompter) -> Outcome:
    return apply_plan(git, CommandPlan("Tracked files reset.").then("reset", "--hard"))


def _reset_untracked(git: GitRunner, prompter: Prompter) -> Outcome:
    if not untracked_paths(git):
        return report_noop("No untracked files to reset.")
    return apply_plan(git, CommandPlan("Untracked files removed.").then("clean", "-fd"))


def reset_path(git: GitRunner, path: str, root: Path) -> None:
    """Reset one path according to its current state, re-reading status between steps."""
    entry = find_entry(git, path)
    if entry is None:
        logger.debug("%s no longer reported by git status; skipping", path)
        return

    if classify(entry) is FileClass.UNTRACKED:
        git.run(["clean", "-f", path], cwd=root)
        return

    if entry.index_state != " ":
        git.run(["restore", "--staged", path], cwd=root)
        entry = find_entry(git, path)
        if entry is None:
            return

    # A newly added file becomes untracked once unstaged; it is kept.
    if entry.worktree_state not in (" ", "?"):
        git.run(["restore", path], cwd=root)


def _reset_custom(git: GitRunner, prompter: Prompter) -> Outcome:
    picked = pick_paths(
        prompter,
        prompt="Select files to reset",
        candidates=uncommitted_paths(git),
        empty_notice="No files to reset.",
    )
    if isinstance(picked, Outcome):
        return picked
    root = get_repo_root(git)
    for path in picked:
        reset_path(git, path, root)
    return report_done("Selected files reset.", details=picked)


_HANDLERS: dict[ResetScope, Callable[[GitRunner, Prompter], Outcome]] = {
    ResetScope.ALL: _reset_all,
    ResetScope.STAGED: _reset_staged,
    ResetScope.UNSTAGED: _reset_unstaged,
    ResetScope.TRACKED: _reset_tracked,
    ResetScope.UNTRACKED: _reset_untracked,
    ResetScope.CUSTOM: _reset_custom,
}


def reset(request: ResetRequest, *, git: GitRunner, prompter: Prompter) -> Outcome:
    scope = request.scope
    if scope is None:
        scope = ResetScope(prompter.choose("What would you like to reset?", RESET_MENU))
    return _HANDLERS[scope](git, prompter)
