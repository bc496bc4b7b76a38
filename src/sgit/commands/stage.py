"""Stage workflow: add files to the index."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from sgit.commands.common import Outcome, apply_plan, pick_paths
from sgit.git.exec import GitRunner
from sgit.git.plan import CommandPlan
from sgit.git.repo import get_repo_root
from sgit.git.status import unstaged_paths
from sgit.prompts import Prompter

STAGE_MENU = ("All files", "Tracked files only", "Specific files")


class StageChoice(IntEnum):
    ALL = 0
    TRACKED = 1
    SPECIFIC = 2


@dataclass(frozen=True)
class StageRequest:
    targets: tuple[str, ...] = ()
    all: bool = False
    tracked: bool = False

    @property
    def interactive(self) -> bool:
        return not self.targets and not self.all and not self.tracked


def stage_all_plan() -> CommandPlan:
    return CommandPlan("Staged all files").then("add", "-A")


def stage_tracked_plan() -> CommandPlan:
    return CommandPlan("Staged tracked files").then("add", "-u")


def stage_targets_plan(targets: tuple[str, ...]) -> CommandPlan:
    return CommandPlan("Staged files").then("add", *(targets or (".",)))


def _stage_specific(git: GitRunner, prompter: Prompter) -> Outcome:
    picked = pick_paths(
        prompter,
        prompt="Select files to stage",
        candidates=unstaged_paths(git),
        empty_notice="No unstaged files to stage.",
    )
    if isinstance(picked, Outcome):
        return picked
    root = get_repo_root(git)
    plan = CommandPlan(f"Staged {len(picked)} file(s)").then("add", *picked, cwd=root)
    return apply_plan(git, plan)


def stage(request: StageRequest, *, git: GitRunner, prompter: Prompter) -> Outcome:
    if request.interactive:
        choice = StageChoice(prompter.choose("What would you like to stage?", STAGE_MENU))
        if choice is StageChoice.ALL:
            return apply_plan(git, stage_all_plan())
        if choice is StageChoice.TRACKED:
            return apply_plan(git, stage_tracked_plan())
        return _stage_specific(git, prompter)

    if request.all:
        return apply_plan(git, stage_all_plan())
    if request.tracked:
        return apply_plan(git, stage_tracked_plan())
    return apply_plan(git, stage_targets_plan(request.targets))
