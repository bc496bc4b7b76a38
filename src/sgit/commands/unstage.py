"""Unstage workflow: take files out of the index, keeping working-tree edits."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from sgit.commands.common import Outcome, apply_plan, pick_paths
from sgit.git.exec import GitRunner
from sgit.git.plan import CommandPlan
from sgit.git.repo import get_repo_root
from sgit.git.status import staged_paths
from sgit.prompts import Prompter

UNSTAGE_MENU = ("All staged files", "Specific files")


class UnstageChoice(IntEnum):
    ALL = 0
    SPECIFIC = 1


@dataclass(frozen=True)
class UnstageRequest:
    targets: tuple[str, ...] = ()
    all: bool = False

    @property
    def interactive(self) -> bool:
        return not self.targets and not self.all


def unstage_all_plan() -> CommandPlan:
    return CommandPlan("All files unstaged").then("restore", "--staged", ".")


def unstage_targets_plan(targets: tuple[str, ...]) -> CommandPlan:
    return CommandPlan("Files unstaged").then("restore", "--staged", *(targets or (".",)))


def unstage(request: UnstageRequest, *, git: GitRunner, prompter: Prompter) -> Outcome:
    if not request.interactive:
        if request.all:
            return apply_plan(git, unstage_all_plan())
        return apply_plan(git, unstage_targets_plan(request.targets))

    choice = UnstageChoice(prompter.choose("What would you like to unstage?", UNSTAGE_MENU))
    if choice is UnstageChoice.ALL:
        return apply_plan(git, unstage_all_plan())

    picked = pick_paths(
        prompter,
        prompt="Select files to unstage",
        candidates=staged_paths(git),
        empty_notice="No staged files to unstage.",
    )
    if isinstance(picked, Outcome):
        return picked
    root = get_repo_root(git)
    plan = CommandPlan(f"Unstaged {len(picked)} file(s)").then("restore", "--staged", *picked, cwd=root)
    return apply_plan(git, plan)
