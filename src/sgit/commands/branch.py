"""Branch workflow: switch to an existing branch or create a new one."""

from __future__ import annotations

from dataclasses import dataclass

from sgit.commands.common import Outcome, apply_plan, report_noop
from sgit.errors import UsageError
from sgit.git.exec import GitRunner
from sgit.git.plan import CommandPlan
from sgit.git.repo import get_branches, get_current_branch
from sgit.prompts import Prompter

CREATE_ENTRY = "Create new branch..."
CURRENT_SUFFIX = " (current)"


@dataclass(frozen=True)
class BranchRequest:
    create: str | None = None

    @property
    def interactive(self) -> bool:
        return self.create is None

    def validate(self) -> None:
        if self.create is not None:
            validate_branch_name(self.create)


def validate_branch_name(raw: str) -> str:
    """Trim and validate a new branch name.

    Raises:
        UsageError: If the name is empty or contains whitespace
    """
    name = raw.strip()
    if not name:
        raise UsageError("branch name cannot be empty")
    if any(ch.isspace() for ch in name):
        raise UsageError("branch name cannot contain whitespace")
    return name


def create_branch(git: GitRunner, raw_name: str) -> Outcome:
    name = validate_branch_name(raw_name)
    plan = (
        CommandPlan(f"Created and switched to branch '{name}'")
        .then("branch", name)
        .then("checkout", name)
    )
    return apply_plan(git, plan)


def branch_menu(branches: list[str], current: str) -> list[str]:
    items = [f"{name}{CURRENT_SUFFIX}" if name == current else name for name in branches]
    items.append(CREATE_ENTRY)
    return items


def branch(request: BranchRequest, *, git: GitRunner, prompter: Prompter) -> Outcome:
    if request.create is not None:
        return create_branch(git, request.create)

    branches = get_branches(git)
    current = get_current_branch(git)
    selection = prompter.choose("Select a branch to checkout", branch_menu(branches, current))

    if selection == len(branches):
        return create_branch(git, prompter.ask_text("New branch name"))

    selected = branches[selection]
    if selected == current:
        return report_noop(f"Already on branch '{selected}'.")
    return apply_plan(git, CommandPlan(f"Switched to branch '{selected}'").then("checkout", selected))
