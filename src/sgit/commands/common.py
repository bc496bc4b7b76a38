"""Shared outcome types and plan execution for sgit workflows."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from sgit import ui
from sgit.git.exec import ExecResult, GitRunner
from sgit.git.plan import CommandPlan
from sgit.prompts import Prompter

NO_FILES_SELECTED = "No files selected."


class OutcomeStatus(str, Enum):
    DONE = "done"
    NOOP = "noop"
    ABORTED = "aborted"


@dataclass(frozen=True)
class Outcome:
    """What a workflow ended up doing, after its messages were printed."""

    status: OutcomeStatus
    message: str
    details: tuple[str, ...] = ()


def report_done(message: str, details: Sequence[str] = ()) -> Outcome:
    if message:
        ui.success(message)
    return Outcome(OutcomeStatus.DONE, message, tuple(details))


def report_noop(message: str) -> Outcome:
    ui.notice(message)
    return Outcome(OutcomeStatus.NOOP, message)


def report_aborted(message: str = "Aborted.") -> Outcome:
    ui.notice(message)
    return Outcome(OutcomeStatus.ABORTED, message)


def execute(git: GitRunner, plan: CommandPlan) -> list[ExecResult]:
    """Run plan steps in order; the first failure propagates and stops the plan."""
    results: list[ExecResult] = []
    for step in plan.steps:
        if step.label:
            ui.step(step.label)
        results.append(git.run(step.args, mode=step.mode, cwd=step.cwd))
        if step.done:
            ui.success(step.done)
    return results


def apply_plan(git: GitRunner, plan: CommandPlan) -> Outcome:
    execute(git, plan)
    return report_done(plan.success_message)


def pick_paths(
    prompter: Prompter,
    *,
    prompt: str,
    candidates: Sequence[str],
    empty_notice: str,
) -> list[str] | Outcome:
    """Multi-select over candidate paths.

    Returns the chosen paths, or a no-op Outcome when there is nothing to
    choose from or nothing was chosen. No prompt is shown for an empty list.
    """
    if not candidates:
        return report_noop(empty_notice)
    chosen = prompter.choose_many(prompt, candidates)
    if not chosen:
        return report_noop(NO_FILES_SELECTED)
    return [candidates[index] for index in chosen]
