"""Direct pass-through commands: init, status, log, diff."""

from __future__ import annotations

from sgit.commands.common import Outcome, apply_plan
from sgit.git.exec import GitRunner, InvokeMode
from sgit.git.plan import CommandPlan


def init(*, git: GitRunner) -> Outcome:
    return apply_plan(git, CommandPlan("Initialized Git repository").then("init"))


def status(*, git: GitRunner, short: bool = False) -> Outcome:
    args = ("status", "-sb") if short else ("status",)
    return apply_plan(git, CommandPlan().then(*args, mode=InvokeMode.VISIBLE))


def log(*, git: GitRunner, short: bool = False, short_count: int = 20, full_count: int = 40) -> Outcome:
    if short:
        args = ("log", "--oneline", "--decorate", "-n", str(short_count))
    else:
        args = ("log", "--decorate", "-n", str(full_count))
    return apply_plan(git, CommandPlan().then(*args, mode=InvokeMode.VISIBLE))


def diff(*, git: GitRunner, path: str | None = None, staged: bool = False) -> Outcome:
    args = ["diff"]
    if staged:
        args.append("--staged")
    if path:
        args.append(path)
    return apply_plan(git, CommandPlan().then(*args, mode=InvokeMode.VISIBLE))
