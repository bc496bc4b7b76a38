"""Remote workflows: push, pull, and sync (fetch, pull, push).

Sync moves FETCHING -> PULLING -> PUSHING -> DONE. A fetch failure that is
not network related, and a pull failure that is neither a conflict nor a
missing upstream, are reported as warnings and the next phase still runs.
Every other failure aborts. Nothing already done is rolled back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from sgit import ui
from sgit.commands.common import Outcome, execute, report_done
from sgit.errors import GitCommandError, SgitError, UsageError
from sgit.git.exec import GitRunner, InvokeMode
from sgit.git.hints import FailureKind, classify_failure
from sgit.git.plan import CommandPlan
from sgit.git.repo import get_current_branch

logger = logging.getLogger(__name__)

DEFAULT_REMOTE = "origin"

FETCH_FAILURES = (FailureKind.NETWORK,)
PULL_FAILURES = (FailureKind.CONFLICT, FailureKind.NO_TRACKING)
PUSH_FAILURES = (FailureKind.REJECTED, FailureKind.NO_UPSTREAM)


@dataclass(frozen=True)
class RemoteRequest:
    """Optional `remote [branch]` qualifiers shared by push, pull and sync."""

    remote: str | None = None
    branch: str | None = None

    def qualifiers(self) -> list[str]:
        if self.remote is None:
            return []
        if self.branch is None:
            return [self.remote]
        return [self.remote, self.branch]

    def describe(self) -> str:
        if self.remote is None:
            return ""
        if self.branch is None:
            return self.remote
        return f"{self.remote}/{self.branch}"

    def validate(self) -> None:
        if self.remote is None and self.branch is not None:
            raise UsageError("cannot specify a branch without a remote")


class SyncPhase(str, Enum):
    FETCHING = "fetching"
    PULLING = "pulling"
    PUSHING = "pushing"
    DONE = "done"


def push(request: RemoteRequest, *, git: GitRunner) -> Outcome:
    request.validate()
    target = request.describe()
    label = f"Pushing to {target}..." if target else "Pushing..."
    execute(git, CommandPlan().then("push", *request.qualifiers(), mode=InvokeMode.CAPTURED_ALL, label=label))
    return report_done("Pushed successfully")


def pull(request: RemoteRequest, *, git: GitRunner) -> Outcome:
    request.validate()
    source = request.describe()
    label = f"Pulling from {source}..." if source else "Pulling..."
    execute(git, CommandPlan().then("pull", *request.qualifiers(), mode=InvokeMode.CAPTURED_ALL, label=label))
    return report_done("Pulled successfully")


def _branch_for_hint(git: GitRunner) -> str:
    try:
        return get_current_branch(git) or "<branch>"
    except SgitError:
        logger.debug("could not read current branch for remediation text", exc_info=True)
        return "<branch>"


def _advance(current: SyncPhase, following: SyncPhase) -> SyncPhase:
    logger.debug("sync: %s -> %s", current.value, following.value)
    return following


def sync(request: RemoteRequest, *, git: GitRunner, default_remote: str = DEFAULT_REMOTE) -> Outcome:
    remote_name = request.remote or default_remote
    warnings: list[str] = []
    phase = SyncPhase.FETCHING

    ui.step(f"Fetching from {remote_name}...")
    try:
        git.run(["fetch", remote_name], mode=InvokeMode.CAPTURED_ALL)
    except GitCommandError as exc:
        if classify_failure(exc.result.output, FETCH_FAILURES) is FailureKind.NETWORK:
            ui.failure(f"Network error: cannot reach '{remote_name}'")
            raise
        warnings.append(f"fetch failed: {exc.result.output}")
        ui.warn(f"Fetch failed: {exc}")
        ui.detail("Continuing with local state...")
    else:
        ui.success("Fetch complete")

    phase = _advance(phase, SyncPhase.PULLING)
    ui.step("Pulling changes...")
    try:
        git.run(["pull", *request.qualifiers()], mode=InvokeMode.CAPTURED_ALL)
    except GitCommandError as exc:
        kind = classify_failure(exc.result.output, PULL_FAILURES)
        if kind is FailureKind.CONFLICT:
            ui.failure("Pull failed due to merge conflicts")
            ui.detail("Resolve conflicts manually:")
            ui.detail("  1. Edit conflicting files (marked with <<<<<<<)")
            ui.detail("  2. Run 'sgit stage .' to stage resolved files")
            ui.detail("  3. Run 'sgit commit' to complete the merge")
            raise
        if kind is FailureKind.NO_TRACKING:
            ui.failure("Branch has no upstream configured")
            ui.detail(f"Try: git branch --set-upstream-to={remote_name}/{_branch_for_hint(git)}")
            raise
        warnings.append(f"pull failed: {exc.result.output}")
        ui.warn(f"Pull failed: {exc}")
        ui.detail("Attempting to push local changes anyway...")
    else:
        ui.success("Pull complete")

    phase = _advance(phase, SyncPhase.PUSHING)
    ui.step("Pushing changes...")
    try:
        git.run(["push", *request.qualifiers()], mode=InvokeMode.CAPTURED_ALL)
    except GitCommandError as exc:
        kind = classify_failure(exc.result.output, PUSH_FAILURES)
        if kind is FailureKind.REJECTED:
            ui.failure("Push rejected: remote has new commits")
            ui.detail("Run 'sgit pull' first to integrate remote changes.")
        elif kind is FailureKind.NO_UPSTREAM:
            ui.failure("No upstream branch configured")
            ui.detail(f"Try: git push -u {remote_name} {_branch_for_hint(git)}")
        else:
            ui.failure("Push failed")
        raise

    _advance(phase, SyncPhase.DONE)
    return report_done("Sync complete: fetched, pulled, and pushed successfully.", details=warnings)
