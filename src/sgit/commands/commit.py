"""Commit workflow: optional staging, commit, optional push.

Completed steps are never rolled back: if the push after a commit fails,
the commit stays.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from sgit import ui
from sgit.commands.common import Outcome, execute, pick_paths, report_aborted, report_done
from sgit.errors import UsageError
from sgit.git.exec import GitRunner, InvokeMode
from sgit.git.plan import CommandPlan
from sgit.git.repo import get_current_branch, get_repo_root, has_commits
from sgit.git.status import uncommitted_paths
from sgit.prompts import Prompter

COMMIT_MENU = ("Staged changes", "Unstaged changes", "All changes", "Custom")


class CommitScope(IntEnum):
    STAGED = 0
    UNSTAGED = 1
    ALL = 2
    CUSTOM = 3


@dataclass(frozen=True)
class CommitRequest:
    message: str | None = None
    all: bool = False
    staged: bool = False
    unstaged: bool = False
    push: bool = False
    amend: bool = False
    no_verify: bool = False

    @property
    def interactive(self) -> bool:
        return self.message is None and not (self.all or self.staged or self.unstaged)

    def validate(self) -> None:
        """Reject flag combinations before any git work is done."""
        if not self.interactive:
            _scope_from_flags(self)
            validate_message(self.message)


@dataclass(frozen=True)
class CommitIntent:
    """Resolved commit choice, from flags or from prompts."""

    message: str
    scope: CommitScope | None = None
    paths: tuple[str, ...] = ()
    push: bool = False


def validate_message(message: str | None) -> str:
    if message is None or not message.strip():
        raise UsageError("commit message cannot be empty")
    return message


def _scope_from_flags(request: CommitRequest) -> CommitScope | None:
    if request.staged and (request.all or request.unstaged):
        raise UsageError("cannot combine --staged with --all or --unstaged")
    if request.all:
        return CommitScope.ALL
    if request.unstaged:
        return CommitScope.UNSTAGED
    if request.staged:
        return CommitScope.STAGED
    return None


def _resolve_interactively(request: CommitRequest, git: GitRunner, prompter: Prompter) -> CommitIntent | Outcome:
    scope = CommitScope(prompter.choose("What would you like to commit?", COMMIT_MENU))

    paths: tuple[str, ...] = ()
    if scope is CommitScope.CUSTOM:
        picked = pick_paths(
            prompter,
            prompt="Select files to stage",
            candidates=uncommitted_paths(git),
            empty_notice="No files to commit.",
        )
        if isinstance(picked, Outcome):
            return picked
        paths = tuple(picked)

    message = validate_message(prompter.ask_text("Commit message"))
    push = prompter.confirm("Push after committing?", default=request.push)
    return CommitIntent(message=message, scope=scope, paths=paths, push=push)


def _confirm_amend(git: GitRunner, prompter: Prompter) -> bool:
    if not has_commits(git):
        return True
    ui.warn("Warning: amending a commit that may have been pushed can cause issues.")
    ui.detail("Use --no-verify to skip this check if you're sure.")
    return prompter.confirm("Continue with amend?", default=False)


def build_commit_plan(git: GitRunner, intent: CommitIntent, *, amend: bool, no_verify: bool) -> CommandPlan:
    plan = CommandPlan()
    if intent.scope is CommitScope.ALL:
        plan.then("add", "-A", done="Staged all files")
    elif intent.scope is CommitScope.UNSTAGED:
        plan.then("add", "-u", done="Staged tracked files")
    elif intent.scope is CommitScope.CUSTOM and intent.paths:
        plan.then("add", *intent.paths, cwd=get_repo_root(git), done=f"Staged {len(intent.paths)} file(s)")

    args = ["commit"]
    if amend:
        args.append("--amend")
    if no_verify:
        args.append("--no-verify")
    args.extend(["-m", intent.message])
    plan.then(
        *args,
        mode=InvokeMode.CAPTURED_ALL,
        label="Committing (amend)..." if amend else "Committing...",
        done="Commit created",
    )
    return plan


def _push_after_commit(git: GitRunner) -> None:
    branch = get_current_branch(git)
    label = f"Pushing to {branch}..." if branch else "Pushing..."
    execute(git, CommandPlan().then("push", mode=InvokeMode.CAPTURED_ALL, label=label, done="Pushed successfully"))


def commit(request: CommitRequest, *, git: GitRunner, prompter: Prompter) -> Outcome:
    if request.interactive:
        resolved = _resolve_interactively(request, git, prompter)
        if isinstance(resolved, Outcome):
            return resolved
        intent = resolved
    else:
        scope = _scope_from_flags(request)
        intent = CommitIntent(message=validate_message(request.message), scope=scope, push=request.push)

    if request.amend and not request.no_verify and not _confirm_amend(git, prompter):
        return report_aborted()

    execute(git, build_commit_plan(git, intent, amend=request.amend, no_verify=request.no_verify))
    if intent.push:
        _push_after_commit(git)
    return report_done("Done.")
