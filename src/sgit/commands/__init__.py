"""Workflow orchestrators, one per sgit subcommand family."""

from sgit.commands.branch import BranchRequest, branch
from sgit.commands.commit import CommitRequest, commit
from sgit.commands.common import Outcome, OutcomeStatus
from sgit.commands.reset import ResetRequest, reset
from sgit.commands.stage import StageRequest, stage
from sgit.commands.sync import RemoteRequest, pull, push, sync
from sgit.commands.unstage import UnstageRequest, unstage

__all__ = [
    "BranchRequest",
    "CommitRequest",
    "Outcome",
    "OutcomeStatus",
    "RemoteRequest",
    "ResetRequest",
    "StageRequest",
    "UnstageRequest",
    "branch",
    "commit",
    "pull",
    "push",
    "reset",
    "stage",
    "sync",
    "unstage",
]
