"""Git access for sgit: invocation, state queries, classification and hints.

Every query runs a fresh git process; nothing is cached between calls, so
callers re-query after any mutating step.
"""

from sgit.git.exec import ExecResult, GitRunner, InvokeMode
from sgit.git.hints import FailureKind, classify_failure, suggest_hint
from sgit.git.plan import CommandPlan, GitStep
from sgit.git.repo import (
    check_in_repo,
    get_branches,
    get_current_branch,
    get_repo_root,
    has_commits,
)
from sgit.git.status import (
    FileClass,
    FileEntry,
    classify,
    get_porcelain_entries,
    parse_porcelain,
    partition,
    staged_paths,
    uncommitted_paths,
    unstaged_paths,
    untracked_paths,
)

__all__ = [
    # exec
    "ExecResult",
    "GitRunner",
    "InvokeMode",
    # hints
    "FailureKind",
    "classify_failure",
    "suggest_hint",
    # plan
    "CommandPlan",
    "GitStep",
    # repo
    "check_in_repo",
    "get_branches",
    "get_current_branch",
    "get_repo_root",
    "has_commits",
    # status
    "FileClass",
    "FileEntry",
    "classify",
    "get_porcelain_entries",
    "parse_porcelain",
    "partition",
    "staged_paths",
    "uncommitted_paths",
    "unstaged_paths",
    "untracked_paths",
]
