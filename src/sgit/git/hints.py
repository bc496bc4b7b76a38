"""Remediation hints for failed git invocations.

git offers no structured error channel, so failures are classified by
case-insensitive substring matches on the combined stderr and stdout
(git prints merge conflicts on stdout). Messages are assumed to be in
English; a localized git will simply produce no hint.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from sgit.errors import NOT_IN_REPO_HINT

NO_STAGED_HINT = "nothing to commit - use 'sgit stage' to stage changes first"

NETWORK_MARKERS = (
    "could not resolve host",
    "network",
    "connection refused",
    "connection timed out",
)
CONFLICT_MARKERS = ("conflict",)
NO_TRACKING_MARKERS = ("no tracking information",)
NO_UPSTREAM_MARKERS = ("no upstream branch",)
REJECTED_MARKERS = ("rejected",)


@dataclass(frozen=True)
class HintRule:
    """One row of the hint table; an empty `commands` set matches any subcommand."""

    needles: tuple[str, ...]
    hint: str
    commands: frozenset[str] = frozenset()

    def matches(self, command: str, lowered_output: str) -> bool:
        if self.commands and command not in self.commands:
            return False
        return any(needle in lowered_output for needle in self.needles)


HINT_RULES: tuple[HintRule, ...] = (
    HintRule(("not a git repository",), NOT_IN_REPO_HINT),
    HintRule(
        ("nothing to commit", "no changes added to commit", "nothing added to commit"),
        NO_STAGED_HINT,
        frozenset({"commit"}),
    ),
    HintRule(
        NO_UPSTREAM_MARKERS,
        "set upstream with 'git push -u origin <branch>' or use 'sgit push' from a tracked branch",
        frozenset({"push"}),
    ),
    HintRule(
        REJECTED_MARKERS,
        "remote has new commits - try 'sgit pull' first, then push again",
        frozenset({"push"}),
    ),
    HintRule(
        ("there is no tracking information",),
        "branch has no upstream - try 'git branch --set-upstream-to=origin/<branch>'",
        frozenset({"pull"}),
    ),
    HintRule(
        CONFLICT_MARKERS,
        "resolve merge conflicts, then commit the resolution",
        frozenset({"pull"}),
    ),
    HintRule(
        ("could not resolve host", "network"),
        "check your network connection",
        frozenset({"push", "pull", "fetch"}),
    ),
    HintRule(
        ("would be overwritten",),
        "commit or stash your changes before switching branches",
        frozenset({"checkout", "switch"}),
    ),
    HintRule(
        ("did not match",),
        "branch name may be misspelled - check 'sgit branch' for available branches",
        frozenset({"checkout", "switch"}),
    ),
    HintRule(
        ("already exists",),
        "branch name already in use, choose a different name",
        frozenset({"branch"}),
    ),
    HintRule(
        ("permission denied",),
        "check file permissions or run with appropriate privileges",
    ),
)


def suggest_hint(output: str, args: Sequence[str]) -> str | None:
    """Return the first matching remediation hint for a failed invocation."""
    lowered = output.lower()
    command = args[0] if args else ""
    for rule in HINT_RULES:
        if rule.matches(command, lowered):
            return rule.hint
    return None


class FailureKind(str, Enum):
    """Coarse failure classes used by multi-step workflows."""

    NETWORK = "network"
    CONFLICT = "conflict"
    NO_TRACKING = "no-tracking"
    REJECTED = "rejected"
    NO_UPSTREAM = "no-upstream"
    OTHER = "other"


_FAILURE_MARKERS: dict[FailureKind, tuple[str, ...]] = {
    FailureKind.NETWORK: NETWORK_MARKERS,
    FailureKind.CONFLICT: CONFLICT_MARKERS,
    FailureKind.NO_TRACKING: NO_TRACKING_MARKERS,
    FailureKind.REJECTED: REJECTED_MARKERS,
    FailureKind.NO_UPSTREAM: NO_UPSTREAM_MARKERS,
}


def classify_failure(output: str, kinds: Sequence[FailureKind] = tuple(_FAILURE_MARKERS)) -> FailureKind:
    """Return the first of `kinds` whose markers appear in `output`, else OTHER.

    Callers pass only the kinds their phase can produce, so a remote URL
    containing "network" cannot mask a push rejection.
    """
    lowered = output.lower()
    for kind in kinds:
        markers = _FAILURE_MARKERS.get(kind, ())
        if any(marker in lowered for marker in markers):
            return kind
    return FailureKind.OTHER
