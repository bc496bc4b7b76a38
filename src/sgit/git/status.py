"""Porcelain status parsing and file classification."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from sgit.git.exec import GitRunner, InvokeMode

# Two state characters, a separator and at least one path character.
MIN_PORCELAIN_LINE = 4
STAGED_INDEX_STATES = frozenset("MADRC")

_C_ESCAPES = {"a": 7, "b": 8, "t": 9, "n": 10, "v": 11, "f": 12, "r": 13, '"': 34, "\\": 92}
_C_ESCAPE_RE = re.compile(r"\\([0-7]{3}|.)")


class FileClass(str, Enum):
    """Mutually exclusive classification of a porcelain entry."""

    UNTRACKED = "untracked"
    UNSTAGED = "unstaged"
    STAGED = "staged"
    UNCLASSIFIED = "unclassified"


@dataclass(frozen=True)
class FileEntry:
    """One path reported by `git status --porcelain`."""

    path: str
    index_state: str
    worktree_state: str

    @property
    def code(self) -> str:
        return f"{self.index_state}{self.worktree_state}"


def _unquote(path: str) -> str:
    """Decode a C-style quoted porcelain path."""
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path
    body = path[1:-1]
    decoded = bytearray()
    pos = 0
    for match in _C_ESCAPE_RE.finditer(body):
        decoded += body[pos:match.start()].encode("utf-8")
        token = match.group(1)
        if len(token) == 3:
            decoded.append(int(token, 8))
        elif token in _C_ESCAPES:
            decoded.append(_C_ESCAPES[token])
        else:
            decoded += token.encode("utf-8")
        pos = match.end()
    decoded += body[pos:].encode("utf-8")
    return decoded.decode("utf-8", errors="replace")


def parse_porcelain(output: str) -> list[FileEntry]:
    """Parse `status --porcelain` output, keeping git's ordering.

    Lines too short to carry a state code and a path are skipped. Renames and
    copies report their destination path.
    """
    entries: list[FileEntry] = []
    for line in output.splitlines():
        if len(line) < MIN_PORCELAIN_LINE:
            continue
        index_state, worktree_state = line[0], line[1]
        path = line[3:]
        if index_state in ("R", "C") and " -> " in path:
            path = path.split(" -> ", 1)[1]
        entries.append(FileEntry(path=_unquote(path), index_state=index_state, worktree_state=worktree_state))
    return entries


def classify(entry: FileEntry) -> FileClass:
    if entry.index_state == "?" and entry.worktree_state == "?":
        return FileClass.UNTRACKED
    if entry.index_state in STAGED_INDEX_STATES:
        return FileClass.STAGED
    if entry.index_state == " " and entry.worktree_state not in (" ", "?"):
        return FileClass.UNSTAGED
    return FileClass.UNCLASSIFIED


def partition(entries: Iterable[FileEntry]) -> dict[FileClass, list[FileEntry]]:
    """Group entries by class; every entry lands in exactly one group."""
    groups: dict[FileClass, list[FileEntry]] = {file_class: [] for file_class in FileClass}
    for entry in entries:
        groups[classify(entry)].append(entry)
    return groups


def get_porcelain_entries(git: GitRunner) -> list[FileEntry]:
    """Query the working tree state. Never cached: call again after mutating steps."""
    result = git.run(["status", "--porcelain"], mode=InvokeMode.CAPTURED_ALL)
    return parse_porcelain(result.stdout)


def find_entry(git: GitRunner, path: str) -> FileEntry | None:
    for entry in get_porcelain_entries(git):
        if entry.path == path:
            return entry
    return None


def paths_in(git: GitRunner, file_class: FileClass) -> list[str]:
    return [entry.path for entry in get_porcelain_entries(git) if classify(entry) is file_class]


def staged_paths(git: GitRunner) -> list[str]:
    return paths_in(git, FileClass.STAGED)


def unstaged_paths(git: GitRunner) -> list[str]:
    return paths_in(git, FileClass.UNSTAGED)


def untracked_paths(git: GitRunner) -> list[str]:
    return paths_in(git, FileClass.UNTRACKED)


def uncommitted_paths(git: GitRunner) -> list[str]:
    """Every reported path, whatever its state."""
    return [entry.path for entry in get_porcelain_entries(git)]
