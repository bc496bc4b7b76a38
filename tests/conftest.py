"""Pytest configuration and fixtures for sgit tests."""
from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

import pytest

from sgit.git.exec import ExecResult, GitRunner, InvokeMode


def make_result(args: Sequence[str], stdout: str = "", stderr: str = "", code: int = 0) -> ExecResult:
    return ExecResult(argv=("git", *args), cwd=Path("/repo"), returncode=code, stdout=stdout, stderr=stderr)


class FakeGit(GitRunner):
    """Recording runner: answers from scripted results, never spawns git.

    Results queued for the same args are returned in order; the last one
    repeats. Unscripted args succeed with empty output.
    """

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple[str, ...]] = []
        self.modes: list[InvokeMode] = []
        self.cwds: list[Path | None] = []
        self._scripted: dict[tuple[str, ...], list[ExecResult]] = {}
        self.script(("rev-parse", "--show-toplevel"), stdout="/repo\n")
        self.script(("rev-parse", "--git-dir"), stdout=".git\n")

    def script(self, args: Sequence[str], *, stdout: str = "", stderr: str = "", code: int = 0) -> FakeGit:
        key = tuple(args)
        self._scripted.setdefault(key, []).append(make_result(key, stdout, stderr, code))
        return self

    def replace(self, args: Sequence[str], *, stdout: str = "", stderr: str = "", code: int = 0) -> FakeGit:
        self._scripted.pop(tuple(args), None)
        return self.script(args, stdout=stdout, stderr=stderr, code=code)

    def invoke(self, args, *, mode=InvokeMode.CAPTURED_ALL, cwd=None) -> ExecResult:
        key = tuple(args)
        self.calls.append(key)
        self.modes.append(mode)
        self.cwds.append(cwd)
        queue = self._scripted.get(key)
        if not queue:
            return make_result(key)
        return queue.pop(0) if len(queue) > 1 else queue[0]

    def calls_to(self, command: str) -> list[tuple[str, ...]]:
        return [call for call in self.calls if call and call[0] == command]

    @property
    def mutating_calls(self) -> list[tuple[str, ...]]:
        """Calls other than the read-only queries sgit issues."""
        readonly = {"rev-parse", "status", "branch", "log"}
        return [
            call
            for call in self.calls
            if call[0] not in readonly or (call[0] == "branch" and not call[1].startswith("-"))
        ]


class ScriptedPrompter:
    """Prompter that replays fixed answers and fails on any unexpected prompt.

    An answer that is an exception instance is raised instead of returned.
    """

    def __init__(self, *answers):
        self.answers = list(answers)
        self.asked: list[tuple[str, str]] = []
        self.menus: list[list[str]] = []

    def _next(self, kind: str, prompt: str):
        self.asked.append((kind, prompt))
        if not self.answers:
            raise AssertionError(f"unexpected {kind} prompt: {prompt!r}")
        answer = self.answers.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return answer

    def choose(self, prompt, items, default=0) -> int:
        self.menus.append(list(items))
        return self._next("choose", prompt)

    def choose_many(self, prompt, items) -> list[int]:
        self.menus.append(list(items))
        return self._next("choose_many", prompt)

    def ask_text(self, prompt) -> str:
        return self._next("ask_text", prompt)

    def confirm(self, prompt, default=False) -> bool:
        return self._next("confirm", prompt)


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the user's sgit config and environment out of every test."""
    for name in ("SGIT_DEFAULT_REMOTE", "SGIT_LOG_SHORT", "SGIT_LOG_FULL", "SGIT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SGIT_CONFIG", str(tmp_path / "sgit-config-absent.toml"))
    monkeypatch.setenv("SGIT_COLOR", "0")
    monkeypatch.setattr("sgit.ui._color", None)


@pytest.fixture
def fake_git() -> FakeGit:
    return FakeGit()


@pytest.fixture
def scripted_prompter() -> type[ScriptedPrompter]:
    """Factory: `scripted_prompter(0, [1, 2], "message", True)`."""
    return ScriptedPrompter


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository with one commit."""
    repo = tmp_path / "test_repo"
    repo.mkdir()

    def git(*args: str) -> None:
        subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True)

    git("init")
    git("config", "user.email", "test@example.com")
    git("config", "user.name", "Test User")
    git("config", "commit.gpgsign", "false")

    (repo / "README.md").write_text("# Test Repo\n")
    (repo / "app.py").write_text("print('v1')\n")
    git("add", "README.md", "app.py")
    git("commit", "-m", "Initial commit")

    return repo
