"""Tests for the stage workflow."""

from __future__ import annotations

from pathlib import Path

from sgit.commands.common import OutcomeStatus
from sgit.commands.stage import STAGE_MENU, StageRequest, stage

STATUS = " M a.py\n M lib/b.py\nM  staged.py\n?? new.txt\n"


def test_stage_all_flag(fake_git, scripted_prompter) -> None:
    outcome = stage(StageRequest(all=True), git=fake_git, prompter=scripted_prompter())

    assert fake_git.calls == [("add", "-A")]
    assert outcome.status is OutcomeStatus.DONE
    assert outcome.message == "Staged all files"


def test_stage_tracked_flag(fake_git, scripted_prompter) -> None:
    stage(StageRequest(tracked=True), git=fake_git, prompter=scripted_prompter())
    assert fake_git.calls == [("add", "-u")]


def test_stage_explicit_targets(fake_git, scripted_prompter, capsys) -> None:
    outcome = stage(StageRequest(targets=("a.py", "docs/")), git=fake_git, prompter=scripted_prompter())

    assert fake_git.calls == [("add", "a.py", "docs/")]
    assert outcome.message == "Staged files"
    assert "✓ Staged files" in capsys.readouterr().out


def test_all_flag_wins_over_targets(fake_git, scripted_prompter) -> None:
    stage(StageRequest(targets=("a.py",), all=True), git=fake_git, prompter=scripted_prompter())
    assert fake_git.calls == [("add", "-A")]


def test_interactive_all(fake_git, scripted_prompter) -> None:
    prompter = scripted_prompter(0)

    stage(StageRequest(), git=fake_git, prompter=prompter)

    assert prompter.menus == [list(STAGE_MENU)]
    assert fake_git.calls == [("add", "-A")]


def test_interactive_tracked(fake_git, scripted_prompter) -> None:
    stage(StageRequest(), git=fake_git, prompter=scripted_prompter(1))
    assert fake_git.calls == [("add", "-u")]


def test_interactive_specific_files_runs_from_repo_root(fake_git, scripted_prompter) -> None:
    fake_git.script(("status", "--porcelain"), stdout=STATUS)
    prompter = scripted_prompter(2, [1])

    outcome = stage(StageRequest(), git=fake_git, prompter=prompter)

    # only unstaged files are offered
    assert prompter.menus[1] == ["a.py", "lib/b.py"]
    assert fake_git.mutating_calls == [("add", "lib/b.py")]
    assert fake_git.cwds[-1] == Path("/repo")
    assert outcome.message == "Staged 1 file(s)"


def test_specific_files_with_nothing_unstaged_is_noop(fake_git, scripted_prompter, capsys) -> None:
    fake_git.script(("status", "--porcelain"), stdout="M  staged.py\n?? new.txt\n")

    outcome = stage(StageRequest(), git=fake_git, prompter=scripted_prompter(2))

    assert outcome.status is OutcomeStatus.NOOP
    assert fake_git.mutating_calls == []
    assert "No unstaged files to stage." in capsys.readouterr().out


def test_empty_selection_is_noop_without_git_changes(fake_git, scripted_prompter, capsys) -> None:
    fake_git.script(("status", "--porcelain"), stdout=STATUS)

    outcome = stage(StageRequest(), git=fake_git, prompter=scripted_prompter(2, []))

    assert outcome.status is OutcomeStatus.NOOP
    assert fake_git.mutating_calls == []
    assert "No files selected." in capsys.readouterr().out
