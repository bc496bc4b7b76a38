"""Tests for the reset workflow."""

from __future__ import annotations

from pathlib import Path

import pytest

from sgit.commands.common import OutcomeStatus
from sgit.commands.reset import RESET_MENU, ResetRequest, ResetScope, reset, reset_path


@pytest.mark.parametrize(
    ("request_", "scope"),
    [
        (ResetRequest(all=True, staged=True), ResetScope.ALL),
        (ResetRequest(staged=True, untracked=True), ResetScope.STAGED),
        (ResetRequest(unstaged=True, tracked=True), ResetScope.UNSTAGED),
        (ResetRequest(tracked=True, untracked=True), ResetScope.TRACKED),
        (ResetRequest(untracked=True), ResetScope.UNTRACKED),
        (ResetRequest(), None),
    ],
)
def test_flag_precedence(request_: ResetRequest, scope: ResetScope | None) -> None:
    assert request_.scope is scope


def test_reset_all(fake_git, scripted_prompter) -> None:
    outcome = reset(ResetRequest(all=True), git=fake_git, prompter=scripted_prompter())

    assert fake_git.calls == [("reset", "--hard"), ("clean", "-fd")]
    assert outcome.message == "All files reset."


def test_reset_tracked(fake_git, scripted_prompter) -> None:
    reset(ResetRequest(tracked=True), git=fake_git, prompter=scripted_prompter())
    assert fake_git.calls == [("reset", "--hard")]


@pytest.mark.parametrize(
    ("request_", "status", "expected_call", "message"),
    [
        (ResetRequest(staged=True), "M  a.py\n", ("restore", "--staged", "."), "Staged files reset."),
        (ResetRequest(unstaged=True), " M a.py\n", ("restore", "."), "Unstaged changes reset."),
        (ResetRequest(untracked=True), "?? a.txt\n", ("clean", "-fd"), "Untracked files removed."),
    ],
)
def test_scoped_reset(fake_git, scripted_prompter, request_, status, expected_call, message) -> None:
    fake_git.script(("status", "--porcelain"), stdout=status)

    outcome = reset(request_, git=fake_git, prompter=scripted_prompter())

    assert fake_git.mutating_calls == [expected_call]
    assert outcome.message == message


@pytest.mark.parametrize(
    ("request_", "notice"),
    [
        (ResetRequest(staged=True), "No staged files to reset."),
        (ResetRequest(unstaged=True), "No unstaged changes to reset."),
        (ResetRequest(untracked=True), "No untracked files to reset."),
    ],
)
def test_scoped_reset_with_nothing_to_do(fake_git, scripted_prompter, capsys, request_, notice) -> None:
    outcome = reset(request_, git=fake_git, prompter=scripted_prompter())

    assert outcome.status is OutcomeStatus.NOOP
    assert fake_git.mutating_calls == []
    assert notice in capsys.readouterr().out


def test_interactive_menu(fake_git, scripted_prompter) -> None:
    prompter = scripted_prompter(3)

    reset(ResetRequest(), git=fake_git, prompter=prompter)

    assert prompter.menus == [list(RESET_MENU)]
    assert fake_git.calls == [("reset", "--hard")]


def test_custom_reset_on_clean_tree(fake_git, scripted_prompter, capsys) -> None:
    outcome = reset(ResetRequest(), git=fake_git, prompter=scripted_prompter(5))

    assert outcome.status is OutcomeStatus.NOOP
    assert "No files to reset." in capsys.readouterr().out


def test_custom_reset_per_file_state(fake_git, scripted_prompter) -> None:
    listing = "?? new.txt\nMM both.py\n M edited.py\n"
    fake_git.script(("status", "--porcelain"), stdout=listing)  # candidates
    fake_git.script(("status", "--porcelain"), stdout=listing)  # new.txt
    fake_git.script(("status", "--porcelain"), stdout=listing)  # both.py before unstaging
    fake_git.script(("status", "--porcelain"), stdout=" M both.py\n M edited.py\n")
    fake_git.script(("status", "--porcelain"), stdout=" M both.py\n M edited.py\n")

    outcome = reset(ResetRequest(), git=fake_git, prompter=scripted_prompter(5, [0, 1, 2]))

    assert fake_git.mutating_calls == [
        ("clean", "-f", "new.txt"),
        ("restore", "--staged", "both.py"),
        ("restore", "both.py"),
        ("restore", "edited.py"),
    ]
    assert outcome.details == ("new.txt", "both.py", "edited.py")
    assert outcome.message == "Selected files reset."


def test_newly_added_file_is_unstaged_but_kept(fake_git) -> None:
    fake_git.script(("status", "--porcelain"), stdout="A  fresh.py\n")
    fake_git.script(("status", "--porcelain"), stdout="?? fresh.py\n")

    reset_path(fake_git, "fresh.py", Path("/repo"))

    assert fake_git.mutating_calls == [("restore", "--staged", "fresh.py")]
    assert fake_git.cwds[-2] == Path("/repo")


def test_path_gone_from_status_is_skipped(fake_git) -> None:
    reset_path(fake_git, "vanished.py", Path("/repo"))
    assert fake_git.mutating_calls == []
