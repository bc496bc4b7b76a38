"""Tests for the branch workflow."""

from __future__ import annotations

import pytest

from sgit.commands.branch import CREATE_ENTRY, BranchRequest, branch, validate_branch_name
from sgit.commands.common import OutcomeStatus
from sgit.errors import UsageError


@pytest.fixture
def branches(fake_git):
    fake_git.script(("branch", "--format=%(refname:short)"), stdout="main\ndev\nfeature/x\n")
    fake_git.script(("branch", "--show-current"), stdout="main\n")
    return fake_git


def test_validate_trims() -> None:
    assert validate_branch_name("  feature/login  ") == "feature/login"


@pytest.mark.parametrize(("raw", "message"), [("", "empty"), ("   ", "empty"), ("my branch", "whitespace")])
def test_validate_rejects(raw: str, message: str) -> None:
    with pytest.raises(UsageError, match=message):
        validate_branch_name(raw)


def test_create_flag(fake_git, scripted_prompter) -> None:
    outcome = branch(BranchRequest(create="feature/login"), git=fake_git, prompter=scripted_prompter())

    assert fake_git.calls == [("branch", "feature/login"), ("checkout", "feature/login")]
    assert outcome.message == "Created and switched to branch 'feature/login'"


@pytest.mark.parametrize("raw", ["", "   ", "my branch"])
def test_create_flag_rejects_invalid_name_without_git(fake_git, scripted_prompter, raw: str) -> None:
    with pytest.raises(UsageError):
        branch(BranchRequest(create=raw), git=fake_git, prompter=scripted_prompter())
    assert fake_git.calls == []


def test_menu_marks_current_and_offers_create(branches, scripted_prompter) -> None:
    prompter = scripted_prompter(1)

    outcome = branch(BranchRequest(), git=branches, prompter=prompter)

    assert prompter.menus == [["main (current)", "dev", "feature/x", CREATE_ENTRY]]
    assert branches.mutating_calls == [("checkout", "dev")]
    assert outcome.message == "Switched to branch 'dev'"


def test_selecting_current_branch_is_noop(branches, scripted_prompter, capsys) -> None:
    outcome = branch(BranchRequest(), git=branches, prompter=scripted_prompter(0))

    assert outcome.status is OutcomeStatus.NOOP
    assert branches.mutating_calls == []
    assert "Already on branch 'main'." in capsys.readouterr().out


def test_interactive_create(branches, scripted_prompter) -> None:
    branch(BranchRequest(), git=branches, prompter=scripted_prompter(3, " hotfix "))
    assert branches.mutating_calls == [("branch", "hotfix"), ("checkout", "hotfix")]


@pytest.mark.parametrize("raw", ["", "bad name"])
def test_interactive_create_rejects_invalid_name(branches, scripted_prompter, raw: str) -> None:
    with pytest.raises(UsageError):
        branch(BranchRequest(), git=branches, prompter=scripted_prompter(3, raw))
    assert branches.mutating_calls == []
