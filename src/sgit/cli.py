"""sgit CLI - shorthand git workflows with interactive fallbacks."""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

import typer
from rich.logging import RichHandler

from sgit import __version__, ui
from sgit.commands import passthrough
from sgit.commands.branch import BranchRequest, branch
from sgit.commands.commit import CommitRequest, commit
from sgit.commands.reset import ResetRequest, reset
from sgit.commands.stage import StageRequest, stage
from sgit.commands.sync import RemoteRequest, pull, push, sync
from sgit.commands.unstage import UnstageRequest, unstage
from sgit.config import SgitConfig, load_config
from sgit.git.exec import GitRunner
from sgit.git.repo import check_in_repo
from sgit.prompts import Prompter, RichPrompter

logger = logging.getLogger(__name__)

# Options whose next token is a value, never a flag.
VALUE_OPTIONS = frozenset({"-m", "--message", "-c", "--create"})

cli = typer.Typer(
    name="sgit",
    help="Blazing fast wrapper for Git with simplified workflows",
    add_completion=False,
)

EXPLANATIONS: tuple[tuple[str, str], ...] = (
    ("init", "initialize a Git repository (runs `git init`)."),
    ("stage", "add files to the staging area (interactive, or use --all/--tracked)."),
    ("unstage", "remove staged files safely (interactive, or use --all)."),
    ("status", "show what is staged vs unstaged (`--short` uses `git status -sb`)."),
    ("log", "view history (`--short` shows compact entries)."),
    ("diff", "compare working changes (`--staged` shows what will be committed)."),
    ("branch", "list and checkout branches (interactive); use -c <name> to create a new branch."),
    ("reset", "discard changes (interactive, or use --all/--staged/--unstaged/--tracked/--untracked)."),
    ("push", "send commits to your remote (uses Git's defaults unless you pass a remote and branch)."),
    ("pull", "fetch + merge from your remote repository."),
    (
        "commit",
        "make commits; `--all` stages everything, `--unstaged` stages only modified tracked files, "
        "`--push` runs `git push`, `--amend` rewrites the last commit, and `--no-verify` skips hooks.",
    ),
    ("sync", "fetch, pull, and push in one command with graceful error handling."),
)


@dataclass
class Session:
    """Collaborators shared by every subcommand of one invocation."""

    git: GitRunner
    prompter: Prompter
    config: SgitConfig


def make_git() -> GitRunner:
    return GitRunner()


def make_prompter() -> Prompter:
    return RichPrompter()


def print_explanations() -> None:
    typer.echo("SGIT simplifies Git for beginners by wrapping each major workflow:")
    typer.echo("")
    width = max(len(name) for name, _ in EXPLANATIONS)
    for name, text in EXPLANATIONS:
        typer.echo(f"  {name:<{width}} – {text}")


def _cause_chain(exc: BaseException) -> Iterator[BaseException]:
    current: BaseException | None = exc
    while current is not None:
        yield current
        current = current.__cause__


@contextmanager
def _reporting_errors() -> Iterator[None]:
    """Print `error: ...` for each cause in the chain and exit 1."""
    try:
        yield
    except (typer.Exit, typer.Abort):
        raise
    except RuntimeError as exc:
        for cause in _cause_chain(exc):
            typer.echo(f"error: {cause}", err=True)
        raise typer.Exit(1) from exc


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=ui.err_console, show_path=False)],
        force=True,
    )


def _session(ctx: typer.Context, *, require_repo: bool = True) -> Session:
    session: Session = ctx.obj
    if require_repo:
        check_in_repo(session.git)
    return session


def _version_option_callback(value: bool) -> None:
    """Handle eager --version option."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


def _explain_option_callback(value: bool) -> None:
    """Handle eager --explain option; needs no repository."""
    if value:
        print_explanations()
        raise typer.Exit()


@cli.callback(invoke_without_command=True)
def _cli_callback(
    ctx: typer.Context,
    explain: bool = typer.Option(
        False,
        "--explain",
        help="Explain what each command does and exit.",
        is_eager=True,
        callback=_explain_option_callback,
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show sgit version and exit.",
        is_eager=True,
        callback=_version_option_callback,
    ),
) -> None:
    """Load configuration and prepare the git session for the subcommand."""
    _ = (explain, version)
    with _reporting_errors():
        if ctx.invoked_subcommand is None:
            raise RuntimeError("'sgit' requires a subcommand; use --help to see the available list")
        config = load_config()
        _configure_logging(config.log_level)
        ui.set_color(config.color)
        logger.debug("sgit %s: %s", __version__, ctx.invoked_subcommand)
        ctx.obj = Session(git=make_git(), prompter=make_prompter(), config=config)


@cli.command("init")
def init_cmd(ctx: typer.Context) -> None:
    """Initialize a Git repository."""
    with _reporting_errors():
        session = _session(ctx, require_repo=False)
        passthrough.init(git=session.git)


@cli.command("stage")
def stage_cmd(
    ctx: typer.Context,
    targets: list[str] | None = typer.Argument(None, metavar="PATH", help="Paths to stage."),
    all_files: bool = typer.Option(False, "--all", help="Stage everything, including untracked files."),
    tracked: bool = typer.Option(False, "--tracked", help="Stage modified tracked files only."),
) -> None:
    """Add files to the staging area."""
    with _reporting_errors():
        session = _session(ctx)
        request = StageRequest(targets=tuple(targets or ()), all=all_files, tracked=tracked)
        stage(request, git=session.git, prompter=session.prompter)


@cli.command("unstage")
def unstage_cmd(
    ctx: typer.Context,
    targets: list[str] | None = typer.Argument(None, metavar="PATH", help="Paths to unstage."),
    all_files: bool = typer.Option(False, "--all", help="Unstage everything."),
) -> None:
    """Remove files from the staging area, keeping their changes."""
    with _reporting_errors():
        session = _session(ctx)
        request = UnstageRequest(targets=tuple(targets or ()), all=all_files)
        unstage(request, git=session.git, prompter=session.prompter)


@cli.command("status")
def status_cmd(
    ctx: typer.Context,
    short: bool = typer.Option(False, "--short", help="Compact output (`git status -sb`)."),
) -> None:
    """Show what is staged vs unstaged."""
    with _reporting_errors():
        session = _session(ctx)
        passthrough.status(git=session.git, short=short)


@cli.command("commit")
def commit_cmd(
    ctx: typer.Context,
    message: str | None = typer.Option(None, "--message", "-m", metavar="MSG", help="Commit message."),
    all_files: bool = typer.Option(False, "--all", help="Stage everything before committing."),
    staged: bool = typer.Option(False, "--staged", help="Commit what is already staged."),
    unstaged: bool = typer.Option(False, "--unstaged", help="Stage modified tracked files before committing."),
    push_after: bool = typer.Option(False, "--push", help="Push after committing."),
    amend: bool = typer.Option(False, "--amend", help="Rewrite the last commit."),
    no_verify: bool = typer.Option(False, "--no-verify", help="Skip hooks and the amend confirmation."),
) -> None:
    """Make a commit, optionally staging first and pushing after."""
    with _reporting_errors():
        request = CommitRequest(
            message=message,
            all=all_files,
            staged=staged,
            unstaged=unstaged,
            push=push_after,
            amend=amend,
            no_verify=no_verify,
        )
        request.validate()
        session = _session(ctx)
        commit(request, git=session.git, prompter=session.prompter)


@cli.command("log")
def log_cmd(
    ctx: typer.Context,
    short: bool = typer.Option(False, "--short", help="One line per commit."),
) -> None:
    """View history."""
    with _reporting_errors():
        session = _session(ctx)
        passthrough.log(
            git=session.git,
            short=short,
            short_count=session.config.log_short_count,
            full_count=session.config.log_full_count,
        )


@cli.command("diff")
def diff_cmd(
    ctx: typer.Context,
    path: str | None = typer.Argument(None, help="Limit the diff to this path."),
    staged: bool = typer.Option(False, "--staged", help="Show what will be committed."),
) -> None:
    """Compare working changes."""
    with _reporting_errors():
        session = _session(ctx)
        passthrough.diff(git=session.git, path=path, staged=staged)


@cli.command("reset")
def reset_cmd(
    ctx: typer.Context,
    all_files: bool = typer.Option(False, "--all", help="Discard everything, including untracked files."),
    staged: bool = typer.Option(False, "--staged", help="Unstage everything."),
    unstaged: bool = typer.Option(False, "--unstaged", help="Discard working-tree edits."),
    tracked: bool = typer.Option(False, "--tracked", help="Hard reset tracked files."),
    untracked: bool = typer.Option(False, "--untracked", help="Remove untracked files."),
) -> None:
    """Discard changes."""
    with _reporting_errors():
        session = _session(ctx)
        request = ResetRequest(
            all=all_files,
            staged=staged,
            unstaged=unstaged,
            tracked=tracked,
            untracked=untracked,
        )
        reset(request, git=session.git, prompter=session.prompter)


@cli.command("branch")
def branch_cmd(
    ctx: typer.Context,
    create: str | None = typer.Option(None, "--create", "-c", metavar="NAME", help="Create and switch to NAME."),
) -> None:
    """List and checkout branches, or create a new one."""
    with _reporting_errors():
        request = BranchRequest(create=create)
        request.validate()
        session = _session(ctx)
        branch(request, git=session.git, prompter=session.prompter)


@cli.command("push")
def push_cmd(
    ctx: typer.Context,
    remote: str | None = typer.Argument(None, help="Remote to push to."),
    branch_name: str | None = typer.Argument(None, metavar="BRANCH", help="Branch to push."),
) -> None:
    """Send commits to your remote."""
    with _reporting_errors():
        request = RemoteRequest(remote=remote, branch=branch_name)
        request.validate()
        session = _session(ctx)
        push(request, git=session.git)


@cli.command("pull")
def pull_cmd(
    ctx: typer.Context,
    remote: str | None = typer.Argument(None, help="Remote to pull from."),
    branch_name: str | None = typer.Argument(None, metavar="BRANCH", help="Branch to pull."),
) -> None:
    """Fetch and merge from your remote."""
    with _reporting_errors():
        request = RemoteRequest(remote=remote, branch=branch_name)
        request.validate()
        session = _session(ctx)
        pull(request, git=session.git)


@cli.command("sync")
def sync_cmd(
    ctx: typer.Context,
    remote: str | None = typer.Argument(None, help="Remote to sync with (default from config)."),
    branch_name: str | None = typer.Argument(None, metavar="BRANCH", help="Branch to pull and push."),
) -> None:
    """Fetch, pull, and push in one command."""
    with _reporting_errors():
        session = _session(ctx)
        sync(
            RemoteRequest(remote=remote, branch=branch_name),
            git=session.git,
            default_remote=session.config.default_remote,
        )


def _wants_explain(argv: list[str]) -> bool:
    """True if `--explain` appears as an option, not as an option value or after `--`."""
    skip_value = False
    for token in argv:
        if skip_value:
            skip_value = False
            continue
        if token == "--":
            return False
        if token == "--explain":
            return True
        skip_value = token in VALUE_OPTIONS
    return False


def main() -> None:
    """Console entry point; `--explain` is honoured after a subcommand too."""
    if _wants_explain(sys.argv[1:]):
        print_explanations()
        raise SystemExit(0)
    cli()
