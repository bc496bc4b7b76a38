"""Command plans: the concrete git invocations one user command resolves to."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from sgit.git.exec import InvokeMode


@dataclass(frozen=True)
class GitStep:
    """One git invocation plus the progress lines printed around it."""

    args: tuple[str, ...]
    mode: InvokeMode = InvokeMode.CAPTURED_QUIET
    cwd: Path | None = None
    label: str | None = None
    done: str | None = None

    def render(self) -> str:
        return " ".join(("git", *self.args))


@dataclass
class CommandPlan:
    """Ordered git steps, executed until the first failure."""

    success_message: str = ""
    steps: list[GitStep] = field(default_factory=list)

    def then(
        self,
        *args: str,
        mode: InvokeMode = InvokeMode.CAPTURED_QUIET,
        cwd: Path | None = None,
        label: str | None = None,
        done: str | None = None,
    ) -> CommandPlan:
        self.steps.append(GitStep(args=args, mode=mode, cwd=cwd, label=label, done=done))
        return self

    def describe(self) -> list[str]:
        return [step.render() for step in self.steps]

    def __len__(self) -> int:
        return len(self.steps)
