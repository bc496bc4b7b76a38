"""Interactive prompt capability.

Orchestrators only see the `Prompter` protocol; the terminal implementation
below renders numbered menus with rich. Tests substitute scripted answers.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import IO, Protocol

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, IntPrompt, Prompt

from sgit import ui
from sgit.errors import PromptAborted


class Prompter(Protocol):
    def choose(self, prompt: str, items: Sequence[str], default: int = 0) -> int:
        """Return the zero-based index of the chosen item."""

    def choose_many(self, prompt: str, items: Sequence[str]) -> list[int]:
        """Return zero-based indexes of the chosen items, possibly none."""

    def ask_text(self, prompt: str) -> str: ...

    def confirm(self, prompt: str, default: bool = False) -> bool: ...


def parse_selection(answer: str, count: int) -> list[int]:
    """Parse a multi-select answer into sorted zero-based indexes.

    Accepts numbers and ranges separated by commas or spaces (`1,3-4`),
    `all`, or an empty answer meaning nothing selected.

    Raises:
        ValueError: If a token is not a number/range or is out of bounds.
    """
    cleaned = answer.strip().lower()
    if not cleaned:
        return []
    if cleaned in ("all", "*"):
        return list(range(count))

    chosen: set[int] = set()
    for token in cleaned.replace(",", " ").split():
        start_text, sep, end_text = token.partition("-")
        try:
            start = int(start_text)
            end = int(end_text) if sep else start
        except ValueError:
            raise ValueError(f"not a number or range: {token!r}") from None
        if start > end:
            start, end = end, start
        if start < 1 or end > count:
            raise ValueError(f"out of range (1-{count}): {token!r}")
        chosen.update(range(start - 1, end))
    return sorted(chosen)


@contextmanager
def _aborting() -> Iterator[None]:
    try:
        yield
    except (KeyboardInterrupt, EOFError) as exc:
        raise PromptAborted("prompt cancelled, nothing was changed") from exc


class RichPrompter:
    """Terminal prompter built on rich prompts."""

    def __init__(self, console: Console | None = None, stream: IO[str] | None = None):
        self.console = console or ui.console
        self.stream = stream

    def _menu(self, prompt: str, items: Sequence[str]) -> None:
        self.console.print(f"[bold]{escape(prompt)}[/bold]")
        for number, item in enumerate(items, start=1):
            self.console.print(f"  [cyan]{number:>2}[/cyan]  {escape(item)}")

    def choose(self, prompt: str, items: Sequence[str], default: int = 0) -> int:
        with _aborting():
            self._menu(prompt, items)
            while True:
                number = IntPrompt.ask(
                    "Choice",
                    console=self.console,
                    default=default + 1,
                    stream=self.stream,
                )
                if 1 <= number <= len(items):
                    return number - 1
                self.console.print(f"[prompt.invalid]Please enter a number between 1 and {len(items)}")

    def choose_many(self, prompt: str, items: Sequence[str]) -> list[int]:
        with _aborting():
            self._menu(prompt, items)
            while True:
                answer = Prompt.ask(
                    "Numbers (e.g. 1,3-4 or 'all'; empty for none)",
                    console=self.console,
                    default="",
                    show_default=False,
                    stream=self.stream,
                )
                try:
                    return parse_selection(answer, len(items))
                except ValueError as exc:
                    self.console.print(f"[prompt.invalid]{escape(str(exc))}")

    def ask_text(self, prompt: str) -> str:
        with _aborting():
            return Prompt.ask(escape(prompt), console=self.console, stream=self.stream)

    def confirm(self, prompt: str, default: bool = False) -> bool:
        with _aborting():
            return Confirm.ask(escape(prompt), console=self.console, default=default, stream=self.stream)
