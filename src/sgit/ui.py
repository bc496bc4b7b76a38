from __future__ import annotations

import os

from rich.console import Console
from rich.text import Text

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

STEP_MARK = "→"
OK_MARK = "✓"
WARN_MARK = "⚠"
FAIL_MARK = "✗"


_color: bool | None = None


def set_color(enabled: bool) -> None:
    global _color
    _color = enabled


def color_enabled() -> bool:
    if _color is not None:
        return _color
    return os.getenv("SGIT_COLOR", "1") == "1"


def _emit(target: Console, message: str, style: str | None = None) -> None:
    text = Text(message, style=style) if style and color_enabled() else Text(message)
    target.print(text, soft_wrap=True)


def step(message: str) -> None:
    _emit(console, f"{STEP_MARK} {message}", "bold cyan")


def success(message: str) -> None:
    _emit(console, f"{OK_MARK} {message}", "bold green")


def notice(message: str) -> None:
    _emit(console, message)


def warn(message: str) -> None:
    _emit(err_console, f"{WARN_MARK} {message}", "bold yellow")


def failure(message: str) -> None:
    _emit(err_console, f"{FAIL_MARK} {message}", "bold red")


def detail(message: str) -> None:
    """Indented follow-up line under a warning or failure."""
    _emit(err_console, f"  {message}", "yellow")
