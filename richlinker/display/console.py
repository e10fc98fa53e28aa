"""The Rich console notifications are printed on."""

from __future__ import annotations

from typing import IO

from rich.console import Console

_console: Console | None = None


def make_console(file: IO[str] | None = None, width: int | None = None) -> Console:
    """Build a notification console.

    Without a file it writes to stderr so stdout stays clean for scripts that
    capture it. Highlighting is off: URLs and ids keep the theme's style.
    """
    if file is None:
        return Console(stderr=True, highlight=False)
    return Console(file=file, width=width, highlight=False)


def get_console() -> Console:
    """Shared notification console, created on first use."""
    global _console
    if _console is None:
        _console = make_console()
    return _console


def set_console(console: Console | None) -> None:
    """Replace the shared console; None restores the stderr default on next use."""
    global _console
    _console = console
