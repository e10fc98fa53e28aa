"""Notification collaborator: one terminal message per activation, plus debug chatter."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from rich.console import Console
from rich.markup import escape

from richlinker.display.console import get_console
from richlinker.display.theme import DEFAULT_THEME, NotificationKind, Theme

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    NotificationKind.SUCCESS: logging.INFO,
    NotificationKind.ERROR: logging.ERROR,
    NotificationKind.WARNING: logging.WARNING,
    NotificationKind.DEBUG: logging.DEBUG,
}


@dataclass(frozen=True)
class Notification:
    kind: NotificationKind
    message: str


class Notifier(Protocol):
    """Consumes notifications. Must not raise."""

    def notify(self, notification: Notification) -> None: ...


class ConsoleNotifier:
    """Prints notifications to a Rich console.

    Every notification is logged and printed. Whether DEBUG notifications are
    emitted at all is decided by the caller.
    """

    def __init__(
        self,
        console: Console | None = None,
        theme: Theme = DEFAULT_THEME,
    ) -> None:
        self.console = console if console is not None else get_console()
        self.theme = theme

    def notify(self, notification: Notification) -> None:
        logger.log(
            _LOG_LEVELS[notification.kind],
            "%s: %s",
            notification.kind.name,
            notification.message,
        )
        gumball = self.theme.gumball(notification.kind)
        style = self.theme.style(notification.kind)
        first, *rest = notification.message.split("\n")
        self.console.print(f"{gumball} {escape(first)}", style=style)
        for line in rest:
            self.console.print(f"  {escape(line)}", style=style)


class RecordingNotifier:
    """Keeps notifications in memory."""

    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)

    def of_kind(self, kind: NotificationKind) -> list[Notification]:
        return [n for n in self.notifications if n.kind is kind]

    @property
    def terminal(self) -> list[Notification]:
        """SUCCESS and ERROR notifications."""
        return [
            n for n in self.notifications
            if n.kind in (NotificationKind.SUCCESS, NotificationKind.ERROR)
        ]
