"""Notification display."""

from richlinker.display.console import get_console, set_console
from richlinker.display.notifier import (
    ConsoleNotifier,
    Notification,
    NotificationKind,
    Notifier,
    RecordingNotifier,
)
from richlinker.display.theme import DEFAULT_THEME, Theme

__all__ = [
    "ConsoleNotifier",
    "DEFAULT_THEME",
    "Notification",
    "NotificationKind",
    "Notifier",
    "RecordingNotifier",
    "Theme",
    "get_console",
    "set_console",
]
