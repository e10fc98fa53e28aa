"""Theme definitions for notifications."""

from dataclasses import dataclass, field
from enum import Enum


class NotificationKind(Enum):
    """Kinds of user-facing notifications."""

    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    DEBUG = "debug"


@dataclass
class Theme:
    """Visual theme configuration.

    All styling in one place for easy customization.
    """

    # Gumball characters with Rich markup colors
    gumballs: dict[NotificationKind, str] = field(default_factory=lambda: {
        NotificationKind.SUCCESS: "[green]●[/]",
        NotificationKind.ERROR: "[red]●[/]",
        NotificationKind.WARNING: "[yellow]●[/]",
        NotificationKind.DEBUG: "[dim]○[/]",
    })

    # Message styles (Rich style strings)
    styles: dict[NotificationKind, str] = field(default_factory=lambda: {
        NotificationKind.SUCCESS: "green",
        NotificationKind.ERROR: "bold red",
        NotificationKind.WARNING: "yellow",
        NotificationKind.DEBUG: "dim",
    })

    def gumball(self, kind: NotificationKind) -> str:
        """Get the gumball character for a notification kind."""
        return self.gumballs.get(kind, "○")

    def style(self, kind: NotificationKind) -> str:
        return self.styles.get(kind, "")


DEFAULT_THEME = Theme()
