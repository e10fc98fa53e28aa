"""Typed exception hierarchy for richlinker."""

from __future__ import annotations


class RichLinkerError(Exception):
    """Base class for all richlinker errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigError(RichLinkerError):
    """Raised for configuration issues (invalid JSON, validation failure)."""


class LoadError(RichLinkerError):
    """Raised when a JSON file cannot be found, read or parsed."""


class StoreError(RichLinkerError):
    """Raised by key-value stores when the backing storage is unusable."""


class BrowserError(RichLinkerError):
    """Raised when the running browser cannot be reached or has no usable page."""


# === Activation errors (terminal for one activation) ===


class NoHandlerError(RichLinkerError):
    """No site handler recognized the current address."""

    def __init__(self, url: str, message: str = "No handler found for this page") -> None:
        self.url = url
        super().__init__(message)


class AmbiguousHandlerError(RichLinkerError):
    """More than one handler recognized an address while strict matching is on."""

    def __init__(self, url: str, names: list[str]) -> None:
        self.url = url
        self.names = names
        super().__init__(f"Multiple handlers match this page: {', '.join(names)}")


class ExtractionError(RichLinkerError):
    """A recognized site lacked the data needed for a meaningful link."""


class ClipboardError(RichLinkerError):
    """Every clipboard avenue failed."""


class ClipboardFocusError(ClipboardError):
    """The platform rejected a clipboard call because the document is not focused."""
