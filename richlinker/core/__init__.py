"""Core types, errors and helpers shared across richlinker."""

from richlinker.core.errors import (
    AmbiguousHandlerError,
    BrowserError,
    ClipboardError,
    ClipboardFocusError,
    ConfigError,
    ExtractionError,
    LoadError,
    NoHandlerError,
    RichLinkerError,
    StoreError,
)
from richlinker.core.types import PresentationMode, RenderedLink

__all__ = [
    "AmbiguousHandlerError",
    "BrowserError",
    "ClipboardError",
    "ClipboardFocusError",
    "ConfigError",
    "ExtractionError",
    "LoadError",
    "NoHandlerError",
    "PresentationMode",
    "RenderedLink",
    "RichLinkerError",
    "StoreError",
]
