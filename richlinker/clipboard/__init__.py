"""Clipboard gateway and platform backends."""

from richlinker.clipboard.gateway import ClipboardGateway
from richlinker.clipboard.platform import ClipboardContent, ClipboardPlatform

__all__ = [
    "ClipboardContent",
    "ClipboardGateway",
    "ClipboardPlatform",
]
