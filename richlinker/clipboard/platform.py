"""Clipboard platform boundary.

A platform moves MIME-typed UTF-8 payloads to and from a real clipboard.
Missing capabilities are reported through the supports_* checks, not by
raising. Failed calls raise ClipboardFocusError when the platform refused
because the document was not focused, ClipboardError otherwise.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class ClipboardContent:
    """Both representations read back from the clipboard (either may be missing)."""

    html: str | None = None
    text: str | None = None


class ClipboardPlatform(Protocol):
    """Protocol for clipboard implementations."""

    @property
    def name(self) -> str:
        """Human-readable name for logs and status messages."""
        ...

    async def supports_multi(self) -> bool:
        """Whether several MIME types can be written as one clipboard entry."""
        ...

    async def supports_text(self) -> bool:
        """Whether plain text can be written."""
        ...

    async def supports_read(self) -> bool:
        """Whether the clipboard can be read back."""
        ...

    async def write(self, items: dict[str, bytes]) -> None:
        """Write all items atomically as one clipboard entry."""
        ...

    async def write_text(self, text: str) -> None:
        """Write plain text only."""
        ...

    async def read(self) -> dict[str, bytes]:
        """Return whatever MIME types are present (possibly none)."""
        ...

    async def focus(self) -> None:
        """Ask the window/document owning the clipboard call for focus."""
        ...
