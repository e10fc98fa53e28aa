"""OS clipboard through pyperclip (plain text only)."""

from __future__ import annotations

import asyncio

import pyperclip

from richlinker.core.constants import MIME_TEXT
from richlinker.core.errors import ClipboardError


class SystemClipboard:
    """ClipboardPlatform backed by the desktop clipboard.

    pyperclip only handles text, so the gateway always falls through to the
    plain-text write. Calls run in a worker thread since some pyperclip
    backends shell out to xclip/xsel/pbcopy.
    """

    @property
    def name(self) -> str:
        return "system"

    async def supports_multi(self) -> bool:
        return False

    async def supports_text(self) -> bool:
        return True

    async def supports_read(self) -> bool:
        return True

    async def write(self, items: dict[str, bytes]) -> None:
        raise ClipboardError("System clipboard cannot hold multiple representations")

    async def write_text(self, text: str) -> None:
        try:
            await asyncio.to_thread(pyperclip.copy, text)
        except pyperclip.PyperclipException as e:
            raise ClipboardError(f"System clipboard write failed: {e}") from e

    async def read(self) -> dict[str, bytes]:
        try:
            text = await asyncio.to_thread(pyperclip.paste)
        except pyperclip.PyperclipException as e:
            raise ClipboardError(f"System clipboard read failed: {e}") from e
        return {MIME_TEXT: text.encode("utf-8")} if text else {}

    async def focus(self) -> None:
        return None
