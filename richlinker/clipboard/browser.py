"""Clipboard of a browser tab, driven through Playwright.

This is the same navigator.clipboard the page's own scripts see, so it
supports text/html + text/plain entries and inherits the browser's focus
rules (a backgrounded tab is refused with "Document is not focused").
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from playwright.async_api import Error as PlaywrightError

from richlinker.core.errors import ClipboardError, ClipboardFocusError

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = logging.getLogger(__name__)

_SUPPORTS_MULTI_JS = "() => !!(navigator.clipboard && navigator.clipboard.write && window.ClipboardItem)"
_SUPPORTS_TEXT_JS = "() => !!(navigator.clipboard && navigator.clipboard.writeText)"
_SUPPORTS_READ_JS = "() => !!(navigator.clipboard && (navigator.clipboard.read || navigator.clipboard.readText))"

_WRITE_JS = """async (items) => {
    const blobs = {};
    for (const [type, data] of Object.entries(items)) {
        blobs[type] = new Blob([data], {type});
    }
    await navigator.clipboard.write([new ClipboardItem(blobs)]);
}"""

_WRITE_TEXT_JS = "async (text) => { await navigator.clipboard.writeText(text); }"

_READ_JS = """async () => {
    const result = {};
    if (navigator.clipboard.read) {
        try {
            for (const item of await navigator.clipboard.read()) {
                for (const type of ['text/html', 'text/plain']) {
                    if (item.types.includes(type)) {
                        try {
                            result[type] = await (await item.getType(type)).text();
                        } catch (e) {}
                    }
                }
            }
        } catch (e) {}
    }
    if (!('text/plain' in result) && navigator.clipboard.readText) {
        result['text/plain'] = await navigator.clipboard.readText();
    }
    return result;
}"""

_FOCUS_JS = "() => { window.focus(); if (document.body) { document.body.focus(); } }"


def _is_focus_refusal(error: PlaywrightError) -> bool:
    return "not focused" in str(error).lower()


class BrowserClipboard:
    """ClipboardPlatform backed by navigator.clipboard in a Playwright page."""

    def __init__(self, page: "Page") -> None:
        self._page = page

    @property
    def name(self) -> str:
        return "browser"

    async def _check(self, script: str) -> bool:
        try:
            return bool(await self._page.evaluate(script))
        except PlaywrightError as e:
            logger.debug("Clipboard capability check failed: %s", e)
            return False

    async def _run(self, script: str, arg: Any = None) -> Any:
        try:
            return await self._page.evaluate(script, arg)
        except PlaywrightError as e:
            if _is_focus_refusal(e):
                raise ClipboardFocusError(str(e)) from e
            raise ClipboardError(str(e)) from e

    async def supports_multi(self) -> bool:
        return await self._check(_SUPPORTS_MULTI_JS)

    async def supports_text(self) -> bool:
        return await self._check(_SUPPORTS_TEXT_JS)

    async def supports_read(self) -> bool:
        return await self._check(_SUPPORTS_READ_JS)

    async def write(self, items: dict[str, bytes]) -> None:
        await self._run(_WRITE_JS, {k: v.decode("utf-8") for k, v in items.items()})

    async def write_text(self, text: str) -> None:
        await self._run(_WRITE_TEXT_JS, text)

    async def read(self) -> dict[str, bytes]:
        result = await self._run(_READ_JS)
        if not isinstance(result, dict):
            return {}
        return {k: v.encode("utf-8") for k, v in result.items() if isinstance(v, str)}

    async def focus(self) -> None:
        try:
            await self._page.bring_to_front()
            await self._page.evaluate(_FOCUS_JS)
        except PlaywrightError as e:
            raise ClipboardError(f"Focus request failed: {e}") from e
