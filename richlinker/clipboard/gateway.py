"""ClipboardGateway - writes the rich + plain pair with a recovery ladder.

Write ladder:
1. Multi-representation write (text/html + text/plain as one entry), when
   the platform supports it.
2. If refused because the document is not focused: request focus, wait
   briefly, retry once.
3. Plain-text-only write.

Only one focus recovery is spent per write() call. Rich writes are often
refused right after activation moves focus around, and a single delayed
retry clears most of those refusals.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from richlinker.clipboard.platform import ClipboardContent, ClipboardPlatform
from richlinker.core.constants import DEFAULT_FOCUS_RETRY_DELAY_MS, MIME_HTML, MIME_TEXT
from richlinker.core.errors import ClipboardError, ClipboardFocusError

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


class ClipboardGateway:
    """Writes and reads the two-representation clipboard payload."""

    def __init__(
        self,
        platform: ClipboardPlatform | None,
        focus_delay_ms: int = DEFAULT_FOCUS_RETRY_DELAY_MS,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        """Initialize the gateway.

        Args:
            platform: Clipboard backend, or None when no clipboard is available.
            focus_delay_ms: Wait between requesting focus and retrying.
            sleep: Awaitable sleep (injected for tests).
        """
        self._platform = platform
        self._focus_delay_ms = focus_delay_ms
        self._sleep = sleep
        self._focus_recoveries = 0

    @property
    def platform(self) -> ClipboardPlatform | None:
        return self._platform

    @property
    def focus_recoveries(self) -> int:
        """Number of focus recoveries performed by the last write()."""
        return self._focus_recoveries

    async def _recover_focus(self) -> None:
        assert self._platform is not None
        self._focus_recoveries += 1
        try:
            await self._platform.focus()
        except ClipboardError as e:
            logger.debug("Focus request failed: %s", e.message)
        await self._sleep(self._focus_delay_ms / 1000)

    async def _attempt(
        self, label: str, call: Callable[[], Awaitable[None]]
    ) -> bool:
        """Run one write, spending the focus recovery on a focus refusal."""
        try:
            await call()
            logger.debug("%s clipboard write succeeded", label)
            return True
        except ClipboardFocusError as e:
            logger.debug("%s clipboard write refused: %s", label, e.message)
            if self._focus_recoveries:
                return False
        except ClipboardError as e:
            logger.debug("%s clipboard write failed: %s", label, e.message)
            return False

        logger.debug("Retrying %s write after focus request", label.lower())
        await self._recover_focus()
        try:
            await call()
            logger.debug("%s clipboard write succeeded after focus", label)
            return True
        except ClipboardError as e:
            logger.debug("%s clipboard write still failed after focus: %s", label, e.message)
            return False

    async def write(self, html: str, text: str) -> bool:
        """Write html and text as one clipboard entry, degrading to plain text.

        Returns:
            True if either the rich or the plain-text write succeeded.
        """
        self._focus_recoveries = 0
        platform = self._platform
        if platform is None:
            logger.debug("No clipboard platform available")
            return False

        logger.info("Clipboard write via %s: %r", platform.name, text)

        if html and text and await platform.supports_multi():
            items = {MIME_HTML: html.encode("utf-8"), MIME_TEXT: text.encode("utf-8")}
            if await self._attempt("Rich", lambda: platform.write(items)):
                return True
        else:
            logger.debug(
                "Rich clipboard write skipped (html=%s, text=%s)", bool(html), bool(text)
            )

        if await platform.supports_text():
            plain = text or html
            return await self._attempt("Plain", lambda: platform.write_text(plain))

        logger.debug("No clipboard write methods available")
        return False

    async def read(self) -> ClipboardContent | None:
        """Best-effort read of both representations; None if nothing was read."""
        platform = self._platform
        if platform is None or not await platform.supports_read():
            return None
        try:
            items = await platform.read()
        except ClipboardError as e:
            logger.debug("Clipboard read failed: %s", e.message)
            return None

        html = _decode(items.get(MIME_HTML))
        text = _decode(items.get(MIME_TEXT))
        if not html and not text:
            return None
        return ClipboardContent(html=html, text=text)


def _decode(payload: bytes | None) -> str | None:
    if payload is None:
        return None
    return payload.decode("utf-8", errors="replace")
