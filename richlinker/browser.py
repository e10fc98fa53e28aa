"""Connection to the user's running browser over the DevTools protocol.

Chrome/Edge/Brave must be started with --remote-debugging-port (the default
endpoint is http://localhost:9222). Only the already-loaded tab is read;
nothing is navigated or fetched.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from richlinker.core.constants import DEFAULT_CDP_ENDPOINT
from richlinker.core.errors import BrowserError

if TYPE_CHECKING:
    from playwright.async_api import Browser, Page, Playwright

logger = logging.getLogger(__name__)

_TAB_STATE_JS = "() => [document.visibilityState === 'visible', document.hasFocus()]"

_CLIPBOARD_PERMISSIONS = ["clipboard-read", "clipboard-write"]


class BrowserSession:
    """Async context manager around a CDP connection.

    Example:
        async with BrowserSession("http://localhost:9222") as session:
            tab = await session.active_page()
    """

    def __init__(self, endpoint: str = DEFAULT_CDP_ENDPOINT, timeout_ms: int = 5000) -> None:
        self._endpoint = endpoint
        self._timeout_ms = timeout_ms
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None

    async def __aenter__(self) -> BrowserSession:
        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.connect_over_cdp(
                self._endpoint, timeout=self._timeout_ms
            )
        except PlaywrightError as e:
            await self._playwright.stop()
            self._playwright = None
            raise BrowserError(
                f"Could not connect to browser at {self._endpoint}: {e}"
            ) from e
        logger.debug("Connected to browser at %s", self._endpoint)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        # Stopping Playwright drops the CDP connection; the user's browser keeps running
        if self._playwright is not None:
            await self._playwright.stop()
        self._playwright = None
        self._browser = None

    async def active_page(self) -> Page:
        """The tab the user is looking at.

        Preference: focused and visible, then visible, then the most recently
        opened tab.

        Raises:
            BrowserError: If the browser has no open tabs.
        """
        if self._browser is None:
            raise BrowserError("Browser session is not connected")

        pages = [page for context in self._browser.contexts for page in context.pages]
        if not pages:
            raise BrowserError("No open tabs found in the browser")

        visible: list[Page] = []
        for page in pages:
            try:
                is_visible, has_focus = await page.evaluate(_TAB_STATE_JS)
            except PlaywrightError as e:
                logger.debug("Skipping tab %s: %s", page.url, e)
                continue
            if is_visible and has_focus:
                return page
            if is_visible:
                visible.append(page)

        return visible[0] if visible else pages[-1]

    async def grant_clipboard(self, page: Page) -> None:
        """Allow clipboard access for the page's origin, where the browser permits it."""
        parts = urlsplit(page.url)
        if parts.scheme not in ("http", "https"):
            return
        try:
            await page.context.grant_permissions(
                _CLIPBOARD_PERMISSIONS, origin=f"{parts.scheme}://{parts.netloc}"
            )
        except PlaywrightError as e:
            logger.debug("Clipboard permission grant refused: %s", e)
