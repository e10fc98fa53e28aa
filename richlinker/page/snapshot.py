"""Read-only snapshot of the page a handler extracts from."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import urlsplit, urlunsplit

from bs4 import BeautifulSoup, Tag
from playwright.async_api import Error as PlaywrightError

from richlinker.core.errors import BrowserError

if TYPE_CHECKING:
    from playwright.async_api import Page


@dataclass(frozen=True)
class PageSnapshot:
    """The address, title and DOM of the page at activation time.

    The HTML is parsed on first DOM access. Handlers only read from it.
    """

    url: str
    title: str = ""
    html: str = field(default="", repr=False)

    @cached_property
    def soup(self) -> BeautifulSoup:
        return BeautifulSoup(self.html, "html.parser")

    @property
    def origin(self) -> str:
        parts = urlsplit(self.url)
        return f"{parts.scheme}://{parts.netloc}"

    def without_fragment(self) -> str:
        """The address with any '#...' part removed."""
        parts = urlsplit(self.url)
        return urlunsplit(parts._replace(fragment=""))

    def select_one(self, selector: str) -> Tag | None:
        return self.soup.select_one(selector)

    def select(self, selector: str) -> list[Tag]:
        return list(self.soup.select(selector))

    def iter_ids_containing(self, fragment: str) -> Iterator[Tag]:
        """Elements whose id attribute embeds fragment, in document order."""
        for tag in self.soup.find_all(id=True):
            element_id = tag.get("id")
            if isinstance(element_id, str) and fragment in element_id:
                yield tag

    @classmethod
    def from_file(cls, path: Path, url: str, title: str | None = None) -> PageSnapshot:
        """Load a saved page. Title defaults to the document's <title>."""
        # Legacy-encoded pages still load; undecodable bytes become U+FFFD
        html = path.read_text(encoding="utf-8", errors="replace")
        snapshot = cls(url=url, title=title or "", html=html)
        if title is None:
            title_tag = snapshot.soup.find("title")
            if title_tag is not None:
                snapshot = cls(url=url, title=title_tag.get_text(strip=True), html=html)
        return snapshot


async def capture_page(page: Page) -> PageSnapshot:
    """Snapshot a live Playwright page.

    Raises:
        BrowserError: If the tab cannot be read (closed, or mid-navigation).
    """
    try:
        title = await page.title()
        html = await page.content()
    except PlaywrightError as e:
        raise BrowserError(f"Could not read the active tab: {e}") from e
    return PageSnapshot(url=page.url, title=title, html=html)
