"""Google Docs: document title plus the heading currently highlighted in the outline."""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from richlinker.handlers.base import DebugCallback, SiteHandler, ignore_debug
from richlinker.page.info import PageInfo
from richlinker.page.snapshot import PageSnapshot

TITLE_SUFFIX = " - Google Docs"
DEFAULT_TITLE = "Untitled Document"

_DOCUMENT_PATH = re.compile(r"^/document/d/[^/]+")
# "Team rituals level 2" -> "Team rituals"
_LEVEL_SUFFIX = re.compile(r" level \d+$")


class GoogleDocsHandler(SiteHandler):
    name = "google_docs"

    def recognize(self, url: str) -> bool:
        return bool(_DOCUMENT_PATH.match(urlsplit(url).path))

    def current_heading(self, page: PageSnapshot) -> str | None:
        """Text of the outline entry for the section in view.

        Sources in order: the entry's tooltip, its text, then the container's
        aria-label.
        """
        item = page.select_one(".navigation-item.location-indicator-highlight")
        if item is None:
            return None

        content = item.select_one(".navigation-item-content")
        if content is not None:
            tooltip = content.get("data-tooltip")
            if isinstance(tooltip, str) and tooltip:
                return tooltip
            text = content.get_text(strip=True)
            if text:
                return text

        container = item.select_one(".navigation-item-content-container")
        if container is not None:
            aria_label = container.get("aria-label")
            if isinstance(aria_label, str) and aria_label:
                return _LEVEL_SUFFIX.sub("", aria_label)

        return None

    async def extract(self, page: PageSnapshot, debug: DebugCallback = ignore_debug) -> PageInfo:
        title = page.title.removesuffix(TITLE_SUFFIX).strip() or DEFAULT_TITLE
        title_url = page.without_fragment()
        debug(f"GoogleDocsHandler: title={title!r} url={title_url!r}")

        heading = self.current_heading(page)
        if heading:
            debug(f"GoogleDocsHandler: found heading={heading!r}")
        else:
            debug("GoogleDocsHandler: no current heading detected")

        return PageInfo(
            primary_label=title,
            primary_location=title_url,
            secondary_label=heading,
            secondary_location=page.url if heading else None,
        )
