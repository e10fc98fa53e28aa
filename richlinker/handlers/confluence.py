"""Confluence (Atlassian wiki) pages."""

from __future__ import annotations

from richlinker.handlers.base import DebugCallback, SiteHandler, ignore_debug
from richlinker.page.info import PageInfo
from richlinker.page.snapshot import PageSnapshot

DEFAULT_TITLE = "Atlassian Wiki Page"


class ConfluenceHandler(SiteHandler):
    name = "confluence"

    def recognize(self, url: str) -> bool:
        return ".atlassian.net/wiki/spaces/" in url

    async def extract(self, page: PageSnapshot, debug: DebugCallback = ignore_debug) -> PageInfo:
        raw_title = page.title or DEFAULT_TITLE

        # "<page> - <space> - Confluence": space names vary, so drop the
        # last two segments rather than keeping the first
        parts = raw_title.split(" - ")
        title = " - ".join(parts[:-2]) if len(parts) > 2 else raw_title

        debug(f"ConfluenceHandler: raw title={raw_title!r} cleaned={title!r}")
        return PageInfo(primary_label=title, primary_location=page.url)
