"""Airtable interface pages (allowlisted record views only)."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from richlinker.config.schema import AirtablePageConfig
from richlinker.core.errors import ExtractionError
from richlinker.handlers.base import DebugCallback, SiteHandler, ignore_debug
from richlinker.page.info import PageInfo
from richlinker.page.snapshot import PageSnapshot

logger = logging.getLogger(__name__)


class AirtableHandler(SiteHandler):
    """Only known interface pages are handled: most Airtable URLs are not link-worthy."""

    name = "airtable"

    def __init__(self, pages: Iterable[AirtablePageConfig]) -> None:
        self._pages = tuple(pages)

    @property
    def pages(self) -> tuple[AirtablePageConfig, ...]:
        return self._pages

    def recognize(self, url: str) -> bool:
        for known in self._pages:
            if url.startswith(known.url):
                logger.debug(
                    "AirtableHandler matched base=%r page=%r", known.base, known.page
                )
                return True
        return False

    async def extract(self, page: PageSnapshot, debug: DebugCallback = ignore_debug) -> PageInfo:
        heading = page.select_one(".heading-size-default")
        title = heading.get_text(strip=True) if heading is not None else ""
        if not title:
            raise ExtractionError(
                "Could not find the record title; open a record in its detail view"
            )

        debug(f"AirtableHandler: title={title!r} url={page.url!r}")
        return PageInfo(primary_label=title, primary_location=page.url)
