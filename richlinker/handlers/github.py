"""GitHub pull requests."""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from richlinker.core.errors import ExtractionError
from richlinker.handlers.base import DebugCallback, SiteHandler, ignore_debug
from richlinker.page.info import PageInfo
from richlinker.page.snapshot import PageSnapshot

_NUMBER = re.compile(r"^\d+$")

_TITLE_SELECTORS = (".gh-header-title", "bdi.js-issue-title", '[data-testid="issue-title"]')


class GitHubHandler(SiteHandler):
    """https://github.com/<org>/<repo>/pull/<number>[/...]"""

    name = "github"

    def recognize(self, url: str) -> bool:
        parts = urlsplit(url)
        if parts.netloc != "github.com":
            return False
        segments = parts.path.split("/")
        # ['', org, repo, 'pull', number, ...]
        if len(segments) < 5:
            return False
        _, org, repo, keyword, number = segments[:5]
        return bool(org and repo and keyword == "pull" and _NUMBER.match(number))

    async def extract(self, page: PageSnapshot, debug: DebugCallback = ignore_debug) -> PageInfo:
        for selector in _TITLE_SELECTORS:
            element = page.select_one(selector)
            if element is None:
                continue
            title = " ".join(element.get_text(" ", strip=True).split())
            if title:
                debug(f"GitHubHandler: title={title!r} via {selector}")
                return PageInfo(primary_label=title, primary_location=page.url)

        raise ExtractionError("Could not find the pull request title on this page")
