"""Pipeline dashboards (Spinnaker-style application execution views).

Addresses look like `<origin>/applications/<app>/executions[/<executionId>]`,
or the same route after `#/`. With an execution selected the
detailed link is the default and the application link is the escape hatch,
so infos from here use INVERTED presentation.
"""

from __future__ import annotations

import re

from bs4 import Tag

from richlinker.core.types import PresentationMode
from richlinker.handlers.base import DebugCallback, SiteHandler, ignore_debug
from richlinker.page.info import PageInfo
from richlinker.page.snapshot import PageSnapshot

_ROUTE = r"applications/(?P<app>[^/?#]+)/executions"
_TAIL = r"(?:/(?:details/)?(?P<execution>[^/?#]+))?/?(?:[?#].*)?$"

# The route starts the path or a '#/' client-side route, never mid-path
_EXECUTION_PATTERNS = (
    re.compile(r"^(?P<base>[a-z][a-z0-9+.-]*://[^/?#]+/" + _ROUTE + ")" + _TAIL, re.IGNORECASE),
    re.compile(r"^(?P<base>[^#]*#/" + _ROUTE + ")" + _TAIL),
)


def _match_execution(url: str) -> re.Match[str] | None:
    for pattern in _EXECUTION_PATTERNS:
        match = pattern.match(url)
        if match is not None:
            return match
    return None

_HEADINGS = ["h1", "h2", "h3", "h4", "h5", "h6"]


class PipelineDashboardHandler(SiteHandler):
    name = "pipeline_dashboard"

    def recognize(self, url: str) -> bool:
        return _match_execution(url) is not None

    def execution_heading(self, page: PageSnapshot, execution_id: str) -> str | None:
        """Heading of the execution group containing the execution's DOM node."""
        for node in page.iter_ids_containing(execution_id):
            group = _execution_group(node)
            if group is None:
                continue
            heading = group.select_one(".execution-group-heading h4") or group.find(_HEADINGS)
            if heading is None:
                continue
            text = heading.get_text(" ", strip=True)
            if text:
                return text
        return None

    async def extract(self, page: PageSnapshot, debug: DebugCallback = ignore_debug) -> PageInfo:
        match = _match_execution(page.url)
        if match is None:
            # recognize() guards this; a direct call on another page gets the page itself
            return PageInfo(primary_label=page.title or page.url, primary_location=page.url)

        app = match["app"]
        execution_id = match["execution"]
        debug(f"PipelineDashboardHandler: app={app!r} execution={execution_id!r}")

        if execution_id is None:
            return PageInfo(
                primary_label=app,
                primary_location=match["base"],
                presentation_mode=PresentationMode.INVERTED,
            )

        heading = self.execution_heading(page, execution_id)
        if heading is None:
            debug(f"PipelineDashboardHandler: no execution group found for {execution_id}")
            heading = f"execution {execution_id}"

        return PageInfo(
            primary_label=app,
            primary_location=match["base"],
            secondary_label=heading,
            secondary_location=page.url,
            presentation_mode=PresentationMode.INVERTED,
        )


def _execution_group(node: Tag) -> Tag | None:
    classes = node.get("class") or []
    if "execution-group" in classes:
        return node
    return node.find_parent(class_="execution-group")
