"""Ordered handler registry - the first handler recognizing an address wins.

Recognition predicates are expected to be disjoint. That is not provable in
general, so select() checks every handler and reports overlaps: a warning
by default, AmbiguousHandlerError with strict matching.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from richlinker.config.schema import HandlersConfig
from richlinker.core.errors import AmbiguousHandlerError
from richlinker.handlers.airtable import AirtableHandler
from richlinker.handlers.base import SiteHandler
from richlinker.handlers.confluence import ConfluenceHandler
from richlinker.handlers.github import GitHubHandler
from richlinker.handlers.google_docs import GoogleDocsHandler
from richlinker.handlers.pipeline import PipelineDashboardHandler

logger = logging.getLogger(__name__)


class HandlerRegistry:
    """Registry of site handlers in registration order.

    Example:
        registry = HandlerRegistry([GoogleDocsHandler(), GitHubHandler()])
        handler = registry.select("https://github.com/org/repo/pull/1")
    """

    def __init__(self, handlers: Iterable[SiteHandler] = (), strict: bool = False) -> None:
        """Initialize the registry.

        Args:
            handlers: Handlers to register, in priority order.
            strict: Raise instead of picking the first of several matches.
        """
        self._handlers: list[SiteHandler] = []
        self._strict = strict
        for handler in handlers:
            self.register(handler)

    @property
    def handlers(self) -> tuple[SiteHandler, ...]:
        return tuple(self._handlers)

    def register(self, handler: SiteHandler) -> None:
        """Append a handler.

        Raises:
            ValueError: If a handler with the same name is already registered.
        """
        if any(existing.name == handler.name for existing in self._handlers):
            raise ValueError(f"Handler already registered: {handler.name}")
        self._handlers.append(handler)

    def matching(self, url: str) -> list[SiteHandler]:
        """All handlers recognizing url, in registration order."""
        return [h for h in self._handlers if h.recognize(url)]

    def select(self, url: str) -> SiteHandler | None:
        """Return the first handler recognizing url, or None.

        Raises:
            AmbiguousHandlerError: With strict matching, if several handlers match.
        """
        matches = self.matching(url)
        if not matches:
            return None
        if len(matches) > 1:
            names = [h.name for h in matches]
            if self._strict:
                raise AmbiguousHandlerError(url, names)
            logger.warning(
                "Handlers %s all recognize %s; using %s", names, url, matches[0].name
            )
        return matches[0]

    def __len__(self) -> int:
        return len(self._handlers)


def create_default_registry(config: HandlersConfig | None = None) -> HandlerRegistry:
    """Build the registry of built-in handlers.

    Args:
        config: Handler settings (enabled subset, strict matching, Airtable pages).
            Defaults apply when None.
    """
    config = config or HandlersConfig()
    builtin: list[SiteHandler] = [
        GoogleDocsHandler(),
        ConfluenceHandler(),
        AirtableHandler(config.airtable_pages),
        GitHubHandler(),
        PipelineDashboardHandler(),
    ]
    if config.enabled is not None:
        enabled = set(config.enabled)
        builtin = [h for h in builtin if h.name in enabled]
    return HandlerRegistry(builtin, strict=config.strict_matching)
