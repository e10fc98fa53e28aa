"""Base site handler interface.

A handler answers two questions about a page:

- recognize(url): is this one of my pages? A pure predicate over the
  address; it must not touch the DOM.
- extract(page): what is the title and link? Reads the snapshot's title
  and DOM, never writes to it. Missing elements degrade to a best-effort
  label; only when no meaningful link can be produced does it raise
  ExtractionError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import ClassVar

from richlinker.page.info import PageInfo
from richlinker.page.snapshot import PageSnapshot

# Receives diagnostic messages during extraction
DebugCallback = Callable[[str], None]


def ignore_debug(message: str) -> None:
    """Default debug callback: drop the message."""
    return None


class SiteHandler(ABC):
    """Recognizes one site family and scrapes a PageInfo from it."""

    name: ClassVar[str]

    @abstractmethod
    def recognize(self, url: str) -> bool:
        """Whether this handler can extract from the page at url."""

    @abstractmethod
    async def extract(self, page: PageSnapshot, debug: DebugCallback = ignore_debug) -> PageInfo:
        """Build a PageInfo from the page.

        Raises:
            ExtractionError: If the page lacks the data for a meaningful link.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
