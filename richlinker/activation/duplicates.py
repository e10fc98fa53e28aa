"""Repeat detection strategies: activation cache, live clipboard, or both."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from richlinker.config.schema import DuplicateStrategy
from richlinker.page.info import PageInfo

if TYPE_CHECKING:
    from richlinker.activation.cache import ActivationCache
    from richlinker.clipboard.gateway import ClipboardGateway

logger = logging.getLogger(__name__)


class DuplicateChecker:
    """Decides whether an activation repeats the previous one.

    The clipboard strategy compares the live clipboard with what a first
    activation of the candidate would have written. It works without any
    stored state, at the cost of a clipboard read (which browsers may
    refuse).
    """

    def __init__(
        self,
        cache: ActivationCache,
        gateway: ClipboardGateway | None = None,
        strategy: DuplicateStrategy = DuplicateStrategy.CACHE,
    ) -> None:
        if strategy is not DuplicateStrategy.CACHE and gateway is None:
            raise ValueError(f"Duplicate strategy {strategy.value!r} needs a clipboard gateway")
        self._cache = cache
        self._gateway = gateway
        self._strategy = strategy

    @property
    def cache(self) -> ActivationCache:
        return self._cache

    @property
    def strategy(self) -> DuplicateStrategy:
        return self._strategy

    async def is_repeat(self, candidate: PageInfo) -> bool:
        """Never raises; any lookup failure counts as a first activation."""
        if self._strategy in (DuplicateStrategy.CACHE, DuplicateStrategy.BOTH):
            if self._cache.is_repeat(candidate):
                logger.debug("Repeat detected via activation cache")
                return True
        if self._strategy in (DuplicateStrategy.CLIPBOARD, DuplicateStrategy.BOTH):
            if await self._matches_clipboard(candidate):
                logger.debug("Repeat detected via clipboard content")
                return True
        return False

    async def _matches_clipboard(self, candidate: PageInfo) -> bool:
        assert self._gateway is not None
        content = await self._gateway.read()
        if content is None:
            return False

        first = candidate.for_activation(repeat=False)
        if content.html is not None and content.html == candidate.to_rich(first):
            return True
        return content.text is not None and content.text == candidate.to_plain(first)

    def record(self, info: PageInfo) -> None:
        self._cache.store(info)
