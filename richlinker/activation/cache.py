"""Activation cache - remembers the last copied PageInfo for a short window.

A second activation on the same page content within the window is a
"repeat" and flips the rendering between the detailed and the coarse link.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from richlinker.activation.store import KeyValueStore
from richlinker.core.constants import ACTIVATION_CACHE_KEY, DEFAULT_ACTIVATION_WINDOW_MS
from richlinker.core.errors import StoreError
from richlinker.page.info import PageInfo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CachedActivation:
    """A PageInfo and when it was written to the clipboard (epoch ms)."""

    info: PageInfo
    captured_at: float

    def age_ms(self, now_ms: float) -> float:
        return now_ms - self.captured_at


class ActivationCache:
    """Single-slot cache of the last successful activation.

    Storage problems never escape: a failed read behaves like an empty
    cache and a failed write is dropped, so duplicate detection degrades to
    "always a first activation".
    """

    def __init__(
        self,
        store: KeyValueStore,
        window_ms: int = DEFAULT_ACTIVATION_WINDOW_MS,
        key: str = ACTIVATION_CACHE_KEY,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the cache.

        Args:
            store: Key-value store holding the serialized record.
            window_ms: Records older than this are expired.
            key: Storage slot name.
            clock: Returns the current time in seconds (injected for tests).
        """
        self._store = store
        self._window_ms = window_ms
        self._key = key
        self._clock = clock

    @property
    def window_ms(self) -> int:
        return self._window_ms

    def _now_ms(self) -> float:
        return self._clock() * 1000

    def _clear(self) -> None:
        try:
            self._store.delete(self._key)
        except (OSError, StoreError) as e:
            logger.debug("Failed to clear activation cache: %s", e)

    def load(self) -> CachedActivation | None:
        """Return the stored activation if present and inside the window.

        Expired or unreadable records are deleted so they are never compared
        against a later, unrelated activation.
        """
        try:
            raw = self._store.get(self._key)
        except (OSError, StoreError) as e:
            logger.debug("Failed to read activation cache: %s", e)
            return None
        if raw is None:
            return None

        try:
            data = json.loads(raw)
            cached = CachedActivation(
                info=PageInfo.from_dict(data["info"]),
                captured_at=float(data["capturedAt"]),
            )
        except (ValueError, KeyError, TypeError) as e:
            logger.debug("Discarding unreadable activation record: %s", e)
            self._clear()
            return None

        age = cached.age_ms(self._now_ms())
        if age > self._window_ms:
            logger.debug("Activation record expired (%.0f ms old)", age)
            self._clear()
            return None
        return cached

    def is_repeat(self, candidate: PageInfo) -> bool:
        """Whether candidate matches the activation stored within the window."""
        cached = self.load()
        return cached is not None and cached.info.equals(candidate)

    def store(self, info: PageInfo) -> None:
        """Record info as the latest activation, replacing any prior one."""
        payload = json.dumps({"capturedAt": self._now_ms(), "info": info.to_dict()})
        try:
            self._store.set(self._key, payload)
        except (OSError, StoreError) as e:
            logger.debug("Failed to cache activation: %s", e)
