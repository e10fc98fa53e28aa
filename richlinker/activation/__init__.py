"""Repeat-activation detection."""

from richlinker.activation.cache import ActivationCache, CachedActivation
from richlinker.activation.duplicates import DuplicateChecker
from richlinker.activation.store import JsonFileStore, KeyValueStore, MemoryStore

__all__ = [
    "ActivationCache",
    "CachedActivation",
    "DuplicateChecker",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
]
