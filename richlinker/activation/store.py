"""String key-value stores backing the activation cache."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

from richlinker.config.load_utils import read_json_object
from richlinker.core.errors import LoadError, StoreError
from richlinker.core.secure_io import secure_mkdir, secure_write_atomic

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """A string-keyed slot store.

    Implementations raise StoreError (or OSError) when the backing storage
    is unusable; callers decide whether that is fatal.
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStore:
    """In-process store. Lives as long as the object does."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    """Store persisted as a single JSON object file.

    Survives separate CLI invocations, which is what makes a second
    activation within the window detectable. Writes replace the file
    atomically with owner-only permissions.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        try:
            data = read_json_object(self._path, "activation store")
        except LoadError as e:
            raise StoreError(e.message) from e
        if not data:
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: dict[str, str]) -> None:
        try:
            secure_mkdir(self._path.parent)
            secure_write_atomic(self._path, json.dumps(data, indent=2))
        except OSError as e:
            raise StoreError(f"Failed to write {self._path}: {e}") from e

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except StoreError:
            # A corrupt file is replaced rather than blocking every later write
            logger.debug("Replacing unreadable store file: %s", self._path)
            data = {}
        data[key] = value
        self._write_all(data)

    def delete(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)
