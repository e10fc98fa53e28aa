"""Reading JSON object files: config layers and the activation store file.

Both are small hand-editable JSON objects, so they share one reader:
- read_json_object() for files that may be absent (returns None)
- require_json_object() when the caller named the file explicitly
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from richlinker.core.errors import LoadError

logger = logging.getLogger(__name__)


def read_json_object(path: Path, what: str = "file") -> dict[str, Any] | None:
    """Parse path as a JSON object.

    A UTF-8 BOM is accepted (editors on Windows add one).

    Args:
        path: File to read.
        what: Description used in log and error messages (e.g. "config").

    Returns:
        The object, {} for a blank file, or None if the file does not exist.

    Raises:
        LoadError: If the file cannot be read, is not JSON, or holds a
            non-object value.
    """
    if not path.is_file():
        logger.debug("No %s at %s", what, path)
        return None

    try:
        content = path.read_text(encoding="utf-8-sig").strip()
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"Failed to read {what} {path}: {e}") from e
    if not content:
        return {}

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise LoadError(f"Invalid JSON in {what} {path}: {e}") from e
    if not isinstance(data, dict):
        raise LoadError(f"Expected an object in {what} {path}, got {type(data).__name__}")

    logger.debug("Read %s: %s", what, path)
    return data


def require_json_object(path: Path, what: str = "file") -> dict[str, Any]:
    """Like read_json_object(), but a missing file is an error.

    Raises:
        LoadError: If the file is missing or read_json_object() fails.
    """
    data = read_json_object(path, what)
    if data is None:
        raise LoadError(f"{what.capitalize()} not found: {path}")
    return data
