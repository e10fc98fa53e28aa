"""Configuration loading with layered merging.

Layers, later overriding earlier (deep merge, lists replaced):
1. Global user config (~/.richlinker/config.json)
2. Project local config (<cwd>/.richlinker/config.json)

Missing layers are skipped; with no files at all the Pydantic defaults apply.
"""

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from richlinker.config.load_utils import read_json_object, require_json_object
from richlinker.config.schema import Config
from richlinker.core.constants import RICHLINKER_DIR_NAME, get_richlinker_dir
from richlinker.core.errors import ConfigError, LoadError
from richlinker.core.utils import deep_merge

logger = logging.getLogger(__name__)


def load_config(path: Path | None = None, cwd: Path | None = None) -> Config:
    """Load configuration from file with layered merging.

    Args:
        path: Explicit config file path. If provided, skips layered loading.
        cwd: Working directory for the local layer. Defaults to Path.cwd().

    Returns:
        Validated Config object.

    Raises:
        ConfigError: If any config file contains invalid JSON or the merged
            config fails validation.
    """
    if path is not None:
        return _load_from_path(path)

    effective_cwd = cwd or Path.cwd()
    global_config = get_richlinker_dir() / "config.json"
    local_config = effective_cwd / RICHLINKER_DIR_NAME / "config.json"

    merged: dict[str, Any] = {}
    loaded_from: list[Path] = []

    layers = [global_config]
    if local_config.resolve() != global_config.resolve():
        layers.append(local_config)

    for layer in layers:
        try:
            data = read_json_object(layer, "config")
        except LoadError as e:
            raise ConfigError(e.message) from e
        if data:
            merged = deep_merge(merged, data)
            loaded_from.append(layer)

    if loaded_from:
        logger.info("Config loaded from: %s", [str(p) for p in loaded_from])
    else:
        logger.debug("No config files found, using defaults")
        return Config()

    try:
        return Config.model_validate(merged)
    except ValidationError as e:
        sources = ", ".join(str(p) for p in loaded_from)
        raise ConfigError(f"Config validation failed (merged from {sources}): {e}") from e


def _load_from_path(path: Path) -> Config:
    """Load and validate config from a specific path.

    Raises:
        ConfigError: If file is missing, has invalid JSON, or fails validation.
    """
    try:
        data = require_json_object(path, "config")
    except LoadError as e:
        raise ConfigError(e.message) from e

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Config validation failed for {path}: {e}") from e
