"""Object graph wiring and logging setup for the CLI."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from richlinker.activation.cache import ActivationCache
from richlinker.activation.duplicates import DuplicateChecker
from richlinker.activation.store import JsonFileStore, KeyValueStore
from richlinker.clipboard.gateway import ClipboardGateway
from richlinker.clipboard.platform import ClipboardPlatform
from richlinker.config.schema import Config, DuplicateStrategy
from richlinker.core.constants import get_default_cache_path
from richlinker.core.secure_io import secure_mkdir
from richlinker.display.notifier import Notifier
from richlinker.handlers.registry import create_default_registry
from richlinker.linker import RichLinker

logger = logging.getLogger(__name__)

LOGGER_NAME = "richlinker"


def configure_logging(
    log_dir: Path,
    level: int = logging.DEBUG,
    console_level: int | None = None,
) -> Path:
    """Configure logging for the richlinker namespace.

    Logs are written to `{log_dir}/richlinker.log` with rotation (1MB per
    file, 3 backups). Notifications already reach the terminal through the
    notifier, so a stderr log handler is only added when console_level is set.

    Args:
        log_dir: Directory for the log file. Created if it doesn't exist.
        level: Logging level for file output.
        console_level: Level for stderr log output, or None for file only.

    Returns:
        Path to the log file.
    """
    secure_mkdir(log_dir)
    log_file = log_dir / "richlinker.log"

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))

    root = logging.getLogger(LOGGER_NAME)
    root.setLevel(level if console_level is None else min(level, console_level))
    # Remove any existing handlers to avoid duplicates on reconfigure
    root.handlers.clear()
    root.addHandler(file_handler)

    if console_level is not None:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(console_level)
        console_handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        ))
        root.addHandler(console_handler)

    root.propagate = False

    logger.debug("Logging configured: %s", log_file)
    return log_file


def create_store(config: Config) -> KeyValueStore:
    """The persistent store behind the activation cache."""
    path = config.activation.cache_path
    return JsonFileStore(Path(path).expanduser() if path else get_default_cache_path())


def build_linker(
    config: Config,
    platform: ClipboardPlatform | None,
    notifier: Notifier,
    store: KeyValueStore | None = None,
) -> RichLinker:
    """Wire registry, gateway, cache and notifier from config."""
    gateway = ClipboardGateway(
        platform, focus_delay_ms=config.clipboard.focus_retry_delay_ms
    )
    cache = ActivationCache(
        store if store is not None else create_store(config),
        window_ms=config.activation.window_ms,
    )
    strategy = config.activation.duplicate_strategy
    duplicates = DuplicateChecker(
        cache,
        gateway if strategy is not DuplicateStrategy.CACHE else None,
        strategy,
    )
    return RichLinker(
        create_default_registry(config.handlers),
        gateway,
        duplicates,
        notifier,
        debug=config.debug,
        preview_width=config.display.preview_width,
    )
