"""Core constants and paths for richlinker.

Single source of truth for global paths and tuned defaults.
"""

from pathlib import Path

RICHLINKER_DIR_NAME = ".richlinker"

# Storage slot for the last successful activation
ACTIVATION_CACHE_KEY = "richlinker-last-copy"

# Normal double-click speed is ~500ms; 1000ms leaves room for slower users
DEFAULT_ACTIVATION_WINDOW_MS = 1000

# Delay after requesting focus before retrying a rejected clipboard write
DEFAULT_FOCUS_RETRY_DELAY_MS = 100

DEFAULT_PREVIEW_WIDTH = 30

DEFAULT_CDP_ENDPOINT = "http://localhost:9222"

MIME_HTML = "text/html"
MIME_TEXT = "text/plain"


def get_richlinker_dir() -> Path:
    """Get ~/.richlinker (global config and state directory)."""
    return Path.home() / RICHLINKER_DIR_NAME


def get_default_config_path() -> Path:
    """Get global config file path."""
    return get_richlinker_dir() / "config.json"


def get_default_cache_path() -> Path:
    """Get the JSON file backing the activation cache."""
    return get_richlinker_dir() / "activation.json"


def get_default_log_dir() -> Path:
    """Get log directory."""
    return get_richlinker_dir() / "logs"
