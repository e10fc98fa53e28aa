"""Configuration loading and validation."""

from richlinker.config.loader import load_config
from richlinker.config.schema import (
    ActivationConfig,
    AirtablePageConfig,
    BrowserConfig,
    ClipboardConfig,
    Config,
    DisplayConfig,
    DuplicateStrategy,
    HandlersConfig,
)

__all__ = [
    "ActivationConfig",
    "AirtablePageConfig",
    "BrowserConfig",
    "ClipboardConfig",
    "Config",
    "DisplayConfig",
    "DuplicateStrategy",
    "HandlersConfig",
    "load_config",
]
