"""Pydantic models for richlinker configuration validation."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from richlinker.core.constants import (
    DEFAULT_ACTIVATION_WINDOW_MS,
    DEFAULT_CDP_ENDPOINT,
    DEFAULT_FOCUS_RETRY_DELAY_MS,
    DEFAULT_PREVIEW_WIDTH,
)

# Handler names accepted in handlers.enabled
HandlerName = Literal["google_docs", "confluence", "airtable", "github", "pipeline_dashboard"]


class DuplicateStrategy(str, Enum):
    """How a repeat activation is detected."""

    CACHE = "cache"  # Compare against the activation cache
    CLIPBOARD = "clipboard"  # Compare against live clipboard content
    BOTH = "both"  # Either one reporting a repeat is enough


class ActivationConfig(BaseModel):
    """Repeat-activation detection settings."""

    model_config = ConfigDict(extra="forbid")

    window_ms: int = Field(default=DEFAULT_ACTIVATION_WINDOW_MS, gt=0)
    """Two activations of the same page within this window count as a repeat."""

    duplicate_strategy: DuplicateStrategy = DuplicateStrategy.CACHE
    """Where the previous activation is looked up."""

    cache_path: str | None = None
    """JSON file backing the activation cache (default ~/.richlinker/activation.json)."""


class ClipboardConfig(BaseModel):
    """Clipboard backend settings."""

    model_config = ConfigDict(extra="forbid")

    backend: Literal["browser", "system"] = "browser"
    """browser: navigator.clipboard of the captured tab (rich + plain).
    system: OS clipboard through pyperclip (plain text only)."""

    focus_retry_delay_ms: int = Field(default=DEFAULT_FOCUS_RETRY_DELAY_MS, ge=0)
    """Wait between requesting focus and retrying a rejected write."""


class BrowserConfig(BaseModel):
    """Connection to the user's running browser."""

    model_config = ConfigDict(extra="forbid")

    cdp_endpoint: str = DEFAULT_CDP_ENDPOINT
    """Chrome DevTools Protocol endpoint (start Chrome with --remote-debugging-port)."""

    connect_timeout_ms: int = Field(default=5000, gt=0)


class AirtablePageConfig(BaseModel):
    """An Airtable interface page worth linking to."""

    model_config = ConfigDict(extra="forbid")

    base: str
    url: str
    page: str = "UNKNOWN"

    @field_validator("url")
    @classmethod
    def _require_https(cls, v: str) -> str:
        if not v.startswith("https://"):
            raise ValueError(f"Airtable page URL must start with https://: {v!r}")
        return v


DEFAULT_AIRTABLE_PAGES: list[dict[str, str]] = [
    {
        "base": "listable",
        "url": "https://airtable.com/apptivTqaoebkrmV1/pagYS8GHSAS9swLLI",
        "page": "Task Detail (Sidesheet+Fullscreen, Global, v2025.04.24) page",
    },
    {
        "base": "escalations",
        "url": "https://airtable.com/appWh5G6JXbHDKC2b/paguOM7Eb387ZUnRE",
        "page": "UNKNOWN",
    },
]


class HandlersConfig(BaseModel):
    """Site handler selection."""

    model_config = ConfigDict(extra="forbid")

    enabled: list[HandlerName] | None = None
    """Handlers to register (None = all, in default order)."""

    strict_matching: bool = False
    """Fail instead of picking the first handler when several recognize a page."""

    airtable_pages: list[AirtablePageConfig] = Field(
        default_factory=lambda: [AirtablePageConfig(**p) for p in DEFAULT_AIRTABLE_PAGES]
    )


class DisplayConfig(BaseModel):
    """Notification display settings."""

    model_config = ConfigDict(extra="forbid")

    preview_width: int = Field(default=DEFAULT_PREVIEW_WIDTH, ge=4)
    """Fields in the success preview are shortened to this many characters."""


class Config(BaseModel):
    """Root configuration model.

    Example config.json:
        {
            "debug": false,
            "activation": {"window_ms": 1000, "duplicate_strategy": "cache"},
            "clipboard": {"backend": "browser"},
            "browser": {"cdp_endpoint": "http://localhost:9222"}
        }
    """

    model_config = ConfigDict(extra="forbid")

    debug: bool = False
    """Show DEBUG notifications (they are always logged)."""

    activation: ActivationConfig = Field(default_factory=ActivationConfig)
    clipboard: ClipboardConfig = Field(default_factory=ClipboardConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    handlers: HandlersConfig = Field(default_factory=HandlersConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
