"""Shared pytest fixtures: fake clipboard platform, clock and page builders."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from richlinker.activation.cache import ActivationCache
from richlinker.activation.duplicates import DuplicateChecker
from richlinker.activation.store import MemoryStore
from richlinker.clipboard.gateway import ClipboardGateway
from richlinker.core.constants import MIME_HTML, MIME_TEXT
from richlinker.core.errors import ClipboardError
from richlinker.display.notifier import RecordingNotifier
from richlinker.handlers.registry import create_default_registry
from richlinker.linker import RichLinker
from richlinker.page.snapshot import PageSnapshot


class FakeClipboard:
    """In-memory ClipboardPlatform.

    Errors queued in write_errors / text_errors are raised by successive
    calls (None in the queue means "succeed this time").
    """

    def __init__(
        self,
        multi: bool = True,
        text: bool = True,
        readable: bool = True,
        write_errors: list[ClipboardError | None] | None = None,
        text_errors: list[ClipboardError | None] | None = None,
    ) -> None:
        self.multi = multi
        self.text = text
        self.readable = readable
        self.write_errors = list(write_errors or [])
        self.text_errors = list(text_errors or [])
        self.entries: list[dict[str, bytes]] = []
        self.write_calls = 0
        self.text_calls = 0
        self.focus_calls = 0

    @property
    def name(self) -> str:
        return "fake"

    async def supports_multi(self) -> bool:
        return self.multi

    async def supports_text(self) -> bool:
        return self.text

    async def supports_read(self) -> bool:
        return self.readable

    async def write(self, items: dict[str, bytes]) -> None:
        self.write_calls += 1
        if self.write_errors:
            error = self.write_errors.pop(0)
            if error is not None:
                raise error
        self.entries.append(dict(items))

    async def write_text(self, text: str) -> None:
        self.text_calls += 1
        if self.text_errors:
            error = self.text_errors.pop(0)
            if error is not None:
                raise error
        self.entries.append({MIME_TEXT: text.encode("utf-8")})

    async def read(self) -> dict[str, bytes]:
        return dict(self.entries[-1]) if self.entries else {}

    async def focus(self) -> None:
        self.focus_calls += 1

    @property
    def last_html(self) -> str | None:
        if not self.entries or MIME_HTML not in self.entries[-1]:
            return None
        return self.entries[-1][MIME_HTML].decode("utf-8")

    @property
    def last_text(self) -> str | None:
        if not self.entries or MIME_TEXT not in self.entries[-1]:
            return None
        return self.entries[-1][MIME_TEXT].decode("utf-8")


class FakeClock:
    """Callable clock returning seconds; advanced manually."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000


async def no_sleep(seconds: float) -> None:
    return None


@pytest.fixture
def make_clipboard() -> type[FakeClipboard]:
    """The FakeClipboard class, for tests that configure their own."""
    return FakeClipboard


@pytest.fixture
def clipboard() -> FakeClipboard:
    return FakeClipboard()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_page() -> Callable[..., PageSnapshot]:
    """Build a PageSnapshot from a URL, title and body HTML."""

    def _make(url: str, title: str = "", body: str = "") -> PageSnapshot:
        html = f"<html><head><title>{title}</title></head><body>{body}</body></html>"
        return PageSnapshot(url=url, title=title, html=html)

    return _make


@pytest.fixture
def gdocs_outline() -> Callable[..., str]:
    """Google Docs outline markup with one highlighted entry."""

    def _outline(
        tooltip: str | None = None,
        text: str = "",
        aria_label: str | None = None,
    ) -> str:
        tooltip_attr = f' data-tooltip="{tooltip}"' if tooltip is not None else ""
        aria_attr = f' aria-label="{aria_label}"' if aria_label is not None else ""
        return (
            '<div class="navigation-item">'
            '<div class="navigation-item-content-container" aria-label="Intro level 1">'
            '<div class="navigation-item-content">Intro</div></div></div>'
            '<div class="navigation-item location-indicator-highlight">'
            f'<div class="navigation-item-content-container"{aria_attr}>'
            f'<div class="navigation-item-content"{tooltip_attr}>{text}</div>'
            "</div></div>"
        )

    return _outline


@pytest.fixture
def make_linker(
    clock: FakeClock,
) -> Callable[..., tuple[RichLinker, FakeClipboard, RecordingNotifier]]:
    """Build a RichLinker over fakes sharing one MemoryStore per call."""

    def _make(
        platform: FakeClipboard | None = None,
        store: MemoryStore | None = None,
        window_ms: int = 1000,
        debug: bool = False,
    ) -> tuple[RichLinker, FakeClipboard, RecordingNotifier]:
        platform = platform if platform is not None else FakeClipboard()
        notifier = RecordingNotifier()
        gateway = ClipboardGateway(platform, sleep=no_sleep)
        cache = ActivationCache(store or MemoryStore(), window_ms=window_ms, clock=clock)
        linker = RichLinker(
            create_default_registry(),
            gateway,
            DuplicateChecker(cache),
            notifier,
            debug=debug,
        )
        return linker, platform, notifier

    return _make


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME at an empty directory so no real ~/.richlinker is read."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home
