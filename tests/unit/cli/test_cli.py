"""Tests for argument parsing, config overrides and the run paths."""

import logging
from io import StringIO
from pathlib import Path

import pyperclip
import pytest
from playwright.async_api import Error as PlaywrightError

import richlinker.browser
from richlinker.activation.store import JsonFileStore, MemoryStore
from richlinker.cli.arg_parser import parse_args
from richlinker.cli.bootstrap import LOGGER_NAME, build_linker, configure_logging, create_store
from richlinker.cli.main import apply_overrides, run
from richlinker.config.schema import Config, DuplicateStrategy
from richlinker.display.console import make_console, set_console
from richlinker.display.notifier import RecordingNotifier

DOC = "https://docs.google.com/document/d/abc/edit"


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo configure_logging so later tests still see records via caplog."""
    package_logger = logging.getLogger(LOGGER_NAME)
    saved = (list(package_logger.handlers), package_logger.level, package_logger.propagate)
    yield
    for handler in package_logger.handlers:
        if handler not in saved[0]:
            handler.close()
    package_logger.handlers[:] = saved[0]
    package_logger.setLevel(saved[1])
    package_logger.propagate = saved[2]


@pytest.fixture
def console_output():
    """Route notifications to a buffer."""
    output = StringIO()
    set_console(make_console(output, width=200))
    yield output
    set_console(None)


@pytest.fixture
def fake_pyperclip(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    buffer = {"text": ""}
    monkeypatch.setattr(pyperclip, "copy", lambda text: buffer.update(text=text))
    monkeypatch.setattr(pyperclip, "paste", lambda: buffer["text"])
    return buffer


class TestParseArgs:
    """Tests for parse_args."""

    def test_defaults(self) -> None:
        args = parse_args([])
        assert args.debug is None
        assert args.verbose is False
        assert args.html is None
        assert args.window_ms is None
        assert args.clipboard is None

    def test_offline_flags(self) -> None:
        args = parse_args(["--html", "page.html", "--url", DOC, "--title", "Plan", "-d"])
        assert args.html == Path("page.html")
        assert args.url == DOC
        assert args.title == "Plan"
        assert args.debug is True

    def test_html_requires_url(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["--html", "page.html"])
        assert exc_info.value.code == 2
        assert "--url is required" in capsys.readouterr().err

    def test_window_must_be_positive(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["--window-ms", "0"])

    def test_unknown_clipboard_backend(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["--clipboard", "x11"])


class TestApplyOverrides:
    """Tests for layering flags over config."""

    def test_no_flags_keeps_config(self) -> None:
        config = Config()
        assert apply_overrides(config, parse_args([])) is config

    def test_flags(self) -> None:
        args = parse_args(["-d", "--window-ms", "2500", "--cdp-endpoint", "http://127.0.0.1:9333"])
        config = apply_overrides(Config(), args)
        assert config.debug is True
        assert config.activation.window_ms == 2500
        assert config.browser.cdp_endpoint == "http://127.0.0.1:9333"
        assert config.clipboard.backend == "browser"

    def test_other_sections_preserved(self) -> None:
        base = Config.model_validate({"activation": {"duplicate_strategy": "both"}})
        config = apply_overrides(base, parse_args(["--window-ms", "300"]))
        assert config.activation.duplicate_strategy is DuplicateStrategy.BOTH

    def test_html_forces_system_clipboard(self) -> None:
        args = parse_args(["--html", "p.html", "--url", DOC, "--clipboard", "browser"])
        assert apply_overrides(Config(), args).clipboard.backend == "system"


class TestBootstrap:
    """Tests for wiring helpers."""

    def test_configure_logging_writes_file(self, tmp_path: Path) -> None:
        log_file = configure_logging(tmp_path / "logs")
        logging.getLogger("richlinker.test").debug("hello from test")
        for handler in logging.getLogger(LOGGER_NAME).handlers:
            handler.flush()
        assert log_file == tmp_path / "logs" / "richlinker.log"
        assert "hello from test" in log_file.read_text()

    def test_stderr_handler_only_when_verbose(self, tmp_path: Path) -> None:
        package_logger = logging.getLogger(LOGGER_NAME)
        configure_logging(tmp_path)
        assert len(package_logger.handlers) == 1
        configure_logging(tmp_path, console_level=logging.DEBUG)
        assert len(package_logger.handlers) == 2
        assert package_logger.propagate is False

    def test_create_store_uses_configured_path(self, tmp_path: Path) -> None:
        path = tmp_path / "cache.json"
        config = Config.model_validate({"activation": {"cache_path": str(path)}})
        store = create_store(config)
        assert isinstance(store, JsonFileStore)
        assert store.path == path

    def test_create_store_default(self, isolated_home: Path) -> None:
        store = create_store(Config())
        assert store.path == isolated_home / ".richlinker" / "activation.json"

    @pytest.mark.asyncio
    async def test_build_linker(self, clipboard, make_page) -> None:
        config = Config.model_validate(
            {"handlers": {"enabled": ["google_docs"]}, "activation": {"duplicate_strategy": "both"}}
        )
        notifier = RecordingNotifier()
        linker = build_linker(config, clipboard, notifier, store=MemoryStore())

        first = await linker.execute(make_page(DOC, "Plan - Google Docs"))
        other = await linker.execute(make_page("https://github.com/a/b/pull/1", ""))

        assert first.succeeded
        assert other.error is not None
        assert other.error.message == "No handler found for this page"


class TestRunOffline:
    """Tests for run() against a saved page."""

    @pytest.mark.asyncio
    async def test_copies_plain_link(
        self, tmp_path: Path, isolated_home: Path, fake_pyperclip, console_output
    ) -> None:
        saved = tmp_path / "doc.html"
        saved.write_text("<html><head><title>Plan - Google Docs</title></head></html>")
        args = parse_args(["--html", str(saved), "--url", DOC, "--log-dir", str(tmp_path / "logs")])

        assert await run(args) == 0
        assert fake_pyperclip["text"] == f"Plan ({DOC})"
        assert "Copied rich link to clipboard" in console_output.getvalue()
        assert (isolated_home / ".richlinker" / "activation.json").is_file()

    @pytest.mark.asyncio
    async def test_unknown_site(
        self, tmp_path: Path, isolated_home: Path, fake_pyperclip, console_output
    ) -> None:
        saved = tmp_path / "story.html"
        saved.write_text("<title>Story</title>")
        args = parse_args(
            ["--html", str(saved), "--url", "https://news.example/s", "--log-dir", str(tmp_path)]
        )

        assert await run(args) == 1
        assert fake_pyperclip["text"] == ""
        assert "No handler found for this page" in console_output.getvalue()

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path: Path, isolated_home: Path, console_output) -> None:
        args = parse_args(
            ["--html", str(tmp_path / "gone.html"), "--url", DOC, "--log-dir", str(tmp_path)]
        )
        assert await run(args) == 1
        assert "Could not read page" in console_output.getvalue()

    @pytest.mark.asyncio
    async def test_non_utf8_page(
        self, tmp_path: Path, isolated_home: Path, fake_pyperclip, console_output
    ) -> None:
        saved = tmp_path / "doc.html"
        saved.write_bytes(b"<title>Caf\xe9 - Google Docs</title>")
        args = parse_args(["--html", str(saved), "--url", DOC, "--log-dir", str(tmp_path)])

        assert await run(args) == 0
        assert fake_pyperclip["text"] == f"Caf� ({DOC})"

    @pytest.mark.asyncio
    async def test_bad_config(self, tmp_path: Path, console_output) -> None:
        config = tmp_path / "config.json"
        config.write_text('{"activation": {"window_ms": "soon"}}')
        args = parse_args(["--config", str(config), "--html", "x.html", "--url", DOC])

        assert await run(args) == 2
        assert "Config validation failed" in console_output.getvalue()


class NavigatingTab:
    """A tab that is mid-navigation when read."""

    url = DOC

    async def title(self) -> str:
        raise PlaywrightError("Execution context was destroyed, most likely because of a navigation")

    async def content(self) -> str:
        return ""


class FakeSession:
    def __init__(self, endpoint: str, timeout_ms: int) -> None:
        self.endpoint = endpoint

    async def __aenter__(self) -> "FakeSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        return None

    async def active_page(self) -> NavigatingTab:
        return NavigatingTab()


class TestRunBrowser:
    """Tests for run() against the live browser."""

    @pytest.mark.asyncio
    async def test_unreadable_tab(
        self, tmp_path: Path, isolated_home: Path, monkeypatch: pytest.MonkeyPatch, console_output
    ) -> None:
        monkeypatch.setattr(richlinker.browser, "BrowserSession", FakeSession)
        args = parse_args(["--log-dir", str(tmp_path)])

        assert await run(args) == 1
        assert "Could not read the active tab" in console_output.getvalue()
