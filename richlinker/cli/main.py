"""Entry point for the richlinker CLI."""

from __future__ import annotations

import argparse
import asyncio
import logging

from richlinker.cli.arg_parser import parse_args
from richlinker.cli.bootstrap import build_linker, configure_logging
from richlinker.clipboard.platform import ClipboardPlatform
from richlinker.clipboard.system import SystemClipboard
from richlinker.config.loader import load_config
from richlinker.config.schema import Config
from richlinker.core.constants import get_default_log_dir
from richlinker.core.errors import BrowserError, ConfigError
from richlinker.display.notifier import ConsoleNotifier, Notification, NotificationKind
from richlinker.linker import ActivationResult
from richlinker.page.snapshot import PageSnapshot, capture_page

logger = logging.getLogger(__name__)


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Layer command-line flags over the loaded config."""
    update: dict[str, object] = {}
    if args.debug is not None:
        update["debug"] = args.debug
    if args.window_ms is not None:
        update["activation"] = config.activation.model_copy(
            update={"window_ms": args.window_ms}
        )
    if args.cdp_endpoint:
        update["browser"] = config.browser.model_copy(
            update={"cdp_endpoint": args.cdp_endpoint}
        )
    # A saved file has no browser tab to hold the clipboard call
    backend = "system" if args.html is not None else args.clipboard
    if backend:
        update["clipboard"] = config.clipboard.model_copy(update={"backend": backend})
    return config.model_copy(update=update) if update else config


async def _activate_offline(
    config: Config, args: argparse.Namespace, notifier: ConsoleNotifier
) -> ActivationResult:
    page = PageSnapshot.from_file(args.html, args.url, args.title)
    linker = build_linker(config, SystemClipboard(), notifier)
    return await linker.execute(page)


async def _activate_browser(config: Config, notifier: ConsoleNotifier) -> ActivationResult:
    from richlinker.browser import BrowserSession
    from richlinker.clipboard.browser import BrowserClipboard

    async with BrowserSession(
        config.browser.cdp_endpoint, config.browser.connect_timeout_ms
    ) as session:
        tab = await session.active_page()
        page = await capture_page(tab)

        platform: ClipboardPlatform
        if config.clipboard.backend == "browser":
            await session.grant_clipboard(tab)
            platform = BrowserClipboard(tab)
        else:
            platform = SystemClipboard()

        linker = build_linker(config, platform, notifier)
        return await linker.execute(page)


async def run(args: argparse.Namespace) -> int:
    """Run one activation. Returns the process exit code."""
    notifier = ConsoleNotifier()
    try:
        config = apply_overrides(load_config(args.config), args)
    except ConfigError as e:
        notifier.notify(Notification(NotificationKind.ERROR, e.message))
        return 2

    configure_logging(
        args.log_dir or get_default_log_dir(),
        console_level=logging.DEBUG if args.verbose else None,
    )

    try:
        if args.html is not None:
            result = await _activate_offline(config, args, notifier)
        else:
            result = await _activate_browser(config, notifier)
    except BrowserError as e:
        logger.debug("Browser activation failed: %s", e.message)
        notifier.notify(Notification(NotificationKind.ERROR, e.message))
        return 1
    except OSError as e:
        notifier.notify(Notification(NotificationKind.ERROR, f"Could not read page: {e}"))
        return 1

    return 0 if result.succeeded else 1


def main() -> None:
    """Entry point for the richlinker CLI."""
    args = parse_args()
    try:
        exit_code = asyncio.run(run(args))
    except KeyboardInterrupt:
        exit_code = 130
    raise SystemExit(exit_code)
