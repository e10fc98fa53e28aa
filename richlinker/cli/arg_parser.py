"""Argument parsing for the richlinker CLI."""

import argparse
from pathlib import Path

from richlinker import __version__


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="richlinker",
        description=(
            "Copy the page you are viewing as a rich link. Run twice within the "
            "activation window to switch between the detailed and the plain link."
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config", "-c",
        type=Path,
        metavar="PATH",
        help="Config file (default: layered ~/.richlinker/config.json and ./.richlinker/config.json)",
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        default=None,
        help="Show debug notifications",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log DEBUG to the console",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        metavar="DIR",
        help="Directory for richlinker.log (default: ~/.richlinker/logs)",
    )
    parser.add_argument(
        "--window-ms",
        type=int,
        metavar="MS",
        help="Repeat-activation window in milliseconds",
    )

    browser = parser.add_argument_group("browser")
    browser.add_argument(
        "--cdp-endpoint",
        metavar="URL",
        help="DevTools endpoint of the running browser (default: http://localhost:9222)",
    )
    browser.add_argument(
        "--clipboard",
        choices=["browser", "system"],
        help="Clipboard backend (default from config: browser)",
    )

    offline = parser.add_argument_group("offline snapshot")
    offline.add_argument(
        "--html",
        type=Path,
        metavar="FILE",
        help="Read the page from a saved HTML file instead of the browser",
    )
    offline.add_argument("--url", help="Address of the saved page (required with --html)")
    offline.add_argument("--title", help="Page title (default: the file's <title>)")

    args = parser.parse_args(argv)
    if args.html is not None and not args.url:
        parser.error("--url is required with --html")
    if args.window_ms is not None and args.window_ms <= 0:
        parser.error("--window-ms must be positive")
    return args
