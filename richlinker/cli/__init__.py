"""Command-line interface."""

from richlinker.cli.main import main

__all__ = ["main"]
