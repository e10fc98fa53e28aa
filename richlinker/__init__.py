"""richlinker - copy the page you are looking at as a rich link."""

__version__ = "0.3.0"
