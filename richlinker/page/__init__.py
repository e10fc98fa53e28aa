"""Page model: what was found on the page and the page it was found on."""

from richlinker.page.info import PageInfo
from richlinker.page.snapshot import PageSnapshot, capture_page

__all__ = ["PageInfo", "PageSnapshot", "capture_page"]
