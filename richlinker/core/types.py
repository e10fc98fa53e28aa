"""Small value types shared by the page model and the renderers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PresentationMode(Enum):
    """Which activation surfaces the secondary (detail) link."""

    DEFAULT = "default"  # Detail appended to the primary label
    INVERTED = "inverted"  # Detail is the headline, primary is the escape hatch


@dataclass(frozen=True)
class RenderedLink:
    """A label/location pair ready to be written to the clipboard."""

    label: str
    location: str
