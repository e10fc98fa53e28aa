"""PageInfo - the normalized result of one extraction.

A PageInfo carries a primary label/location pair (the document, the wiki
page, the application) and an optional secondary pair pointing somewhere
inside it (a heading, a pipeline execution). Rendering decides which of the
two ends up on the clipboard.
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Any

from richlinker.core.constants import DEFAULT_PREVIEW_WIDTH
from richlinker.core.types import PresentationMode, RenderedLink
from richlinker.core.utils import shorten


@dataclass(frozen=True)
class PageInfo:
    """What a site handler found on the page.

    Equality covers the four label/location fields only; the presentation
    mode is a rendering concern and two infos that differ only in mode are
    the same page content.

    Attributes:
        primary_label: Title of the page (document, wiki page, application).
        primary_location: Stable address of the page.
        secondary_label: Optional sub-location label (heading, execution).
        secondary_location: Address of the sub-location.
        presentation_mode: Which activation shows the secondary detail.
    """

    primary_label: str
    primary_location: str
    secondary_label: str | None = None
    secondary_location: str | None = None
    presentation_mode: PresentationMode = field(
        default=PresentationMode.DEFAULT, compare=False
    )

    def __post_init__(self) -> None:
        if (self.secondary_label is None) != (self.secondary_location is None):
            raise ValueError(
                "secondary_label and secondary_location must be given together"
            )

    @property
    def has_secondary(self) -> bool:
        return self.secondary_label is not None

    def equals(self, other: object) -> bool:
        """Structural equality, ignoring presentation mode."""
        return isinstance(other, PageInfo) and self == other

    def for_activation(self, repeat: bool) -> bool:
        """Return the include_secondary flag for a first or repeat activation.

        A first activation surfaces the detail and a repeat collapses to the
        stable primary link. INVERTED infos read the flag the other way round,
        so the flag flips with the mode.
        """
        if self.presentation_mode is PresentationMode.INVERTED:
            return repeat
        return not repeat

    def shows_detail(self, include_secondary: bool) -> bool:
        """Whether render_link(include_secondary) carries the secondary pair."""
        if not self.has_secondary:
            return False
        if self.presentation_mode is PresentationMode.INVERTED:
            return not include_secondary
        return include_secondary

    def render_link(self, include_secondary: bool) -> RenderedLink:
        """Pick the label and location to put on the clipboard.

        DEFAULT: True appends the secondary label ("Doc #Heading") and links
        to the secondary location.
        INVERTED: False headlines the secondary, namespaced by the primary
        label ("app: Deploy to prod"); True collapses to the primary link.
        """
        if not self.shows_detail(include_secondary):
            return RenderedLink(self.primary_label, self.primary_location)

        assert self.secondary_label is not None and self.secondary_location is not None
        if self.presentation_mode is PresentationMode.INVERTED:
            label = f"{self.primary_label}: {self.secondary_label}"
        else:
            label = f"{self.primary_label} #{self.secondary_label}"
        return RenderedLink(label, self.secondary_location)

    def to_rich(self, include_secondary: bool) -> str:
        """Minimal hyperlink fragment for the text/html representation."""
        link = self.render_link(include_secondary)
        href = html.escape(link.location, quote=True)
        return f'<a href="{href}">{html.escape(link.label, quote=False)}</a>'

    def to_plain(self, include_secondary: bool) -> str:
        """'label (location)' for the text/plain representation."""
        link = self.render_link(include_secondary)
        return f"{link.label} ({link.location})"

    def preview(
        self, include_secondary: bool, width: int = DEFAULT_PREVIEW_WIDTH
    ) -> str:
        """Short multi-line summary for the success notification."""
        lines = [f"* title: {shorten(self.primary_label or 'Untitled', width)}"]
        if self.shows_detail(include_secondary):
            lines.append(f"* header: {shorten(self.secondary_label, width)}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "primaryLabel": self.primary_label,
            "primaryLocation": self.primary_location,
            "secondaryLabel": self.secondary_label,
            "secondaryLocation": self.secondary_location,
            "presentationMode": self.presentation_mode.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PageInfo:
        """Rebuild from to_dict() output.

        Raises:
            KeyError: If a primary field is missing.
            ValueError: If the mode is unknown or the secondary pair is partial.
        """
        return cls(
            primary_label=data["primaryLabel"],
            primary_location=data["primaryLocation"],
            secondary_label=data.get("secondaryLabel"),
            secondary_location=data.get("secondaryLocation"),
            presentation_mode=PresentationMode(
                data.get("presentationMode", PresentationMode.DEFAULT.value)
            ),
        )
