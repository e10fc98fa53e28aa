"""RichLinker - one activation from page to clipboard.

Flow:
    RESOLVING_HANDLER  registry.select(url)
    EXTRACTING         handler.extract(page) -> PageInfo
    CHECKING_DUPLICATE is this a repeat of the last activation?
    RENDERING          PageInfo -> html + text
    WRITING            ClipboardGateway.write(html, text)
    SUCCEEDED          cache updated, success notification
    FAILED             error notification, cache untouched

States only move forward. Any non-terminal state can end in FAILED, which
always produces exactly one ERROR notification.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from richlinker.activation.duplicates import DuplicateChecker
from richlinker.clipboard.gateway import ClipboardGateway
from richlinker.core.constants import DEFAULT_PREVIEW_WIDTH
from richlinker.core.errors import (
    ClipboardError,
    ExtractionError,
    NoHandlerError,
    RichLinkerError,
)
from richlinker.core.types import RenderedLink
from richlinker.display.notifier import Notification, NotificationKind, Notifier
from richlinker.handlers.base import SiteHandler
from richlinker.handlers.registry import HandlerRegistry
from richlinker.page.info import PageInfo
from richlinker.page.snapshot import PageSnapshot

logger = logging.getLogger(__name__)


class ActivationState(Enum):
    """Where an activation is in the pipeline."""

    IDLE = "idle"
    RESOLVING_HANDLER = "resolving_handler"
    EXTRACTING = "extracting"
    CHECKING_DUPLICATE = "checking_duplicate"
    RENDERING = "rendering"
    WRITING = "writing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class ActivationResult:
    """Outcome of one activation."""

    state: ActivationState = ActivationState.IDLE
    handler: str | None = None
    info: PageInfo | None = None
    repeat: bool = False
    link: RenderedLink | None = None
    html: str | None = None
    text: str | None = None
    error: RichLinkerError | None = None
    transitions: list[ActivationState] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.state is ActivationState.SUCCEEDED


class RichLinker:
    """Runs activations against pages.

    Example:
        linker = RichLinker(registry, gateway, duplicates, ConsoleNotifier())
        result = await linker.execute(snapshot)
    """

    def __init__(
        self,
        registry: HandlerRegistry,
        gateway: ClipboardGateway,
        duplicates: DuplicateChecker,
        notifier: Notifier,
        *,
        debug: bool = False,
        preview_width: int = DEFAULT_PREVIEW_WIDTH,
    ) -> None:
        """Initialize the linker.

        Args:
            registry: Site handlers, first match wins.
            gateway: Clipboard writer.
            duplicates: Repeat-activation detection and recording.
            notifier: Receives user-facing notifications.
            debug: Emit DEBUG notifications (they are always logged).
            preview_width: Width of fields in the success preview.
        """
        self._registry = registry
        self._gateway = gateway
        self._duplicates = duplicates
        self._notifier = notifier
        self._debug_enabled = debug
        self._preview_width = preview_width

    def _debug(self, message: str) -> None:
        if self._debug_enabled:
            self._notifier.notify(Notification(NotificationKind.DEBUG, message))
        else:
            logger.debug(message)

    def _enter(self, result: ActivationResult, state: ActivationState) -> None:
        logger.debug("Activation state: %s -> %s", result.state.value, state.value)
        result.state = state
        result.transitions.append(state)

    async def _extract(self, handler: SiteHandler, page: PageSnapshot) -> PageInfo:
        try:
            return await handler.extract(page, self._debug)
        except RichLinkerError:
            raise
        except Exception as e:
            logger.exception("%s failed on %s", handler.name, page.url)
            raise ExtractionError("Failed to extract page information") from e

    async def execute(self, page: PageSnapshot) -> ActivationResult:
        """Copy a rich link for page to the clipboard.

        Never raises for activation errors; they end the activation in FAILED
        and are reported through the notifier and result.error.
        """
        result = ActivationResult()
        try:
            self._enter(result, ActivationState.RESOLVING_HANDLER)
            self._debug(f"RichLinker: processing URL {page.url}")
            handler = self._registry.select(page.url)
            if handler is None:
                self._debug("RichLinker: no matching handler found")
                raise NoHandlerError(page.url)
            result.handler = handler.name
            self._debug(f"RichLinker: using handler {type(handler).__name__}")

            self._enter(result, ActivationState.EXTRACTING)
            info = await self._extract(handler, page)
            result.info = info
            self._debug(
                f"RichLinker: extracted title={info.primary_label!r} "
                f"header={info.secondary_label or 'none'!r}"
            )

            self._enter(result, ActivationState.CHECKING_DUPLICATE)
            result.repeat = await self._duplicates.is_repeat(info)
            if result.repeat:
                self._debug("RichLinker: same item detected, switching link detail")

            self._enter(result, ActivationState.RENDERING)
            include_secondary = info.for_activation(result.repeat)
            result.link = info.render_link(include_secondary)
            result.html = info.to_rich(include_secondary)
            result.text = info.to_plain(include_secondary)

            self._enter(result, ActivationState.WRITING)
            if not await self._gateway.write(result.html, result.text):
                raise ClipboardError("Failed to copy to clipboard")
        except RichLinkerError as e:
            return self._fail(result, e)

        self._duplicates.record(info)
        self._enter(result, ActivationState.SUCCEEDED)
        preview = info.preview(include_secondary, self._preview_width)
        self._notifier.notify(
            Notification(NotificationKind.SUCCESS, f"Copied rich link to clipboard\n{preview}")
        )
        return result

    def _fail(self, result: ActivationResult, error: RichLinkerError) -> ActivationResult:
        logger.info("Activation failed in %s: %s", result.state.value, error.message)
        result.error = error
        self._enter(result, ActivationState.FAILED)
        self._notifier.notify(Notification(NotificationKind.ERROR, error.message))
        return result
