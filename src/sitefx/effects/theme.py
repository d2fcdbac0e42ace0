"""Radial-wipe theme transition and the persisted theme preference."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from sitefx.config import ThemeSettings
from sitefx.core.events import EventBus
from sitefx.core.scheduler import Scheduler, TimerHandle
from sitefx.core.state import Rect, RuntimeState, Size, Theme, TransitionOverlay
from sitefx.logging import get_logger
from sitefx.services.document import DocumentAttributes
from sitefx.services.preferences import PreferenceStore


class TransitionPhase(Enum):
    IDLE = "idle"
    EXPANDING = "expanding"
    COMMITTED = "committed"


class OverlaySurface(Protocol):
    """Renders the transient full-viewport wipe."""

    def show(self, overlay: TransitionOverlay) -> None:
        ...

    def release(self, overlay: TransitionOverlay) -> None:
        ...


class NullOverlaySurface:
    def show(self, overlay: TransitionOverlay) -> None:
        pass

    def release(self, overlay: TransitionOverlay) -> None:
        pass


@dataclass(frozen=True, slots=True)
class _PendingToggle:
    anchor: Rect
    viewport: Size


def wipe_radius(cx: float, cy: float, viewport: Size) -> float:
    """Distance from (cx, cy) to the farthest viewport corner."""
    return math.hypot(max(cx, viewport.width - cx), max(cy, viewport.height - cy))


class ThemeTransitionController:
    """Sole owner and writer of the theme preference.

    ``toggle`` opens a wipe overlay in the target theme's background,
    and after ``wipe_ms`` the commit flips the preference, persists it,
    updates the document attribute and drops the overlay. Toggles that
    arrive outside IDLE are handled by ``settings.reentry_policy``:
    ``ignore`` drops them, ``queue`` keeps at most one to replay on the
    next IDLE edge.
    """

    def __init__(
        self,
        settings: ThemeSettings,
        scheduler: Scheduler,
        store: PreferenceStore,
        document: DocumentAttributes,
        events: EventBus | None = None,
        surface: OverlaySurface | None = None,
        state: RuntimeState | None = None,
    ) -> None:
        self.settings = settings
        self.scheduler = scheduler
        self.store = store
        self.document = document
        self.events = events or EventBus()
        self.surface = surface or NullOverlaySurface()
        self.state = state or RuntimeState()
        self.logger = get_logger("theme")
        self.phase = TransitionPhase.IDLE
        self.overlay: TransitionOverlay | None = None
        self.disposed = False
        self._initialized = False
        self._pending: _PendingToggle | None = None
        self._commit_timer: TimerHandle | None = None
        self._pull_timer: TimerHandle | None = None

    @property
    def theme(self) -> Theme:
        return self.state.theme

    @property
    def is_dark(self) -> bool:
        return self.state.theme is Theme.DARK

    @property
    def pulling(self) -> bool:
        return self.state.flags.pulling

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def background_for(self, theme: Theme) -> str:
        if theme is Theme.DARK:
            return self.settings.dark_background
        return self.settings.light_background

    def initialize(self) -> Theme:
        """Load the persisted preference once and apply it to the document."""
        if self._initialized:
            return self.state.theme
        default = Theme(self.settings.default)
        raw = self.store.get(self.settings.storage_key)
        theme = Theme.parse(raw, default)
        if raw is not None and theme.value != raw.strip().lower():
            self.logger.warning("Unrecognized stored theme {!r}, using {}", raw, theme.value)
        self.state.theme = theme
        self.document.set_attribute(self.settings.attribute, theme.value)
        self._initialized = True
        self.logger.info("Theme restored: {}", theme.value)
        return theme

    def toggle(self, anchor: Rect, viewport: Size) -> bool:
        """Start a wipe from the anchor's center; returns whether it was accepted."""
        if self.disposed:
            return False
        if not self._initialized:
            self.initialize()
        if self.phase is not TransitionPhase.IDLE:
            return self._handle_reentry(anchor, viewport)

        self._start_pull()
        cx, cy = anchor.center
        target = self.state.theme.flipped
        self.overlay = TransitionOverlay(
            center_x=cx,
            center_y=cy,
            max_radius=wipe_radius(cx, cy, viewport),
            target_color=self.background_for(target),
            target_theme=target,
            started_at=self.scheduler.now(),
            duration_ms=self.settings.wipe_ms,
        )
        self.phase = TransitionPhase.EXPANDING
        self.state.flags.transition_active = True
        self.surface.show(self.overlay)
        self.events.emit("theme.overlay.created", self.overlay)
        self.logger.debug(
            "Wipe toward {} from ({:.0f}, {:.0f}) radius {:.1f}",
            target.value,
            cx,
            cy,
            self.overlay.max_radius,
        )
        self._commit_timer = self.scheduler.call_later(self.settings.wipe_ms, self._commit)
        return True

    def _handle_reentry(self, anchor: Rect, viewport: Size) -> bool:
        if self.settings.reentry_policy == "queue" and self._pending is None:
            self._pending = _PendingToggle(anchor, viewport)
            self.logger.debug("Queued toggle during {}", self.phase.value)
            return True
        self.logger.debug("Ignored toggle during {}", self.phase.value)
        return False

    def _commit(self) -> None:
        self._commit_timer = None
        if self.disposed or self.overlay is None:
            return
        self.phase = TransitionPhase.COMMITTED
        theme = self.state.theme.flipped
        self.state.theme = theme
        self.store.set(self.settings.storage_key, theme.value)
        self.document.set_attribute(self.settings.attribute, theme.value)
        overlay, self.overlay = self.overlay, None
        self.surface.release(overlay)
        self.events.emit("theme.overlay.removed", overlay)
        self.events.emit("theme.committed", theme)
        self.logger.info("Theme committed: {}", theme.value)
        self.phase = TransitionPhase.IDLE
        self.state.flags.transition_active = False

        if self._pending is not None:
            pending, self._pending = self._pending, None
            self.toggle(pending.anchor, pending.viewport)

    def _start_pull(self) -> None:
        if self._pull_timer is not None:
            self._pull_timer.cancel()
        if not self.state.flags.pulling:
            self.state.flags.pulling = True
            self.events.emit("theme.pull.started", None)
        self._pull_timer = self.scheduler.call_later(self.settings.pull_ms, self._end_pull)

    def _end_pull(self) -> None:
        self._pull_timer = None
        if self.disposed:
            return
        self.state.flags.pulling = False
        self.events.emit("theme.pull.ended", None)

    def dispose(self) -> None:
        """Cancel timers and drop any in-flight overlay without committing."""
        if self.disposed:
            return
        self.disposed = True
        for handle in (self._commit_timer, self._pull_timer):
            if handle is not None:
                handle.cancel()
        self._commit_timer = self._pull_timer = None
        self._pending = None
        if self.overlay is not None:
            overlay, self.overlay = self.overlay, None
            self.surface.release(overlay)
            self.events.emit("theme.overlay.removed", overlay)
        self.phase = TransitionPhase.IDLE
        self.state.flags.transition_active = False
        self.state.flags.pulling = False
