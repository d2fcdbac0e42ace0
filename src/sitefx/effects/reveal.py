"""Scroll-triggered reveals: the one-shot latch and the two controllers built on it."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from sitefx.config import RevealSettings
from sitefx.core.scheduler import Scheduler
from sitefx.core.state import VisibilityState
from sitefx.logging import get_logger
from sitefx.services.viewport import IntersectionEntry, Margin, Subscription, ViewportSource
from sitefx.utils.easing import EASE, STANDARD, CubicBezier, lerp, progress


class LatchPhase(Enum):
    PENDING = "pending"
    WATCHING = "watching"
    TRIGGERED = "triggered"
    DISPOSED = "disposed"


class RevealLatch:
    """Flips a ``VisibilityState`` to visible on the first sufficient intersection.

    The subscription is released on the WATCHING -> TRIGGERED edge, so any
    later signal never reaches the latch. An element that never intersects
    simply stays hidden.
    """

    def __init__(
        self,
        source: ViewportSource,
        scheduler: Scheduler,
        *,
        threshold: float = 0.1,
        margin: Margin | None = None,
        delay: float = 0.0,
        on_visible: Callable[[VisibilityState], None] | None = None,
    ) -> None:
        self.source = source
        self.scheduler = scheduler
        self.threshold = threshold
        self.margin = margin or Margin()
        self.state = VisibilityState(delay=delay)
        self.phase = LatchPhase.PENDING
        self.on_visible = on_visible
        self._subscription: Subscription | None = None
        self.logger = get_logger("reveal-latch")

    @property
    def visible(self) -> bool:
        return self.state.visible

    def mount(self, target: Any | None) -> None:
        if target is None or self.phase is not LatchPhase.PENDING:
            return
        self.phase = LatchPhase.WATCHING
        self._subscription = self.source.observe(target, self.threshold, self.margin, self._handle)

    def _handle(self, entry: IntersectionEntry) -> None:
        if self.phase is not LatchPhase.WATCHING:
            return
        if not entry.is_intersecting or entry.ratio < self.threshold:
            return
        self.phase = LatchPhase.TRIGGERED
        self._release()
        self.state.mark_visible(self.scheduler.now())
        self.logger.debug("Latch triggered at ratio {:.2f}", entry.ratio)
        if self.on_visible:
            self.on_visible(self.state)

    def dispose(self) -> None:
        if self.phase is LatchPhase.DISPOSED:
            return
        self._release()
        self.phase = LatchPhase.DISPOSED

    def _release(self) -> None:
        if self._subscription is not None:
            self._subscription.disconnect()
            self._subscription = None


@dataclass(frozen=True, slots=True)
class RevealStyle:
    opacity: float
    translate_y: float
    blur_px: float = 0.0

    def blend(self, other: RevealStyle, amount: float) -> RevealStyle:
        return RevealStyle(
            opacity=lerp(self.opacity, other.opacity, amount),
            translate_y=lerp(self.translate_y, other.translate_y, amount),
            blur_px=lerp(self.blur_px, other.blur_px, amount),
        )


@dataclass(frozen=True, slots=True)
class RevealUnit:
    index: int
    content: str
    delay: float
    duration: float
    easing: CubicBezier


class _RevealController:
    hidden_style: RevealStyle
    visible_style: RevealStyle

    def __init__(self, latch: RevealLatch, units: list[RevealUnit]) -> None:
        self.latch = latch
        self.units = units

    @property
    def visible(self) -> bool:
        return self.latch.visible

    def mount(self, target: Any | None) -> None:
        self.latch.mount(target)

    def dispose(self) -> None:
        self.latch.dispose()

    def styles(self) -> list[RevealStyle]:
        """Target style of every unit; the renderer owns the transition."""
        style = self.visible_style if self.visible else self.hidden_style
        return [style for _ in self.units]

    def style_at(self, now: float) -> list[RevealStyle]:
        """Interpolated style of every unit at ``now`` (ms, scheduler clock)."""
        since = self.latch.state.visible_since
        if since is None:
            return [self.hidden_style for _ in self.units]
        elapsed = (now - since) / 1000.0
        return [
            self.hidden_style.blend(
                self.visible_style,
                unit.easing(progress(elapsed, unit.delay, unit.duration)),
            )
            for unit in self.units
        ]


class BlurText(_RevealController):
    """Per-word staggered blur reveal."""

    hidden_style = RevealStyle(opacity=0.0, translate_y=8.0, blur_px=8.0)
    visible_style = RevealStyle(opacity=1.0, translate_y=0.0, blur_px=0.0)

    def __init__(
        self,
        text: str,
        source: ViewportSource,
        scheduler: Scheduler,
        settings: RevealSettings | None = None,
        delay: float = 0.0,
    ) -> None:
        settings = settings or RevealSettings()
        latch = RevealLatch(source, scheduler, threshold=settings.threshold, delay=delay)
        units = [
            RevealUnit(
                index=i,
                content=word,
                delay=delay + i * settings.word_stagger_s,
                duration=settings.blur_duration_s,
                easing=STANDARD,
            )
            for i, word in enumerate(text.split())
        ]
        super().__init__(latch, units)
        self.text = text

    @property
    def words(self) -> list[str]:
        return [unit.content for unit in self.units]


class FadeIn(_RevealController):
    """Single-block fade and rise, triggered slightly inside the viewport."""

    hidden_style = RevealStyle(opacity=0.0, translate_y=12.0)
    visible_style = RevealStyle(opacity=1.0, translate_y=0.0)

    def __init__(
        self,
        source: ViewportSource,
        scheduler: Scheduler,
        settings: RevealSettings | None = None,
        delay: float = 0.0,
    ) -> None:
        settings = settings or RevealSettings()
        latch = RevealLatch(
            source,
            scheduler,
            threshold=settings.threshold,
            margin=Margin(bottom=settings.fade_bottom_margin),
            delay=delay,
        )
        unit = RevealUnit(index=0, content="", delay=delay, duration=settings.fade_duration_s, easing=EASE)
        super().__init__(latch, [unit])
