"""Viewport-intersection signal source."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from sitefx.core.state import Rect


@dataclass(frozen=True, slots=True)
class IntersectionEntry:
    is_intersecting: bool
    ratio: float


@dataclass(frozen=True, slots=True)
class Margin:
    """Root margin in px; negative values shrink the observed viewport."""

    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0


IntersectionCallback = Callable[[IntersectionEntry], None]


def intersection_entry(box: Rect, root: Rect, margin: Margin) -> IntersectionEntry:
    """Share of ``box`` inside ``root`` after growing the root by ``margin``.

    A bottom margin of -40 moves the root's bottom edge 40px up, so an element
    only starts intersecting once it is more than 40px past the viewport edge.
    """
    area = box.width * box.height
    if area <= 0:
        return IntersectionEntry(is_intersecting=False, ratio=0.0)
    left = root.left - margin.left
    top = root.top - margin.top
    right = root.left + root.width + margin.right
    bottom = root.top + root.height + margin.bottom
    width = min(box.left + box.width, right) - max(box.left, left)
    height = min(box.top + box.height, bottom) - max(box.top, top)
    if width <= 0 or height <= 0:
        return IntersectionEntry(is_intersecting=False, ratio=0.0)
    return IntersectionEntry(is_intersecting=True, ratio=min(1.0, width * height / area))


class Subscription(Protocol):
    def disconnect(self) -> None:
        ...


class ViewportSource(Protocol):
    def observe(
        self,
        target: Any,
        threshold: float,
        margin: Margin,
        callback: IntersectionCallback,
    ) -> Subscription:
        ...


class ManualSubscription:
    def __init__(
        self,
        source: ManualViewportSource,
        target: Any,
        margin: Margin,
        callback: IntersectionCallback,
    ) -> None:
        self.source = source
        self.target = target
        self.margin = margin
        self.callback = callback
        self.active = True

    def disconnect(self) -> None:
        if self.active:
            self.active = False
            self.source._subscriptions.remove(self)


class ManualViewportSource:
    """Viewport source whose intersection changes are pushed by the caller."""

    def __init__(self) -> None:
        self._subscriptions: list[ManualSubscription] = []

    def observe(
        self,
        target: Any,
        threshold: float,
        margin: Margin,
        callback: IntersectionCallback,
    ) -> ManualSubscription:
        subscription = ManualSubscription(self, target, margin, callback)
        self._subscriptions.append(subscription)
        return subscription

    def observed(self, target: Any) -> bool:
        return any(sub.target is target for sub in self._subscriptions)

    @property
    def active_count(self) -> int:
        return len(self._subscriptions)

    def signal(self, target: Any, is_intersecting: bool, ratio: float | None = None) -> None:
        if ratio is None:
            ratio = 1.0 if is_intersecting else 0.0
        entry = IntersectionEntry(is_intersecting=is_intersecting, ratio=ratio)
        for sub in [s for s in self._subscriptions if s.target is target]:
            if sub.active:
                sub.callback(entry)

    def place(self, target: Any, box: Rect, root: Rect) -> None:
        """Deliver the intersection of ``box`` with ``root`` under each subscriber's margin."""
        for sub in [s for s in self._subscriptions if s.target is target]:
            if sub.active:
                sub.callback(intersection_entry(box, root, sub.margin))
