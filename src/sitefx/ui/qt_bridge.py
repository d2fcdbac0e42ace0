"""Qt implementations of the core's collaborators."""

from __future__ import annotations

from collections.abc import Callable

from PySide6 import QtCore, QtWidgets

from sitefx.core.scheduler import TimerCallback, TimerHandle
from sitefx.core.state import Rect
from sitefx.services.viewport import (
    IntersectionCallback,
    IntersectionEntry,
    Margin,
    intersection_entry,
)


class QtScheduler:
    """Scheduler on the Qt event loop; ``now`` is ms since construction."""

    def __init__(self) -> None:
        self._clock = QtCore.QElapsedTimer()
        self._clock.start()

    def now(self) -> float:
        return self._clock.nsecsElapsed() / 1_000_000

    def call_later(self, delay_ms: float, callback: TimerCallback) -> TimerHandle:
        handle = TimerHandle(due=self.now() + delay_ms, callback=callback)

        def _fire() -> None:
            if not handle.cancelled:
                handle.callback()

        QtCore.QTimer.singleShot(max(0, round(delay_ms)), _fire)
        return handle


class _QtSubscription:
    def __init__(
        self,
        source: QtViewportSource,
        target: QtWidgets.QWidget,
        threshold: float,
        margin: Margin,
        callback: IntersectionCallback,
    ) -> None:
        self.source = source
        self.target = target
        self.threshold = threshold
        self.margin = margin
        self.callback = callback
        self.last: bool | None = None

    def disconnect(self) -> None:
        if self in self.source._subscriptions:
            self.source._subscriptions.remove(self)


class QtViewportSource(QtCore.QObject):
    """Intersection signals for widgets inside a ``QScrollArea``.

    Like a browser intersection observer, callbacks fire once on observe
    and then whenever the threshold is crossed in either direction.
    """

    def __init__(self, area: QtWidgets.QScrollArea) -> None:
        super().__init__(area)
        self.area = area
        self._subscriptions: list[_QtSubscription] = []
        area.verticalScrollBar().valueChanged.connect(self.refresh)
        area.horizontalScrollBar().valueChanged.connect(self.refresh)
        area.viewport().installEventFilter(self)

    def observe(
        self,
        target: QtWidgets.QWidget,
        threshold: float,
        margin: Margin,
        callback: IntersectionCallback,
    ) -> _QtSubscription:
        sub = _QtSubscription(self, target, threshold, margin, callback)
        self._subscriptions.append(sub)
        QtCore.QTimer.singleShot(0, self.refresh)
        return sub

    def eventFilter(self, obj: QtCore.QObject, event: QtCore.QEvent) -> bool:  # noqa: N802
        if event.type() in (QtCore.QEvent.Type.Resize, QtCore.QEvent.Type.Show):
            QtCore.QTimer.singleShot(0, self.refresh)
        return False

    def _entry_for(self, sub: _QtSubscription) -> IntersectionEntry:
        if not sub.target.isVisible():
            return IntersectionEntry(is_intersecting=False, ratio=0.0)
        viewport = self.area.viewport()
        top_left = sub.target.mapTo(viewport, QtCore.QPoint(0, 0))
        box = Rect(top_left.x(), top_left.y(), sub.target.width(), sub.target.height())
        root = Rect(0, 0, viewport.width(), viewport.height())
        return intersection_entry(box, root, sub.margin)

    @QtCore.Slot()
    def refresh(self) -> None:
        for sub in list(self._subscriptions):
            entry = self._entry_for(sub)
            crossed = entry.is_intersecting and entry.ratio >= sub.threshold
            if crossed != sub.last:
                sub.last = crossed
                sub.callback(entry)


class QtDocument:
    """Mirrors the theme attribute onto a window property and its stylesheet."""

    def __init__(self, window: QtWidgets.QWidget, stylesheet_for: Callable[[str], str]) -> None:
        self.window = window
        self.stylesheet_for = stylesheet_for
        self.attributes: dict[str, str] = {}

    def set_attribute(self, name: str, value: str) -> None:
        self.attributes[name] = value
        self.window.setProperty(name, value)
        self.window.setStyleSheet(self.stylesheet_for(value))
