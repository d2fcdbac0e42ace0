"""Timer scheduling for the cooperative UI loop.

Every fixed-duration step in sitefx (spark expiry, theme wipe, chain pull)
is a one-shot callback registered here. The core only ever sees the
``Scheduler`` protocol; the Qt shell plugs in ``QtScheduler`` and tests
drive ``ManualScheduler`` by hand.
"""

from __future__ import annotations

import heapq
import itertools
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

TimerCallback = Callable[[], None]


@dataclass(slots=True)
class TimerHandle:
    due: float
    callback: TimerCallback
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


class Scheduler(Protocol):
    def now(self) -> float:
        """Milliseconds on a monotonic clock."""

    def call_later(self, delay_ms: float, callback: TimerCallback) -> TimerHandle:
        ...


@dataclass(order=True, slots=True)
class _Entry:
    due: float
    seq: int
    handle: TimerHandle = field(compare=False)


class ManualScheduler:
    """Virtual clock advanced explicitly.

    Callbacks fire in due order; ties fire in registration order. A callback
    scheduled during ``advance`` fires in the same call if its due time is
    still within the advanced window.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._queue: list[_Entry] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay_ms: float, callback: TimerCallback) -> TimerHandle:
        handle = TimerHandle(due=self._now + max(0.0, delay_ms), callback=callback)
        heapq.heappush(self._queue, _Entry(handle.due, next(self._seq), handle))
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for entry in self._queue if not entry.handle.cancelled)

    def advance(self, ms: float) -> None:
        if ms < 0:
            raise ValueError("cannot advance a clock backwards")
        target = self._now + ms
        while self._queue and self._queue[0].due <= target:
            entry = heapq.heappop(self._queue)
            self._now = entry.due
            if not entry.handle.cancelled:
                entry.handle.callback()
        self._now = target

    def advance_to(self, timestamp: float) -> None:
        self.advance(timestamp - self._now)

    def run_all(self) -> None:
        """Drain every pending timer, including ones scheduled while draining."""
        while self._queue:
            self.advance_to(max(self._now, self._queue[0].due))
