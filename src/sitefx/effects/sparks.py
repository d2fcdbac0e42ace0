"""Click-spawned spark particles."""

from __future__ import annotations

import itertools
import random

from sitefx.config import SparkSettings
from sitefx.core.events import EventBus
from sitefx.core.scheduler import Scheduler, TimerHandle
from sitefx.core.state import Particle
from sitefx.logging import get_logger


class SparkField:
    """Arena of live particles for one clickable element.

    Each click spawns a batch with a fresh monotonic ``batch_id``. Expiry
    timers only record which batches are due; the sweep then drops every
    particle whose ``batch_id`` is in that set, so a batch never removes
    members of another, even when particle ids collide.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        settings: SparkSettings | None = None,
        events: EventBus | None = None,
        rng: random.Random | None = None,
        color: str | None = None,
    ) -> None:
        self.scheduler = scheduler
        self.settings = settings or SparkSettings()
        self.events = events
        self.color = color or self.settings.color
        self.logger = get_logger("sparks")
        self._rng = rng or random.Random()
        self._batch_ids = itertools.count(1)
        self._particles: list[Particle] = []
        self._expired: set[int] = set()
        self._timers: dict[int, TimerHandle] = {}
        self.disposed = False

    @property
    def particles(self) -> list[Particle]:
        return list(self._particles)

    @property
    def live_batches(self) -> set[int]:
        return {p.batch_id for p in self._particles}

    def spawn(self, x: float, y: float, count: int | None = None) -> list[Particle]:
        if self.disposed:
            return []
        count = self.settings.count if count is None else count
        if count < 1:
            raise ValueError("spark count must be positive")
        now = self.scheduler.now()
        batch_id = next(self._batch_ids)
        expires_at = now + self.settings.lifetime_ms
        step = 360.0 / count
        batch = [
            Particle(
                id=f"{int(now)}-{i}",
                batch_id=batch_id,
                origin_x=x,
                origin_y=y,
                angle=i * step,
                velocity=self._rng.uniform(self.settings.velocity_min, self.settings.velocity_max),
                spawn_time=now,
                expires_at=expires_at,
            )
            for i in range(count)
        ]
        self._particles.extend(batch)
        self._timers[batch_id] = self.scheduler.call_later(
            self.settings.lifetime_ms, lambda: self._expire(batch_id)
        )
        self.logger.debug("Spawned batch {} with {} sparks at ({}, {})", batch_id, count, x, y)
        if self.events:
            self.events.emit("sparks.spawned", batch)
        return batch

    def _expire(self, batch_id: int) -> None:
        if self.disposed:
            return
        self._timers.pop(batch_id, None)
        self._expired.add(batch_id)
        self.sweep()

    def sweep(self) -> int:
        """Drop particles of expired batches; returns how many were removed."""
        if not self._expired:
            return 0
        expired = self._expired
        before = len(self._particles)
        self._particles = [p for p in self._particles if p.batch_id not in expired]
        removed = before - len(self._particles)
        self.logger.debug("Swept batches {} ({} sparks)", sorted(expired), removed)
        if self.events:
            self.events.emit("sparks.expired", sorted(expired))
        self._expired = set()
        return removed

    def dispose(self) -> None:
        if self.disposed:
            return
        self.disposed = True
        for handle in self._timers.values():
            handle.cancel()
        self._timers.clear()
        self._particles.clear()
