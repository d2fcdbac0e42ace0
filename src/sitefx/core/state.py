"""Runtime state containers."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from sitefx.utils.easing import EASE_OUT, lerp, progress


@dataclass(frozen=True, slots=True)
class Rect:
    left: float
    top: float
    width: float
    height: float

    @property
    def center(self) -> tuple[float, float]:
        return self.left + self.width / 2, self.top + self.height / 2

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.left + self.width and self.top <= y <= self.top + self.height


@dataclass(frozen=True, slots=True)
class Size:
    width: float
    height: float


class Theme(str, Enum):
    DARK = "dark"
    LIGHT = "light"

    @property
    def flipped(self) -> Theme:
        return Theme.LIGHT if self is Theme.DARK else Theme.DARK

    @classmethod
    def parse(cls, value: str | None, default: Theme) -> Theme:
        if value is None:
            return default
        try:
            return cls(value.strip().lower())
        except ValueError:
            return default


@dataclass(slots=True)
class VisibilityState:
    """Monotonic reveal flag plus the stagger delay of its owner."""

    delay: float = 0.0
    visible: bool = False
    visible_since: float | None = None

    def mark_visible(self, now: float) -> bool:
        if self.visible:
            return False
        self.visible = True
        self.visible_since = now
        return True


@dataclass(frozen=True, slots=True)
class PointerOffset:
    x: float = 0.0
    y: float = 0.0

    @property
    def is_origin(self) -> bool:
        return self.x == 0 and self.y == 0


ORIGIN = PointerOffset()


@dataclass(frozen=True, slots=True)
class Particle:
    id: str
    batch_id: int
    origin_x: float
    origin_y: float
    angle: float
    velocity: float
    spawn_time: float
    expires_at: float

    @property
    def lifetime(self) -> float:
        return self.expires_at - self.spawn_time

    def _eased(self, now: float) -> float:
        return EASE_OUT(progress(now, self.spawn_time, self.lifetime))

    def position_at(self, now: float) -> tuple[float, float]:
        k = self._eased(now)
        rad = math.radians(self.angle)
        return (
            self.origin_x + math.cos(rad) * self.velocity * k,
            self.origin_y + math.sin(rad) * self.velocity * k,
        )

    def scale_at(self, now: float) -> float:
        return lerp(1.0, 0.0, self._eased(now))

    def opacity_at(self, now: float) -> float:
        return lerp(1.0, 0.0, self._eased(now))


@dataclass(frozen=True, slots=True)
class TransitionOverlay:
    center_x: float
    center_y: float
    max_radius: float
    target_color: str
    target_theme: Theme
    started_at: float
    duration_ms: float

    def radius_at(self, now: float) -> float:
        return self.max_radius * EASE_OUT(progress(now, self.started_at, self.duration_ms))


@dataclass(slots=True)
class RuntimeFlags:
    transition_active: bool = False
    pulling: bool = False


@dataclass(slots=True)
class RuntimeState:
    flags: RuntimeFlags = field(default_factory=RuntimeFlags)
    theme: Theme = Theme.DARK
