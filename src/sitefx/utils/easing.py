"""CSS-compatible timing functions."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CubicBezier:
    """``cubic-bezier(x1, y1, x2, y2)`` with fixed end points (0,0) and (1,1)."""

    x1: float
    y1: float
    x2: float
    y2: float

    def _sample(self, a1: float, a2: float, t: float) -> float:
        # Bernstein form with P0 = 0 and P3 = 1
        u = 1.0 - t
        return 3 * u * u * t * a1 + 3 * u * t * t * a2 + t * t * t

    def _slope_x(self, t: float) -> float:
        u = 1.0 - t
        return 3 * u * u * self.x1 + 6 * u * t * (self.x2 - self.x1) + 3 * t * t * (1.0 - self.x2)

    def _solve_t(self, x: float) -> float:
        t = x
        for _ in range(8):
            err = self._sample(self.x1, self.x2, t) - x
            if abs(err) < 1e-6:
                return t
            slope = self._slope_x(t)
            if abs(slope) < 1e-6:
                break
            t -= err / slope
        lo, hi = 0.0, 1.0
        t = x
        while hi - lo > 1e-7:
            value = self._sample(self.x1, self.x2, t)
            if abs(value - x) < 1e-7:
                break
            if value < x:
                lo = t
            else:
                hi = t
            t = (lo + hi) / 2
        return t

    def __call__(self, progress: float) -> float:
        if progress <= 0.0:
            return 0.0
        if progress >= 1.0:
            return 1.0
        return self._sample(self.y1, self.y2, self._solve_t(progress))


LINEAR = CubicBezier(0.0, 0.0, 1.0, 1.0)
EASE = CubicBezier(0.25, 0.1, 0.25, 1.0)
EASE_OUT = CubicBezier(0.0, 0.0, 0.58, 1.0)
STANDARD = CubicBezier(0.4, 0.0, 0.2, 1.0)


def progress(elapsed: float, delay: float, duration: float) -> float:
    """Linear 0..1 progress of a delayed transition."""
    if duration <= 0:
        return 1.0 if elapsed >= delay else 0.0
    return min(1.0, max(0.0, (elapsed - delay) / duration))


def lerp(start: float, end: float, amount: float) -> float:
    return start + (end - start) * amount
