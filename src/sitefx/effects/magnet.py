"""Pointer-proportional magnet transform."""

from __future__ import annotations

from sitefx.config import MagnetSettings
from sitefx.core.state import ORIGIN, PointerOffset, Rect


class MagnetEffect:
    """Pulls a wrapped element toward the pointer by ``strength`` of the distance.

    Stateless apart from the last computed offset; no timers.
    """

    def __init__(self, settings: MagnetSettings | None = None, strength: float | None = None) -> None:
        self.settings = settings or MagnetSettings()
        self.strength = self.settings.strength if strength is None else strength
        self.bounds: Rect | None = None
        self.offset: PointerOffset = ORIGIN

    def bind(self, bounds: Rect | None) -> None:
        self.bounds = bounds

    def on_pointer_move(self, x: float, y: float) -> PointerOffset | None:
        if self.bounds is None:
            return None
        cx, cy = self.bounds.center
        self.offset = PointerOffset((x - cx) * self.strength, (y - cy) * self.strength)
        return self.offset

    def on_pointer_leave(self) -> PointerOffset:
        self.offset = ORIGIN
        return self.offset

    @property
    def transition_s(self) -> float:
        if self.offset.is_origin:
            return self.settings.return_duration_s
        return self.settings.move_duration_s
