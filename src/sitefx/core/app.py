"""sitefx composition root."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from sitefx.config import SiteFxSettings
from sitefx.core.events import EventBus
from sitefx.core.scheduler import Scheduler
from sitefx.core.state import RuntimeState
from sitefx.effects.magnet import MagnetEffect
from sitefx.effects.reveal import BlurText, FadeIn
from sitefx.effects.sparks import SparkField
from sitefx.effects.theme import OverlaySurface, ThemeTransitionController
from sitefx.logging import get_logger
from sitefx.services.document import DocumentAttributes
from sitefx.services.preferences import JsonPreferenceStore, PreferenceStore
from sitefx.services.viewport import ViewportSource


class _Disposable(Protocol):
    def dispose(self) -> None:
        ...


@dataclass(slots=True)
class SiteFxContext:
    settings: SiteFxSettings
    events: EventBus
    state: RuntimeState
    scheduler: Scheduler
    viewport: ViewportSource
    theme: ThemeTransitionController
    _owned: list[_Disposable] = field(default_factory=list)

    def start(self) -> None:
        self.theme.initialize()

    def stop(self) -> None:
        for item in reversed(self._owned):
            item.dispose()
        self._owned.clear()
        self.theme.dispose()

    def blur_text(self, text: str, delay: float = 0.0) -> BlurText:
        reveal = BlurText(text, self.viewport, self.scheduler, self.settings.reveal, delay=delay)
        self._owned.append(reveal)
        return reveal

    def fade_in(self, delay: float = 0.0) -> FadeIn:
        reveal = FadeIn(self.viewport, self.scheduler, self.settings.reveal, delay=delay)
        self._owned.append(reveal)
        return reveal

    def magnet(self, strength: float | None = None) -> MagnetEffect:
        return MagnetEffect(self.settings.magnet, strength=strength)

    def sparks(self, color: str | None = None) -> SparkField:
        field_ = SparkField(self.scheduler, self.settings.sparks, self.events, color=color)
        self._owned.append(field_)
        return field_


def build_context(
    settings: SiteFxSettings,
    scheduler: Scheduler,
    viewport: ViewportSource,
    document: DocumentAttributes,
    store: PreferenceStore | None = None,
    surface: OverlaySurface | None = None,
) -> SiteFxContext:
    events = EventBus()
    state = RuntimeState()
    store = store or JsonPreferenceStore(settings.paths.preferences_file)
    theme = ThemeTransitionController(
        settings.theme,
        scheduler,
        store,
        document,
        events=events,
        surface=surface,
        state=state,
    )

    logger = get_logger("bootstrap")
    logger.info("sitefx context ready")

    return SiteFxContext(
        settings=settings,
        events=events,
        state=state,
        scheduler=scheduler,
        viewport=viewport,
        theme=theme,
    )
