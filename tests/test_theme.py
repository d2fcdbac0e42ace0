import math

import pytest

from sitefx.config import ThemeSettings
from sitefx.core.events import EventBus
from sitefx.core.scheduler import ManualScheduler
from sitefx.core.state import Rect, Size, Theme
from sitefx.effects.theme import ThemeTransitionController, TransitionPhase, wipe_radius
from sitefx.services.document import InMemoryDocument
from sitefx.services.preferences import MemoryPreferenceStore

VIEWPORT = Size(1000, 800)
ANCHOR = Rect(0, 0, 40, 40)  # centered on (20, 20)


class RecordingSurface:
    def __init__(self):
        self.live = []
        self.max_live = 0

    def show(self, overlay):
        self.live.append(overlay)
        self.max_live = max(self.max_live, len(self.live))

    def release(self, overlay):
        self.live.remove(overlay)


def make_controller(initial=None, **overrides):
    scheduler = ManualScheduler()
    store = MemoryPreferenceStore(initial)
    document = InMemoryDocument()
    surface = RecordingSurface()
    events = EventBus()
    controller = ThemeTransitionController(
        ThemeSettings(**overrides), scheduler, store, document, events=events, surface=surface
    )
    return controller, scheduler, store, document, surface, events


def test_default_is_dark_when_absent():
    controller, _, store, document, surface, _ = make_controller()
    assert controller.initialize() is Theme.DARK
    assert document.get_attribute("data-theme") == "dark"
    assert store.writes == 0
    assert surface.live == []


def test_startup_restore_light():
    controller, *_ = make_controller({"theme": "light"})
    controller.initialize()
    assert controller.theme is Theme.LIGHT
    assert controller.overlay is None
    assert controller.phase is TransitionPhase.IDLE


def test_unrecognized_value_falls_back_to_dark():
    controller, *_ = make_controller({"theme": "sepia"})
    assert controller.initialize() is Theme.DARK


def test_initialize_reads_once():
    controller, _, store, *_ = make_controller({"theme": "light"})
    controller.initialize()
    store.values["theme"] = "dark"
    assert controller.initialize() is Theme.LIGHT


def test_wipe_radius_reaches_farthest_corner():
    assert wipe_radius(20, 20, VIEWPORT) == pytest.approx(math.sqrt(980**2 + 780**2))
    assert wipe_radius(20, 20, VIEWPORT) == pytest.approx(1252.6, abs=0.1)
    assert wipe_radius(500, 400, VIEWPORT) == pytest.approx(math.hypot(500, 400))


def test_toggle_sequence():
    controller, scheduler, store, document, surface, _ = make_controller()
    controller.initialize()
    assert controller.toggle(ANCHOR, VIEWPORT)

    assert controller.phase is TransitionPhase.EXPANDING
    overlay = controller.overlay
    assert (overlay.center_x, overlay.center_y) == (20, 20)
    assert overlay.max_radius == pytest.approx(1252.6, abs=0.1)
    assert overlay.target_color == "#fafafa"
    assert overlay.target_theme is Theme.LIGHT
    assert surface.live == [overlay]
    assert controller.theme is Theme.DARK

    scheduler.advance(150)
    assert 0 < overlay.radius_at(scheduler.now()) < overlay.max_radius
    assert store.writes == 0

    scheduler.advance(150)
    assert controller.phase is TransitionPhase.IDLE
    assert controller.theme is Theme.LIGHT
    assert store.values["theme"] == "light"
    assert document.get_attribute("data-theme") == "light"
    assert controller.overlay is None
    assert surface.live == []


def test_commit_order():
    controller, scheduler, store, document, surface, events = make_controller()
    controller.initialize()
    order = []
    events.subscribe("theme.overlay.removed", lambda _o: order.append(("removed", store.values.get("theme"))))
    events.subscribe("theme.committed", lambda t: order.append(("committed", t.value)))
    controller.toggle(ANCHOR, VIEWPORT)
    scheduler.advance(300)
    assert order == [("removed", "light"), ("committed", "light")]
    assert document.history[-1] == ("data-theme", "light")


def test_round_trip_restores_preference():
    controller, scheduler, store, *_ = make_controller({"theme": "light"})
    controller.initialize()
    controller.toggle(ANCHOR, VIEWPORT)
    scheduler.advance(300)
    controller.toggle(ANCHOR, VIEWPORT)
    scheduler.advance(300)
    assert store.values["theme"] == "light"
    assert controller.theme is Theme.LIGHT
    assert store.writes == 2


def test_pull_substate_overlaps_and_expires():
    controller, scheduler, *_ = make_controller()
    controller.initialize()
    controller.toggle(ANCHOR, VIEWPORT)
    assert controller.pulling
    scheduler.advance(300)
    assert controller.phase is TransitionPhase.IDLE
    assert controller.pulling
    scheduler.advance(200)
    assert not controller.pulling


def test_reentrant_toggle_ignored_by_default():
    controller, scheduler, store, _, surface, _ = make_controller()
    controller.initialize()
    assert controller.toggle(ANCHOR, VIEWPORT)
    scheduler.advance(100)
    assert not controller.toggle(ANCHOR, VIEWPORT)
    scheduler.advance(1_000)
    assert surface.max_live == 1
    assert store.writes == 1
    assert controller.theme is Theme.LIGHT


def test_queue_policy_replays_one_toggle():
    controller, scheduler, store, _, surface, _ = make_controller(reentry_policy="queue")
    controller.initialize()
    assert controller.toggle(ANCHOR, VIEWPORT)
    assert controller.toggle(ANCHOR, VIEWPORT)
    assert not controller.toggle(ANCHOR, VIEWPORT)
    assert controller.has_pending

    scheduler.advance(300)
    assert controller.theme is Theme.LIGHT
    assert controller.phase is TransitionPhase.EXPANDING
    assert not controller.has_pending

    scheduler.advance(300)
    assert controller.theme is Theme.DARK
    assert store.writes == 2
    assert surface.max_live == 1


def test_dispose_before_commit_leaves_store_untouched():
    controller, scheduler, store, document, surface, _ = make_controller()
    controller.initialize()
    controller.toggle(ANCHOR, VIEWPORT)
    controller.dispose()
    scheduler.advance(1_000)
    assert store.writes == 0
    assert document.get_attribute("data-theme") == "dark"
    assert surface.live == []
    assert not controller.toggle(ANCHOR, VIEWPORT)


def test_custom_backgrounds():
    controller, scheduler, *_ = make_controller({"theme": "light"}, dark_background="#111111")
    controller.initialize()
    controller.toggle(ANCHOR, VIEWPORT)
    assert controller.overlay.target_color == "#111111"


def test_toggle_before_initialize_loads_stored_preference():
    controller, scheduler, store, document, _, _ = make_controller({"theme": "light"})
    assert controller.toggle(ANCHOR, VIEWPORT)
    assert controller.overlay.target_theme is Theme.DARK
    scheduler.advance(300)
    assert store.values["theme"] == "dark"
    assert document.get_attribute("data-theme") == "dark"
    assert store.writes == 1
