from sitefx.config import SiteFxSettings
from sitefx.core.app import build_context
from sitefx.core.scheduler import ManualScheduler
from sitefx.core.state import Rect, Size, Theme
from sitefx.services.document import InMemoryDocument
from sitefx.services.preferences import JsonPreferenceStore
from sitefx.services.viewport import ManualViewportSource


def make_context(tmp_path):
    settings = SiteFxSettings()
    settings.paths.base_dir = tmp_path
    scheduler = ManualScheduler()
    viewport = ManualViewportSource()
    document = InMemoryDocument()
    ctx = build_context(settings, scheduler, viewport, document)
    return ctx, scheduler, viewport, document


def test_context_persists_theme_to_data_dir(tmp_path):
    ctx, scheduler, _, document = make_context(tmp_path)
    ctx.start()
    assert document.get_attribute("data-theme") == "dark"
    ctx.theme.toggle(Rect(0, 0, 40, 40), Size(1000, 800))
    scheduler.advance(300)
    assert ctx.state.theme is Theme.LIGHT
    store = JsonPreferenceStore(tmp_path / "data" / "preferences.json")
    assert store.get("theme") == "light"


def test_stop_disposes_owned_effects(tmp_path):
    ctx, scheduler, viewport, _ = make_context(tmp_path)
    ctx.start()
    heading = ctx.fade_in()
    heading.mount("heading")
    sparks = ctx.sparks(color="#333")
    sparks.spawn(1, 1)
    ctx.theme.toggle(Rect(0, 0, 40, 40), Size(1000, 800))
    ctx.stop()
    assert viewport.active_count == 0
    assert sparks.disposed
    scheduler.advance(1_000)
    assert ctx.state.theme is Theme.DARK
    assert not ctx.state.flags.transition_active


def test_context_factories_use_settings(tmp_path):
    ctx, *_ = make_context(tmp_path)
    ctx.settings.magnet.strength = 0.3
    assert ctx.magnet().strength == 0.3
    assert ctx.sparks().color == "#3b82f6"
    assert ctx.blur_text("a b c", delay=0.1).units[2].delay == 0.1 + 2 * 0.08
