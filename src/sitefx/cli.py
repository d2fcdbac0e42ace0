"""Typer CLI for sitefx."""

from __future__ import annotations

import json
import platform

import typer

from sitefx.config import load_settings
from sitefx.core.scheduler import ManualScheduler
from sitefx.core.state import Rect, Size, Theme
from sitefx.effects.sparks import SparkField
from sitefx.effects.theme import ThemeTransitionController
from sitefx.logging import configure_logging
from sitefx.services.document import InMemoryDocument
from sitefx.services.preferences import JsonPreferenceStore

app = typer.Typer(no_args_is_help=True)


@app.command()
def run() -> None:
    """Launch the demo page."""

    from sitefx.main import main as launch

    launch()


@app.command()
def doctor() -> None:
    """Print environment diagnostics."""

    settings = load_settings()
    configure_logging(settings)
    info = {
        "python": platform.python_version(),
        "platform": platform.platform(),
        "paths": {
            "home": str(settings.paths.base_dir),
            "logs": str(settings.paths.logs_dir),
            "preferences": str(settings.paths.preferences_file),
        },
    }
    typer.echo(json.dumps(info, indent=2))


@app.command()
def settings(key: str | None = typer.Argument(None)) -> None:
    """Display current settings or a specific section."""

    data = load_settings().model_dump()
    if key:
        data = data.get(key, {})
    typer.echo(json.dumps(data, indent=2, default=str))


@app.command()
def theme(
    toggle: bool = typer.Option(False, "--toggle", help="Run one full wipe and persist the result."),
    width: int = typer.Option(1000, help="Viewport width for the wipe."),
    height: int = typer.Option(800, help="Viewport height for the wipe."),
) -> None:
    """Show (or flip) the persisted theme preference."""

    cfg = load_settings()
    configure_logging(cfg, level="WARNING")
    scheduler = ManualScheduler()
    controller = ThemeTransitionController(
        cfg.theme,
        scheduler,
        JsonPreferenceStore(cfg.paths.preferences_file),
        InMemoryDocument(),
    )
    current: Theme = controller.initialize()
    result = {"theme": current.value}
    if toggle:
        controller.toggle(Rect(0, 0, 40, 40), Size(width, height))
        radius = controller.overlay.max_radius if controller.overlay else 0.0
        scheduler.run_all()
        result = {"from": current.value, "theme": controller.theme.value, "radius": round(radius, 1)}
    typer.echo(json.dumps(result))


@app.command("simulate-sparks")
def simulate_sparks(
    count: int | None = typer.Option(None, help="Sparks per click (defaults to settings)."),
    gap_ms: int = typer.Option(200, help="Delay between the two clicks."),
) -> None:
    """Replay two overlapping clicks and print live particle counts."""

    cfg = load_settings()
    configure_logging(cfg, level="WARNING")
    scheduler = ManualScheduler()
    field = SparkField(scheduler, cfg.sparks)
    lifetime = cfg.sparks.lifetime_ms
    field.spawn(0, 0, count)
    scheduler.advance(gap_ms)
    field.spawn(10, 10, count)
    checkpoints = sorted({gap_ms + 50, lifetime + 50, gap_ms + lifetime + 50})
    samples = []
    for at in checkpoints:
        scheduler.advance_to(at)
        samples.append({"t_ms": at, "live": len(field.particles), "batches": sorted(field.live_batches)})
    typer.echo(json.dumps(samples, indent=2))
