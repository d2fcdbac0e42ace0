"""Application configuration models and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal, get_args

from dotenv import load_dotenv
from pydantic import BaseModel, Field


LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR"]


class AppPaths(BaseModel):
    """Resolved directories for sitefx runtime files."""

    base_dir: Path = Field(
        default_factory=lambda: Path(os.getenv("SITEFX_HOME", Path.home() / ".sitefx"))
    )

    @property
    def logs_dir(self) -> Path:
        return self.base_dir / "logs"

    @property
    def data_dir(self) -> Path:
        return self.base_dir / "data"

    @property
    def preferences_file(self) -> Path:
        return self.data_dir / "preferences.json"

    def ensure(self) -> None:
        for path in (self.base_dir, self.logs_dir, self.data_dir):
            path.mkdir(parents=True, exist_ok=True)


class RevealSettings(BaseModel):
    threshold: float = Field(default=0.1, ge=0.0, le=1.0)
    fade_bottom_margin: int = -40
    word_stagger_s: float = Field(default=0.08, ge=0.0)
    blur_duration_s: float = Field(default=0.6, gt=0.0)
    fade_duration_s: float = Field(default=0.5, gt=0.0)


class MagnetSettings(BaseModel):
    strength: float = Field(default=0.15, ge=0.0, le=1.0)
    move_duration_s: float = Field(default=0.1, gt=0.0)
    return_duration_s: float = Field(default=0.4, gt=0.0)


class SparkSettings(BaseModel):
    count: int = Field(default=6, ge=1, le=64)
    color: str = "#3b82f6"
    lifetime_ms: int = Field(default=500, ge=1)
    velocity_min: float = Field(default=30.0, ge=0.0)
    velocity_max: float = Field(default=60.0, ge=0.0)
    size_px: float = Field(default=4.0, gt=0.0)


class ThemeSettings(BaseModel):
    default: Literal["light", "dark"] = "dark"
    storage_key: str = "theme"
    attribute: str = "data-theme"
    wipe_ms: int = Field(default=300, ge=1)
    pull_ms: int = Field(default=500, ge=1)
    dark_background: str = "#0a0a0a"
    light_background: str = "#fafafa"
    reentry_policy: Literal["ignore", "queue"] = "ignore"


class SiteFxSettings(BaseModel):
    app_name: str = "sitefx"
    log_level: LogLevel = "INFO"
    paths: AppPaths = Field(default_factory=AppPaths)
    reveal: RevealSettings = Field(default_factory=RevealSettings)
    magnet: MagnetSettings = Field(default_factory=MagnetSettings)
    sparks: SparkSettings = Field(default_factory=SparkSettings)
    theme: ThemeSettings = Field(default_factory=ThemeSettings)


def _maybe_float(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _maybe_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def load_settings(env_path: Path | None = None) -> SiteFxSettings:
    """Load user settings from environment variables and defaults."""

    env_file = env_path or Path('.env')
    if env_file.exists():
        load_dotenv(env_file)

    overrides: dict[str, Any] = {}

    if theme := os.getenv('SITEFX_THEME_DEFAULT'):
        overrides.setdefault('theme', {})['default'] = theme.lower()

    if policy := os.getenv('SITEFX_THEME_POLICY'):
        overrides.setdefault('theme', {})['reentry_policy'] = policy.lower()

    if (count := _maybe_int(os.getenv('SITEFX_SPARK_COUNT'))) is not None:
        overrides.setdefault('sparks', {})['count'] = count

    if color := os.getenv('SITEFX_SPARK_COLOR'):
        overrides.setdefault('sparks', {})['color'] = color

    level = (os.getenv('SITEFX_LOG_LEVEL') or '').upper()
    if level in get_args(LogLevel):
        overrides['log_level'] = level

    if (strength := _maybe_float(os.getenv('SITEFX_MAGNET_STRENGTH'))) is not None:
        overrides.setdefault('magnet', {})['strength'] = strength

    settings = SiteFxSettings(**overrides)
    settings.paths.ensure()
    return settings
