import os

import pytest
from pydantic import ValidationError

from sitefx.config import SiteFxSettings, SparkSettings, load_settings


def test_load_settings_creates_paths(tmp_path, monkeypatch):
    monkeypatch.setenv("SITEFX_HOME", str(tmp_path / "sitefx-home"))
    settings = load_settings(env_path=tmp_path / "missing.env")
    assert isinstance(settings, SiteFxSettings)
    for required in (settings.paths.base_dir, settings.paths.logs_dir, settings.paths.data_dir):
        assert required.exists()


def test_defaults():
    settings = SiteFxSettings()
    assert settings.reveal.threshold == 0.1
    assert settings.magnet.strength == 0.15
    assert settings.sparks.count == 6
    assert settings.sparks.lifetime_ms == 500
    assert settings.theme.default == "dark"
    assert settings.theme.wipe_ms == 300
    assert settings.theme.pull_ms == 500
    assert settings.theme.reentry_policy == "ignore"


def test_env_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("SITEFX_HOME", str(tmp_path))
    monkeypatch.setenv("SITEFX_SPARK_COUNT", "4")
    monkeypatch.setenv("SITEFX_MAGNET_STRENGTH", "0.3")
    monkeypatch.setenv("SITEFX_THEME_POLICY", "QUEUE")
    monkeypatch.setenv("SITEFX_THEME_DEFAULT", "Light")
    settings = load_settings(env_path=tmp_path / "missing.env")
    assert settings.sparks.count == 4
    assert settings.magnet.strength == 0.3
    assert settings.theme.reentry_policy == "queue"
    assert settings.theme.default == "light"


def test_unparseable_numbers_are_ignored(tmp_path, monkeypatch):
    monkeypatch.setenv("SITEFX_HOME", str(tmp_path))
    monkeypatch.setenv("SITEFX_SPARK_COUNT", "lots")
    settings = load_settings(env_path=tmp_path / "missing.env")
    assert settings.sparks.count == 6


def test_dotenv_file_is_loaded(tmp_path, monkeypatch):
    monkeypatch.setenv("SITEFX_HOME", str(tmp_path))
    monkeypatch.delenv("SITEFX_SPARK_COLOR", raising=False)
    env = tmp_path / ".env"
    env.write_text("SITEFX_SPARK_COLOR=#ff00ff\n")
    settings = load_settings(env_path=env)
    os.environ.pop("SITEFX_SPARK_COLOR", None)
    assert settings.sparks.color == "#ff00ff"


def test_invalid_spark_count_rejected():
    with pytest.raises(ValidationError):
        SparkSettings(count=0)
