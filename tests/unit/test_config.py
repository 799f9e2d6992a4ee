"""Tests for environment-driven settings."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from conquest.config import Settings, get_settings


def test_defaults(monkeypatch):
    for name in ("CONQUEST_CPU_THINK_DELAY_SECONDS", "CONQUEST_CPU_MAX_ATTACKS"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.cpu_think_delay_seconds == 1.0
    assert settings.cpu_max_attacks == 10
    assert settings.database_url.startswith("sqlite")
    assert settings.default_map_id == "three-realms"
    assert settings.maps_dir is None


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("CONQUEST_CPU_THINK_DELAY_SECONDS", "0")
    monkeypatch.setenv("CONQUEST_DATA_DIR", str(tmp_path))
    settings = Settings(_env_file=None)
    assert settings.cpu_think_delay_seconds == 0
    assert settings.data_dir == Path(tmp_path)


def test_rejects_negative_delay(monkeypatch):
    monkeypatch.setenv("CONQUEST_CPU_THINK_DELAY_SECONDS", "-1")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_get_settings_is_cached():
    get_settings.cache_clear()
    assert get_settings() is get_settings()
    get_settings.cache_clear()
