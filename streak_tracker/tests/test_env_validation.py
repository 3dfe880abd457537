"""Tests for environment and configuration validation."""

import logging
from types import SimpleNamespace

import pytest

from streak_tracker.core.config import Settings, validate_config
from streak_tracker.core.validation import EnvValidationError, validate_env


@pytest.fixture(autouse=True)
def _enforce_validation(monkeypatch):
    monkeypatch.delenv("SKIP_ENV_VALIDATION", raising=False)


def make_settings(**overrides):
    defaults = dict(
        ENV="development",
        PORT=3000,
        MISSED_DAYS_WINDOW=30,
        MAX_MISSED_DAYS_WINDOW=365,
        ENABLE_DEBUG_ROUTES=None,
    )
    defaults.update(overrides)
    return SimpleNamespace(**defaults)


def test_default_config_passes():
    assert validate_env(settings_obj=make_settings())


def test_invalid_port_fails():
    with pytest.raises(EnvValidationError):
        validate_env(settings_obj=make_settings(PORT=70000))


def test_window_outside_bounds_fails():
    with pytest.raises(EnvValidationError):
        validate_env(settings_obj=make_settings(MISSED_DAYS_WINDOW=0))
    with pytest.raises(EnvValidationError):
        validate_env(settings_obj=make_settings(MISSED_DAYS_WINDOW=400))


def test_debug_routes_forbidden_in_production():
    with pytest.raises(EnvValidationError):
        validate_env(settings_obj=make_settings(ENV="production", ENABLE_DEBUG_ROUTES=True))
    assert validate_env(settings_obj=make_settings(ENV="production"))


def test_skip_env_validation_bypass(monkeypatch):
    monkeypatch.setenv("SKIP_ENV_VALIDATION", "1")
    validate_env(settings_obj=make_settings(PORT=0))


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("MISSED_DAYS_WINDOW", "14")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://localhost:3000, http://10.0.2.2:3000")
    cfg = Settings(_env_file=None)
    assert cfg.PORT == 8080
    assert cfg.MISSED_DAYS_WINDOW == 14
    assert cfg.cors_origins == ["http://localhost:3000", "http://10.0.2.2:3000"]


def test_debug_routes_default_follows_environment():
    assert Settings(_env_file=None, ENV="development").debug_routes_enabled
    assert not Settings(_env_file=None, ENV="production").debug_routes_enabled
    assert Settings(_env_file=None, ENV="production", ENABLE_DEBUG_ROUTES=True).debug_routes_enabled


def test_open_cors_in_production_warns(caplog):
    cfg = Settings(_env_file=None, ENV="production", CORS_ALLOW_ORIGINS="*")
    with caplog.at_level(logging.WARNING, logger="streak_tracker"):
        assert validate_config(strict=False, settings_obj=cfg)
    assert any("CORS_ALLOW_ORIGINS" in r.getMessage() for r in caplog.records)


def test_open_cors_in_production_raises_when_strict():
    cfg = Settings(_env_file=None, ENV="production", CORS_ALLOW_ORIGINS="*")
    with pytest.raises(RuntimeError):
        validate_config(strict=True, settings_obj=cfg)
