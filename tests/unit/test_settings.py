from __future__ import annotations

import pytest
from pydantic import ValidationError

from qibla.config import QiblaSettings, get_settings, reset_settings_cache
from qibla.geo import KAABA


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings_cache()
    yield
    reset_settings_cache()


def test_defaults_match_engine_constants() -> None:
    settings = QiblaSettings()
    assert settings.target == KAABA
    assert settings.sample_interval_ms == 100
    assert settings.feedback_cooldown_ms == 4000.0
    assert settings.feedback_cooldown_inclusive is False
    assert settings.accurate_threshold_deg == 5.0
    assert settings.close_threshold_deg == 15.0
    assert settings.smoothing_window_ms == 0.0
    assert settings.declination_year is None


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QIBLA_FEEDBACK_COOLDOWN_MS", "2500")
    monkeypatch.setenv("QIBLA_SMOOTHING_WINDOW_MS", "300")
    monkeypatch.setenv("QIBLA_DECLINATION_ENABLED", "false")
    settings = get_settings()
    assert settings.feedback_cooldown_ms == 2500.0
    assert settings.smoothing_window_ms == 300.0
    assert settings.declination_enabled is False


def test_settings_are_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    first = get_settings()
    monkeypatch.setenv("QIBLA_SAMPLE_INTERVAL_MS", "50")
    assert get_settings() is first
    reset_settings_cache()
    assert get_settings().sample_interval_ms == 50


def test_smoothing_window_is_bounded() -> None:
    with pytest.raises(ValidationError):
        QiblaSettings(smoothing_window_ms=900.0)


def test_thresholds_must_be_ordered() -> None:
    with pytest.raises(ValidationError):
        QiblaSettings(accurate_threshold_deg=20.0, close_threshold_deg=10.0)


def test_target_latitude_is_validated() -> None:
    with pytest.raises(ValidationError):
        QiblaSettings(target_latitude=95.0)
