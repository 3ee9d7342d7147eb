"""Runtime settings for the compass engine."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    ACCURATE_THRESHOLD_DEGREES,
    CLOSE_THRESHOLD_DEGREES,
    FEEDBACK_COOLDOWN_MS,
    FLAT_AXIS_THRESHOLD,
    KAABA_LATITUDE,
    KAABA_LONGITUDE,
    MAX_SMOOTHING_WINDOW_MS,
    SAMPLE_INTERVAL_MS,
)
from .geo import GeoPoint


class QiblaSettings(BaseSettings):
    """Settings read from ``QIBLA_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(env_prefix="QIBLA_", env_file=".env", extra="ignore")

    target_latitude: float = Field(default=KAABA_LATITUDE, ge=-90.0, le=90.0)
    target_longitude: float = Field(default=KAABA_LONGITUDE, ge=-180.0, le=180.0)

    sample_interval_ms: int = Field(default=SAMPLE_INTERVAL_MS, gt=0)

    feedback_cooldown_ms: float = Field(default=FEEDBACK_COOLDOWN_MS, ge=0.0)
    feedback_cooldown_inclusive: bool = False

    accurate_threshold_deg: float = Field(default=ACCURATE_THRESHOLD_DEGREES, ge=0.0, le=180.0)
    close_threshold_deg: float = Field(default=CLOSE_THRESHOLD_DEGREES, ge=0.0, le=180.0)

    flat_axis_threshold: float = Field(default=FLAT_AXIS_THRESHOLD, gt=0.0)
    smoothing_window_ms: float = Field(default=0.0, ge=0.0, le=MAX_SMOOTHING_WINDOW_MS)

    declination_enabled: bool = True
    # None means the current calendar year.
    declination_year: Optional[int] = None

    @model_validator(mode="after")
    def _check_thresholds(self) -> "QiblaSettings":
        if self.close_threshold_deg <= self.accurate_threshold_deg:
            raise ValueError("close_threshold_deg must exceed accurate_threshold_deg")
        return self

    @property
    def target(self) -> GeoPoint:
        return GeoPoint(self.target_latitude, self.target_longitude)


@lru_cache(maxsize=1)
def get_settings() -> QiblaSettings:
    """Return cached settings."""

    return QiblaSettings()


def reset_settings_cache() -> None:
    """Clear cached settings (primarily for tests)."""

    get_settings.cache_clear()
