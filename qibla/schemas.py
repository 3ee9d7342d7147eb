"""Pydantic models for the compass status contract."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel

from .alignment import AccuracyTier


class SessionState(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    DENIED = "denied"
    STOPPED = "stopped"


class MapPoint(BaseModel):
    """Lat/lon representation of the current fix."""

    lat: float
    lon: float


class CompassStatus(BaseModel):
    """Snapshot of a compass session for the presentation layer."""

    state: SessionState

    # Device heading is magnetic; target bearing is relative to true north.
    heading_deg: Optional[float] = None
    target_bearing_deg: Optional[float] = None
    declination_deg: float = 0.0
    heading_jitter_deg: float = 0.0

    offset_deg: Optional[float] = None
    magnitude_deg: Optional[float] = None
    tier: Optional[AccuracyTier] = None
    color: Optional[str] = None
    label: Optional[str] = None

    is_flat: bool = True
    flat_warning: Optional[str] = None

    location: Optional[MapPoint] = None
    location_text: Optional[str] = None
    distance_km: Optional[float] = None

    error: Optional[str] = None

    @property
    def bearing_available(self) -> bool:
        return self.target_bearing_deg is not None
