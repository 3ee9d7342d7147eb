"""Great-circle helpers for locating the Kaaba from a position fix."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .constants import KAABA_LATITUDE, KAABA_LONGITUDE
from .errors import CoordinateRangeError

EARTH_RADIUS_M = 6_371_000.0


def normalize_bearing(degrees: float) -> float:
    """Wrap an angle in degrees into [0, 360)."""
    wrapped = degrees % 360.0
    # Tiny negative inputs round up to exactly 360.0 under float modulo.
    if wrapped >= 360.0:
        return 0.0
    return wrapped


def _check_coordinates(latitude: float, longitude: float) -> None:
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise CoordinateRangeError(
            f"coordinates must be finite, got ({latitude}, {longitude})"
        )
    if not -90.0 <= latitude <= 90.0:
        raise CoordinateRangeError(f"latitude {latitude} outside [-90, 90]")
    if not -180.0 <= longitude <= 180.0:
        raise CoordinateRangeError(f"longitude {longitude} outside [-180, 180]")


@dataclass(frozen=True)
class GeoPoint:
    """Geodetic position with latitude and longitude in signed degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        _check_coordinates(self.latitude, self.longitude)


KAABA = GeoPoint(KAABA_LATITUDE, KAABA_LONGITUDE)


def initial_bearing(origin: GeoPoint, target: GeoPoint) -> float:
    """Return the initial great-circle bearing from origin to target.

    The result is measured clockwise from true north and lies in [0, 360).
    Identical points have no defined bearing; 0.0 is returned for them.
    """
    _check_coordinates(origin.latitude, origin.longitude)
    _check_coordinates(target.latitude, target.longitude)
    if origin == target:
        return 0.0

    lat1 = math.radians(origin.latitude)
    lat2 = math.radians(target.latitude)
    delta_lon = math.radians(target.longitude - origin.longitude)

    y = math.sin(delta_lon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(
        delta_lon
    )
    return normalize_bearing(math.degrees(math.atan2(y, x)))


def qibla_bearing(origin: GeoPoint) -> float:
    return initial_bearing(origin, KAABA)


def great_circle_distance_m(origin: GeoPoint, target: GeoPoint) -> float:
    """Haversine distance between two points in metres."""
    lat1 = math.radians(origin.latitude)
    lat2 = math.radians(target.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(target.longitude - origin.longitude)
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_M * c


def format_coordinates(point: GeoPoint) -> str:
    """Render a point as ``21.4225°N, 39.8262°E``."""
    lat_hemisphere = "N" if point.latitude >= 0 else "S"
    lon_hemisphere = "E" if point.longitude >= 0 else "W"
    return (
        f"{abs(point.latitude):.4f}°{lat_hemisphere}, "
        f"{abs(point.longitude):.4f}°{lon_hemisphere}"
    )
