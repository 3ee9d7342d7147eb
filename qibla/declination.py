"""Coarse regional magnetic declination table.

This is not a geomagnetic model. Each region is a latitude/longitude box with
a base offset at the epoch year and a linear yearly drift. Points outside every
box get no correction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .constants import DECLINATION_EPOCH_YEAR
from .geo import GeoPoint


@dataclass(frozen=True)
class DeclinationRegion:
    name: str
    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float
    base_degrees: float
    drift_degrees_per_year: float

    def contains(self, point: GeoPoint) -> bool:
        return (
            self.min_latitude <= point.latitude <= self.max_latitude
            and self.min_longitude <= point.longitude <= self.max_longitude
        )

    def offset_for_year(self, year: int, epoch_year: int = DECLINATION_EPOCH_YEAR) -> float:
        return self.base_degrees + (year - epoch_year) * self.drift_degrees_per_year


DEFAULT_REGIONS: Tuple[DeclinationRegion, ...] = (
    DeclinationRegion(
        name="southeast_asia",
        min_latitude=-10.0,
        max_latitude=10.0,
        min_longitude=90.0,
        max_longitude=150.0,
        base_degrees=0.5,
        drift_degrees_per_year=0.08,
    ),
    DeclinationRegion(
        name="middle_east",
        min_latitude=15.0,
        max_latitude=30.0,
        min_longitude=30.0,
        max_longitude=50.0,
        base_degrees=2.5,
        drift_degrees_per_year=0.12,
    ),
)


class DeclinationEstimator:
    """Looks up the first region containing a point, in table order."""

    def __init__(
        self,
        regions: Sequence[DeclinationRegion] = DEFAULT_REGIONS,
        *,
        epoch_year: int = DECLINATION_EPOCH_YEAR,
    ) -> None:
        self.regions: Tuple[DeclinationRegion, ...] = tuple(regions)
        self.epoch_year = epoch_year

    def region_for(self, point: GeoPoint) -> Optional[DeclinationRegion]:
        for region in self.regions:
            if region.contains(point):
                return region
        return None

    def declination(self, point: GeoPoint, year: int) -> float:
        region = self.region_for(point)
        if region is None:
            return 0.0
        return region.offset_for_year(year, self.epoch_year)


_default_estimator = DeclinationEstimator()


def declination(point: GeoPoint, year: int) -> float:
    """Declination in degrees using the built-in region table."""
    return _default_estimator.declination(point, year)
