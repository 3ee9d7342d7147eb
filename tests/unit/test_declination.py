from __future__ import annotations

import pytest

from qibla.declination import DEFAULT_REGIONS, DeclinationEstimator, DeclinationRegion, declination
from qibla.geo import GeoPoint


@pytest.mark.parametrize("year", [1990, 2020, 2024, 2100])
@pytest.mark.parametrize(
    "point",
    [GeoPoint(51.5074, -0.1278), GeoPoint(40.7128, -74.006), GeoPoint(-33.8688, 151.2093)],
)
def test_outside_all_regions_is_zero(point: GeoPoint, year: int) -> None:
    assert declination(point, year) == 0.0


def test_middle_east_base_and_drift() -> None:
    mecca = GeoPoint(21.0, 39.0)
    assert declination(mecca, 2020) == pytest.approx(2.5)
    assert declination(mecca, 2025) == pytest.approx(3.1)
    assert declination(mecca, 2015) == pytest.approx(1.9)


def test_southeast_asia_base_and_drift() -> None:
    jakarta = GeoPoint(-6.2, 106.8)
    assert declination(jakarta, 2024) == pytest.approx(0.82)


def test_region_bounds_are_inclusive() -> None:
    assert declination(GeoPoint(10.0, 150.0), 2020) == pytest.approx(0.5)
    assert declination(GeoPoint(15.0, 30.0), 2020) == pytest.approx(2.5)
    assert declination(GeoPoint(10.0001, 150.0), 2020) == 0.0


def test_default_table_is_data() -> None:
    names = [region.name for region in DEFAULT_REGIONS]
    assert names == ["southeast_asia", "middle_east"]


class TestCustomTable:
    def test_custom_region_and_epoch(self) -> None:
        estimator = DeclinationEstimator(
            [DeclinationRegion("test", 0.0, 10.0, 0.0, 10.0, 1.0, 0.5)],
            epoch_year=2000,
        )
        assert estimator.declination(GeoPoint(5.0, 5.0), 2010) == pytest.approx(6.0)
        assert estimator.declination(GeoPoint(-5.0, 5.0), 2010) == 0.0

    def test_first_matching_region_wins(self) -> None:
        wide = DeclinationRegion("wide", -45.0, 45.0, -45.0, 45.0, -3.0, 0.0)
        narrow = DeclinationRegion("narrow", -1.0, 1.0, -1.0, 1.0, 7.0, 0.0)
        estimator = DeclinationEstimator([narrow, wide])
        assert estimator.region_for(GeoPoint(0.0, 0.0)) is narrow
        assert estimator.declination(GeoPoint(0.0, 0.0), 2020) == pytest.approx(7.0)
        assert estimator.declination(GeoPoint(20.0, 0.0), 2020) == pytest.approx(-3.0)

    def test_empty_table(self) -> None:
        assert DeclinationEstimator([]).declination(GeoPoint(21.0, 39.0), 2020) == 0.0
