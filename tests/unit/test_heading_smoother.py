from __future__ import annotations

import math

import pytest

from qibla.smoothing import MAX_WINDOW_SAMPLES, HeadingSmoother


def test_heading_mean_and_rms_stability() -> None:
    smoother = HeadingSmoother(window_ms=300.0)
    smoother.update(10.0, timestamp_ms=0.0)
    smoother.update(12.0, timestamp_ms=100.0)
    smoother.update(11.0, timestamp_ms=200.0)
    assert smoother.mean() == pytest.approx(11.0, rel=1e-3)
    assert smoother.rms() == pytest.approx(math.sqrt(2 / 3), rel=1e-3)


def test_wraparound_handling() -> None:
    smoother = HeadingSmoother(window_ms=200.0)
    smoother.update(350.0, timestamp_ms=0.0)
    mean = smoother.update(10.0, timestamp_ms=100.0)
    assert mean == pytest.approx(0.0, abs=1e-9) or mean == pytest.approx(360.0, abs=1e-9)
    assert 0.0 <= mean < 360.0
    assert smoother.rms() < 15.0


def test_old_samples_leave_the_window() -> None:
    smoother = HeadingSmoother(window_ms=250.0)
    smoother.update(0.0, timestamp_ms=0.0)
    smoother.update(0.0, timestamp_ms=100.0)
    assert smoother.update(90.0, timestamp_ms=1000.0) == pytest.approx(90.0)
    assert len(smoother) == 1


def test_clock_jump_backwards_restarts_window() -> None:
    smoother = HeadingSmoother(window_ms=200.0)
    smoother.update(40.0, timestamp_ms=1000.0)
    smoother.update(220.0, timestamp_ms=500.0)
    assert len(smoother) == 1
    assert smoother.mean() == pytest.approx(220.0)
    assert smoother.update(220.0, timestamp_ms=600.0) == pytest.approx(220.0)
    assert len(smoother) == 2


def test_repeated_timestamp_keeps_window_bounded() -> None:
    smoother = HeadingSmoother(window_ms=200.0)
    for _ in range(MAX_WINDOW_SAMPLES * 3):
        smoother.update(10.0, timestamp_ms=1000.0)
    assert len(smoother) == MAX_WINDOW_SAMPLES


def test_opposing_headings_fall_back_to_latest() -> None:
    smoother = HeadingSmoother(window_ms=200.0)
    smoother.update(0.0, timestamp_ms=0.0)
    assert smoother.update(180.0, timestamp_ms=50.0) == pytest.approx(180.0)


def test_zero_window_rejection() -> None:
    with pytest.raises(ValueError):
        HeadingSmoother(window_ms=0.0)


def test_window_is_bounded() -> None:
    with pytest.raises(ValueError):
        HeadingSmoother(window_ms=501.0)
