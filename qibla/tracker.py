"""Heading and flatness tracking from raw sensor samples."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .constants import FLAT_AXIS_THRESHOLD
from .geo import normalize_bearing
from .smoothing import HeadingSmoother

logger = logging.getLogger(__name__)


class SensorKind(str, Enum):
    MAGNETIC = "magnetic"
    TILT = "tilt"


@dataclass(frozen=True)
class SensorSample:
    """One three-axis reading with a monotonic timestamp in milliseconds."""

    kind: SensorKind
    x: float
    y: float
    z: float
    timestamp_ms: float

    def is_finite(self) -> bool:
        return all(
            math.isfinite(value) for value in (self.x, self.y, self.z, self.timestamp_ms)
        )


def magnetic_heading(x: float, y: float) -> float:
    """Raw heading in [0, 360) from the horizontal field components."""
    return normalize_bearing(math.degrees(math.atan2(y, x)))


def is_flat(x: float, y: float, threshold: float = FLAT_AXIS_THRESHOLD) -> bool:
    return abs(x) < threshold and abs(y) < threshold


class HeadingTracker:
    """Keeps the latest device heading and "held flat" flag.

    With ``smoothing_window_ms == 0`` every valid magnetic sample replaces
    the heading outright. A positive window switches to a circular mean over
    that many milliseconds of samples. Invalid samples leave state untouched.
    """

    def __init__(
        self,
        *,
        smoothing_window_ms: float = 0.0,
        flat_threshold: float = FLAT_AXIS_THRESHOLD,
    ) -> None:
        if smoothing_window_ms < 0:
            raise ValueError("smoothing_window_ms must be non-negative")
        if flat_threshold <= 0:
            raise ValueError("flat_threshold must be positive")
        self.flat_threshold = flat_threshold
        self._smoother: Optional[HeadingSmoother] = (
            HeadingSmoother(smoothing_window_ms) if smoothing_window_ms > 0 else None
        )
        self._heading: Optional[float] = None
        self._raw_heading: Optional[float] = None
        self._is_flat = True

    @property
    def heading(self) -> Optional[float]:
        return self._heading

    @property
    def raw_heading(self) -> Optional[float]:
        return self._raw_heading

    @property
    def is_flat(self) -> bool:
        return self._is_flat

    @property
    def jitter(self) -> float:
        """RMS spread of the smoothing window in degrees (0 without smoothing)."""
        if self._smoother is None:
            return 0.0
        return self._smoother.rms()

    def ingest_magnetic(self, sample: Optional[SensorSample]) -> Optional[float]:
        if not self.accepts(sample, SensorKind.MAGNETIC):
            return self._heading
        raw = magnetic_heading(sample.x, sample.y)
        self._raw_heading = raw
        if self._smoother is None:
            self._heading = raw
        else:
            self._heading = self._smoother.update(raw, sample.timestamp_ms)
        return self._heading

    def ingest_tilt(self, sample: Optional[SensorSample]) -> bool:
        if not self.accepts(sample, SensorKind.TILT):
            return self._is_flat
        self._is_flat = is_flat(sample.x, sample.y, self.flat_threshold)
        return self._is_flat

    @staticmethod
    def accepts(sample: Optional[SensorSample], kind: SensorKind) -> bool:
        if sample is None:
            logger.debug("discarding missing %s sample", kind.value)
            return False
        if sample.kind != kind:
            logger.debug("discarding %s sample on %s channel", sample.kind.value, kind.value)
            return False
        try:
            finite = sample.is_finite()
        except TypeError:
            logger.debug("discarding malformed %s sample: %s", kind.value, sample)
            return False
        if not finite:
            logger.debug("discarding non-finite %s sample: %s", kind.value, sample)
            return False
        return True
