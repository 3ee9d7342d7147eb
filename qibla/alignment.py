"""Alignment classification between the device heading and the Qibla."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from .constants import ACCURATE_THRESHOLD_DEGREES, CLOSE_THRESHOLD_DEGREES
from .geo import normalize_bearing


class AccuracyTier(str, Enum):
    ACCURATE = "accurate"
    CLOSE = "close"
    FAR = "far"


TIER_COLORS = {
    AccuracyTier.ACCURATE: "#4CAF50",
    AccuracyTier.CLOSE: "#FFC107",
    AccuracyTier.FAR: "#F44336",
}

TIER_LABELS = {
    AccuracyTier.ACCURATE: "Very accurate",
    AccuracyTier.CLOSE: "Fairly accurate",
    AccuracyTier.FAR: "Not accurate",
}


@dataclass(frozen=True)
class AlignmentResult:
    offset_degrees: float
    tier: AccuracyTier

    @property
    def magnitude(self) -> float:
        return abs(self.offset_degrees)

    @property
    def color(self) -> str:
        return TIER_COLORS[self.tier]

    @property
    def label(self) -> str:
        return TIER_LABELS[self.tier]

    @property
    def is_aligned(self) -> bool:
        return self.tier == AccuracyTier.ACCURATE


def signed_offset(target_bearing: float, true_heading: float) -> float:
    """Turn needed from ``true_heading`` to ``target_bearing``, in (-180, 180].

    Positive values mean the target lies clockwise of the heading.
    """
    offset = normalize_bearing(target_bearing - true_heading)
    if offset > 180.0:
        offset -= 360.0
    return offset


def tier_for(
    magnitude: float,
    *,
    accurate_threshold: float = ACCURATE_THRESHOLD_DEGREES,
    close_threshold: float = CLOSE_THRESHOLD_DEGREES,
) -> AccuracyTier:
    if magnitude <= accurate_threshold:
        return AccuracyTier.ACCURATE
    if magnitude <= close_threshold:
        return AccuracyTier.CLOSE
    return AccuracyTier.FAR


def classify(
    target_bearing: float,
    device_heading: float,
    declination_degrees: float = 0.0,
    *,
    accurate_threshold: float = ACCURATE_THRESHOLD_DEGREES,
    close_threshold: float = CLOSE_THRESHOLD_DEGREES,
) -> AlignmentResult:
    """Classify how far the device's reference mark is from the Qibla.

    The device heading is magnetic; adding the declination gives the true
    heading that is compared against the (true) target bearing. An offset of
    zero means the reference mark points straight at the target.
    """
    values = (target_bearing, device_heading, declination_degrees)
    if not all(math.isfinite(value) for value in values):
        raise ValueError(f"alignment inputs must be finite, got {values}")
    if accurate_threshold < 0 or close_threshold <= accurate_threshold:
        raise ValueError("thresholds must satisfy 0 <= accurate < close")

    true_heading = normalize_bearing(device_heading + declination_degrees)
    offset = signed_offset(target_bearing, true_heading)
    tier = tier_for(
        abs(offset),
        accurate_threshold=accurate_threshold,
        close_threshold=close_threshold,
    )
    return AlignmentResult(offset_degrees=offset, tier=tier)
