"""Bounded circular-mean smoothing for compass headings."""

from __future__ import annotations

from collections import deque
from math import atan2, cos, degrees, radians, sin, sqrt
from typing import Deque, Optional, Tuple

from .constants import MAX_SMOOTHING_WINDOW_MS
from .geo import normalize_bearing

Sample = Tuple[float, float]

MAX_WINDOW_SAMPLES = 256


def _wrap_offset(degrees: float) -> float:
    wrapped = (degrees + 180.0) % 360.0 - 180.0
    if wrapped == -180.0:
        return 180.0
    return wrapped


class HeadingSmoother:
    """Circular mean of the headings seen within the last ``window_ms``.

    Samples are keyed by their own timestamps, so irregular or bursty
    delivery only changes how many samples share the window.
    """

    def __init__(self, window_ms: float) -> None:
        if window_ms <= 0:
            raise ValueError("window_ms must be positive")
        if window_ms > MAX_SMOOTHING_WINDOW_MS:
            raise ValueError(
                f"window_ms must not exceed {MAX_SMOOTHING_WINDOW_MS:g} ms"
            )
        self.window_ms = float(window_ms)
        self._samples: Deque[Sample] = deque(maxlen=MAX_WINDOW_SAMPLES)
        self._latest_ms: Optional[float] = None
        self._last_heading = 0.0

    def update(self, heading_degrees: float, timestamp_ms: float) -> float:
        self._last_heading = heading_degrees
        if self._latest_ms is not None and timestamp_ms < self._latest_ms - self.window_ms:
            # Clock discontinuity: restart the window from this sample.
            self._samples.clear()
            self._latest_ms = timestamp_ms
        elif self._latest_ms is None or timestamp_ms > self._latest_ms:
            self._latest_ms = timestamp_ms
        self._samples.append((heading_degrees, timestamp_ms))
        self._evict_old_samples()
        return self.mean()

    def mean(self) -> float:
        if not self._samples:
            return normalize_bearing(self._last_heading)
        sum_sin = 0.0
        sum_cos = 0.0
        for heading, _ in self._samples:
            rad = radians(heading)
            sum_sin += sin(rad)
            sum_cos += cos(rad)
        # Opposing headings cancel out; fall back to the newest reading.
        if abs(sum_sin) < 1e-12 and abs(sum_cos) < 1e-12:
            return normalize_bearing(self._last_heading)
        return normalize_bearing(degrees(atan2(sum_sin, sum_cos)))

    def rms(self) -> float:
        if not self._samples:
            return 0.0
        mean_heading = self.mean()
        accumulator = 0.0
        for heading, _ in self._samples:
            delta = _wrap_offset(heading - mean_heading)
            accumulator += delta * delta
        return sqrt(accumulator / len(self._samples))

    def clear(self) -> None:
        self._samples.clear()
        self._latest_ms = None

    def __len__(self) -> int:
        return len(self._samples)

    def _evict_old_samples(self) -> None:
        if self._latest_ms is None:
            return
        cutoff = self._latest_ms - self.window_ms
        kept = [sample for sample in self._samples if sample[1] >= cutoff]
        if len(kept) != len(self._samples):
            self._samples = deque(kept, maxlen=MAX_WINDOW_SAMPLES)
