"""Qibla compass orientation engine exports."""

from .alignment import AccuracyTier, AlignmentResult, classify
from .config import QiblaSettings, get_settings, reset_settings_cache
from .constants import (
    ACCURATE_THRESHOLD_DEGREES,
    CLOSE_THRESHOLD_DEGREES,
    FEEDBACK_COOLDOWN_MS,
    KAABA_LATITUDE,
    KAABA_LONGITUDE,
)
from .declination import DEFAULT_REGIONS, DeclinationEstimator, DeclinationRegion, declination
from .errors import (
    CoordinateRangeError,
    LocationError,
    LocationPermissionDenied,
    LocationUnavailable,
    QiblaError,
)
from .feedback import FeedbackDebouncer
from .geo import KAABA, GeoPoint, initial_bearing, normalize_bearing, qibla_bearing
from .schemas import CompassStatus, SessionState
from .session import CompassSession
from .smoothing import HeadingSmoother
from .tracker import HeadingTracker, SensorKind, SensorSample

__all__ = [
    "ACCURATE_THRESHOLD_DEGREES",
    "CLOSE_THRESHOLD_DEGREES",
    "FEEDBACK_COOLDOWN_MS",
    "KAABA",
    "KAABA_LATITUDE",
    "KAABA_LONGITUDE",
    "DEFAULT_REGIONS",
    "AccuracyTier",
    "AlignmentResult",
    "CompassSession",
    "CompassStatus",
    "CoordinateRangeError",
    "DeclinationEstimator",
    "DeclinationRegion",
    "FeedbackDebouncer",
    "GeoPoint",
    "HeadingSmoother",
    "HeadingTracker",
    "LocationError",
    "LocationPermissionDenied",
    "LocationUnavailable",
    "QiblaError",
    "QiblaSettings",
    "SensorKind",
    "SensorSample",
    "SessionState",
    "classify",
    "declination",
    "get_settings",
    "initial_bearing",
    "normalize_bearing",
    "qibla_bearing",
    "reset_settings_cache",
]
