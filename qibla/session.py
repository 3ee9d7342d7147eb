"""Compass session wiring platform sensors to the orientation engine.

A session owns one HeadingTracker and one FeedbackDebouncer for as long as it
is active. All calls on a session are expected to come from a single event
loop; nothing here takes locks.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List, Optional, Protocol

from .alignment import AlignmentResult, classify
from .config import QiblaSettings, get_settings
from .constants import (
    HOLD_FLAT_WARNING,
    LOCATION_UNAVAILABLE_MESSAGE,
    PERMISSION_DENIED_MESSAGE,
    SENSOR_INIT_FAILED_MESSAGE,
)
from .declination import DeclinationEstimator
from .errors import LocationError, LocationPermissionDenied
from .feedback import FeedbackDebouncer
from .geo import GeoPoint, format_coordinates, great_circle_distance_m, initial_bearing
from .schemas import CompassStatus, MapPoint, SessionState
from .telemetry import SessionTelemetry, TelemetryEmitter
from .tracker import HeadingTracker, SensorKind, SensorSample

logger = logging.getLogger(__name__)

SampleCallback = Callable[[SensorSample], None]
FeedbackListener = Callable[[AlignmentResult], None]


class Subscription(Protocol):
    def remove(self) -> None: ...


class SensorStream(Protocol):
    def subscribe(self, callback: SampleCallback, interval_ms: int) -> Subscription: ...


class LocationProvider(Protocol):
    def current_fix(self) -> Optional[GeoPoint]:
        """Return the latest fix, None when there is none yet.

        May raise LocationPermissionDenied or LocationUnavailable.
        """
        ...


class CompassSession:
    """Start/stop lifecycle around the bearing, tracker and feedback gate."""

    def __init__(
        self,
        location: LocationProvider,
        magnetometer: SensorStream,
        tilt_sensor: SensorStream,
        *,
        settings: Optional[QiblaSettings] = None,
        emitter: Optional[TelemetryEmitter] = None,
        declination_estimator: Optional[DeclinationEstimator] = None,
        year: Optional[int] = None,
    ) -> None:
        self._location = location
        self._magnetometer = magnetometer
        self._tilt_sensor = tilt_sensor
        self._settings = settings or get_settings()
        self._telemetry = SessionTelemetry(emitter)
        self._declination_estimator = declination_estimator or DeclinationEstimator()
        self._year = year

        self._state = SessionState.IDLE
        self._subscriptions: List[Subscription] = []
        self._listeners: List[FeedbackListener] = []
        self._tracker: Optional[HeadingTracker] = None
        self._debouncer: Optional[FeedbackDebouncer] = None
        self._origin: Optional[GeoPoint] = None
        self._target_bearing: Optional[float] = None
        self._declination = 0.0
        self._alignment: Optional[AlignmentResult] = None
        self._error: Optional[str] = None
        self._feedback_count = 0

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def origin(self) -> Optional[GeoPoint]:
        return self._origin

    @property
    def target_bearing(self) -> Optional[float]:
        return self._target_bearing

    @property
    def alignment(self) -> Optional[AlignmentResult]:
        return self._alignment

    @property
    def subscription_count(self) -> int:
        return len(self._subscriptions)

    def add_feedback_listener(self, listener: FeedbackListener) -> Callable[[], None]:
        """Register a callback for the debounced "aligned" cue.

        Returns a function that unregisters the listener.
        """
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def start(self) -> CompassStatus:
        if self._state == SessionState.ACTIVE:
            return self.status()
        self._error = None

        try:
            fix = self._location.current_fix()
        except LocationPermissionDenied as exc:
            logger.warning("location permission denied: %s", exc)
            self._state = SessionState.DENIED
            self._error = PERMISSION_DENIED_MESSAGE
            self._telemetry.record_location_unavailable("permission_denied")
            return self.status()
        except LocationError as exc:
            logger.warning("no location fix at session start: %s", exc)
            self._telemetry.record_location_unavailable("unavailable")
            fix = None

        self._tracker = HeadingTracker(
            smoothing_window_ms=self._settings.smoothing_window_ms,
            flat_threshold=self._settings.flat_axis_threshold,
        )
        self._debouncer = FeedbackDebouncer(
            self._settings.feedback_cooldown_ms,
            inclusive=self._settings.feedback_cooldown_inclusive,
        )
        self._feedback_count = 0
        self._apply_fix(fix)

        subscribed = False
        try:
            interval = self._settings.sample_interval_ms
            self._subscriptions.append(self._magnetometer.subscribe(self.on_magnetic, interval))
            self._subscriptions.append(self._tilt_sensor.subscribe(self.on_tilt, interval))
            subscribed = True
        finally:
            if not subscribed:
                logger.error("sensor subscription failed, releasing session resources")
                self._discard()
                self._state = SessionState.IDLE
                self._error = SENSOR_INIT_FAILED_MESSAGE

        self._state = SessionState.ACTIVE
        logger.info(
            "compass session started (fix=%s, bearing=%s)",
            fix is not None,
            self._target_bearing,
        )
        self._telemetry.record_session_started(
            has_fix=fix is not None,
            smoothing_window_ms=self._settings.smoothing_window_ms,
        )
        return self.status()

    def stop(self) -> CompassStatus:
        was_active = self._state == SessionState.ACTIVE
        self._discard()
        self._state = SessionState.STOPPED
        if was_active:
            logger.info("compass session stopped after %d feedback cues", self._feedback_count)
            self._telemetry.record_session_stopped(feedback_count=self._feedback_count)
        return self.status()

    def __enter__(self) -> "CompassSession":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.stop()
        return False

    def update_fix(self, fix: Optional[GeoPoint]) -> CompassStatus:
        """Apply a fix pushed by the location provider."""
        if self._state != SessionState.ACTIVE:
            logger.debug("ignoring fix update while session is %s", self._state.value)
            return self.status()
        self._apply_fix(fix)
        return self.status()

    def refresh_fix(self) -> CompassStatus:
        """Query the location provider again, e.g. after a missing fix."""
        if self._state != SessionState.ACTIVE:
            return self.status()
        try:
            fix = self._location.current_fix()
        except LocationPermissionDenied as exc:
            logger.warning("location permission revoked: %s", exc)
            self._telemetry.record_location_unavailable("permission_denied")
            self._apply_fix(None)
            self._error = PERMISSION_DENIED_MESSAGE
            return self.status()
        except LocationError as exc:
            logger.warning("location refresh failed: %s", exc)
            self._telemetry.record_location_unavailable("unavailable")
            fix = None
        self._apply_fix(fix)
        return self.status()

    def on_magnetic(self, sample: SensorSample) -> None:
        if self._tracker is None or self._state != SessionState.ACTIVE:
            return
        if not self._tracker.accepts(sample, SensorKind.MAGNETIC):
            return
        heading = self._tracker.ingest_magnetic(sample)
        if self._target_bearing is None:
            return
        self._alignment = self._classify(heading)
        if self._debouncer.should_fire(self._alignment.is_aligned, sample.timestamp_ms):
            self._feedback_count += 1
            self._telemetry.record_feedback_fired(
                offset_degrees=self._alignment.offset_degrees,
                sample_ts_ms=sample.timestamp_ms,
            )
            self._notify(self._alignment)

    def on_tilt(self, sample: SensorSample) -> None:
        if self._tracker is None or self._state != SessionState.ACTIVE:
            return
        self._tracker.ingest_tilt(sample)

    def status(self) -> CompassStatus:
        tracker = self._tracker
        alignment = self._alignment
        is_flat = tracker.is_flat if tracker is not None else True
        origin = self._origin
        return CompassStatus(
            state=self._state,
            heading_deg=tracker.heading if tracker is not None else None,
            target_bearing_deg=self._target_bearing,
            declination_deg=self._declination,
            heading_jitter_deg=tracker.jitter if tracker is not None else 0.0,
            offset_deg=alignment.offset_degrees if alignment else None,
            magnitude_deg=alignment.magnitude if alignment else None,
            tier=alignment.tier if alignment else None,
            color=alignment.color if alignment else None,
            label=alignment.label if alignment else None,
            is_flat=is_flat,
            flat_warning=None if is_flat else HOLD_FLAT_WARNING,
            location=MapPoint(lat=origin.latitude, lon=origin.longitude) if origin else None,
            location_text=format_coordinates(origin) if origin else None,
            distance_km=(
                great_circle_distance_m(origin, self._settings.target) / 1000.0
                if origin
                else None
            ),
            error=self._error,
        )

    def _apply_fix(self, fix: Optional[GeoPoint]) -> None:
        self._origin = fix
        if fix is None:
            self._target_bearing = None
            self._declination = 0.0
            self._alignment = None
            self._error = LOCATION_UNAVAILABLE_MESSAGE
            return

        self._error = None
        self._target_bearing = initial_bearing(fix, self._settings.target)
        if self._settings.declination_enabled:
            self._declination = self._declination_estimator.declination(fix, self._resolve_year())
        else:
            self._declination = 0.0
        heading = self._tracker.heading if self._tracker is not None else None
        self._alignment = self._classify(heading) if heading is not None else None

    def _classify(self, heading: float) -> AlignmentResult:
        return classify(
            self._target_bearing,
            heading,
            self._declination,
            accurate_threshold=self._settings.accurate_threshold_deg,
            close_threshold=self._settings.close_threshold_deg,
        )

    def _resolve_year(self) -> int:
        if self._year is not None:
            return self._year
        if self._settings.declination_year is not None:
            return self._settings.declination_year
        return datetime.now().year

    def _notify(self, result: AlignmentResult) -> None:
        for listener in list(self._listeners):
            try:
                listener(result)
            except Exception:
                logger.exception("feedback listener failed")

    def _discard(self) -> None:
        subscriptions, self._subscriptions = self._subscriptions, []
        for subscription in subscriptions:
            try:
                subscription.remove()
            except Exception:
                logger.exception("failed to remove sensor subscription")
        self._tracker = None
        self._debouncer = None
        self._alignment = None
        self._origin = None
        self._target_bearing = None
        self._declination = 0.0
