"""Telemetry hooks for compass session instrumentation."""

from __future__ import annotations

import logging
import time
from typing import Callable, Dict, Mapping, MutableMapping, Optional

TelemetryEmitter = Callable[[str, Mapping[str, object]], None]

_logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class SessionTelemetry:
    """Forwards session events to an optional emitter owned by the caller."""

    def __init__(self, emitter: Optional[TelemetryEmitter] = None) -> None:
        self._emitter = emitter if callable(emitter) else None

    @property
    def enabled(self) -> bool:
        return self._emitter is not None

    def _safe_emit(self, event: str, payload: MutableMapping[str, object]) -> None:
        if not self._emitter:
            _logger.debug("telemetry emitter not configured for event %s", event)
            return
        try:
            self._emitter(event, dict(payload))
        except Exception:
            _logger.exception("failed to emit telemetry event %s", event)

    def record_session_started(self, *, has_fix: bool, smoothing_window_ms: float) -> None:
        payload: Dict[str, object] = {
            "hasFix": has_fix,
            "smoothingWindowMs": smoothing_window_ms,
            "ts": _now_ms(),
        }
        self._safe_emit("compass.session.start", payload)

    def record_session_stopped(self, *, feedback_count: int) -> None:
        payload: Dict[str, object] = {"feedbackCount": feedback_count, "ts": _now_ms()}
        self._safe_emit("compass.session.stop", payload)

    def record_location_unavailable(self, reason: str) -> None:
        payload: Dict[str, object] = {"reason": reason, "ts": _now_ms()}
        self._safe_emit("compass.location.unavailable", payload)

    def record_feedback_fired(
        self, *, offset_degrees: float, sample_ts_ms: float
    ) -> None:
        payload: Dict[str, object] = {
            "offsetDeg": round(offset_degrees, 2),
            "sampleTsMs": sample_ts_ms,
            "ts": _now_ms(),
        }
        self._safe_emit("compass.feedback.fired", payload)
