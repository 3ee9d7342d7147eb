from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Tuple

from qibla.telemetry import SessionTelemetry


def test_payloads_carry_timestamps() -> None:
    events: List[Tuple[str, Dict[str, object]]] = []
    telemetry = SessionTelemetry(lambda name, payload: events.append((name, dict(payload))))

    telemetry.record_feedback_fired(offset_degrees=1.23456, sample_ts_ms=1500.0)

    name, payload = events[0]
    assert name == "compass.feedback.fired"
    assert payload["offsetDeg"] == 1.23
    assert payload["sampleTsMs"] == 1500.0
    assert isinstance(payload["ts"], int)


def test_emitter_failure_is_logged(caplog) -> None:
    def broken(name: str, payload: Mapping[str, object]) -> None:
        raise RuntimeError("collector down")

    telemetry = SessionTelemetry(broken)
    with caplog.at_level(logging.ERROR, logger="qibla.telemetry"):
        telemetry.record_location_unavailable("unavailable")
    assert "compass.location.unavailable" in caplog.text


def test_disabled_without_emitter() -> None:
    telemetry = SessionTelemetry()
    assert telemetry.enabled is False
    telemetry.record_session_stopped(feedback_count=0)


def test_non_callable_emitter_is_ignored() -> None:
    assert SessionTelemetry("not-a-callable").enabled is False  # type: ignore[arg-type]
