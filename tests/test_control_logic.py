"""Unit tests for sensor status and gate logic."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from backend.forecast import control_logic
from backend.forecast.control_logic import (
    build_gate_override,
    classify_gps,
    classify_humidity,
    classify_temperature,
    classify_water_status,
    derive_gate_state,
    is_emergency,
    summarize_status,
)
from backend.forecast.schema import ConfigurationError, Reading


@pytest.mark.parametrize(
    "value, expected",
    [(None, None), (-0.5, "LOW"), (0.0, "NORMAL"), (35.0, "NORMAL"), (35.1, "HIGH")],
)
def test_classify_temperature(value, expected) -> None:
    assert classify_temperature(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [(None, None), (29.9, "LOW"), (30.0, "NORMAL"), (60.0, "NORMAL"), (60.5, "HIGH")],
)
def test_classify_humidity(value, expected) -> None:
    assert classify_humidity(value) == expected


@pytest.mark.parametrize(
    "status, expected",
    [("DANGER", "CRITICAL"), ("WARNING", "CRITICAL"), ("NORMAL", "NORMAL"), ("ODD", "UNKNOWN"), (None, "UNKNOWN")],
)
def test_classify_water_status(status, expected) -> None:
    assert classify_water_status(status) == expected


@pytest.mark.parametrize(
    "status, expected",
    [("DANGER", "CLOSED"), ("WARNING", "CLOSED"), ("NORMAL", "OPEN"), ("", "UNKNOWN"), (None, "UNKNOWN")],
)
def test_derive_gate_state(status, expected) -> None:
    assert derive_gate_state(status) == expected


def test_build_gate_override_uses_default_reasons() -> None:
    assert build_gate_override(True) == {
        "new_state": True,
        "override_reason": control_logic.CLOSE_REASON,
    }
    assert build_gate_override(False) == {
        "new_state": False,
        "override_reason": "Manual open via UI",
    }


def test_build_gate_override_keeps_custom_reason() -> None:
    command = build_gate_override(True, "Storm surge expected")

    assert command["override_reason"] == "Storm surge expected"


@pytest.mark.parametrize("should_close", ["yes", 1, None])
def test_build_gate_override_rejects_non_bool(should_close) -> None:
    with pytest.raises(ConfigurationError):
        build_gate_override(should_close)


def test_summarize_status_for_latest_reading() -> None:
    reading = Reading(
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        water_level=120.0,
        temperature=36.0,
        humidity=None,
        water_status="DANGER",
    )

    summary = summarize_status(reading)

    assert summary["created_at"] == "2024-01-01T00:00:00+00:00"
    assert summary["metrics"]["temperature"] == {"value": 36.0, "state": "HIGH"}
    assert summary["metrics"]["humidity"] == {"value": None, "state": None}
    assert summary["water_severity"] == "CRITICAL"
    assert summary["gate_state"] == "CLOSED"
    assert summary["sensors"] == {
        "water_level": "Online",
        "temperature": "Online",
        "humidity": "Offline",
    }


def test_summarize_status_without_reading() -> None:
    summary = summarize_status(None)

    assert summary["gate_state"] == "UNKNOWN"
    assert set(summary["sensors"].values()) == {"Offline"}


def _status_reading(water_status=None, risk_level=None, gps_status=None, gate_status=None) -> Reading:
    return Reading(
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        water_status=water_status,
        risk_level=risk_level,
        gps_status=gps_status,
        gate_status=gate_status,
    )


@pytest.mark.parametrize(
    "water_status, risk_level, expected",
    [
        ("DANGER", "LOW", True),
        ("NORMAL", "CRITICAL", True),
        ("WARNING", "HIGH", False),
        (None, None, False),
    ],
)
def test_is_emergency(water_status, risk_level, expected) -> None:
    assert is_emergency(_status_reading(water_status, risk_level)) is expected


def test_is_emergency_without_reading() -> None:
    assert is_emergency(None) is False


@pytest.mark.parametrize(
    "gps_status, expected",
    [("CONNECTED", "LIVE"), ("DISCONNECTED", "DEFAULT"), ("", "DEFAULT"), (None, "DEFAULT")],
)
def test_classify_gps(gps_status, expected) -> None:
    assert classify_gps(gps_status) == expected


def test_summarize_status_includes_alert_gps_and_reported_gate() -> None:
    summary = summarize_status(
        _status_reading("WARNING", "CRITICAL", "CONNECTED", gate_status="OPEN")
    )

    assert summary["risk_level"] == "CRITICAL"
    assert summary["emergency"] is True
    assert summary["gps"] == "LIVE"
    assert summary["gate_state"] == "CLOSED"
    assert summary["reported_gate_status"] == "OPEN"


def test_summarize_status_without_reading_has_no_alert() -> None:
    summary = summarize_status(None)

    assert summary["emergency"] is False
    assert summary["gps"] == "DEFAULT"
    assert summary["reported_gate_status"] is None
