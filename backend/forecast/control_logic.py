"""
control_logic.py — Sensor Status and Flood Gate Logic
======================================================

Classifies the latest reading for the dashboard status cards and derives
the flood gate position from the station's water status.

Sensor states:
    NORMAL / HIGH / LOW  — value inside / above / below its band
    None                 — sensor gave no value

Gate states:
    CLOSED   — water status is WARNING or DANGER
    OPEN     — any other reported water status
    UNKNOWN  — no water status reported

Alerts:
    emergency  — water status DANGER or reported risk level CRITICAL
    GPS LIVE   — station reports a GPS fix, else DEFAULT coordinates

Manual overrides are only built here; sending them to the gate controller
is the data source's job.
"""

import logging

from . import config
from .schema import ConfigurationError, Metric

logger = logging.getLogger("forecast.control_logic")

# Sensor band states
NORMAL = "NORMAL"
HIGH = "HIGH"
LOW = "LOW"

# Water status severities
CRITICAL = "CRITICAL"
UNKNOWN = "UNKNOWN"

# Gate states
GATE_OPEN = "OPEN"
GATE_CLOSED = "CLOSED"
GATE_UNKNOWN = "UNKNOWN"

# Sensor availability
ONLINE = "Online"
OFFLINE = "Offline"

# GPS fix
GPS_CONNECTED = "CONNECTED"
GPS_LIVE = "LIVE"
GPS_DEFAULT = "DEFAULT"

# Alert banner risk level that forces an emergency alert
CRITICAL_RISK = "CRITICAL"

CLOSE_REASON = "Manual close via UI"
OPEN_REASON = "Manual open via UI"


def classify_temperature(value):
    """HIGH above TEMPERATURE_HIGH, LOW below TEMPERATURE_LOW, else NORMAL."""
    if value is None:
        return None
    if value > config.TEMPERATURE_HIGH:
        return HIGH
    if value < config.TEMPERATURE_LOW:
        return LOW
    return NORMAL


def classify_humidity(value):
    """LOW below HUMIDITY_LOW, HIGH above HUMIDITY_HIGH, else NORMAL."""
    if value is None:
        return None
    if value < config.HUMIDITY_LOW:
        return LOW
    if value > config.HUMIDITY_HIGH:
        return HIGH
    return NORMAL


def classify_water_status(water_status):
    """Map the station's water status onto a display severity."""
    if water_status in config.GATE_CLOSING_STATUSES:
        return CRITICAL
    if water_status == NORMAL:
        return NORMAL
    return UNKNOWN


def derive_gate_state(water_status) -> str:
    """
    Infer the flood gate position from the reported water status.

    Args:
        water_status: Status string from the station (e.g. 'NORMAL',
            'WARNING', 'DANGER'), or None.

    Returns:
        GATE_CLOSED, GATE_OPEN, or GATE_UNKNOWN.
    """
    if not water_status:
        return GATE_UNKNOWN
    if water_status in config.GATE_CLOSING_STATUSES:
        return GATE_CLOSED
    return GATE_OPEN


def classify_gps(gps_status) -> str:
    """LIVE when the station reports a GPS fix, else DEFAULT (fallback coordinates)."""
    return GPS_LIVE if gps_status == GPS_CONNECTED else GPS_DEFAULT


def is_emergency(reading) -> bool:
    """True when the water status is DANGER or the reported risk is CRITICAL."""
    if reading is None:
        return False
    return reading.water_status == "DANGER" or reading.risk_level == CRITICAL_RISK


def sensor_availability(reading) -> dict:
    """Online/Offline per metric, based on whether the reading carries a value."""
    return {
        metric.value: ONLINE if reading.value(metric) is not None else OFFLINE
        for metric in Metric
    }


def summarize_status(reading) -> dict:
    """
    Bundle everything the status cards show for one reading.

    Args:
        reading: Latest Reading from the station, or None.

    Returns:
        Dict with per-metric value and state, water severity, emergency
        flag, derived and reported gate state, GPS mode, and sensor
        availability. An empty summary when reading is None.
    """
    if reading is None:
        return {
            "created_at": None,
            "metrics": {},
            "water_status": None,
            "water_severity": UNKNOWN,
            "risk_level": None,
            "emergency": False,
            "gate_state": GATE_UNKNOWN,
            "reported_gate_status": None,
            "gps": GPS_DEFAULT,
            "sensors": {metric.value: OFFLINE for metric in Metric},
        }

    return {
        "created_at": reading.created_at.isoformat(),
        "metrics": {
            Metric.WATER_LEVEL.value: {
                "value": reading.water_level,
                "state": None,
            },
            Metric.TEMPERATURE.value: {
                "value": reading.temperature,
                "state": classify_temperature(reading.temperature),
            },
            Metric.HUMIDITY.value: {
                "value": reading.humidity,
                "state": classify_humidity(reading.humidity),
            },
        },
        "water_status": reading.water_status,
        "water_severity": classify_water_status(reading.water_status),
        "risk_level": reading.risk_level,
        "emergency": is_emergency(reading),
        "gate_state": derive_gate_state(reading.water_status),
        "reported_gate_status": reading.gate_status,
        "gps": classify_gps(reading.gps_status),
        "sensors": sensor_availability(reading),
    }


def build_gate_override(should_close, reason: str = None) -> dict:
    """
    Build the arguments of a manual gate override command.

    Args:
        should_close: True to close the gate, False to open it.
        reason: Free-text reason; defaults to the dashboard's
            'Manual close via UI' / 'Manual open via UI'.

    Returns:
        Dict with 'new_state' and 'override_reason'.

    Raises:
        ConfigurationError: If should_close is not a bool.
    """
    if not isinstance(should_close, bool):
        raise ConfigurationError(
            f"should_close must be true or false, got {should_close!r}"
        )
    if not reason:
        reason = CLOSE_REASON if should_close else OPEN_REASON

    logger.warning(f"Gate override requested: "
                   f"{GATE_CLOSED if should_close else GATE_OPEN} ({reason})")
    return {"new_state": should_close, "override_reason": reason}
