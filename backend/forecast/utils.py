"""
utils.py — Shared Utility Functions and Logging Setup
======================================================

Common helpers used across the forecast core modules.
"""

import math
import logging
from datetime import datetime, timezone

from . import config


def setup_logging(level: str = None) -> None:
    """
    Configure structured logging for the forecast core.

    Sets up a console handler with timestamp, logger name, level,
    and message. All forecast.* loggers inherit this configuration.

    Args:
        level: Log level string (DEBUG/INFO/WARNING/ERROR/CRITICAL).
               Defaults to config.LOG_LEVEL.
    """
    level = level or config.LOG_LEVEL
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(name)s] %(levelname)s — %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    forecast_logger = logging.getLogger("forecast")
    forecast_logger.setLevel(numeric_level)

    # Avoid duplicate handlers on repeated calls
    if not forecast_logger.handlers:
        forecast_logger.addHandler(handler)


def parse_timestamp(value) -> datetime:
    """
    Parse a reading timestamp into a timezone-aware datetime.

    Accepts datetime objects or ISO-8601 strings (a trailing 'Z' is
    accepted). Naive values are interpreted as UTC.

    Raises:
        ValueError: If the value is missing or not a valid timestamp.
    """
    if value is None:
        raise ValueError("Reading has no created_at timestamp")
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise ValueError(f"Invalid created_at timestamp: {value!r}")
    if not isinstance(value, datetime):
        raise ValueError(f"Invalid created_at timestamp: {value!r}")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def parse_metric_value(value):
    """
    Coerce a raw sensor value to float, or None when the sensor gave nothing.

    Non-numeric values, NaN and ±inf are treated as absent readings.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number
