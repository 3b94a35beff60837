"""
windowing.py — Sampling Interval and History Windows
=====================================================

Two time-based helpers used before forecasting:

    estimate_interval()   — spacing to use between future forecast points
    select_time_range()   — restrict readings to the last day / week / month

How the interval is estimated:
    1. Take the gaps between consecutive points of the series.
    2. Keep only the last INTERVAL_TAIL_GAPS of them (5 by default).
    3. Average them.
    With fewer than 2 points there is no gap at all and the spacing falls
    back to DEFAULT_INTERVAL_SECONDS (1 hour).

Why only the tail?
    The station's reporting cadence changes (power saving, maintenance,
    reconnects). The most recent gaps describe the cadence the next points
    will most likely follow; gaps from hours ago do not.
"""

import logging
from datetime import datetime, timedelta, timezone
from enum import Enum

import numpy as np

from . import config
from .schema import ConfigurationError

logger = logging.getLogger("forecast.windowing")

DEFAULT_INTERVAL = timedelta(seconds=config.DEFAULT_INTERVAL_SECONDS)


def estimate_interval(series, tail_gaps: int = None) -> timedelta:
    """
    Estimate the spacing between future points from the tail of a series.

    The series is expected ascending by time. Unordered input is not
    rejected: its raw (possibly negative) gaps are averaged as they are.

    Args:
        series: TimeSeries (or any sequence of (time, value) points).
        tail_gaps: How many trailing gaps to average.
            Defaults to config.INTERVAL_TAIL_GAPS (5).

    Returns:
        Average gap as a timedelta, or DEFAULT_INTERVAL (1 h) when the
        series has fewer than 2 points.

    Raises:
        ConfigurationError: If tail_gaps is smaller than 1.
    """
    if tail_gaps is None:
        tail_gaps = config.INTERVAL_TAIL_GAPS
    if isinstance(tail_gaps, bool) or not isinstance(tail_gaps, int) or tail_gaps < 1:
        raise ConfigurationError(f"tail_gaps must be a positive integer, got {tail_gaps!r}")

    points = list(series)
    if len(points) < 2:
        logger.debug(f"Only {len(points)} point(s), using default interval "
                     f"{DEFAULT_INTERVAL}")
        return DEFAULT_INTERVAL

    tail = points[-(tail_gaps + 1):]
    seconds = np.array([p.time.timestamp() for p in tail], dtype=np.float64)
    gaps = np.diff(seconds)
    interval = timedelta(seconds=float(gaps.mean()))

    logger.debug(f"Estimated interval {interval} from last {len(gaps)} gap(s)")
    return interval


class TimeRange(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"

    @property
    def span(self) -> timedelta:
        return timedelta(days=config.TIME_RANGE_DAYS[self.value])

    @classmethod
    def parse(cls, value) -> "TimeRange":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            choices = ", ".join(r.value for r in cls)
            raise ConfigurationError(
                f"Unknown time range {value!r} (expected one of: {choices})"
            )


def select_time_range(readings, time_range, now: datetime = None) -> list:
    """
    Keep the readings created within the selected history window.

    Mirrors the dashboard's history query: everything with
    now - span <= created_at <= now, input order preserved.

    Args:
        readings: Sequence of Reading objects.
        time_range: TimeRange or its name ('day', 'week', 'month').
        now: Window end. Defaults to the current UTC time.

    Returns:
        List of readings inside the window.
    """
    time_range = TimeRange.parse(time_range)
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    start = now - time_range.span

    selected = [r for r in readings if start <= r.created_at <= now]
    logger.debug(f"Time range '{time_range.value}': kept {len(selected)} readings "
                 f"between {start.isoformat()} and {now.isoformat()}")
    return selected
