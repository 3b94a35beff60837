"""
schema.py — Forecast Core Data Model
=====================================

Typed records passed between the forecast stages:

    Reading          — one sensor sample from the monitoring table
    TimeSeries       — ordered (time, value) points for one metric
    ForecastPoint    — one predicted (time, value) pair
    ForecastConfig   — horizon + metric selection for one request

Metric and MetricSelection are closed enums so that the orchestrator can
dispatch over a fixed set of variants instead of matching free strings.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import NamedTuple, Optional

from . import config
from .utils import parse_metric_value, parse_timestamp


class ConfigurationError(ValueError):
    """Raised when a caller passes an invalid horizon, metric or option."""


class Metric(str, Enum):
    WATER_LEVEL = "water_level"
    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"


class MetricSelection(str, Enum):
    WATER_LEVEL = "water_level"
    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"
    ALL = "all"

    def metrics(self) -> tuple:
        """Expand the selection into the metrics to forecast, in display order."""
        if self is MetricSelection.ALL:
            return tuple(Metric)
        return (Metric(self.value),)

    @classmethod
    def parse(cls, value) -> "MetricSelection":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ConfigurationError(
                f"Unknown metric selection {value!r} (expected one of: {choices})"
            )


@dataclass(frozen=True)
class Reading:
    """
    One sensor sample as delivered by the data source.

    Any metric may be None independently of the others (sensor offline,
    packet lost).
    """

    created_at: datetime
    water_level: Optional[float] = None
    temperature: Optional[float] = None
    humidity: Optional[float] = None
    water_status: Optional[str] = None
    risk_level: Optional[str] = None
    gps_status: Optional[str] = None
    gate_status: Optional[str] = None

    def __post_init__(self):
        # Naive timestamps are UTC; keeps comparisons and epoch math consistent.
        object.__setattr__(self, "created_at", parse_timestamp(self.created_at))

    def value(self, metric: Metric) -> Optional[float]:
        return getattr(self, Metric(metric).value)

    @classmethod
    def from_record(cls, record: dict) -> "Reading":
        """
        Build a Reading from a monitoring-table row.

        Args:
            record: Dict with 'created_at' (ISO-8601 or datetime) and the
                nullable metric columns.

        Returns:
            Parsed Reading; non-numeric metric values become None.

        Raises:
            ValueError: If created_at is missing or unparseable.
        """
        return cls(
            created_at=parse_timestamp(record.get("created_at")),
            water_level=parse_metric_value(record.get("water_level")),
            temperature=parse_metric_value(record.get("temperature")),
            humidity=parse_metric_value(record.get("humidity")),
            water_status=record.get("water_status"),
            risk_level=record.get("risk_level"),
            gps_status=record.get("gps_status"),
            gate_status=record.get("gate_status"),
        )


class SeriesPoint(NamedTuple):
    time: datetime
    value: float

    def to_dict(self) -> dict:
        return {"time": self.time.isoformat(), "value": self.value}


class ForecastPoint(NamedTuple):
    time: datetime
    value: float

    def to_dict(self) -> dict:
        return {"time": self.time.isoformat(), "value": self.value}


@dataclass(frozen=True)
class TimeSeries:
    """Ordered, non-null (time, value) points for exactly one metric."""

    metric: Metric
    points: tuple = ()

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    @property
    def times(self) -> list:
        return [p.time for p in self.points]

    @property
    def values(self) -> list:
        return [p.value for p in self.points]

    def to_list(self) -> list:
        return [p.to_dict() for p in self.points]


@dataclass(frozen=True)
class ForecastConfig:
    """
    Per-request forecast settings.

    Attributes:
        horizon_steps: Number of future points to produce (positive int).
        metric_selection: Which metric(s) to forecast.

    Raises:
        ConfigurationError: On a non-positive horizon or unknown selection.
    """

    horizon_steps: int = config.DEFAULT_HORIZON
    metric_selection: MetricSelection = field(default=MetricSelection.ALL)

    def __post_init__(self):
        validate_horizon(self.horizon_steps)
        object.__setattr__(self, "metric_selection",
                           MetricSelection.parse(self.metric_selection))

    @classmethod
    def from_values(cls, horizon=None, metric=None) -> "ForecastConfig":
        """Build a config from raw caller values, applying defaults for None."""
        if horizon is None:
            horizon = config.DEFAULT_HORIZON
        if metric is None:
            metric = MetricSelection.ALL
        return cls(horizon_steps=horizon, metric_selection=metric)


def validate_horizon(horizon) -> int:
    """Reject anything but a positive integer number of steps."""
    if isinstance(horizon, bool) or not isinstance(horizon, int):
        raise ConfigurationError(
            f"Forecast horizon must be a positive integer, got {horizon!r}"
        )
    if horizon <= 0:
        raise ConfigurationError(
            f"Forecast horizon must be a positive integer, got {horizon}"
        )
    return horizon
