"""Unit tests for the forecast data model."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from backend.forecast import config
from backend.forecast.schema import (
    ConfigurationError,
    ForecastConfig,
    ForecastPoint,
    Metric,
    MetricSelection,
    Reading,
)


def test_reading_from_record_parses_iso_timestamp_and_metrics() -> None:
    reading = Reading.from_record(
        {
            "created_at": "2024-03-01T12:30:00Z",
            "water_level": 42,
            "temperature": "21.5",
            "humidity": None,
            "water_status": "WARNING",
        }
    )

    assert reading.created_at == datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)
    assert reading.water_level == 42.0
    assert reading.temperature == 21.5
    assert reading.humidity is None
    assert reading.water_status == "WARNING"


def test_reading_from_record_treats_naive_timestamp_as_utc() -> None:
    reading = Reading.from_record({"created_at": "2024-03-01T12:30:00"})

    assert reading.created_at.tzinfo is not None
    assert reading.created_at.utcoffset().total_seconds() == 0


def test_reading_from_record_drops_non_numeric_values() -> None:
    reading = Reading.from_record(
        {
            "created_at": "2024-03-01T12:30:00+00:00",
            "water_level": "n/a",
            "temperature": float("nan"),
            "humidity": True,
        }
    )

    assert reading.water_level is None
    assert reading.temperature is None
    assert reading.humidity is None


@pytest.mark.parametrize("created_at", [None, "yesterday", 12345])
def test_reading_from_record_rejects_bad_timestamp(created_at) -> None:
    with pytest.raises(ValueError):
        Reading.from_record({"created_at": created_at, "water_level": 1.0})


def test_reading_value_looks_up_metric_column() -> None:
    reading = Reading(
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        water_level=3.0,
        temperature=20.0,
    )

    assert reading.value(Metric.WATER_LEVEL) == 3.0
    assert reading.value("temperature") == 20.0
    assert reading.value(Metric.HUMIDITY) is None


def test_metric_selection_expands_all_in_display_order() -> None:
    assert MetricSelection.ALL.metrics() == (
        Metric.WATER_LEVEL,
        Metric.TEMPERATURE,
        Metric.HUMIDITY,
    )
    assert MetricSelection.HUMIDITY.metrics() == (Metric.HUMIDITY,)


def test_metric_selection_parse_rejects_unknown_name() -> None:
    with pytest.raises(ConfigurationError):
        MetricSelection.parse("rainfall")


def test_forecast_config_defaults() -> None:
    forecast_config = ForecastConfig()

    assert forecast_config.horizon_steps == config.DEFAULT_HORIZON
    assert forecast_config.metric_selection is MetricSelection.ALL


def test_forecast_config_from_values_parses_metric_name() -> None:
    forecast_config = ForecastConfig.from_values(horizon=10, metric="water_level")

    assert forecast_config.horizon_steps == 10
    assert forecast_config.metric_selection is MetricSelection.WATER_LEVEL


@pytest.mark.parametrize("horizon", [0, -3, 2.5, "5", True, None])
def test_forecast_config_rejects_invalid_horizon(horizon) -> None:
    with pytest.raises(ConfigurationError):
        ForecastConfig(horizon_steps=horizon)


def test_configuration_error_is_a_value_error() -> None:
    assert issubclass(ConfigurationError, ValueError)


def test_forecast_point_to_dict_uses_iso_time() -> None:
    point = ForecastPoint(time=datetime(2024, 1, 1, 6, tzinfo=timezone.utc), value=1.5)

    assert point.to_dict() == {"time": "2024-01-01T06:00:00+00:00", "value": 1.5}


def test_reading_built_directly_treats_naive_timestamp_as_utc() -> None:
    reading = Reading(created_at=datetime(2024, 1, 1, 5), water_level=1.0)

    assert reading.created_at == datetime(2024, 1, 1, 5, tzinfo=timezone.utc)
    assert reading.created_at.timestamp() == datetime(2024, 1, 1, 5, tzinfo=timezone.utc).timestamp()


def test_reading_built_directly_rejects_missing_timestamp() -> None:
    with pytest.raises(ValueError):
        Reading(created_at=None)
