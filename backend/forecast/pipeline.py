"""
pipeline.py — Metric Pipeline Orchestrator
===========================================

Runs the forecast stages for each selected metric and hands the display
layer one historical series and one blended forecast per metric.

Flow (per metric, independently):
    readings -> normalize_series() -> estimate_interval()
             -> LinearTrendForecaster + ExponentialSmoothingForecaster
             -> blend_forecasts() -> MetricForecast

The orchestrator is a pure function of its inputs: it neither mutates the
readings nor keeps results between calls. Dashboards that want a live
forecast call it again whenever a new batch of readings arrives.
"""

import logging
from dataclasses import dataclass, field

from .blending import blend_forecasts
from .ema import ExponentialSmoothingForecaster
from .model import LinearTrendForecaster
from .preprocessing import normalize_series
from .schema import ConfigurationError, ForecastConfig, Metric, TimeSeries
from .windowing import estimate_interval

logger = logging.getLogger("forecast.pipeline")


@dataclass(frozen=True)
class MetricForecast:
    """History and blended forecast for one metric."""

    history: TimeSeries
    forecast: list = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "history": self.history.to_list(),
            "forecast": [p.to_dict() for p in self.forecast],
        }


def forecast_metric(readings, metric: Metric, horizon: int,
                    tail_gaps: int = None) -> MetricForecast:
    """
    Run the full pipeline for one metric.

    Args:
        readings: Sequence of Reading objects, ascending by created_at.
        metric: Metric to forecast.
        horizon: Number of future points.
        tail_gaps: Trailing gaps used for the interval estimate.

    Returns:
        MetricForecast; its forecast is empty when the metric has fewer
        than 2 non-null readings.
    """
    history = normalize_series(readings, metric)
    interval = estimate_interval(history, tail_gaps=tail_gaps)

    linear = LinearTrendForecaster().forecast(history, horizon, interval)
    exponential = ExponentialSmoothingForecaster().forecast(history, horizon, interval)
    blended = blend_forecasts(linear, exponential)

    if not blended:
        logger.info(f"{history.metric.value}: insufficient data for a forecast "
                    f"({len(history)} point(s))")
    else:
        logger.debug(f"{history.metric.value}: {len(blended)} forecast points "
                     f"every {interval}")

    return MetricForecast(history=history, forecast=blended)


def run_pipeline(readings, forecast_config: ForecastConfig,
                 tail_gaps: int = None) -> dict:
    """
    Main entry point: forecast every metric named by the configuration.

    Args:
        readings: Sequence of Reading objects, ascending by created_at.
        forecast_config: ForecastConfig with horizon and metric selection.
        tail_gaps: Trailing gaps used for the interval estimate.
            Defaults to config.INTERVAL_TAIL_GAPS.

    Returns:
        Dict mapping Metric -> MetricForecast, in display order.

    Raises:
        ConfigurationError: If forecast_config is not a ForecastConfig.
    """
    if not isinstance(forecast_config, ForecastConfig):
        raise ConfigurationError(
            f"Expected a ForecastConfig, got {type(forecast_config).__name__}"
        )

    readings = tuple(readings)
    metrics = forecast_config.metric_selection.metrics()
    logger.info(f"Forecasting {', '.join(m.value for m in metrics)} "
                f"over {forecast_config.horizon_steps} steps "
                f"from {len(readings)} readings")

    return {
        metric: forecast_metric(readings, metric,
                                forecast_config.horizon_steps, tail_gaps)
        for metric in metrics
    }


def forecast_to_dict(result: dict) -> dict:
    """Render run_pipeline() output as JSON-ready data keyed by metric name."""
    return {metric.value: mf.to_dict() for metric, mf in result.items()}
