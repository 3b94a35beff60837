"""
model.py — Linear Trend Forecaster
===================================

Wraps scikit-learn's LinearRegression to provide:
- An ordinary least-squares fit of metric value against absolute time
- A flat fallback when every timestamp is identical
- Projection of the fitted line onto future, evenly spaced timestamps

The fit:
    x = reading time as epoch seconds, y = metric value
    m = Σ((x - x̄)(y - ȳ)) / Σ((x - x̄)²)
    b = ȳ - m·x̄
    Σ((x - x̄)²) == 0 (all readings share one timestamp) → m = 0, b = ȳ

The model is refitted from scratch on every call; nothing is kept between
forecasts.
"""

import logging
import numpy as np
from sklearn.linear_model import LinearRegression

from .schema import ForecastPoint, validate_horizon
from .windowing import estimate_interval

logger = logging.getLogger("forecast.model")

MIN_POINTS = 2


def _epoch_seconds(times) -> np.ndarray:
    return np.array([t.timestamp() for t in times], dtype=np.float64)


def future_times(last_time, horizon: int, interval) -> list:
    """Timestamps last_time + i·interval for i in 1..horizon."""
    return [last_time + i * interval for i in range(1, horizon + 1)]


class LinearTrendForecaster:
    """
    Least-squares trend line projected forward over the forecast horizon.

    Usage:
        slope, intercept = LinearTrendForecaster().fit(series)
        points = LinearTrendForecaster().forecast(series, horizon=5)
    """

    def fit(self, series) -> tuple:
        """
        Fit the trend line to a series.

        Args:
            series: TimeSeries with at least 2 points.

        Returns:
            (slope, intercept) with slope in value units per second.

        Raises:
            ValueError: If the series has fewer than 2 points.
        """
        if len(series) < MIN_POINTS:
            raise ValueError(
                f"Linear fit needs at least {MIN_POINTS} points, got {len(series)}"
            )

        x = _epoch_seconds(series.times)
        y = np.array(series.values, dtype=np.float64)

        if np.all(x == x[0]):
            intercept = float(y.mean())
            logger.info(f"{series.metric.value}: all {len(x)} readings share one "
                        f"timestamp, using flat trend at mean {intercept:.4f}")
            return 0.0, intercept

        regression = LinearRegression()
        regression.fit(x.reshape(-1, 1), y)
        slope = float(regression.coef_[0])
        intercept = float(regression.intercept_)
        logger.debug(f"{series.metric.value}: slope={slope:.6g}/s "
                     f"intercept={intercept:.6g}")
        return slope, intercept

    def forecast(self, series, horizon: int, interval=None) -> list:
        """
        Project the trend line over the next `horizon` steps.

        Args:
            series: TimeSeries, ascending by time.
            horizon: Number of future points (positive int).
            interval: Spacing between future points (timedelta).
                Defaults to estimate_interval(series).

        Returns:
            List of `horizon` ForecastPoints, or [] when the series has
            fewer than 2 points.

        Raises:
            ConfigurationError: If horizon is not a positive integer.
        """
        validate_horizon(horizon)
        if len(series) < MIN_POINTS:
            logger.debug(f"{series.metric.value}: {len(series)} point(s), "
                         f"no linear forecast")
            return []

        if interval is None:
            interval = estimate_interval(series)

        slope, intercept = self.fit(series)
        times = future_times(series.times[-1], horizon, interval)
        x_future = _epoch_seconds(times)
        values = slope * x_future + intercept

        return [ForecastPoint(time=t, value=float(v))
                for t, v in zip(times, values)]
