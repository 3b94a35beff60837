"""
ema.py — Exponential Smoothing Forecaster
==========================================

Single exponential smoothing over a metric's history:

    S_0 = y_0
    S_t = alpha * y_t + (1 - alpha) * S_(t-1)

The forecast for every future step is the final smoothed value S_n.
Single smoothing has no trend term, so the projection is a flat line; it
damps the linear trend when the two models are blended.
"""

import logging

from . import config
from .model import MIN_POINTS, future_times
from .schema import ForecastPoint, validate_horizon
from .windowing import estimate_interval

logger = logging.getLogger("forecast.ema")


def smooth(values, alpha: float = None) -> float:
    """
    Run single exponential smoothing and return the last smoothed value.

    Args:
        values: Observed values in time order (at least one).
        alpha: Smoothing factor. Defaults to config.EMA_ALPHA (0.3).

    Returns:
        Final smoothed value.
    """
    alpha = alpha if alpha is not None else config.EMA_ALPHA
    if not 0 < alpha <= 1:
        raise ValueError(f"Smoothing factor must be in (0, 1], got {alpha}")

    values = list(values)
    if not values:
        raise ValueError("Cannot smooth an empty sequence")

    smoothed = values[0]
    for value in values[1:]:
        smoothed = alpha * value + (1 - alpha) * smoothed
    return float(smoothed)


class ExponentialSmoothingForecaster:
    """
    Flat forecast at the exponentially smoothed level of the series.

    Attributes:
        alpha (float): Smoothing factor (0 < alpha <= 1).
    """

    def __init__(self, alpha: float = None):
        """
        Args:
            alpha: Smoothing factor. Defaults to config.EMA_ALPHA (0.3).
        """
        self.alpha = alpha if alpha is not None else config.EMA_ALPHA

    def forecast(self, series, horizon: int, interval=None) -> list:
        """
        Repeat the final smoothed value over the next `horizon` steps.

        Returns:
            List of `horizon` ForecastPoints, or [] when the series has
            fewer than 2 points.
        """
        validate_horizon(horizon)
        if len(series) < MIN_POINTS:
            logger.debug(f"{series.metric.value}: {len(series)} point(s), "
                         f"no smoothing forecast")
            return []

        if interval is None:
            interval = estimate_interval(series)

        level = smooth(series.values, self.alpha)
        logger.debug(f"{series.metric.value}: smoothed level={level:.4f} "
                     f"(alpha={self.alpha})")

        times = future_times(series.times[-1], horizon, interval)
        return [ForecastPoint(time=t, value=level) for t in times]
