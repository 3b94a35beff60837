"""
blending.py — Forecast Blender
===============================

Combines the linear trend and smoothed-level forecasts into the single
series shown on the dashboard:

    blended[i] = LINEAR_WEIGHT * linear[i] + EXPONENTIAL_WEIGHT * exponential[i]

Points are matched by index. Both forecasters step time the same way from
the same last observation, so index i refers to the same timestamp in both.
"""

import logging
import numpy as np

from . import config
from .schema import ForecastPoint

logger = logging.getLogger("forecast.blending")


def blend_forecasts(linear, exponential,
                    linear_weight: float = None,
                    exponential_weight: float = None) -> list:
    """
    Weighted point-by-point combination of two forecasts.

    Args:
        linear: ForecastPoints from the linear trend model.
        exponential: ForecastPoints from the smoothing model.
        linear_weight: Defaults to config.LINEAR_WEIGHT (0.7).
        exponential_weight: Defaults to config.EXPONENTIAL_WEIGHT (0.3).

    Returns:
        Blended ForecastPoints carrying the linear forecast's timestamps,
        or [] if either input is empty.

    Raises:
        ValueError: If both inputs are non-empty but differ in length.
    """
    if linear_weight is None:
        linear_weight = config.LINEAR_WEIGHT
    if exponential_weight is None:
        exponential_weight = config.EXPONENTIAL_WEIGHT

    if not linear or not exponential:
        return []
    if len(linear) != len(exponential):
        raise ValueError(
            f"Cannot blend forecasts of different lengths "
            f"({len(linear)} vs {len(exponential)})"
        )

    lin = np.array([p.value for p in linear], dtype=np.float64)
    exp = np.array([p.value for p in exponential], dtype=np.float64)
    blended = linear_weight * lin + exponential_weight * exp
    logger.debug(f"Blended {len(blended)} points "
                 f"(weights {linear_weight}/{exponential_weight})")

    return [ForecastPoint(time=p.time, value=float(v))
            for p, v in zip(linear, blended)]
