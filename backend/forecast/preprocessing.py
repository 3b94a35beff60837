"""
preprocessing.py — Series Normalization
========================================

Turns raw monitoring readings into one TimeSeries per metric:

1. Pick the metric column out of each reading.
2. Drop readings where that metric is missing (None / NaN) or infinite.
3. Keep the remaining (time, value) pairs in the order they were given.

Ordering:
    The normalizer does NOT sort. The data source returns rows ordered by
    created_at ascending and the forecasters rely on that. Least-squares
    regression gives the same fit for any order, but the interval estimate
    averages the raw tail gaps of whatever order it receives, so unordered
    input yields an implementation-defined (possibly negative) spacing.
"""

import logging
import numpy as np
import pandas as pd

from .schema import Metric, SeriesPoint, TimeSeries

logger = logging.getLogger("forecast.preprocessing")


def _values_frame(readings, metric: Metric) -> pd.DataFrame:
    """One numeric 'value' column, indexed by position in the input."""
    values = pd.Series([r.value(metric) for r in readings], dtype="object")
    numeric = pd.to_numeric(values, errors="coerce").astype("float64")
    return pd.DataFrame({"value": numeric})


def normalize_series(readings, metric) -> TimeSeries:
    """
    Convert readings into the ordered series for a single metric.

    In the flood-monitoring context, a missing water level means the
    ultrasonic sensor did not answer for that sample; the other metrics of
    the same reading are unaffected.

    Args:
        readings: Sequence of Reading objects, ideally ascending by created_at.
        metric: Metric (or its column name) to extract.

    Returns:
        TimeSeries holding only the finite values, input order preserved.
    """
    metric = Metric(metric)
    readings = list(readings)
    if not readings:
        return TimeSeries(metric=metric)

    df = _values_frame(readings, metric)
    before = len(df)
    df = df[np.isfinite(df["value"])]
    dropped = before - len(df)
    if dropped > 0:
        logger.debug(f"{metric.value}: dropped {dropped} of {before} readings "
                     f"with no finite value")

    points = tuple(
        SeriesPoint(time=readings[i].created_at, value=float(v))
        for i, v in zip(df.index.tolist(), df["value"].tolist())
    )
    return TimeSeries(metric=metric, points=points)


def normalize_all(readings, metrics) -> dict:
    """
    Normalize several metrics from the same batch of readings.

    Args:
        readings: Sequence of Reading objects.
        metrics: Iterable of Metric.

    Returns:
        Dict mapping each Metric to its TimeSeries.
    """
    readings = list(readings)
    return {Metric(m): normalize_series(readings, m) for m in metrics}


def sort_readings(readings) -> list:
    """
    Order readings by created_at ascending, as the data source does.

    The sort is stable, so readings sharing a timestamp keep their
    relative order.
    """
    return sorted(readings, key=lambda r: r.created_at)
