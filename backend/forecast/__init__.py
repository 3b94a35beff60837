"""
backend.forecast — Forecast Core for the Flood Monitoring Dashboard
====================================================================

Turns the station's historical readings into chart-ready series and a
short-horizon forecast for the dashboard.

Architecture:
    Flood station sensors → Monitoring table → Dashboard data layer
                                                      ↓
                                               Forecast Core:
                                                 1. Series Normalization
                                                 2. Interval Estimation
                                                 3. Linear Trend (OLS)
                                                 4. Exponential Smoothing
                                                 5. Forecast Blending (70/30)
                                                      ↓
                                  {metric: history + forecast} → Charts

Modules:
    config          — Model parameters and service constants
    schema          — Reading / TimeSeries / ForecastPoint / ForecastConfig
    preprocessing   — Per-metric series normalization
    windowing       — Sampling interval estimate and history windows
    model           — Least-squares linear trend forecaster
    ema             — Single exponential smoothing forecaster
    blending        — Weighted combination of the two forecasts
    pipeline        — Per-metric orchestration
    control_logic   — Sensor status cards and flood gate logic
    service         — Flask HTTP bridge
    utils           — Logging setup and record parsing helpers
"""

from .pipeline import MetricForecast, forecast_to_dict, run_pipeline
from .schema import (
    ConfigurationError,
    ForecastConfig,
    ForecastPoint,
    Metric,
    MetricSelection,
    Reading,
    TimeSeries,
)

__version__ = "1.0.0"
__author__ = "Flood Monitoring Dashboard Team"
