"""
config.py — Forecast Core Configuration Constants
==================================================

Centralizes the model parameters, blend weights, and service settings used
by the flood-monitoring forecast core. Tuning these values changes how
aggressively the forecast follows recent readings.

The monitoring station reports:
- Water level (sensor units, higher = closer to flooding)
- Air temperature (°C)
- Relative humidity (%)
- Readings are stored with a `created_at` timestamp by the data source
"""

import os

# ═══════════════════════════════════════════════════════════════════
# EXPONENTIAL SMOOTHING CONFIGURATION
# ═══════════════════════════════════════════════════════════════════

# Smoothing factor (0 < alpha <= 1).
#   Higher alpha → more weight on the newest reading → tracks changes faster.
#   Lower  alpha → flatter projection, less sensitive to a single spike.
EMA_ALPHA = 0.3

# ═══════════════════════════════════════════════════════════════════
# FORECAST BLENDING
# ═══════════════════════════════════════════════════════════════════

# Weights applied to the two models when combining them point by point.
# The linear trend carries the direction, the smoothed level damps it.
LINEAR_WEIGHT = 0.7
EXPONENTIAL_WEIGHT = 0.3

# ═══════════════════════════════════════════════════════════════════
# SAMPLING INTERVAL ESTIMATION
# ═══════════════════════════════════════════════════════════════════

# Number of trailing gaps averaged to estimate the spacing of future points.
# Override per call via estimate_interval(..., tail_gaps=N).
INTERVAL_TAIL_GAPS = 5

# Spacing used when the series has fewer than 2 points (1 hour).
DEFAULT_INTERVAL_SECONDS = 3600

# ═══════════════════════════════════════════════════════════════════
# FORECAST HORIZON
# ═══════════════════════════════════════════════════════════════════

# Number of future points produced when the caller does not choose one.
DEFAULT_HORIZON = int(os.environ.get("FORECAST_DEFAULT_HORIZON", "5"))

# Horizons offered by the dashboard selector (advertised on /health).
HORIZON_CHOICES = (3, 5, 10)

# ═══════════════════════════════════════════════════════════════════
# HISTORY WINDOWS
# ═══════════════════════════════════════════════════════════════════

# Span (in days) of each selectable history window.
TIME_RANGE_DAYS = {
    "day": 1,
    "week": 7,
    "month": 30,
}

# ═══════════════════════════════════════════════════════════════════
# SENSOR STATUS THRESHOLDS
# ═══════════════════════════════════════════════════════════════════

# Temperature (°C) outside [LOW, HIGH] is flagged on the status cards.
TEMPERATURE_HIGH = 35.0
TEMPERATURE_LOW = 0.0

# Relative humidity (%) outside [LOW, HIGH] is flagged.
HUMIDITY_LOW = 30.0
HUMIDITY_HIGH = 60.0

# Water statuses reported by the station that keep the flood gate closed.
GATE_CLOSING_STATUSES = ("WARNING", "DANGER")

# ═══════════════════════════════════════════════════════════════════
# HTTP SERVICE
# ═══════════════════════════════════════════════════════════════════

SERVICE_HOST = os.environ.get("FORECAST_SERVICE_HOST", "0.0.0.0")
SERVICE_PORT = int(os.environ.get("FORECAST_SERVICE_PORT", "5050"))

# ═══════════════════════════════════════════════════════════════════
# LOGGING
# ═══════════════════════════════════════════════════════════════════

# Log level for the forecast core (DEBUG, INFO, WARNING, ERROR, CRITICAL)
LOG_LEVEL = os.environ.get("FORECAST_LOG_LEVEL", "INFO")
