"""
service.py — Forecast HTTP Service (Flask)
===========================================

Lightweight HTTP bridge between the dashboard's data layer and the
forecast core. The caller posts the readings it already fetched from the
monitoring table; the service never talks to the database itself.

Endpoints:
    GET  /health     — Service health check
    POST /forecast   — Historical series + blended forecast per metric
    POST /status     — Status-card summary of the latest reading
    POST /gate       — Validate and build a manual gate override command

Run:
    python -m backend.forecast.service
    # Starts on port 5050 by default (configurable via FORECAST_SERVICE_PORT)
"""

import logging

from flask import Flask, request, jsonify
from werkzeug.exceptions import HTTPException

from backend.forecast import config
from backend.forecast.control_logic import build_gate_override, summarize_status
from backend.forecast.pipeline import forecast_to_dict, run_pipeline
from backend.forecast.preprocessing import sort_readings
from backend.forecast.schema import ForecastConfig, Reading
from backend.forecast.utils import parse_timestamp, setup_logging
from backend.forecast.windowing import TimeRange, select_time_range

setup_logging()

logger = logging.getLogger("forecast.service")
app = Flask(__name__)


def _json_body() -> dict:
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        raise ValueError("No JSON object body provided")
    return data


def _parse_readings(data: dict) -> list:
    """Parse and time-order the 'readings' array of a request body."""
    rows = data.get("readings")
    if not isinstance(rows, list):
        raise ValueError("'readings' must be a list of monitoring records")
    for row in rows:
        if not isinstance(row, dict):
            raise ValueError("Each reading must be a JSON object")
    return sort_readings(Reading.from_record(row) for row in rows)


@app.errorhandler(ValueError)
def bad_request(error):
    logger.warning(f"Rejected request: {error}")
    return jsonify({"error": str(error)}), 400


@app.route("/health", methods=["GET"])
def health():
    """Health check endpoint."""
    return jsonify({
        "status": "OK",
        "service": "Flood Forecast Core",
        "horizon_choices": list(config.HORIZON_CHOICES),
        "default_horizon": config.DEFAULT_HORIZON,
        "time_ranges": [r.value for r in TimeRange],
    })


@app.route("/forecast", methods=["POST"])
def forecast():
    """
    Forecast the selected metrics from the posted readings.

    Expects JSON body:
        { readings: [...], horizon?: int, metric?: str,
          time_range?: 'day'|'week'|'month', now?: ISO-8601 }

    Returns:
        { horizon, metric, time_range, series: {metric: {history, forecast}} }
    """
    data = _json_body()
    forecast_config = ForecastConfig.from_values(
        horizon=data.get("horizon"),
        metric=data.get("metric"),
    )
    readings = _parse_readings(data)

    time_range = data.get("time_range")
    if time_range is not None:
        time_range = TimeRange.parse(time_range)
        now = parse_timestamp(data["now"]) if data.get("now") else None
        readings = select_time_range(readings, time_range, now=now)

    result = run_pipeline(readings, forecast_config)

    return jsonify({
        "horizon": forecast_config.horizon_steps,
        "metric": forecast_config.metric_selection.value,
        "time_range": time_range.value if time_range is not None else None,
        "series": forecast_to_dict(result),
    })


@app.route("/status", methods=["POST"])
def status():
    """Summarize the most recent posted reading for the status cards."""
    readings = _parse_readings(_json_body())
    latest = readings[-1] if readings else None
    return jsonify(summarize_status(latest))


@app.route("/gate", methods=["POST"])
def gate():
    """
    Build a manual gate override command.

    Expects JSON body: { should_close: bool, reason?: str }
    """
    data = _json_body()
    command = build_gate_override(data.get("should_close"), data.get("reason"))
    return jsonify({"status": "accepted", "command": command})


@app.errorhandler(Exception)
def internal_error(error):
    if isinstance(error, HTTPException):
        return error
    logger.error(f"Forecast service error: {error}", exc_info=True)
    return jsonify({"status": "error", "message": str(error)}), 500


if __name__ == "__main__":
    logger.info(f"Starting forecast service on port {config.SERVICE_PORT}")
    app.run(host=config.SERVICE_HOST, port=config.SERVICE_PORT, debug=False)
