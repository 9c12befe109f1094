"""REST API for capital projections."""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List

from flask import Flask, Response, jsonify, request

from capital_projection.config import DEFAULT_INPUT, load_settings
from capital_projection.data_model import (
    ProjectionInput,
    Scenario,
    projection_input_from_payload,
    validate_projection_input,
)
from capital_projection.engine import (
    aggregate_period,
    compare_scenarios,
    compute_advanced_analytics,
    export_csv,
    results_to_frame,
    run_projection,
)

logger = logging.getLogger(__name__)

app = Flask(__name__)
settings = load_settings()

FREQ_OPTIONS = [
    {"label": "Monthly", "value": "M"},
    {"label": "Quarterly", "value": "Q"},
    {"label": "Yearly", "value": "Y"},
]
FREQ_VALUES = [option["value"] for option in FREQ_OPTIONS]


class PayloadError(ValueError):
    def __init__(self, errors: List[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = errors


def _sanitize_json_compat(value: Any):
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return value
    if isinstance(value, dict):
        return {key: _sanitize_json_compat(val) for key, val in value.items()}
    if isinstance(value, (list, tuple)):
        return [_sanitize_json_compat(item) for item in value]
    return value


def _sanitize_records(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [_sanitize_json_compat(row) for row in records]


def _parse_input(payload: Any) -> ProjectionInput:
    if not isinstance(payload, dict):
        raise PayloadError(["Projection input must be an object"])
    errors = validate_projection_input(payload)
    if errors:
        raise PayloadError(errors)
    try:
        return projection_input_from_payload(payload)
    except (TypeError, ValueError) as exc:
        raise PayloadError([str(exc)]) from exc


def _period_records(result, freq: str) -> List[Dict[str, Any]]:
    if freq == "M":
        return [record.to_dict() for record in result.results]
    frame = aggregate_period(results_to_frame(result.results), freq=freq)
    return frame.to_dict(orient="records")


@app.after_request
def apply_cors_headers(response):
    response.headers["Access-Control-Allow-Origin"] = settings.cors_origin
    response.headers["Access-Control-Allow-Methods"] = "GET,POST,OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    return response


@app.errorhandler(PayloadError)
def handle_payload_error(exc: PayloadError):
    return jsonify({"error": "Invalid projection input.", "errors": exc.errors}), 400


@app.get("/api/health")
def healthcheck():
    return jsonify({"status": "ok"})


@app.get("/api/schema")
def get_schema():
    return jsonify({"inputDefaults": DEFAULT_INPUT, "freqOptions": FREQ_OPTIONS, "currency": settings.currency})


@app.post("/api/projections")
def create_projection():
    payload = request.get_json(silent=True) or {}
    data = _parse_input(payload)
    freq = str(payload.get("freq") or "M").upper()
    if freq not in FREQ_VALUES:
        return jsonify({"error": f"Unknown frequency {freq!r}; expected one of: {', '.join(FREQ_VALUES)}"}), 400

    result = run_projection(data)
    if not result.success:
        return jsonify(result.to_dict()), 422

    analytics = compute_advanced_analytics(result.results, data)
    body = {
        "success": True,
        "freq": freq,
        "results": _sanitize_records(_period_records(result, freq)),
        "summary": _sanitize_json_compat(result.summary.to_dict()) if result.summary else None,
        "analytics": _sanitize_json_compat(analytics.to_dict()) if analytics else None,
    }
    return jsonify(body)


@app.post("/api/projections/export")
def export_projection():
    payload = request.get_json(silent=True) or {}
    data = _parse_input(payload)
    result = run_projection(data)
    if not result.success:
        return jsonify(result.to_dict()), 422
    filename = str(payload.get("filename") or "projection.csv")
    return Response(
        export_csv(result.results, currency=settings.currency),
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@app.post("/api/scenarios/compare")
def compare_scenarios_endpoint():
    payload = request.get_json(silent=True) or {}
    entries = payload.get("scenarios") if isinstance(payload, dict) else None
    if not isinstance(entries, list) or len(entries) < 2:
        return jsonify({"error": "At least two scenarios are required."}), 400

    scenarios: List[Scenario] = []
    for index, entry in enumerate(entries, start=1):
        data = _parse_input(entry)
        result = run_projection(data)
        if not result.success:
            return jsonify({"error": f"Scenario {index} failed: {result.error}"}), 422
        if not result.results:
            return jsonify({"error": f"Scenario {index} produced no projection months."}), 422
        scenarios.append(Scenario(name=entry.get("name"), results=result.results, input_data=data))

    comparison = compare_scenarios(scenarios)
    return jsonify(_sanitize_json_compat(comparison.to_dict()))


def main() -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting projection API on %s:%d", settings.host, settings.port)
    app.run(host=settings.host, port=settings.port, debug=settings.debug)


if __name__ == "__main__":
    main()
