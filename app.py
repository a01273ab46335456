"""Flask application providing an HTTP interface for Fibonacci spiral generation."""

from __future__ import annotations

import math
from typing import Any, Dict, Mapping

from flask import Flask, jsonify, render_template, request

from fibspiral import FibonacciSpiral


app = Flask(__name__, static_folder="static", template_folder="templates")


DEFAULT_PARAMS: Dict[str, Any] = {
    "count": 5,
    "size": 800,
    "show_squares": True,
    "show_labels": True,
    "show_spiral": True,
    "fill_opacity": 0.0,
}

MAX_COUNT = 40

# Bounds of the slider on the index page.
SLIDER_RANGE = (1, 15)


def _get_value(source: Mapping[str, Any], key: str, default: Any) -> Any:
    value = source.get(key, default)
    return default if value in (None, "") else value


def _parse_bool(source: Mapping[str, Any], key: str, default: bool) -> bool:
    value = _get_value(source, key, default)
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return default


def _parse_params(source: Mapping[str, Any]) -> Dict[str, Any]:
    params: Dict[str, Any] = {}

    def as_int(name: str, default: int) -> int:
        value = _get_value(source, name, default)
        try:
            return int(value)
        except (TypeError, ValueError, OverflowError):
            return default

    def as_float(name: str, default: float) -> float:
        value = _get_value(source, name, default)
        try:
            result = float(value)
        except (TypeError, ValueError):
            return default
        return result if math.isfinite(result) else default

    params["count"] = min(MAX_COUNT, max(0, as_int("count", DEFAULT_PARAMS["count"])))
    params["size"] = max(200, as_int("size", DEFAULT_PARAMS["size"]))
    params["show_squares"] = _parse_bool(source, "show_squares", DEFAULT_PARAMS["show_squares"])
    params["show_labels"] = _parse_bool(source, "show_labels", DEFAULT_PARAMS["show_labels"])
    params["show_spiral"] = _parse_bool(source, "show_spiral", DEFAULT_PARAMS["show_spiral"])
    params["fill_opacity"] = min(1.0, max(0.0, as_float("fill_opacity", DEFAULT_PARAMS["fill_opacity"])))

    return params


def _render_spiral(spiral: FibonacciSpiral, params: Mapping[str, Any]) -> str:
    return spiral.to_svg(
        size=params["size"],
        show_squares=params["show_squares"],
        show_labels=params["show_labels"],
        show_spiral=params["show_spiral"],
        fill_opacity=params["fill_opacity"],
    )


@app.route("/")
def index() -> str:
    return render_template(
        "index.html",
        params=DEFAULT_PARAMS,
        slider_min=SLIDER_RANGE[0],
        slider_max=SLIDER_RANGE[1],
    )


@app.post("/api/spiral")
def generate_spiral():
    payload = request.get_json(silent=True) or {}
    params = {**DEFAULT_PARAMS, **_parse_params(payload)}

    try:
        spiral = FibonacciSpiral(params["count"])
        svg = _render_spiral(spiral, params)
        geometry = spiral.to_json_dict()
    except Exception as exc:  # pragma: no cover - error path
        app.logger.exception("Failed to generate spiral")
        return jsonify({"error": str(exc)}), 400

    return jsonify({"svg": svg, "params": params, "geometry": geometry})


@app.get("/api/spiral/geometry")
def spiral_geometry():
    params = {**DEFAULT_PARAMS, **_parse_params(request.args)}

    try:
        geometry = FibonacciSpiral(params["count"]).to_json_dict()
    except Exception as exc:  # pragma: no cover - error path
        app.logger.exception("Failed to export spiral geometry")
        return jsonify({"error": str(exc)}), 400

    return jsonify({"geometry": geometry, "params": params})


if __name__ == "__main__":  # pragma: no cover - manual execution only
    app.run(debug=True)
