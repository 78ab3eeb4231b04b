from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request
from pydantic import ValidationError

from .config import AppConfig, load_config
from .engine import run_causal_simulation
from .graph.normalize import normalize_graph
from .simulation.attractor import classify_attractor
from .types import SimulationOptions
from .validation.schema import validate_causal_graph

logger = logging.getLogger(__name__)


def _options_from_body(body: Dict[str, Any], cfg: AppConfig) -> SimulationOptions:
    params = cfg.simulation_defaults()
    for key in ("steps", "dt", "damping"):
        if body.get(key) is not None:
            params[key] = body[key]
    params["initial_state"] = body.get("currentState")
    return SimulationOptions(**params)


def build_payload(description: Any, options: SimulationOptions) -> Dict[str, Any]:
    """Core output plus the graph actually simulated and the attractor label."""
    result = run_causal_simulation(description, options)
    payload = result.to_payload()
    payload["causalGraph"] = normalize_graph(description).to_dict()
    payload["attractor"] = classify_attractor(result.final_values)
    return payload


def create_app(cfg: Optional[AppConfig] = None) -> Flask:
    cfg = cfg or load_config()
    app = Flask(__name__)

    @app.route("/health")
    def health():
        return jsonify({"status": "ok"})

    @app.route("/simulate", methods=["POST"])
    def simulate():
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            return jsonify({"error": "Request body must be a JSON object."}), 400

        description = body.get("causalGraph")
        if description is not None:
            if not isinstance(description, dict):
                return jsonify({"error": "causalGraph must be an object."}), 400
            try:
                validate_causal_graph(description)
            except ValueError as e:
                return jsonify({"error": str(e)}), 400

        try:
            options = _options_from_body(body, cfg)
        except ValidationError as e:
            return jsonify({"error": "Invalid simulation options.", "details": [err["msg"] for err in e.errors()]}), 400
        if options.steps > cfg.max_steps:
            return jsonify({"error": f"steps must not exceed {cfg.max_steps}."}), 400

        try:
            return jsonify(build_payload(description or {}, options))
        except Exception:
            logger.exception("Simulation failed")
            return jsonify({"error": "Internal Server Error during simulation."}), 500

    return app


def run(host: str = "127.0.0.1", port: int = 5000, debug: bool = False) -> None:
    app = create_app()
    app.run(host=host, port=port, debug=debug)
