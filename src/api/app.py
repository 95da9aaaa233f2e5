"""Flask API over one experiment store - the dashboard talks to this."""
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(ROOT))

from flask import Flask, request, jsonify

from src.abtesting.analyze import run_analysis
from src.abtesting.roi import ROIInputs, calculate_roi, revenue_curve
from src.abtesting.schema import METRIC_NAMES
from src.abtesting.store import ExperimentStore

logger = logging.getLogger(__name__)


def _body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValueError("Expected a JSON object body")
    return data


def _validate_update(data: dict) -> None:
    for key in ("name", "description", "primary_metric"):
        if key in data and not isinstance(data[key], str):
            raise ValueError(f"'{key}' must be a string")
    metrics = data.get("secondary_metrics")
    if "secondary_metrics" in data and (
        not isinstance(metrics, list) or not all(isinstance(m, str) for m in metrics)
    ):
        raise ValueError("'secondary_metrics' must be a list of strings")
    unknown = [
        m for m in [data.get("primary_metric")] + (metrics or [])
        if m is not None and m not in METRIC_NAMES
    ]
    if unknown:
        raise ValueError(f"Unknown metrics: {', '.join(unknown)}")


def create_app(store: ExperimentStore = None) -> Flask:
    """Build the API bound to `store` (a fresh store seeded with the demo experiment if omitted)."""
    if store is None:
        store = ExperimentStore()
        store.seed_demo()

    app = Flask(__name__)
    app.config["STORE"] = store

    def _experiment_or_404(experiment_id):
        exp = store.get_experiment(experiment_id)
        if exp is None:
            return None, (jsonify({"error": f"Unknown experiment {experiment_id}"}), 404)
        return exp, None

    def _applied(experiment_id, ok):
        if not ok:
            return jsonify({"error": "Request ignored", "experiment_id": experiment_id}), 409
        exp = store.get_experiment(experiment_id)
        if exp is None:
            return jsonify({"error": f"Unknown experiment {experiment_id}"}), 404
        return jsonify(exp.to_dict())

    @app.errorhandler(ValueError)
    def bad_request(e):
        return jsonify({"error": str(e)}), 400

    @app.route("/ping", methods=["GET"])
    def ping():
        return "pong"

    @app.route("/experiments", methods=["GET"])
    def list_experiments():
        return jsonify([e.to_dict() for e in store.list_experiments()])

    @app.route("/experiments", methods=["POST"])
    def create_experiment():
        data = _body()
        name = data.get("name")
        if not name:
            raise ValueError("'name' is required")
        exp = store.create_experiment(name, data.get("description", ""))
        return jsonify(exp.to_dict()), 201

    @app.route("/experiments/<experiment_id>", methods=["GET"])
    def get_experiment(experiment_id):
        exp, err = _experiment_or_404(experiment_id)
        return err or jsonify(exp.to_dict())

    @app.route("/experiments/<experiment_id>", methods=["PATCH"])
    def update_experiment(experiment_id):
        _, err = _experiment_or_404(experiment_id)
        if err:
            return err
        data = _body()
        _validate_update(data)
        ok = store.update_experiment(
            experiment_id,
            name=data.get("name"),
            description=data.get("description"),
            primary_metric=data.get("primary_metric"),
            secondary_metrics=data.get("secondary_metrics"),
        )
        return _applied(experiment_id, ok)

    @app.route("/experiments/<experiment_id>", methods=["DELETE"])
    def delete_experiment(experiment_id):
        if not store.delete_experiment(experiment_id):
            return jsonify({"error": f"Unknown experiment {experiment_id}"}), 404
        return "", 204

    @app.route("/experiments/<experiment_id>/status", methods=["POST"])
    def set_status(experiment_id):
        _, err = _experiment_or_404(experiment_id)
        if err:
            return err
        status = _body().get("status")
        return _applied(experiment_id, store.set_status(experiment_id, status))

    @app.route("/experiments/<experiment_id>/traffic", methods=["PUT"])
    def update_traffic(experiment_id):
        _, err = _experiment_or_404(experiment_id)
        if err:
            return err
        splits = _body().get("splits")
        if not isinstance(splits, list) or not all(isinstance(s, int) for s in splits):
            raise ValueError("'splits' must be a list of integers")
        return _applied(experiment_id, store.update_traffic_split(experiment_id, splits))

    @app.route("/experiments/<experiment_id>/variants", methods=["POST"])
    def add_variant(experiment_id):
        _, err = _experiment_or_404(experiment_id)
        if err:
            return err
        data = _body()
        name = data.get("name")
        if not name:
            raise ValueError("'name' is required")
        ok = store.add_variant(experiment_id, name, data.get("description", ""))
        return _applied(experiment_id, ok)

    @app.route("/experiments/<experiment_id>/variants/<variant_id>", methods=["DELETE"])
    def remove_variant(experiment_id, variant_id):
        _, err = _experiment_or_404(experiment_id)
        if err:
            return err
        return _applied(experiment_id, store.remove_variant(experiment_id, variant_id))

    @app.route("/experiments/<experiment_id>/simulate", methods=["POST"])
    def simulate(experiment_id):
        _, err = _experiment_or_404(experiment_id)
        if err:
            return err
        return _applied(experiment_id, store.simulate_visitors(experiment_id))

    @app.route("/experiments/<experiment_id>/results", methods=["POST"])
    def calculate_results(experiment_id):
        _, err = _experiment_or_404(experiment_id)
        if err:
            return err
        return _applied(experiment_id, store.calculate_results(experiment_id))

    @app.route("/experiments/<experiment_id>/analysis", methods=["GET"])
    def analysis(experiment_id):
        summary = run_analysis(store, experiment_id)
        if summary is None:
            return jsonify({"error": f"Unknown experiment {experiment_id}"}), 404
        return jsonify(summary.to_dict())

    @app.route("/roi", methods=["POST"])
    def roi():
        data = _body()
        try:
            inputs = ROIInputs(
                monthly_traffic=float(data["monthly_traffic"]),
                average_order_value=float(data["average_order_value"]),
                conversion_rate=float(data["conversion_rate"]),
                current_load_time=float(data["current_load_time"]),
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Invalid ROI inputs: {e}")
        result = calculate_roi(inputs).to_dict()
        result["curve"] = revenue_curve(inputs)
        return jsonify(result)

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    create_app().run(host="0.0.0.0", port=5000)
