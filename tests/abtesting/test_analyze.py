"""Tests for the experiment read-out."""
import json
from pathlib import Path

import pytest
from src.abtesting.analyze import run_analysis, summarize_experiment
from src.abtesting.schema import Experiment, ExperimentStatus, Variant
from src.abtesting.simulate import SimulatorConfig
from src.abtesting.store import ExperimentStore


def _experiment(*counts, split=None):
    split = split or [100 // len(counts)] * len(counts)
    return Experiment(
        experiment_id="exp_test",
        name="Test",
        status=ExperimentStatus.RUNNING,
        variants=[
            Variant(f"v{i}", f"Variant {i}", traffic_percent=pct, visitors=n, conversions=c)
            for i, ((c, n), pct) in enumerate(zip(counts, split))
        ],
    )


def test_summary_ship():
    """Clear, balanced winner -> ship."""
    s = summarize_experiment(_experiment((100, 1000), (150, 1000)))
    assert s.recommendation == "ship"
    assert s.verdict.winner_id == "v1"
    assert s.srm.passed
    assert s.variants[0].is_control
    assert s.variants[0].uplift == 0
    assert s.variants[1].uplift == pytest.approx(50.0)
    assert s.variants[1].conversion_rate == pytest.approx(15.0)
    assert s.required_sample_size > 0


def test_summary_hold_on_srm():
    """Traffic far off the configured split -> hold."""
    s = summarize_experiment(_experiment((90, 900), (15, 100)))
    assert not s.srm.passed
    assert s.recommendation == "hold"


def test_summary_iterate_without_effect():
    s = summarize_experiment(_experiment((100, 1000), (102, 1000)))
    assert s.recommendation == "iterate"


def test_summary_without_traffic():
    s = summarize_experiment(_experiment((0, 0), (0, 0)))
    assert s.recommendation == "iterate"
    assert s.required_sample_size is None
    assert s.verdict.confidence == 0


def test_to_dict_is_json_serializable():
    s = summarize_experiment(_experiment((100, 1000), (150, 1000)))
    d = json.loads(json.dumps(s.to_dict()))
    assert d["recommendation"] == "ship"
    assert len(d["variants"]) == 2


def test_run_analysis_writes_artifact(tmp_path):
    store = ExperimentStore(SimulatorConfig(seed=5))
    exp = store.seed_demo()
    summary = run_analysis(store, exp.experiment_id, artifacts_dir=str(tmp_path))
    out = Path(tmp_path) / exp.experiment_id / "analysis.json"
    assert out.exists()
    with open(out) as f:
        assert json.load(f)["experiment_id"] == exp.experiment_id
    assert summary.verdict.winner_id == "var_green"


def test_run_analysis_is_read_only():
    """The read-out never attaches a Result to the experiment."""
    store = ExperimentStore()
    exp = store.seed_demo()
    run_analysis(store, exp.experiment_id)
    assert store.get_experiment(exp.experiment_id).results is None


def test_run_analysis_unknown_id():
    assert run_analysis(ExperimentStore(), "missing") is None
