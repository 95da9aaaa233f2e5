#!/usr/bin/env python3
"""
Run full experiment demo: create -> run -> simulate traffic -> complete -> analyze.

Creates artifacts/experiments/<id>/analysis.json and a CSV snapshot of all experiments.
"""

import logging
import sys
from pathlib import Path

ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

TICKS = 60


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    from src.abtesting import ExperimentStore, SimulatorConfig, run_analysis, write_snapshot
    from src.abtesting.analyze import DEFAULT_ARTIFACTS_DIR

    artifacts_dir = ROOT / DEFAULT_ARTIFACTS_DIR
    artifacts_dir.mkdir(parents=True, exist_ok=True)

    store = ExperimentStore(SimulatorConfig(seed=42))
    store.seed_demo()

    print("1. Creating experiment...")
    exp = store.create_experiment("Pricing page headline", "Benefit-led vs feature-led headline")
    store.add_variant(exp.experiment_id, "Variant B", "Social-proof headline")
    store.set_status(exp.experiment_id, "running")

    print(f"2. Simulating {TICKS} ticks of traffic...")
    for _ in range(TICKS):
        store.simulate_visitors(exp.experiment_id)

    print("3. Completing and analyzing...")
    store.complete_experiment(exp.experiment_id)
    summary = run_analysis(store, exp.experiment_id, artifacts_dir=str(artifacts_dir))

    for v in summary.variants:
        print(f"   {v.name:<12} {v.visitors:>6} visitors  {v.conversion_rate:>6.2f}%  uplift {v.uplift:+.2f}%")
    print(f"   Recommendation: {summary.recommendation.upper()} - {summary.recommendation_reason}")

    write_snapshot(store.list_experiments(), str(artifacts_dir / "snapshot.csv"))

    out_dir = artifacts_dir / exp.experiment_id
    print(f"\n[OK] Demo complete. Artifacts in {out_dir}:")
    for f in sorted(out_dir.iterdir()):
        print(f"   - {f.name}")

if __name__ == "__main__":
    main()
