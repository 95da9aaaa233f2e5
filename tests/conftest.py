"""Pytest configuration - add project root to path, shared store fixtures."""
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

from src.abtesting.simulate import SimulatorConfig
from src.abtesting.store import ExperimentStore


@pytest.fixture
def seeded_store():
    """Store holding the demo experiment plus a fresh three-variant draft."""
    store = ExperimentStore(SimulatorConfig(seed=3))
    store.seed_demo()
    exp = store.create_experiment("Checkout button")
    store.add_variant(exp.experiment_id, "Variant B")
    return store
