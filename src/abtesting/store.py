"""
In-process experiment lifecycle store.

The only place experiment and variant state is mutated. Every mutator
returns True when the change was applied and False when the request was
ignored (unknown id, malformed or wrong-length split, unknown metric,
minimum-variant floor, forbidden status change); nothing here raises on
bad input.

All access is serialized through one re-entrant lock, so read-modify-write
operations such as variant removal cannot interleave with another
mutation. Experiments handed out are deep copies.
"""

import copy
import logging
import numbers
import threading
import uuid
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np

from .schema import (
    METRIC_NAMES,
    Experiment,
    ExperimentMetrics,
    ExperimentResult,
    ExperimentStatus,
    Variant,
)
from .simulate import SimulatorConfig, simulate_tick
from .stats import VariantCounts, determine_winner

logger = logging.getLogger(__name__)

MIN_VARIANTS = 2
DEMO_EXPERIMENT_ID = "exp_demo_1"

# Allowed status changes; completed is terminal
TRANSITIONS: Dict[ExperimentStatus, frozenset] = {
    ExperimentStatus.DRAFT: frozenset({ExperimentStatus.RUNNING}),
    ExperimentStatus.RUNNING: frozenset({ExperimentStatus.PAUSED, ExperimentStatus.COMPLETED}),
    ExperimentStatus.PAUSED: frozenset({ExperimentStatus.RUNNING, ExperimentStatus.COMPLETED}),
    ExperimentStatus.COMPLETED: frozenset(),
}


def _new_experiment_id() -> str:
    return f"exp_{uuid.uuid4().hex[:12]}"


def _new_variant_id() -> str:
    return f"var_{uuid.uuid4().hex[:12]}"


def _is_sequence(value) -> bool:
    return isinstance(value, (list, tuple))


def even_split(count: int) -> List[int]:
    """
    Split 100% evenly across `count` variants.

    The integer remainder goes to the first variant so the split always
    sums to exactly 100.
    """
    if count <= 0:
        return []
    share = 100 // count
    remainder = 100 - share * count
    return [share + (remainder if i == 0 else 0) for i in range(count)]


class ExperimentStore:
    """
    Authoritative collection of experiments, most recent first.

    Args:
        simulator: Traffic simulation parameters
        clock: Callable returning the current time (for timestamps)
    """

    def __init__(
        self,
        simulator: Optional[SimulatorConfig] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._experiments: List[Experiment] = []
        self._lock = threading.RLock()
        self.simulator = simulator or SimulatorConfig()
        self._rng = np.random.default_rng(self.simulator.seed)
        self._clock = clock or datetime.utcnow

    # -- reads -------------------------------------------------------------

    def list_experiments(self) -> List[Experiment]:
        with self._lock:
            return copy.deepcopy(self._experiments)

    def get_experiment(self, experiment_id: str) -> Optional[Experiment]:
        with self._lock:
            exp = self._find(experiment_id)
            return copy.deepcopy(exp) if exp else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._experiments)

    def _find(self, experiment_id: str) -> Optional[Experiment]:
        for exp in self._experiments:
            if exp.experiment_id == experiment_id:
                return exp
        logger.debug(f"Unknown experiment {experiment_id}")
        return None

    # -- experiment CRUD ---------------------------------------------------

    def create_experiment(self, name: str, description: str = "") -> Experiment:
        """Create a draft experiment with a 50/50 Control vs Variant A split."""
        split = even_split(MIN_VARIANTS)
        exp = Experiment(
            experiment_id=_new_experiment_id(),
            name=name,
            description=description,
            status=ExperimentStatus.DRAFT,
            variants=[
                Variant(_new_variant_id(), "Control", "Original version", split[0]),
                Variant(_new_variant_id(), "Variant A", "Test version", split[1]),
            ],
            metrics=ExperimentMetrics(primary_metric="conversion_rate"),
            created_at=self._clock(),
        )
        with self._lock:
            self._experiments.insert(0, exp)
        logger.info(f"Created experiment {exp.experiment_id} ({name!r})")
        return copy.deepcopy(exp)

    def update_experiment(
        self,
        experiment_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        primary_metric: Optional[str] = None,
        secondary_metrics: Optional[Sequence[str]] = None,
    ) -> bool:
        """
        Edit descriptive fields. Status, variants and results have their own operations.

        Text fields must be strings and metrics must be names from
        METRIC_OPTIONS; otherwise nothing is changed.
        """
        for label, value in (("name", name), ("description", description)):
            if value is not None and not isinstance(value, str):
                logger.warning(f"Ignoring update of {experiment_id}: {label} is not a string")
                return False
        if primary_metric is not None and (
            not isinstance(primary_metric, str) or primary_metric not in METRIC_NAMES
        ):
            logger.warning(f"Ignoring update of {experiment_id}: unknown metric {primary_metric!r}")
            return False
        if secondary_metrics is not None:
            if not _is_sequence(secondary_metrics) or not all(
                isinstance(m, str) and m in METRIC_NAMES for m in secondary_metrics
            ):
                logger.warning(
                    f"Ignoring update of {experiment_id}: invalid secondary metrics {secondary_metrics!r}"
                )
                return False

        with self._lock:
            exp = self._find(experiment_id)
            if exp is None:
                return False
            if name is not None:
                exp.name = name
            if description is not None:
                exp.description = description
            if primary_metric is not None:
                exp.metrics.primary_metric = primary_metric
            if secondary_metrics is not None:
                exp.metrics.secondary_metrics = list(secondary_metrics)
            return True

    def delete_experiment(self, experiment_id: str) -> bool:
        with self._lock:
            exp = self._find(experiment_id)
            if exp is None:
                return False
            self._experiments.remove(exp)
        logger.info(f"Deleted experiment {experiment_id}")
        return True

    # -- lifecycle ---------------------------------------------------------

    def set_status(self, experiment_id: str, status) -> bool:
        """
        Move an experiment to a new status.

        draft -> running -> paused <-> running -> completed. The first move
        to running stamps started_at; completing stamps ended_at. Results
        are not computed here (see calculate_results / complete_experiment).
        Setting the current status again is accepted and changes nothing.
        """
        try:
            status = ExperimentStatus(status)
        except ValueError:
            logger.warning(f"Ignoring unknown status {status!r} for {experiment_id}")
            return False

        with self._lock:
            exp = self._find(experiment_id)
            if exp is None:
                return False
            if status == exp.status:
                return True
            if status not in TRANSITIONS[exp.status]:
                logger.warning(
                    f"Ignoring transition {exp.status.value} -> {status.value} "
                    f"for {experiment_id}"
                )
                return False

            now = self._clock()
            if status == ExperimentStatus.RUNNING and exp.started_at is None:
                exp.started_at = now
            if status == ExperimentStatus.COMPLETED:
                exp.ended_at = now
            previous = exp.status
            exp.status = status

        logger.info(f"Experiment {experiment_id}: {previous.value} -> {status.value}")
        return True

    def complete_experiment(self, experiment_id: str) -> bool:
        """Complete an experiment and compute its results in one step."""
        with self._lock:
            if not self.set_status(experiment_id, ExperimentStatus.COMPLETED):
                return False
            return self.calculate_results(experiment_id)

    # -- variants and traffic ----------------------------------------------

    def update_traffic_split(self, experiment_id: str, splits: Sequence[int]) -> bool:
        """
        Overwrite traffic percentages positionally.

        The caller is responsible for a valid distribution; only the length
        and that each entry is an integer in 0-100 are checked. A rejected
        split leaves every variant untouched.
        """
        if not _is_sequence(splits) or not all(
            isinstance(pct, numbers.Integral) and not isinstance(pct, bool) and 0 <= pct <= 100
            for pct in splits
        ):
            logger.warning(f"Ignoring split {splits!r} for {experiment_id}: entries must be integers 0-100")
            return False
        percents = [int(pct) for pct in splits]

        with self._lock:
            exp = self._find(experiment_id)
            if exp is None:
                return False
            if len(percents) != len(exp.variants):
                logger.warning(
                    f"Ignoring split of length {len(percents)} for {experiment_id} "
                    f"with {len(exp.variants)} variants"
                )
                return False
            for variant, pct in zip(exp.variants, percents):
                variant.traffic_percent = pct
            return True

    def add_variant(self, experiment_id: str, name: str, description: str = "") -> bool:
        """Append a variant and re-split traffic evenly."""
        with self._lock:
            exp = self._find(experiment_id)
            if exp is None:
                return False
            exp.variants.append(Variant(_new_variant_id(), name, description))
            self._redistribute(exp)
        logger.info(f"Added variant {name!r} to {experiment_id}")
        return True

    def remove_variant(self, experiment_id: str, variant_id: str) -> bool:
        """Remove a variant and re-split traffic, keeping at least MIN_VARIANTS."""
        with self._lock:
            exp = self._find(experiment_id)
            if exp is None:
                return False
            if len(exp.variants) <= MIN_VARIANTS:
                logger.warning(
                    f"Ignoring removal from {experiment_id}: "
                    f"at least {MIN_VARIANTS} variants required"
                )
                return False
            variant = exp.find_variant(variant_id)
            if variant is None:
                return False
            exp.variants.remove(variant)
            self._redistribute(exp)
        logger.info(f"Removed variant {variant_id} from {experiment_id}")
        return True

    @staticmethod
    def _redistribute(exp: Experiment) -> None:
        for variant, pct in zip(exp.variants, even_split(len(exp.variants))):
            variant.traffic_percent = pct

    # -- traffic and results -----------------------------------------------

    def simulate_visitors(self, experiment_id: str) -> bool:
        """Add one tick of synthetic traffic. Only running experiments move."""
        with self._lock:
            exp = self._find(experiment_id)
            if exp is None or exp.status != ExperimentStatus.RUNNING:
                return False
            for variant in exp.variants:
                simulate_tick(variant, self._rng, self.simulator)
            return True

    def calculate_results(self, experiment_id: str) -> bool:
        """Run the winner resolver and store its verdict, replacing any earlier one."""
        with self._lock:
            exp = self._find(experiment_id)
            if exp is None:
                return False
            verdict = determine_winner([
                VariantCounts(v.variant_id, v.conversions, v.visitors)
                for v in exp.variants
            ])
            exp.results = ExperimentResult(
                winner=verdict.winner_id,
                confidence=verdict.confidence,
                is_significant=verdict.is_significant,
                uplift=verdict.uplift,
            )
        logger.info(
            f"Results for {experiment_id}: winner={verdict.winner_id} "
            f"confidence={verdict.confidence}% uplift={verdict.uplift}%"
        )
        return True

    # -- demo data ---------------------------------------------------------

    def seed_demo(self) -> Experiment:
        """Insert the running "Hero CTA Button Color" demo experiment."""
        now = self._clock()
        exp = Experiment(
            experiment_id=DEMO_EXPERIMENT_ID,
            name="Hero CTA Button Color",
            description="Testing orange vs green CTA button for signup conversions",
            status=ExperimentStatus.RUNNING,
            variants=[
                Variant("var_control", "Control (Orange)", "Current orange button", 50, 1250, 127),
                Variant("var_green", "Variant A (Green)", "Green button test", 50, 1243, 156),
            ],
            metrics=ExperimentMetrics("conversion_rate", ["click_through_rate"]),
            created_at=now - timedelta(days=7),
            started_at=now - timedelta(days=5),
        )
        with self._lock:
            existing = self._find(DEMO_EXPERIMENT_ID)
            if existing is not None:
                return copy.deepcopy(existing)
            self._experiments.insert(0, exp)
        return copy.deepcopy(exp)
