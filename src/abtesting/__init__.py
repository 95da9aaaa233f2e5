"""A/B experiment decision engine and lifecycle store."""

from .schema import (
    METRIC_OPTIONS,
    Experiment,
    ExperimentMetrics,
    ExperimentResult,
    ExperimentStatus,
    Variant,
)
from .simulate import SimulatorConfig
from .store import MIN_VARIANTS, ExperimentStore, even_split
from .analyze import ExperimentSummary, run_analysis, summarize_experiment
from .snapshot import experiments_to_frame, read_snapshot, write_snapshot
from .roi import ROIInputs, ROIResult, calculate_roi, revenue_curve

__all__ = [
    "METRIC_OPTIONS",
    "Experiment",
    "ExperimentMetrics",
    "ExperimentResult",
    "ExperimentStatus",
    "Variant",
    "SimulatorConfig",
    "MIN_VARIANTS",
    "ExperimentStore",
    "even_split",
    "ExperimentSummary",
    "run_analysis",
    "summarize_experiment",
    "experiments_to_frame",
    "read_snapshot",
    "write_snapshot",
    "ROIInputs",
    "ROIResult",
    "calculate_roi",
    "revenue_curve",
]
