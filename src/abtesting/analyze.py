"""
Experiment read-out.

Input: an experiment (or a store + experiment_id).
Output: ExperimentSummary with per-variant rates, the winner verdict, an
SRM check, a sample-size target and a ship/hold/iterate recommendation.
Optionally saved as JSON to artifacts/experiments/<experiment_id>/.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from .schema import Experiment
from .stats import (
    SRMResult,
    VariantCounts,
    WinnerResult,
    check_srm,
    confidence,
    conversion_rate,
    determine_winner,
    required_sample_size,
    uplift,
)

logger = logging.getLogger(__name__)

DEFAULT_ARTIFACTS_DIR = "artifacts/experiments"
# Relative lift the sample-size target is sized for
TARGET_MDE = 0.10


@dataclass
class VariantSummary:
    """Per-variant row of the read-out, compared against the control."""
    variant_id: str
    name: str
    traffic_percent: int
    visitors: int
    conversions: int
    conversion_rate: float
    uplift: float
    confidence: float
    is_control: bool = False


@dataclass
class ExperimentSummary:
    """Complete experiment read-out."""
    experiment_id: str
    name: str
    status: str
    analysis_timestamp: datetime = field(default_factory=datetime.utcnow)
    variants: List[VariantSummary] = field(default_factory=list)
    verdict: Optional[WinnerResult] = None
    srm: Optional[SRMResult] = None
    required_sample_size: Optional[int] = None
    recommendation: str = "iterate"  # ship, hold, iterate
    recommendation_reason: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "experiment_id": self.experiment_id,
            "name": self.name,
            "status": self.status,
            "analysis_timestamp": self.analysis_timestamp.isoformat(),
            "variants": [
                {
                    "id": v.variant_id,
                    "name": v.name,
                    "traffic_percent": v.traffic_percent,
                    "visitors": v.visitors,
                    "conversions": v.conversions,
                    "conversion_rate": v.conversion_rate,
                    "uplift": v.uplift,
                    "confidence": v.confidence,
                    "is_control": v.is_control,
                }
                for v in self.variants
            ],
            "verdict": self.verdict.to_dict() if self.verdict else None,
            "srm_passed": self.srm.passed if self.srm else True,
            "srm_p_value": self.srm.p_value if self.srm else None,
            "required_sample_size": self.required_sample_size,
            "recommendation": self.recommendation,
            "recommendation_reason": self.recommendation_reason,
        }


def _recommend(verdict: WinnerResult, srm: SRMResult, control_id: str) -> tuple:
    if not srm.passed:
        return "hold", "SRM detected: traffic deviates from the configured split. Do not interpret results."
    if verdict.is_significant and verdict.winner_id != control_id and verdict.uplift > 0:
        return "ship", f"Variant {verdict.winner_id} beats control by {verdict.uplift:.2f}% at {verdict.confidence:.2f}% confidence."
    if verdict.is_significant:
        return "iterate", "Significant difference, but no variant beats the control."
    return "iterate", "No significant effect yet. Keep collecting traffic or refine the hypothesis."


def summarize_experiment(experiment: Experiment) -> ExperimentSummary:
    """Build the read-out for one experiment. Does not modify it."""
    summary = ExperimentSummary(
        experiment_id=experiment.experiment_id,
        name=experiment.name,
        status=experiment.status.value,
    )
    control = experiment.control
    if control is None:
        summary.recommendation_reason = "Experiment has no variants."
        return summary

    for v in experiment.variants:
        is_control = v is control
        summary.variants.append(VariantSummary(
            variant_id=v.variant_id,
            name=v.name,
            traffic_percent=v.traffic_percent,
            visitors=v.visitors,
            conversions=v.conversions,
            conversion_rate=round(conversion_rate(v.conversions, v.visitors), 2),
            uplift=0.0 if is_control else round(
                uplift(control.conversions, control.visitors, v.conversions, v.visitors), 2
            ),
            confidence=0.0 if is_control else round(
                confidence(control.conversions, control.visitors, v.conversions, v.visitors), 2
            ),
            is_control=is_control,
        ))

    summary.verdict = determine_winner([
        VariantCounts(v.variant_id, v.conversions, v.visitors)
        for v in experiment.variants
    ])
    summary.srm = check_srm(
        [v.visitors for v in experiment.variants],
        [v.traffic_percent for v in experiment.variants],
    )

    baseline = conversion_rate(control.conversions, control.visitors) / 100
    if 0 < baseline < 1:
        summary.required_sample_size = required_sample_size(baseline, TARGET_MDE)

    summary.recommendation, summary.recommendation_reason = _recommend(
        summary.verdict, summary.srm, control.variant_id
    )
    return summary


def run_analysis(
    store,
    experiment_id: str,
    artifacts_dir: Optional[str] = None,
) -> Optional[ExperimentSummary]:
    """
    Summarize a stored experiment.

    Args:
        store: ExperimentStore holding the experiment
        experiment_id: Experiment ID
        artifacts_dir: When given, analysis.json is written under
            <artifacts_dir>/<experiment_id>/

    Returns:
        ExperimentSummary, or None for an unknown id
    """
    experiment = store.get_experiment(experiment_id)
    if experiment is None:
        return None

    summary = summarize_experiment(experiment)

    if artifacts_dir is not None:
        out_dir = Path(artifacts_dir) / experiment_id
        out_dir.mkdir(parents=True, exist_ok=True)
        with open(out_dir / "analysis.json", "w") as f:
            json.dump(summary.to_dict(), f, indent=2)
        logger.info(f"Analysis saved to {out_dir}")

    return summary
