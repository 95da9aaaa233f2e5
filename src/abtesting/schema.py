"""
Experiment data models for the growth experiments engine.

Dataclass schemas for experiments, variants, metric selection and
significance results.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class ExperimentStatus(str, Enum):
    """Experiment lifecycle status."""
    DRAFT = "draft"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


# Metric choices offered when configuring an experiment
METRIC_OPTIONS = (
    ("conversion_rate", "Conversion Rate"),
    ("revenue_per_user", "Revenue per User"),
    ("click_through_rate", "Click-through Rate"),
    ("time_on_page", "Time on Page"),
    ("bounce_rate", "Bounce Rate"),
)
METRIC_NAMES = frozenset(value for value, _ in METRIC_OPTIONS)


@dataclass
class Variant:
    """One arm of an experiment."""
    variant_id: str
    name: str
    description: str = ""
    traffic_percent: int = 0  # 0-100
    visitors: int = 0
    conversions: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.variant_id,
            "name": self.name,
            "description": self.description,
            "traffic_percent": self.traffic_percent,
            "visitors": self.visitors,
            "conversions": self.conversions,
        }


@dataclass
class ExperimentMetrics:
    """Metrics an experiment is judged on."""
    primary_metric: str = "conversion_rate"
    secondary_metrics: List[str] = field(default_factory=list)


@dataclass
class ExperimentResult:
    """Significance verdict attached to an experiment."""
    winner: Optional[str]  # variant id, None when there is no clear winner
    confidence: float
    is_significant: bool
    uplift: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "winner": self.winner,
            "confidence": self.confidence,
            "is_significant": self.is_significant,
            "uplift": self.uplift,
        }


@dataclass
class Experiment:
    """An A/B experiment. The first variant is the control."""
    experiment_id: str
    name: str
    description: str = ""
    status: ExperimentStatus = ExperimentStatus.DRAFT
    variants: List[Variant] = field(default_factory=list)
    metrics: ExperimentMetrics = field(default_factory=ExperimentMetrics)
    results: Optional[ExperimentResult] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None

    @property
    def control(self) -> Optional[Variant]:
        return self.variants[0] if self.variants else None

    def find_variant(self, variant_id: str) -> Optional[Variant]:
        for v in self.variants:
            if v.variant_id == variant_id:
                return v
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "id": self.experiment_id,
            "name": self.name,
            "description": self.description,
            "status": self.status.value,
            "variants": [v.to_dict() for v in self.variants],
            "metrics": {
                "primary_metric": self.metrics.primary_metric,
                "secondary_metrics": list(self.metrics.secondary_metrics),
            },
            "results": self.results.to_dict() if self.results else None,
            "created_at": self.created_at.isoformat(),
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "ended_at": self.ended_at.isoformat() if self.ended_at else None,
        }
