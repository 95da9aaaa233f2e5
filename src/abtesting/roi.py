"""
Revenue impact of page load time.

Conversion rate decays exponentially with every second of load time past
one second, levelling off at a 70% loss.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, List

OPTIMAL_LOAD_TIME = 1.0  # seconds
DECAY_RATE = 0.12
MAX_PENALTY = 0.7


@dataclass(frozen=True)
class ROIInputs:
    monthly_traffic: float
    average_order_value: float
    conversion_rate: float  # percentage, e.g. 2 = 2%
    current_load_time: float  # seconds

    def __post_init__(self):
        for name in ("monthly_traffic", "average_order_value", "conversion_rate", "current_load_time"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite")
            if value < 0:
                raise ValueError(f"{name} must be non-negative")


@dataclass(frozen=True)
class ROIResult:
    current_monthly_revenue: float
    optimal_monthly_revenue: float
    monthly_loss: float
    yearly_loss: float
    lost_conversions: int
    improvement_potential: float  # percent

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_monthly_revenue": self.current_monthly_revenue,
            "optimal_monthly_revenue": self.optimal_monthly_revenue,
            "monthly_loss": self.monthly_loss,
            "yearly_loss": self.yearly_loss,
            "lost_conversions": self.lost_conversions,
            "improvement_potential": self.improvement_potential,
        }


def conversion_penalty(load_time: float) -> float:
    """Fraction of conversions lost at a given load time (0 to 0.7)."""
    if load_time <= OPTIMAL_LOAD_TIME:
        return 0.0
    delay = load_time - OPTIMAL_LOAD_TIME
    return min(MAX_PENALTY * (1 - math.exp(-DECAY_RATE * delay)), MAX_PENALTY)


def adjusted_conversion_rate(base_rate: float, load_time: float) -> float:
    return max(base_rate * (1 - conversion_penalty(load_time)), 0.0)


def monthly_revenue(traffic: float, conversion_rate_pct: float, aov: float) -> float:
    return traffic * (conversion_rate_pct / 100) * aov


def calculate_roi(inputs: ROIInputs) -> ROIResult:
    """Compare revenue at the current load time against a one-second page."""
    optimal_revenue = monthly_revenue(
        inputs.monthly_traffic, inputs.conversion_rate, inputs.average_order_value
    )
    current_rate = adjusted_conversion_rate(inputs.conversion_rate, inputs.current_load_time)
    current_revenue = monthly_revenue(
        inputs.monthly_traffic, current_rate, inputs.average_order_value
    )

    monthly_loss = optimal_revenue - current_revenue
    lost = inputs.monthly_traffic * (inputs.conversion_rate - current_rate) / 100
    improvement = (
        (optimal_revenue - current_revenue) / current_revenue * 100
        if current_revenue > 0 else 0.0
    )

    return ROIResult(
        current_monthly_revenue=current_revenue,
        optimal_monthly_revenue=optimal_revenue,
        monthly_loss=monthly_loss,
        yearly_loss=monthly_loss * 12,
        lost_conversions=int(round(lost)),
        improvement_potential=improvement,
    )


def revenue_curve(inputs: ROIInputs) -> List[Dict[str, float]]:
    """Monthly revenue at load times from 0.5s to 8s in 0.5s steps."""
    points = []
    for step in range(1, 17):
        load_time = step * 0.5
        rate = adjusted_conversion_rate(inputs.conversion_rate, load_time)
        revenue = monthly_revenue(inputs.monthly_traffic, rate, inputs.average_order_value)
        points.append({
            "load_time": load_time,
            "revenue": round(revenue),
            "conversion_rate": rate,
        })
    return points
