"""
Winner resolution across an experiment's variants.

The first variant is the control. The variant with the strictly highest
conversion rate wins; ties go to the earlier variant, so the control wins
every tie it is part of.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from .rates import conversion_rate
from .significance import confidence, is_significant, uplift


@dataclass(frozen=True)
class VariantCounts:
    """Counters fed to the resolver."""
    variant_id: str
    conversions: int
    visitors: int


@dataclass(frozen=True)
class WinnerResult:
    winner_id: Optional[str]
    confidence: float
    is_significant: bool
    uplift: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "winner_id": self.winner_id,
            "confidence": self.confidence,
            "is_significant": self.is_significant,
            "uplift": self.uplift,
        }


NO_WINNER = WinnerResult(winner_id=None, confidence=0.0, is_significant=False, uplift=0.0)


def determine_winner(variants: Sequence[VariantCounts]) -> WinnerResult:
    """
    Pick the best-converting variant and test it against the control.

    Args:
        variants: Counters in experiment order, control first

    Returns:
        WinnerResult with confidence and uplift rounded to 2 decimals.
        Fewer than 2 variants gives NO_WINNER.
    """
    if len(variants) < 2:
        return NO_WINNER

    control = variants[0]
    best = control
    highest_rate = conversion_rate(control.conversions, control.visitors)

    for v in variants[1:]:
        rate = conversion_rate(v.conversions, v.visitors)
        if rate > highest_rate:
            highest_rate = rate
            best = v

    conf = confidence(control.conversions, control.visitors, best.conversions, best.visitors)
    lift = uplift(control.conversions, control.visitors, best.conversions, best.visitors)

    return WinnerResult(
        winner_id=best.variant_id,
        confidence=round(conf, 2),
        is_significant=is_significant(conf),
        uplift=round(lift, 2),
    )
