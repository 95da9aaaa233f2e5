"""Experiment statistics module."""

from .rates import conversion_rate
from .significance import (
    MAX_CONFIDENCE,
    SIGNIFICANCE_THRESHOLD,
    confidence,
    is_significant,
    p_value,
    uplift,
    z_score,
)
from .winner import NO_WINNER, VariantCounts, WinnerResult, determine_winner
from .power import power_proportion, required_sample_size
from .srm import SRMResult, check_srm, srm_chi_square

__all__ = [
    "conversion_rate",
    "MAX_CONFIDENCE",
    "SIGNIFICANCE_THRESHOLD",
    "confidence",
    "is_significant",
    "p_value",
    "uplift",
    "z_score",
    "NO_WINNER",
    "VariantCounts",
    "WinnerResult",
    "determine_winner",
    "power_proportion",
    "required_sample_size",
    "SRMResult",
    "check_srm",
    "srm_chi_square",
]
