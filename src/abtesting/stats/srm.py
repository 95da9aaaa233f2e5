"""
Sample Ratio Mismatch (SRM) chi-square test.

Detects when observed visitor counts drift from the configured traffic
split, across any number of variants.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from scipy import stats


@dataclass(frozen=True)
class SRMResult:
    passed: bool
    chi2: float
    p_value: float


def srm_chi_square(
    visitors: Sequence[int],
    traffic_percents: Sequence[float],
) -> tuple:
    """
    Chi-square goodness of fit of visitor counts against allocation.

    H0: visitors are split as configured
    H1: the split differs from the configuration

    Variants allocated 0% are left out.

    Returns:
        Tuple of (chi2_statistic, p_value)
    """
    observed = np.asarray(visitors, dtype=float)
    weights = np.asarray(traffic_percents, dtype=float)
    if observed.shape != weights.shape:
        raise ValueError("visitors and traffic_percents must have the same length")

    keep = weights > 0
    observed = observed[keep]
    weights = weights[keep]

    n_total = observed.sum()
    if n_total == 0 or weights.sum() <= 0 or len(observed) < 2:
        return 0.0, 1.0

    expected = n_total * weights / weights.sum()
    chi2 = np.sum((observed - expected) ** 2 / expected)
    p_value = stats.chi2.sf(chi2, df=len(observed) - 1)

    return float(chi2), float(p_value)


def check_srm(
    visitors: Sequence[int],
    traffic_percents: Sequence[float],
    alpha: float = 0.01,
) -> SRMResult:
    """
    Check for sample ratio mismatch.

    Args:
        visitors: Observed visitors per variant
        traffic_percents: Configured allocation per variant
        alpha: Significance threshold (default 0.01)
    """
    chi2, p_value = srm_chi_square(visitors, traffic_percents)
    return SRMResult(passed=p_value >= alpha, chi2=chi2, p_value=p_value)
