"""
Power analysis for conversion-rate experiments.

Sample size per variant to detect a relative lift, and achieved power for
a given sample.
"""

from typing import Optional

import numpy as np
from scipy import stats


def required_sample_size(
    baseline_rate: float,
    mde_relative: float,
    alpha: float = 0.05,
    power: float = 0.8,
) -> Optional[int]:
    """
    Visitors needed per variant for a two-proportion test.

    Args:
        baseline_rate: Control conversion proportion (e.g., 0.10)
        mde_relative: Minimum detectable lift, relative (e.g., 0.10 = +10%)
        alpha: Type I error rate
        power: Statistical power (1 - Type II)

    Returns:
        Visitors per variant, or None when the effect is zero
    """
    p1 = baseline_rate
    p2 = baseline_rate * (1 + mde_relative)
    effect = p2 - p1
    if effect == 0:
        return None

    z_alpha = stats.norm.ppf(1 - alpha / 2)
    z_beta = stats.norm.ppf(power)

    n = 2 * (z_alpha + z_beta) ** 2 * p1 * (1 - p1) / effect ** 2
    return int(np.ceil(n))


def power_proportion(
    baseline_rate: float,
    mde_relative: float,
    n_per_variant: int,
    alpha: float = 0.05,
) -> float:
    """
    Achieved power for a relative lift at a given sample size.

    Returns:
        Statistical power (0-1)
    """
    if n_per_variant <= 0:
        return 0.0

    p1 = baseline_rate
    p2 = baseline_rate * (1 + mde_relative)

    z_alpha = stats.norm.ppf(1 - alpha / 2)
    p_pool = (p1 + p2) / 2
    se = np.sqrt(p_pool * (1 - p_pool) * 2 / n_per_variant)
    effect = abs(p2 - p1)

    if se == 0:
        return 0.0

    z_crit = effect / se
    power = 1 - stats.norm.cdf(z_alpha - z_crit) + stats.norm.cdf(-z_alpha - z_crit)
    return float(np.clip(power, 0, 1))
