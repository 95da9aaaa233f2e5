"""
Two-proportion significance estimate for control vs. candidate.

Z-score on the pooled rate, two-tailed p-value from the standard normal,
and the capped confidence percentage shown on the dashboard.
"""

import numpy as np
from scipy import stats

from .rates import conversion_rate

SIGNIFICANCE_THRESHOLD = 95.0
# Never display 100% certainty
MAX_CONFIDENCE = 99.99


def z_score(conv_a: int, visitors_a: int, conv_b: int, visitors_b: int) -> float:
    """
    Z-score for the difference in conversion proportions (A minus B).

    Degenerate inputs (an empty group, pooled rate of 0 or 1, zero standard
    error) return 0.
    """
    if visitors_a <= 0 or visitors_b <= 0:
        return 0.0

    p_a = conv_a / visitors_a
    p_b = conv_b / visitors_b
    p_pooled = (conv_a + conv_b) / (visitors_a + visitors_b)

    if p_pooled <= 0 or p_pooled >= 1:
        return 0.0

    se = np.sqrt(p_pooled * (1 - p_pooled) * (1 / visitors_a + 1 / visitors_b))
    if se == 0:
        return 0.0

    return float((p_a - p_b) / se)


def p_value(z: float) -> float:
    """Two-tailed p-value for a z-score."""
    return float(2 * stats.norm.sf(abs(z)))


def confidence(
    control_conv: int,
    control_visitors: int,
    variant_conv: int,
    variant_visitors: int,
) -> float:
    """
    Confidence (%) that control and variant convert differently.

    Returns:
        (1 - p) * 100, clipped to [0, MAX_CONFIDENCE]
    """
    z = z_score(control_conv, control_visitors, variant_conv, variant_visitors)
    conf = (1 - p_value(z)) * 100
    return float(np.clip(conf, 0.0, MAX_CONFIDENCE))


def is_significant(confidence_pct: float) -> bool:
    return confidence_pct >= SIGNIFICANCE_THRESHOLD


def uplift(
    control_conv: int,
    control_visitors: int,
    variant_conv: int,
    variant_visitors: int,
) -> float:
    """
    Relative improvement (%) of the variant rate over the control rate.

    Defined as 0 when the control rate is 0, so a zero here does not mean
    "no difference" in that case.
    """
    control_rate = conversion_rate(control_conv, control_visitors)
    variant_rate = conversion_rate(variant_conv, variant_visitors)

    if control_rate == 0:
        return 0.0
    return (variant_rate - control_rate) / control_rate * 100
