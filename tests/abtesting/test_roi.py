"""Tests for the load-time revenue impact calculator."""
import math

import pytest
from src.abtesting.roi import (
    MAX_PENALTY,
    ROIInputs,
    calculate_roi,
    conversion_penalty,
    revenue_curve,
)

INPUTS = dict(monthly_traffic=10000, average_order_value=50, conversion_rate=2)


def test_no_penalty_at_or_below_one_second():
    assert conversion_penalty(0.5) == 0
    assert conversion_penalty(1.0) == 0


def test_penalty_curve():
    assert conversion_penalty(3.0) == pytest.approx(0.7 * (1 - math.exp(-0.24)))
    assert conversion_penalty(100) <= MAX_PENALTY
    assert conversion_penalty(100) == pytest.approx(MAX_PENALTY, abs=1e-3)


def test_roi_at_optimal_load_time():
    res = calculate_roi(ROIInputs(current_load_time=1.0, **INPUTS))
    assert res.optimal_monthly_revenue == pytest.approx(10000)
    assert res.monthly_loss == 0
    assert res.lost_conversions == 0
    assert res.improvement_potential == 0


def test_roi_slow_page():
    res = calculate_roi(ROIInputs(current_load_time=3.0, **INPUTS))
    penalty = conversion_penalty(3.0)
    assert res.current_monthly_revenue == pytest.approx(10000 * (1 - penalty))
    assert res.yearly_loss == pytest.approx(res.monthly_loss * 12)
    assert res.lost_conversions == 30
    assert res.improvement_potential > 0


def test_roi_zero_traffic():
    res = calculate_roi(ROIInputs(monthly_traffic=0, average_order_value=50, conversion_rate=2, current_load_time=4))
    assert res.improvement_potential == 0


def test_negative_inputs_rejected():
    with pytest.raises(ValueError, match="non-negative"):
        ROIInputs(monthly_traffic=-1, average_order_value=50, conversion_rate=2, current_load_time=1)


def test_revenue_curve():
    points = revenue_curve(ROIInputs(current_load_time=2.0, **INPUTS))
    assert len(points) == 16
    assert points[0]["load_time"] == 0.5
    assert points[-1]["load_time"] == 8.0
    revenues = [p["revenue"] for p in points]
    assert revenues == sorted(revenues, reverse=True)


def test_non_finite_inputs_rejected():
    for bad in (float("nan"), float("inf")):
        with pytest.raises(ValueError, match="finite"):
            ROIInputs(monthly_traffic=bad, average_order_value=50, conversion_rate=2, current_load_time=1)
