"""Tests for sample size and power."""
import pytest
from src.abtesting.stats.power import power_proportion, required_sample_size


def test_required_sample_size_known():
    """10% baseline, +10% relative lift -> ~14k per variant."""
    n = required_sample_size(0.10, 0.10)
    assert 14000 <= n <= 14300


def test_required_sample_size_shrinks_with_effect():
    assert required_sample_size(0.10, 0.20) < required_sample_size(0.10, 0.10)


def test_required_sample_size_zero_effect():
    assert required_sample_size(0.10, 0.0) is None


def test_power_proportion():
    """Power near the 80% design target at the planned sample size."""
    n = required_sample_size(0.10, 0.10)
    p = power_proportion(0.10, 0.10, n)
    assert 0.7 <= p <= 0.9
    assert power_proportion(0.10, 0.10, 2 * n) > p


def test_power_proportion_empty_sample():
    assert power_proportion(0.10, 0.10, 0) == 0.0
