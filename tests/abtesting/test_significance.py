"""Tests for conversion rate, z-score, p-value, confidence and uplift."""
import pytest
from src.abtesting.stats.rates import conversion_rate
from src.abtesting.stats.significance import (
    MAX_CONFIDENCE,
    confidence,
    is_significant,
    p_value,
    uplift,
    z_score,
)


def test_conversion_rate_zero_visitors():
    """No visitors -> 0%, not a division error."""
    assert conversion_rate(0, 0) == 0
    assert conversion_rate(5, 0) == 0


def test_conversion_rate_percentage():
    assert conversion_rate(25, 200) == pytest.approx(12.5)
    assert conversion_rate(1, 3) == pytest.approx(100 / 3)


def test_z_score_direction():
    """Control 10% vs variant 15% -> strongly negative z (A minus B)."""
    z = z_score(100, 1000, 150, 1000)
    assert z == pytest.approx(-3.38, abs=0.01)


def test_z_score_degenerate_inputs():
    """Pooled rate 0 or 1, or an empty group -> 0."""
    assert z_score(0, 100, 0, 100) == 0
    assert z_score(100, 100, 50, 50) == 0
    assert z_score(0, 0, 0, 0) == 0
    assert z_score(0, 0, 5, 10) == 0


def test_p_value_two_tailed():
    assert p_value(0) == pytest.approx(1.0)
    assert p_value(1.96) == pytest.approx(0.05, abs=1e-3)
    assert p_value(-1.96) == pytest.approx(p_value(1.96))


def test_confidence_all_zero():
    assert confidence(0, 0, 0, 0) == 0


def test_confidence_capped():
    """Overwhelming evidence never reads as 100%."""
    assert confidence(0, 10000, 5000, 10000) == MAX_CONFIDENCE


def test_confidence_bounds():
    """Confidence stays within [0, 99.99] for non-negative inputs."""
    for conv_a, n_a, conv_b, n_b in [
        (0, 0, 0, 0),
        (0, 10, 10, 10),
        (3, 7, 0, 0),
        (100, 1000, 102, 1000),
        (1, 1, 0, 1),
        (500, 600, 10, 600),
    ]:
        c = confidence(conv_a, n_a, conv_b, n_b)
        assert 0 <= c <= MAX_CONFIDENCE


def test_is_significant_threshold():
    assert is_significant(95.0)
    assert is_significant(99.99)
    assert not is_significant(94.99)


def test_uplift():
    assert uplift(100, 1000, 150, 1000) == pytest.approx(50.0)
    assert uplift(100, 1000, 50, 1000) == pytest.approx(-50.0)


def test_uplift_zero_control_rate():
    """Zero control rate -> uplift defined as 0 (finite)."""
    assert uplift(0, 100, 10, 100) == 0
    assert uplift(0, 0, 10, 100) == 0
