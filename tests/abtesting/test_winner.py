"""Tests for winner resolution."""
import pytest
from src.abtesting.stats.winner import NO_WINNER, VariantCounts, determine_winner


def test_fewer_than_two_variants():
    """Empty and single-variant inputs give the empty verdict."""
    for variants in ([], [VariantCounts("a", 10, 100)]):
        res = determine_winner(variants)
        assert res == NO_WINNER
        assert res.winner_id is None
        assert res.confidence == 0
        assert not res.is_significant
        assert res.uplift == 0


def test_classic_ab():
    """10% vs 15% on 1000 visitors each -> variant wins, significant."""
    res = determine_winner([
        VariantCounts("control", 100, 1000),
        VariantCounts("variant", 150, 1000),
    ])
    assert res.winner_id == "variant"
    assert res.uplift == pytest.approx(50.0)
    assert res.is_significant
    assert res.confidence > 99


def test_no_real_difference():
    """10% vs 10.2% is not significant."""
    res = determine_winner([
        VariantCounts("control", 100, 1000),
        VariantCounts("variant", 102, 1000),
    ])
    assert res.winner_id == "variant"
    assert not res.is_significant
    assert res.confidence < 50


def test_identical_rates_control_wins():
    """Identical rates -> control kept as best, confidence 0."""
    res = determine_winner([
        VariantCounts("control", 100, 1000),
        VariantCounts("b", 100, 1000),
        VariantCounts("c", 50, 500),
    ])
    assert res.winner_id == "control"
    assert res.confidence == 0
    assert not res.is_significant
    assert res.uplift == 0


def test_tie_goes_to_earlier_variant():
    """Equal best rates -> first one encountered wins."""
    res = determine_winner([
        VariantCounts("control", 10, 100),
        VariantCounts("b", 20, 100),
        VariantCounts("c", 40, 200),
    ])
    assert res.winner_id == "b"


def test_best_of_many():
    res = determine_winner([
        VariantCounts("control", 50, 500),
        VariantCounts("b", 100, 1000),
        VariantCounts("c", 120, 1000),
    ])
    assert res.winner_id == "c"
    assert res.uplift == pytest.approx(20.0)


def test_rounded_to_two_decimals():
    res = determine_winner([
        VariantCounts("control", 127, 1250),
        VariantCounts("green", 156, 1243),
    ])
    assert res.winner_id == "green"
    assert round(res.confidence, 2) == res.confidence
    assert round(res.uplift, 2) == res.uplift


def test_zero_control_rate_uplift_is_zero():
    res = determine_winner([
        VariantCounts("control", 0, 100),
        VariantCounts("b", 10, 100),
    ])
    assert res.winner_id == "b"
    assert res.uplift == 0
