from __future__ import annotations

import math

import pytest

from core.entities import Holding
from core.statistics import aggregate_returns, find_holding_near, median, weighted_mean


def make_holding(name: str, invested: float, ret: float) -> Holding:
    return Holding(stock_name=name, investment_amount=invested, profit_loss_till_date_percent=ret)


def test_weighted_average_uses_invested_capital():
    stats = aggregate_returns([make_holding("AAA", 100.0, 10.0), make_holding("BBB", 900.0, -10.0)])
    assert stats.weighted_average_return == pytest.approx(-8.0)
    assert stats.simple_average_return == pytest.approx(0.0)
    assert stats.total_invested == 1000.0


def test_weighted_average_zero_when_nothing_invested():
    stats = aggregate_returns([make_holding("AAA", 0.0, 10.0), make_holding("BBB", 0.0, 30.0)])
    assert stats.weighted_average_return == 0.0
    assert stats.simple_average_return == pytest.approx(20.0)


def test_median_odd_and_even():
    assert median([10.0, -5.0, 20.0]) == 10.0
    assert median([10.0, -5.0, 20.0, 0.0]) == 5.0
    assert median([]) == 0.0
    assert isinstance(median([1, 2]), float)
    assert median([1, 2]) == 1.5


def test_weighted_mean_ignores_zero_weights():
    assert weighted_mean([5.0, 100.0], [1.0, 0.0]) == pytest.approx(5.0)
    assert weighted_mean([5.0], [0.0]) == 0.0


def test_extremes_and_matching_holdings():
    holdings = [
        make_holding("AAA", 100.0, 12.5),
        make_holding("BBB", 100.0, -7.0),
        make_holding("CCC", 100.0, 40.0),
    ]
    stats = aggregate_returns(holdings)
    assert stats.max_return == 40.0
    assert stats.min_return == -7.0
    assert stats.spread == 47.0
    assert stats.max_return_holding.stock_name == "CCC"
    assert stats.min_return_holding.stock_name == "BBB"


def test_find_holding_near_is_tolerant_and_first_match_wins():
    holdings = [make_holding("FIRST", 1.0, 50.0), make_holding("SECOND", 1.0, 50.004)]
    assert find_holding_near(holdings, 50.004).stock_name == "FIRST"
    assert find_holding_near(holdings, 50.004, tolerance=0.001).stock_name == "SECOND"
    assert find_holding_near(holdings, 51.0) is None


def test_volatility_is_centered_on_weighted_average():
    holdings = [make_holding("AAA", 100.0, 10.0), make_holding("BBB", 900.0, -10.0)]
    stats = aggregate_returns(holdings)
    # deviations from -8: 18 and -2
    assert stats.variance == pytest.approx((18.0**2 + 2.0**2) / 2)
    assert stats.volatility_index == pytest.approx(math.sqrt(164.0))


def test_consistency_index_counts_positive_returns():
    holdings = [
        make_holding("AAA", 1.0, 5.0),
        make_holding("BBB", 1.0, 0.0),
        make_holding("CCC", 1.0, -1.0),
        make_holding("DDD", 1.0, 2.0),
    ]
    assert aggregate_returns(holdings).consistency_index == pytest.approx(50.0)


def test_empty_holdings_yield_neutral_statistics():
    stats = aggregate_returns([])
    assert stats.weighted_average_return == 0.0
    assert stats.simple_average_return == 0.0
    assert stats.median_return == 0.0
    assert stats.max_return == 0.0
    assert stats.min_return == 0.0
    assert stats.max_return_holding is None
    assert stats.min_return_holding is None
    assert stats.volatility_index == 0.0
    assert stats.consistency_index == 0.0
