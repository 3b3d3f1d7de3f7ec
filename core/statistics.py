from __future__ import annotations

import math
import statistics
from typing import Sequence

from core.entities import Holding, ReturnStatistics

EXTREME_MATCH_TOLERANCE = 0.01


def weighted_mean(values: Sequence[float], weights: Sequence[float]) -> float:
    total = sum(weights)
    if total <= 0:
        return 0.0
    return sum(value * (weight / total) for value, weight in zip(values, weights))


def median(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return float(statistics.median(values))


def _finite_or_zero(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def find_holding_near(
    holdings: Sequence[Holding],
    target: float,
    tolerance: float = EXTREME_MATCH_TOLERANCE,
) -> Holding | None:
    """Return the first holding whose return lies within ``tolerance`` of ``target``."""

    for holding in holdings:
        if abs(holding.return_pct - target) < tolerance:
            return holding
    return None


def aggregate_returns(
    holdings: Sequence[Holding],
    tolerance: float = EXTREME_MATCH_TOLERANCE,
) -> ReturnStatistics:
    """Cross-sectional return statistics over the current holdings.

    Dispersion is measured around the investment-weighted mean so that the
    volatility figure lines up with the headline average return.
    """

    returns = [h.return_pct for h in holdings]
    if not returns:
        return ReturnStatistics()

    invested = [h.invested for h in holdings]
    total_invested = sum(invested)
    weighted = weighted_mean(returns, invested) if total_invested > 0 else 0.0
    simple = sum(returns) / len(returns)

    max_return = max(returns)
    min_return = min(returns)

    deviations = [r - weighted for r in returns]
    variance = sum(d * d for d in deviations) / len(returns)
    positives = sum(1 for r in returns if r > 0)

    # overflowed aggregates are zeroed here so the scores are built from
    # the same values the record reports
    weighted = _finite_or_zero(weighted)
    simple = _finite_or_zero(simple)
    variance = _finite_or_zero(variance)

    return ReturnStatistics(
        weighted_average_return=weighted,
        simple_average_return=simple,
        median_return=median(returns),
        max_return=max_return,
        min_return=min_return,
        max_return_holding=find_holding_near(holdings, max_return, tolerance),
        min_return_holding=find_holding_near(holdings, min_return, tolerance),
        variance=variance,
        volatility_index=math.sqrt(variance),
        consistency_index=positives / len(returns) * 100,
        total_invested=total_invested,
    )
