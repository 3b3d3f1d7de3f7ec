from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from core.entities import CompositeScores, Holding, ReturnStatistics

HEALTH_WEIGHTS = (0.4, 0.4, 0.2)
HEALTH_BANDS: tuple[tuple[int, str], ...] = (
    (75, "Excellent"),
    (60, "Healthy"),
    (45, "Moderate"),
)
DIVERSIFICATION_BANDS: tuple[tuple[float, str], ...] = (
    (7.5, "Well diversified"),
    (5.0, "Moderately diversified"),
)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def round_half_up(value: float, places: int = 0) -> Decimal:
    quantum = Decimal(1).scaleb(-places)
    return Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)


def health_label(score: int) -> str:
    for floor, label in HEALTH_BANDS:
        if score >= floor:
            return label
    return "Needs Attention"


def diversification_label(score: float) -> str:
    for floor, label in DIVERSIFICATION_BANDS:
        if score >= floor:
            return label
    return "Needs diversification"


def unique_sectors(holdings: Sequence[Holding]) -> set[str]:
    return {h.sector_name for h in holdings if h.sector_name}


def score_portfolio(stats: ReturnStatistics, holdings: Sequence[Holding]) -> CompositeScores:
    """Blend return statistics and sector spread into the two headline scores."""

    total = len(holdings)
    positives = sum(1 for h in holdings if h.return_pct > 0)
    positive_ratio = positives / total * 100 if total else 0.0

    return_score = clamp(50 + stats.weighted_average_return * 2, 0, 100)
    volatility_score = clamp(100 - stats.volatility_index * 5, 0, 100)

    w_pos, w_ret, w_vol = HEALTH_WEIGHTS
    blended = w_pos * positive_ratio + w_ret * return_score + w_vol * volatility_score
    health = int(clamp(int(round_half_up(blended)), 0, 100))

    sector_count = len(unique_sectors(holdings))
    stock_count_score = min(10.0, total / 3)
    sector_score = min(10.0, sector_count * 2.0)
    diversification = clamp(float(round_half_up((stock_count_score + sector_score) / 2, 1)), 0.0, 10.0)

    return CompositeScores(
        health_score=health,
        health_label=health_label(health),
        diversification_score=diversification,
        diversification_label=diversification_label(diversification),
        positive_ratio=positive_ratio,
        return_score=return_score,
        volatility_score=volatility_score,
        stock_count_score=stock_count_score,
        sector_score=sector_score,
        unique_sector_count=sector_count,
    )
