from __future__ import annotations

import math
from dataclasses import dataclass, fields, replace
from typing import Any, Iterable, Mapping, Protocol

from core.dividends import DEFAULT_MIN_EVENTS_PER_YEAR, classify_dividends
from core.entities import (
    Holding,
    PortfolioMetrics,
    Transaction,
    coerce_holdings,
    coerce_transactions,
)
from core.risk import partition_by_return, risk_breakdown
from core.scoring import score_portfolio
from core.statistics import EXTREME_MATCH_TOLERANCE, aggregate_returns
from ports.outlier import IOutlierHook


class MetricsConfigProtocol(Protocol):
    dividend_min_events_per_year: int
    extreme_match_tolerance: float
    outlier_return_threshold: float


@dataclass(slots=True)
class MetricsConfig:
    dividend_min_events_per_year: int = DEFAULT_MIN_EVENTS_PER_YEAR
    extreme_match_tolerance: float = EXTREME_MATCH_TOLERANCE
    outlier_return_threshold: float = 400.0


class PortfolioAnalytics:
    """Compute the portfolio metrics record with a fixed configuration."""

    def __init__(
        self,
        config: MetricsConfigProtocol | None = None,
        outlier_hook: IOutlierHook | None = None,
    ) -> None:
        self.config: MetricsConfigProtocol = config or MetricsConfig()
        self.outlier_hook = outlier_hook

    def compute(
        self,
        holdings: Iterable[Holding | Mapping[str, Any]],
        transactions: Iterable[Transaction | Mapping[str, Any]],
    ) -> PortfolioMetrics:
        return compute_portfolio_metrics(holdings, transactions, self.config, self.outlier_hook)


def compute_portfolio_metrics(
    holdings: Iterable[Holding | Mapping[str, Any]],
    transactions: Iterable[Transaction | Mapping[str, Any]],
    config: MetricsConfigProtocol | None = None,
    outlier_hook: IOutlierHook | None = None,
) -> PortfolioMetrics:
    """Derive every portfolio-level metric from scratch.

    Inputs are never mutated and nothing is cached between calls. Malformed
    records degrade to zero values instead of raising.
    """

    config = config or MetricsConfig()
    holding_list = coerce_holdings(holdings)
    transaction_list = coerce_transactions(transactions)

    dividends = classify_dividends(transaction_list, config.dividend_min_events_per_year)
    stats = aggregate_returns(holding_list, config.extreme_match_tolerance)
    risk = risk_breakdown(holding_list)
    scores = score_portfolio(stats, holding_list)
    winners, losers = partition_by_return(holding_list)

    metrics = PortfolioMetrics(
        total_stocks=len(holding_list),
        total_current_value=float(sum(h.current_value for h in holding_list)),
        total_invested=stats.total_invested,
        positive_count=len(winners),
        positive_current_value=float(sum(h.current_value for h in winners)),
        negative_count=len(losers),
        negative_current_value=float(sum(h.current_value for h in losers)),
        dividend_count=dividends.qualifying_count,
        annual_dividend_payout=dividends.annual_payout,
        health_score=scores.health_score,
        health_label=scores.health_label,
        diversification_score=scores.diversification_score,
        diversification_label=scores.diversification_label,
        weighted_average_return=stats.weighted_average_return,
        simple_average_return=stats.simple_average_return,
        median_return=stats.median_return,
        max_return=stats.max_return,
        min_return=stats.min_return,
        max_return_stock=stats.max_return_holding.stock_name if stats.max_return_holding else None,
        min_return_stock=stats.min_return_holding.stock_name if stats.min_return_holding else None,
        spread=stats.spread,
        consistency_index=stats.consistency_index,
        volatility_index=stats.volatility_index,
        risk_ratio=risk.risk_ratio,
        positive_invested=risk.positive_invested,
        negative_invested=risk.negative_invested,
        unique_sector_count=scores.unique_sector_count,
        positive_ratio=scores.positive_ratio,
        return_score=scores.return_score,
        volatility_score=scores.volatility_score,
        stock_count_score=scores.stock_count_score,
        sector_score=scores.sector_score,
        variance=stats.variance,
    )
    metrics = _finite(metrics)

    if outlier_hook is not None and stats.max_return > config.outlier_return_threshold:
        outlier_hook.on_outlier(stats.max_return_holding, stats.max_return)

    return metrics


def _finite(metrics: PortfolioMetrics) -> PortfolioMetrics:
    """Zero any float that is still non-finite, e.g. ``spread`` when max - min overflows."""

    changes: dict[str, float] = {}
    for item in fields(metrics):
        value = getattr(metrics, item.name)
        if isinstance(value, float) and not math.isfinite(value):
            changes[item.name] = 0.0
    return replace(metrics, **changes) if changes else metrics
