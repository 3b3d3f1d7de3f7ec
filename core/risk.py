from __future__ import annotations

from typing import Sequence

from core.entities import Holding, RiskBreakdown


def partition_by_return(holdings: Sequence[Holding]) -> tuple[list[Holding], list[Holding]]:
    """Split holdings into winners (>0) and losers (<0); flat positions go nowhere."""

    winners = [h for h in holdings if h.return_pct > 0]
    losers = [h for h in holdings if h.return_pct < 0]
    return winners, losers


def risk_breakdown(holdings: Sequence[Holding]) -> RiskBreakdown:
    winners, losers = partition_by_return(holdings)
    positive_invested = sum(h.invested for h in winners)
    negative_invested = sum(h.invested for h in losers)
    ratio = positive_invested / negative_invested if negative_invested > 0 else 0.0
    return RiskBreakdown(
        risk_ratio=ratio,
        positive_invested=float(positive_invested),
        negative_invested=float(negative_invested),
    )


def format_risk_ratio(breakdown: RiskBreakdown) -> str:
    return f"{breakdown.risk_ratio:.1f} : 1"
