"""Dependency wiring helpers for the FastAPI backend, the CLI and tests."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Tuple

from adapters.currency_inr import INRFormatter
from adapters.outlier_logging import LoggingOutlierHook, NullOutlierHook
from adapters.portfolio_csv import load_holdings, load_transactions
from config.schema import AppSettings
from core.entities import Holding, PortfolioMetrics, RiskBreakdown, Transaction
from core.metrics import PortfolioAnalytics
from core.risk import format_risk_ratio
from ports.formatter import ICurrencyFormatter
from ports.outlier import IOutlierHook

logger = logging.getLogger(__name__)


def build_outlier_hook(settings: AppSettings) -> IOutlierHook:
    if settings.outlier.hook == "logging":
        return LoggingOutlierHook()
    return NullOutlierHook()


def build_formatter(settings: AppSettings) -> ICurrencyFormatter:
    return INRFormatter(symbol=settings.display.symbol, short_amounts=settings.display.short_amounts)


def build_dependencies(settings: AppSettings) -> Tuple[PortfolioAnalytics, ICurrencyFormatter]:
    analytics = PortfolioAnalytics(settings.analytics, build_outlier_hook(settings))
    formatter = build_formatter(settings)
    return analytics, formatter


def load_portfolio(
    settings: AppSettings,
    holdings_path: Path | None = None,
    transactions_path: Path | None = None,
) -> Tuple[list[Holding], list[Transaction]]:
    holdings_file = Path(holdings_path or settings.data.holdings_path)
    transactions_file = Path(transactions_path or settings.data.transactions_path)
    holdings = load_holdings(holdings_file)
    if transactions_file.exists():
        transactions = load_transactions(transactions_file)
    else:
        logger.warning("Transactions file %s not found; dividend metrics will be empty", transactions_file)
        transactions = []
    return holdings, transactions


def display_values(metrics: PortfolioMetrics, formatter: ICurrencyFormatter) -> Dict[str, str]:
    risk = RiskBreakdown(
        risk_ratio=metrics.risk_ratio,
        positive_invested=metrics.positive_invested,
        negative_invested=metrics.negative_invested,
    )
    return {
        "totalCurrentValue": formatter.format(metrics.total_current_value),
        "totalInvested": formatter.format(metrics.total_invested),
        "positiveCurrentValue": formatter.format(metrics.positive_current_value),
        "negativeCurrentValue": formatter.format(metrics.negative_current_value),
        "annualDividendPayout": formatter.format(metrics.annual_dividend_payout),
        "positiveInvested": formatter.format_short(metrics.positive_invested),
        "negativeInvested": formatter.format_short(metrics.negative_invested),
        "riskRatio": format_risk_ratio(risk),
        "healthScore": f"{metrics.health_score} / 100",
        "diversificationScore": f"{metrics.diversification_score:.1f} / 10",
    }
