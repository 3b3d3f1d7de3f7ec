from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from api.deps import build_dependencies, display_values, load_portfolio
from config.schema import AppSettings, load_settings
from core.entities import PortfolioMetrics
from ports.formatter import ICurrencyFormatter


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")


def _signed(value: float) -> str:
    return f"{'+' if value >= 0 else ''}{value:.1f}%"


def render_summary(metrics: PortfolioMetrics, formatter: ICurrencyFormatter) -> list[str]:
    display = display_values(metrics, formatter)
    lines = [
        "=== Portfolio metrics ===",
        f"Stocks: {metrics.total_stocks} ({display['totalCurrentValue']})",
        f"Positive: {metrics.positive_count} ({display['positiveCurrentValue']})",
        f"Negative: {metrics.negative_count} ({display['negativeCurrentValue']})",
        f"Dividend stocks: {metrics.dividend_count} ({display['annualDividendPayout']})",
        f"Health score: {display['healthScore']} ({metrics.health_label})",
        f"Diversification: {display['diversificationScore']} ({metrics.diversification_label})",
        f"Average return: {_signed(metrics.weighted_average_return)} "
        f"(simple {_signed(metrics.simple_average_return)})",
        f"Median return: {_signed(metrics.median_return)}",
        f"Spread: {_signed(metrics.max_return)} / {_signed(metrics.min_return)} "
        f"({metrics.spread:.1f}% spread)",
        f"Consistency: {metrics.consistency_index:.0f}%",
        f"Volatility: {metrics.volatility_index:.1f}%",
        f"Risk ratio: {display['riskRatio']} "
        f"({display['positiveInvested']} vs {display['negativeInvested']})",
    ]
    return lines


def run_metrics(
    settings: AppSettings,
    holdings_path: Path | None,
    transactions_path: Path | None,
    as_json: bool,
) -> int:
    analytics, formatter = build_dependencies(settings)
    try:
        holdings, transactions = load_portfolio(settings, holdings_path, transactions_path)
    except FileNotFoundError as exc:
        logging.error("Input file not found: %s", exc)
        return 1
    except ValueError as exc:
        logging.error("Could not read input: %s", exc)
        return 1

    metrics = analytics.compute(holdings, transactions)
    if as_json:
        print(json.dumps(metrics.as_dict(), indent=2, ensure_ascii=False))
    else:
        print("\n".join(render_summary(metrics, formatter)))
    return 0


def parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Portfolio holdings analytics")
    parser.add_argument("--holdings", type=Path, help="Holdings CSV export")
    parser.add_argument("--transactions", type=Path, help="Transactions CSV export")
    parser.add_argument("--config", type=Path, help="Settings TOML (default: config/settings.toml)")
    parser.add_argument("--json", action="store_true", help="Print the raw metrics record as JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        settings = load_settings(args.config)
    except Exception as exc:  # pragma: no cover
        logging.exception("Failed to load settings: %s", exc)
        print("Failed to load settings. Check the log output.", file=sys.stderr)
        return 1

    return run_metrics(settings, args.holdings, args.transactions, args.json)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
