from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable

from core.entities import DividendSummary, Transaction, as_number

logger = logging.getLogger(__name__)

DEFAULT_MIN_EVENTS_PER_YEAR = 3


def is_dividend_event(txn: Transaction) -> bool:
    label = (txn.buy_sell or "").upper()
    return "DIVIDEND" in label or label == "DIV"


def dividend_amount(txn: Transaction) -> float:
    """Cash paid by a dividend event.

    ``trade_value_adjusted`` wins when positive; otherwise price times quantity
    when both are present; otherwise nothing.
    """

    value = as_number(txn.trade_value_adjusted)
    if value > 0:
        return value
    price = as_number(txn.trade_price_adjusted)
    qty = as_number(txn.traded_qty)
    if price and qty:
        return price * qty
    return 0.0


def classify_dividends(
    transactions: Iterable[Transaction],
    min_events_per_year: int = DEFAULT_MIN_EVENTS_PER_YEAR,
) -> DividendSummary:
    """Find ISINs paying at least ``min_events_per_year`` dividends in some year."""

    counts: dict[str, dict[int, int]] = defaultdict(lambda: defaultdict(int))
    events: list[tuple[str, Transaction]] = []
    dropped = 0

    for txn in transactions:
        if not is_dividend_event(txn):
            continue
        year = txn.year()
        if not txn.isin or year is None:
            dropped += 1
            continue
        counts[txn.isin][year] += 1
        events.append((txn.isin, txn))

    if dropped:
        logger.debug("Skipped %d dividend events without ISIN or valid date", dropped)

    qualifying = frozenset(
        isin for isin, per_year in counts.items() if any(n >= min_events_per_year for n in per_year.values())
    )
    payout = sum(dividend_amount(txn) for isin, txn in events if isin in qualifying)

    return DividendSummary(
        qualifying_isins=qualifying,
        qualifying_count=len(qualifying),
        annual_payout=float(payout),
    )
