from __future__ import annotations

from datetime import date, datetime

import pytest

from core.dividends import classify_dividends, dividend_amount, is_dividend_event
from core.entities import Transaction


def div(isin: str | None, when, value: float | None = None, price: float | None = None, qty: float | None = None, label: str = "DIVIDEND") -> Transaction:
    return Transaction(
        isin=isin,
        transaction_date=when,
        buy_sell=label,
        trade_price_adjusted=price,
        traded_qty=qty,
        trade_value_adjusted=value,
    )


@pytest.mark.parametrize(
    "label, expected",
    [("DIVIDEND", True), ("Dividend Received", True), ("div", True), ("DIV", True), ("DIVI", False), ("DIV ", False), ("BUY", False), ("", False)],
)
def test_is_dividend_event(label, expected):
    assert is_dividend_event(div("INE000A01011", "2023-01-01", label=label)) is expected


def test_dividend_amount_prefers_trade_value():
    assert dividend_amount(div("X", "2023-01-01", value=120.0, price=2.0, qty=10)) == 120.0
    assert dividend_amount(div("X", "2023-01-01", value=0.0, price=2.5, qty=10)) == 25.0
    assert dividend_amount(div("X", "2023-01-01", price=2.5)) == 0.0
    assert dividend_amount(div("X", "2023-01-01")) == 0.0


def test_qualifying_isin_sums_events_from_every_year():
    txns = [
        div("INE111", "2022-03-01", value=10.0),
        div("INE111", "2022-09-01", value=10.0),
        div("INE111", "2023-02-01", value=20.0),
        div("INE111", date(2023, 6, 1), value=20.0),
        div("INE111", datetime(2023, 11, 1, 9, 30), value=20.0),
    ]
    summary = classify_dividends(txns)
    assert summary.qualifying_isins == frozenset({"INE111"})
    assert summary.qualifying_count == 1
    assert summary.annual_payout == pytest.approx(80.0)


def test_isin_below_threshold_every_year_is_excluded_entirely():
    txns = [
        div("INE222", "2022-03-01", value=50.0),
        div("INE222", "2022-09-01", value=50.0),
        div("INE222", "2023-03-01", value=50.0),
        div("INE222", "2023-09-01", value=50.0),
    ]
    summary = classify_dividends(txns)
    assert summary.qualifying_count == 0
    assert summary.annual_payout == 0.0


def test_bad_dates_and_missing_isin_are_dropped():
    txns = [
        div("INE333", "2023-01-10", value=5.0),
        div("INE333", "2023-04-10", value=5.0),
        div("INE333", "not-a-date", value=500.0),
        div("INE333", None, value=500.0),
        div(None, "2023-07-10", value=500.0),
        div("", "2023-07-10", value=500.0),
    ]
    summary = classify_dividends(txns)
    assert summary.qualifying_count == 0

    txns.append(div("INE333", "10-07-2023", value=5.0))
    summary = classify_dividends(txns)
    assert summary.qualifying_count == 1
    assert summary.annual_payout == pytest.approx(15.0)


def test_trades_are_ignored_and_threshold_is_configurable():
    txns = [
        div("INE444", "2024-01-05", value=7.0),
        div("INE444", "2024-05-05", value=7.0),
        div("INE444", "2024-06-05", value=1000.0, label="BUY"),
    ]
    assert classify_dividends(txns).qualifying_count == 0
    summary = classify_dividends(txns, min_events_per_year=2)
    assert summary.qualifying_count == 1
    assert summary.annual_payout == pytest.approx(14.0)


def test_empty_transactions():
    summary = classify_dividends([])
    assert summary.qualifying_count == 0
    assert summary.annual_payout == 0.0
    assert summary.qualifying_isins == frozenset()


def test_isin_text_is_matched_verbatim():
    txns = [
        div("INE555", "2024-01-05", value=1.0),
        div("INE555", "2024-02-05", value=1.0),
        div(" INE555", "2024-03-05", value=1.0),
        Transaction.from_mapping({"isin": "INE555", "transactionDate": "2024-04-05", "buySell": "DIV ", "tradeValueAdjusted": 1.0}),
    ]
    assert classify_dividends(txns).qualifying_count == 0
    txns.append(div(" INE555", "2024-05-05", value=1.0))
    assert classify_dividends(txns, min_events_per_year=2).qualifying_isins == frozenset({"INE555", " INE555"})
