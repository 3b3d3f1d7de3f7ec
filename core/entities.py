from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from typing import Any, Iterable, Mapping

_DATE_FORMATS: tuple[str, ...] = ("%d-%m-%Y", "%d/%m/%Y", "%d-%b-%Y", "%Y/%m/%d")


def as_number(value: Any) -> float:
    """Coerce an optional numeric field to a finite float, defaulting to 0."""

    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def _optional_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def _clean_text(value: Any) -> str | None:
    # blank and NaN cells mean absent; other text is kept verbatim
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    text = str(value)
    return text or None


def parse_transaction_date(value: Any) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


@dataclass(frozen=True, slots=True)
class Holding:
    stock_name: str
    market_value: float = 0.0
    investment_amount: float = 0.0
    profit_loss_till_date_percent: float = 0.0
    profit_loss_till_date: float = 0.0
    sector_name: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Holding":
        return cls(
            stock_name=_clean_text(_pick(data, "stockName", "stock_name")) or "",
            market_value=as_number(_pick(data, "marketValue", "market_value")),
            investment_amount=as_number(_pick(data, "investmentAmount", "investment_amount")),
            profit_loss_till_date_percent=as_number(
                _pick(data, "profitLossTillDatePercent", "profit_loss_till_date_percent")
            ),
            profit_loss_till_date=as_number(_pick(data, "profitLossTillDate", "profit_loss_till_date")),
            sector_name=_clean_text(_pick(data, "sectorName", "sector_name")),
        )

    @property
    def return_pct(self) -> float:
        return as_number(self.profit_loss_till_date_percent)

    @property
    def invested(self) -> float:
        return as_number(self.investment_amount)

    @property
    def current_value(self) -> float:
        return as_number(self.market_value)


@dataclass(frozen=True, slots=True)
class Transaction:
    isin: str | None
    transaction_date: date | datetime | str | None
    buy_sell: str = ""
    trade_price_adjusted: float | None = None
    traded_qty: float | None = None
    trade_value_adjusted: float | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Transaction":
        raw_date = _pick(data, "transactionDate", "transaction_date")
        if isinstance(raw_date, float) and math.isnan(raw_date):
            raw_date = None
        return cls(
            isin=_clean_text(_pick(data, "isin")),
            transaction_date=raw_date,
            buy_sell=_clean_text(_pick(data, "buySell", "buy_sell")) or "",
            trade_price_adjusted=_optional_number(_pick(data, "tradePriceAdjusted", "trade_price_adjusted")),
            traded_qty=_optional_number(_pick(data, "tradedQty", "traded_qty")),
            trade_value_adjusted=_optional_number(_pick(data, "tradeValueAdjusted", "trade_value_adjusted")),
        )

    def parsed_date(self) -> date | None:
        return parse_transaction_date(self.transaction_date)

    def year(self) -> int | None:
        parsed = self.parsed_date()
        return parsed.year if parsed else None


def coerce_holdings(items: Iterable[Holding | Mapping[str, Any]]) -> list[Holding]:
    return [item if isinstance(item, Holding) else Holding.from_mapping(item) for item in items]


def coerce_transactions(items: Iterable[Transaction | Mapping[str, Any]]) -> list[Transaction]:
    return [item if isinstance(item, Transaction) else Transaction.from_mapping(item) for item in items]


@dataclass(frozen=True, slots=True)
class DividendSummary:
    qualifying_isins: frozenset[str] = field(default_factory=frozenset)
    qualifying_count: int = 0
    annual_payout: float = 0.0


@dataclass(frozen=True, slots=True)
class ReturnStatistics:
    weighted_average_return: float = 0.0
    simple_average_return: float = 0.0
    median_return: float = 0.0
    max_return: float = 0.0
    min_return: float = 0.0
    max_return_holding: Holding | None = None
    min_return_holding: Holding | None = None
    variance: float = 0.0
    volatility_index: float = 0.0
    consistency_index: float = 0.0
    total_invested: float = 0.0

    @property
    def spread(self) -> float:
        return self.max_return - self.min_return


@dataclass(frozen=True, slots=True)
class CompositeScores:
    health_score: int
    health_label: str
    diversification_score: float
    diversification_label: str
    positive_ratio: float = 0.0
    return_score: float = 0.0
    volatility_score: float = 0.0
    stock_count_score: float = 0.0
    sector_score: float = 0.0
    unique_sector_count: int = 0


@dataclass(frozen=True, slots=True)
class RiskBreakdown:
    risk_ratio: float = 0.0
    positive_invested: float = 0.0
    negative_invested: float = 0.0


@dataclass(frozen=True, slots=True)
class PortfolioMetrics:
    total_stocks: int
    total_current_value: float
    total_invested: float
    positive_count: int
    positive_current_value: float
    negative_count: int
    negative_current_value: float
    dividend_count: int
    annual_dividend_payout: float
    health_score: int
    health_label: str
    diversification_score: float
    diversification_label: str
    weighted_average_return: float
    simple_average_return: float
    median_return: float
    max_return: float
    min_return: float
    max_return_stock: str | None
    min_return_stock: str | None
    spread: float
    consistency_index: float
    volatility_index: float
    risk_ratio: float
    positive_invested: float
    negative_invested: float
    unique_sector_count: int
    positive_ratio: float
    return_score: float
    volatility_score: float
    stock_count_score: float
    sector_score: float
    variance: float

    def as_dict(self) -> dict[str, Any]:
        return {_camel(key): value for key, value in asdict(self).items()}


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)
