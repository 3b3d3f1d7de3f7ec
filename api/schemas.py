"""Pydantic models used by the FastAPI layer."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class HoldingIn(BaseModel):
    stock_name: str = Field(default="", alias="stockName")
    market_value: Optional[float] = Field(default=None, alias="marketValue")
    investment_amount: Optional[float] = Field(default=None, alias="investmentAmount")
    profit_loss_till_date_percent: Optional[float] = Field(default=None, alias="profitLossTillDatePercent")
    profit_loss_till_date: Optional[float] = Field(default=None, alias="profitLossTillDate")
    sector_name: Optional[str] = Field(default=None, alias="sectorName")

    model_config = dict(populate_by_name=True)


class TransactionIn(BaseModel):
    isin: Optional[str] = None
    transaction_date: Optional[str] = Field(default=None, alias="transactionDate")
    buy_sell: str = Field(default="", alias="buySell")
    trade_price_adjusted: Optional[float] = Field(default=None, alias="tradePriceAdjusted")
    traded_qty: Optional[float] = Field(default=None, alias="tradedQty")
    trade_value_adjusted: Optional[float] = Field(default=None, alias="tradeValueAdjusted")

    model_config = dict(populate_by_name=True)


class MetricsRequest(BaseModel):
    holdings: List[HoldingIn] = Field(default_factory=list)
    transactions: List[TransactionIn] = Field(default_factory=list)


class MetricsOut(BaseModel):
    total_stocks: int
    total_current_value: float
    total_invested: float
    positive_count: int
    positive_current_value: float
    negative_count: int
    negative_current_value: float
    dividend_count: int
    annual_dividend_payout: float
    health_score: int = Field(ge=0, le=100)
    health_label: str
    diversification_score: float = Field(ge=0, le=10)
    diversification_label: str
    weighted_average_return: float
    simple_average_return: float
    median_return: float
    max_return: float
    min_return: float
    max_return_stock: Optional[str] = None
    min_return_stock: Optional[str] = None
    spread: float
    consistency_index: float
    volatility_index: float
    risk_ratio: float
    positive_invested: float
    negative_invested: float
    unique_sector_count: int
    positive_ratio: float
    return_score: float = Field(ge=0, le=100)
    volatility_score: float = Field(ge=0, le=100)
    stock_count_score: float = Field(ge=0, le=10)
    sector_score: float = Field(ge=0, le=10)
    variance: float

    model_config = dict(alias_generator=to_camel, populate_by_name=True)


class MetricsResponse(BaseModel):
    metrics: MetricsOut
    display: Dict[str, str] = Field(default_factory=dict)
