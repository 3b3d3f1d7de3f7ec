"""CSV loaders for broker holdings and transaction exports."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable

import pandas as pd

from core.entities import Holding, Transaction

logger = logging.getLogger(__name__)

HOLDING_COLUMNS: tuple[str, ...] = ("stockName",)
TRANSACTION_COLUMNS: tuple[str, ...] = ("isin", "transactionDate", "buySell")


def _read_records(path: Path, required: Iterable[str]) -> list[dict[str, Any]]:
    csv_path = Path(path)
    if not csv_path.exists():
        raise FileNotFoundError(csv_path)
    df = pd.read_csv(csv_path)
    df.columns = [str(column).strip() for column in df.columns]
    missing = [column for column in required if column not in df.columns]
    if missing:
        raise ValueError(f"{csv_path.name}: missing columns {', '.join(missing)}")
    # blank cells arrive as NaN; the entity defaults expect None
    df = df.astype(object).where(df.notna(), None)
    return df.to_dict(orient="records")


def load_holdings(path: Path) -> list[Holding]:
    holdings = [Holding.from_mapping(row) for row in _read_records(path, HOLDING_COLUMNS)]
    logger.info("Loaded %d holdings from %s", len(holdings), path)
    return holdings


def load_transactions(path: Path) -> list[Transaction]:
    transactions = [Transaction.from_mapping(row) for row in _read_records(path, TRANSACTION_COLUMNS)]
    logger.info("Loaded %d transactions from %s", len(transactions), path)
    return transactions
