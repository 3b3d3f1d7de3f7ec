from __future__ import annotations

import logging

from core.entities import Holding
from ports.outlier import IOutlierHook

logger = logging.getLogger(__name__)


class LoggingOutlierHook(IOutlierHook):
    """Log holdings whose return is large enough to suggest bad upstream data."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self.log = log or logger

    def on_outlier(self, holding: Holding | None, max_return: float) -> None:
        if holding is None:
            self.log.warning("High return detected: %.2f%% (holding not matched)", max_return)
            return
        self.log.warning(
            "High return detected: %.2f%% stock=%s invested=%.2f value=%.2f",
            max_return,
            holding.stock_name,
            holding.investment_amount,
            holding.market_value,
        )


class NullOutlierHook(IOutlierHook):
    def on_outlier(self, holding: Holding | None, max_return: float) -> None:  # pragma: no cover - no-op
        return None
