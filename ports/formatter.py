from __future__ import annotations

from typing import Protocol


class ICurrencyFormatter(Protocol):
    def format(self, amount: float) -> str: ...

    def format_short(self, amount: float) -> str: ...
