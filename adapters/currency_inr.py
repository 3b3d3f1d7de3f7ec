from __future__ import annotations

import math

from ports.formatter import ICurrencyFormatter

__all__ = ["INRFormatter", "group_indian_digits"]

CRORE = 10_000_000
LAKH = 100_000
THOUSAND = 1_000


def group_indian_digits(digits: str) -> str:
    """Insert separators the Indian way: last three digits, then pairs."""

    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups: list[str] = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


class INRFormatter(ICurrencyFormatter):
    """Rupee amounts with lakh/crore grouping."""

    def __init__(self, symbol: str = "₹", short_amounts: bool = True) -> None:
        self.symbol = symbol
        self.short_amounts = short_amounts

    def format(self, amount: float) -> str:
        if amount is None or not math.isfinite(amount):
            amount = 0.0
        text = f"{abs(amount):.2f}"
        whole, fraction = text.split(".")
        sign = "-" if amount < 0 and text != "0.00" else ""
        return f"{sign}{self.symbol}{group_indian_digits(whole)}.{fraction}"

    def format_short(self, amount: float) -> str:
        if not self.short_amounts:
            return self.format(amount)
        if amount >= CRORE:
            return f"{self.symbol}{amount / CRORE:.1f}Cr"
        if amount >= LAKH:
            return f"{self.symbol}{amount / LAKH:.0f}L"
        if amount >= THOUSAND:
            return f"{self.symbol}{amount / THOUSAND:.0f}K"
        return self.format(amount)
