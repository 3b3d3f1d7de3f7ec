from __future__ import annotations

from typing import Protocol

from core.entities import Holding


class IOutlierHook(Protocol):
    def on_outlier(self, holding: Holding | None, max_return: float) -> None: ...
