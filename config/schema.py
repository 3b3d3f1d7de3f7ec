from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

try:  # pragma: no cover - Python 3.10 fallback
    import tomllib  # type: ignore
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore

logger = logging.getLogger(__name__)


class AnalyticsSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    dividend_min_events_per_year: int = Field(default=3, ge=1)
    extreme_match_tolerance: float = Field(default=0.01, gt=0)
    outlier_return_threshold: float = Field(default=400.0, gt=0)


class DisplaySettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    currency: str = Field(default="INR", pattern="^INR$")
    symbol: str = Field(default="₹")
    short_amounts: bool = Field(default=True)


class OutlierSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    hook: str = Field(default="logging", pattern="^(logging|none)$")


class DataSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    holdings_path: str = Field(default="data/holdings.csv")
    transactions_path: str = Field(default="data/transactions.csv")


class AppSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    analytics: AnalyticsSettings = Field(default_factory=AnalyticsSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    outlier: OutlierSettings = Field(default_factory=OutlierSettings)
    data: DataSettings = Field(default_factory=DataSettings)


def load_settings(path: Path | None = None) -> AppSettings:
    config_path = path or Path("config/settings.toml")
    data: dict[str, Any] = {}
    if config_path.exists():
        with config_path.open("rb") as fh:
            data = tomllib.load(fh)
    else:
        logger.warning("%s not found. Using defaults.", config_path)

    try:
        settings = AppSettings.model_validate(data)
    except ValidationError as exc:
        logger.error("Settings validation failed: %s", exc)
        raise

    _warn_missing_sections(data)
    return settings


def _warn_missing_sections(data: dict[str, Any]) -> None:
    expected_sections = {"analytics", "display", "outlier", "data"}
    for section in sorted(expected_sections):
        if section not in data:
            logger.warning("Settings section %s is missing. Using defaults.", section)
