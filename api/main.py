"""FastAPI entrypoint for the holdings analytics backend."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from api import schemas
from api.deps import build_dependencies, display_values, load_portfolio
from config.schema import AppSettings, load_settings
from core.entities import Holding, PortfolioMetrics, Transaction

logger = logging.getLogger(__name__)

settings: AppSettings = load_settings()
analytics, formatter = build_dependencies(settings)

app = FastAPI(title="Holdings Analytics API", version="0.1.0")

origins = [
    "http://localhost",
    "http://127.0.0.1",
    "http://localhost:3000",
    "http://localhost:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _respond(metrics: PortfolioMetrics) -> schemas.MetricsResponse:
    return schemas.MetricsResponse(
        metrics=schemas.MetricsOut.model_validate(metrics.as_dict()),
        display=display_values(metrics, formatter),
    )


@app.get("/api/health", response_model=dict)
def health() -> dict:
    return {"ok": True}


@app.get("/api/settings", response_model=dict)
def get_settings() -> dict:
    return {
        "analytics": settings.analytics.model_dump(),
        "display": settings.display.model_dump(),
    }


@app.post("/api/metrics", response_model=schemas.MetricsResponse)
def post_metrics(payload: schemas.MetricsRequest) -> schemas.MetricsResponse:
    holdings = [Holding.from_mapping(item.model_dump()) for item in payload.holdings]
    transactions = [Transaction.from_mapping(item.model_dump()) for item in payload.transactions]
    metrics = analytics.compute(holdings, transactions)
    logger.debug(
        "Computed metrics for %d holdings / %d transactions",
        len(holdings),
        len(transactions),
    )
    return _respond(metrics)


@app.get("/api/metrics/files", response_model=schemas.MetricsResponse)
def get_metrics_from_files() -> schemas.MetricsResponse:
    try:
        holdings, transactions = load_portfolio(settings)
    except FileNotFoundError as exc:
        raise HTTPException(status_code=404, detail=f"File not found: {exc}") from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _respond(analytics.compute(holdings, transactions))
