"""Runtime settings for the projection API.

Env vars:
  PROJECTION_API_HOST=127.0.0.1   -> interface the API binds to
  PROJECTION_API_PORT=8000        -> port the API listens on
  PROJECTION_LOG_LEVEL=INFO       -> root logging level
  PROJECTION_CURRENCY=MYR         -> currency code used in CSV export headers
  PROJECTION_CORS_ORIGIN=*        -> Access-Control-Allow-Origin value
  PROJECTION_DEBUG=0              -> run Flask in debug mode
"""
from __future__ import annotations

import os
from dataclasses import dataclass

TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    currency: str = "MYR"
    cors_origin: str = "*"
    debug: bool = False


def load_settings() -> Settings:
    return Settings(
        host=os.getenv("PROJECTION_API_HOST", "127.0.0.1"),
        port=int(os.getenv("PROJECTION_API_PORT", 8000)),
        log_level=os.getenv("PROJECTION_LOG_LEVEL", "INFO").upper(),
        currency=os.getenv("PROJECTION_CURRENCY", "MYR"),
        cors_origin=os.getenv("PROJECTION_CORS_ORIGIN", "*"),
        debug=str(os.getenv("PROJECTION_DEBUG", "")).lower() in TRUTHY,
    )


DEFAULT_INPUT = {
    "name": "MyProjection",
    "initialCapital": 500000.0,
    "currentAge": 35,
    "avgYearlyInvestmentReturn": 5.0,
    "annualInflationRate": 3.0,
    "projectionStartDate": "2025-01",
    "initialMonthlyIncome": 8000.0,
    "spendingMode": "single",
    "totalMonthlySpending": 5000.0,
    "itemizedSpending": [],
    "dynamicSpending": [],
    "incomeChanges": [],
    "lumpSums": [],
}
