from __future__ import annotations

from typing import List, Sequence

import pandas as pd

from ..data_model import MonthRecord

FRAME_COLUMNS = {
    "month": "MonthIndex",
    "year": "Year",
    "month_in_year": "MonthInYear",
    "date": "Date",
    "age": "Age",
    "income": "Income",
    "spending": "Spending",
    "lump_sum": "LumpSum",
    "net_cash_flow": "NetCashFlow",
    "investment_returns": "InvestmentReturns",
    "capital_before_returns": "CapitalBeforeReturns",
    "capital": "Capital",
}

MONEY_COLUMNS = ["Income", "Spending", "LumpSum", "NetCashFlow", "InvestmentReturns", "Capital"]


def results_to_frame(results: Sequence[MonthRecord], scenario: str | None = None) -> pd.DataFrame:
    """One row per simulated month, with CamelCase column names."""
    df = pd.DataFrame([record.to_dict() for record in results], columns=list(FRAME_COLUMNS))
    df = df.rename(columns=FRAME_COLUMNS)
    if scenario is not None:
        df.insert(0, "Scenario", scenario)
    return df


def csv_headers(currency: str = "MYR") -> List[str]:
    return [
        "Month",
        "Year",
        "Date",
        "Age",
        f"Income ({currency})",
        f"Spending ({currency})",
        f"Lump Sum ({currency})",
        f"Net Cash Flow ({currency})",
        f"Investment Returns ({currency})",
        f"Capital ({currency})",
    ]


def csv_rows(results: Sequence[MonthRecord]) -> List[List[str]]:
    rows: List[List[str]] = []
    for r in results:
        rows.append(
            [
                str(r.month),
                str(r.year),
                r.date,
                str(r.age),
                f"{r.income:.2f}",
                f"{r.spending:.2f}",
                f"{r.lump_sum:.2f}",
                f"{r.net_cash_flow:.2f}",
                f"{r.investment_returns:.2f}",
                f"{r.capital:.2f}",
            ]
        )
    return rows


def export_csv(results: Sequence[MonthRecord], currency: str = "MYR") -> str:
    if not results:
        return ""
    df = pd.DataFrame(csv_rows(results), columns=csv_headers(currency))
    return df.to_csv(index=False, lineterminator="\n").rstrip("\n")
