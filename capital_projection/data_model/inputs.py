from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, List, Literal

import pandas as pd

SPENDING_MODES = ("single", "itemized")


@dataclass(frozen=True)
class SpendingItem:
    name: str
    amount: float


@dataclass(frozen=True)
class SpendingAdjustment:
    """Percentage change applied to every spending amount from (year, month) on."""

    percentage: float
    year: int
    month: int


@dataclass(frozen=True)
class IncomeChange:
    amount: float
    year: int
    month: int


@dataclass(frozen=True)
class LumpSum:
    amount: float
    year: int
    month: int


@dataclass
class ProjectionInput:
    initial_capital: float
    current_age: int
    avg_yearly_investment_return: float
    annual_inflation_rate: float
    projection_start_date: str | date
    initial_monthly_income: float = 0.0
    spending_mode: Literal["single", "itemized"] = "single"
    total_monthly_spending: float = 0.0
    itemized_spending: List[SpendingItem] = field(default_factory=list)
    dynamic_spending: List[SpendingAdjustment] = field(default_factory=list)
    income_changes: List[IncomeChange] = field(default_factory=list)
    lump_sums: List[LumpSum] = field(default_factory=list)

    def initial_spending(self) -> float:
        if self.spending_mode == "itemized":
            return sum(item.amount for item in self.itemized_spending)
        return self.total_monthly_spending


@dataclass
class Scenario:
    name: str | None
    results: list
    input_data: ProjectionInput


def _extract_payload_value(payload: dict, *keys: str, default=None):
    for key in keys:
        if key in payload and payload[key] is not None:
            return payload[key]
    return default


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_itemized_spending(rows: list[dict] | None) -> List[SpendingItem]:
    items: List[SpendingItem] = []
    for row in rows or []:
        name = str(row.get("name", "") or "").strip()
        amount = float(row.get("amount", 0.0) or 0.0)
        if not name or amount == 0.0:
            continue
        items.append(SpendingItem(name=name, amount=amount))
    return items


def _parse_schedule_rows(rows: list[dict] | None, value_key: str) -> List[tuple[float, int, int]]:
    parsed: List[tuple[float, int, int]] = []
    for row in rows or []:
        value = row.get(value_key)
        year = row.get("year")
        month = row.get("month")
        if _is_blank(value) or _is_blank(year) or _is_blank(month):
            continue
        parsed.append((float(value), int(float(year)), int(float(month))))
    return parsed


def projection_input_from_payload(payload: dict) -> ProjectionInput:
    """Build a ProjectionInput from a camelCase or snake_case JSON payload.

    Numbers are coerced with float()/int(); non-numeric text raises ValueError.
    Incomplete adjustment rows are dropped the same way the input form drops them.
    """
    mode = str(_extract_payload_value(payload, "spendingMode", "spending_mode", default="single") or "single")
    itemized = parse_itemized_spending(_extract_payload_value(payload, "itemizedSpending", "itemized_spending", default=[]))
    dynamic = [
        SpendingAdjustment(percentage=value, year=year, month=month)
        for value, year, month in _parse_schedule_rows(
            _extract_payload_value(payload, "dynamicSpending", "dynamic_spending", default=[]), "percentage"
        )
    ]
    income_changes = [
        IncomeChange(amount=value, year=year, month=month)
        for value, year, month in _parse_schedule_rows(
            _extract_payload_value(payload, "incomeChanges", "income_changes", default=[]), "amount"
        )
    ]
    lump_sums = [
        LumpSum(amount=value, year=year, month=month)
        for value, year, month in _parse_schedule_rows(
            _extract_payload_value(payload, "lumpSums", "lump_sums", default=[]), "amount"
        )
    ]
    return ProjectionInput(
        initial_capital=float(_extract_payload_value(payload, "initialCapital", "initial_capital", default=0.0) or 0.0),
        current_age=int(float(_extract_payload_value(payload, "currentAge", "current_age", default=0) or 0)),
        avg_yearly_investment_return=float(
            _extract_payload_value(payload, "avgYearlyInvestmentReturn", "avg_yearly_investment_return", default=0.0) or 0.0
        ),
        annual_inflation_rate=float(
            _extract_payload_value(payload, "annualInflationRate", "annual_inflation_rate", default=0.0) or 0.0
        ),
        projection_start_date=_extract_payload_value(payload, "projectionStartDate", "projection_start_date", default=""),
        initial_monthly_income=float(
            _extract_payload_value(payload, "initialMonthlyIncome", "initial_monthly_income", default=0.0) or 0.0
        ),
        spending_mode=mode,
        total_monthly_spending=float(
            _extract_payload_value(payload, "totalMonthlySpending", "total_monthly_spending", default=0.0) or 0.0
        ),
        itemized_spending=itemized,
        dynamic_spending=dynamic,
        income_changes=income_changes,
        lump_sums=lump_sums,
    )


def parse_start_date(value: str | date | None) -> tuple[int, int]:
    """Return (year, month) of a projection start date; raises ValueError when unparseable."""
    if not isinstance(value, (str, date)) and value is not None:
        raise ValueError(f"Projection start date must be a string or date, got {type(value).__name__}")
    stamp = pd.Timestamp(value) if not _is_blank(value) else pd.NaT
    if pd.isna(stamp):
        raise ValueError(f"Invalid projection start date: {value!r}")
    return stamp.year, stamp.month
