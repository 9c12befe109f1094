from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterator, List, Tuple

from ..data_model import MonthRecord, ProjectionInput, ProjectionResult, SpendingItem, parse_start_date
from .scheduler import AdjustmentCursor, schedule_adjustments
from .summary import calculate_summary

logger = logging.getLogger(__name__)

MAX_PROJECTION_MONTHS = 600  # 50 years


@dataclass(frozen=True)
class SpendingState:
    itemized: bool
    items: Tuple[SpendingItem, ...] = ()
    amount: float = 0.0

    @classmethod
    def from_input(cls, data: ProjectionInput) -> "SpendingState":
        if data.spending_mode == "itemized":
            return cls(itemized=True, items=tuple(data.itemized_spending or ()))
        return cls(itemized=False, amount=data.total_monthly_spending or 0.0)

    def scaled(self, factor: float) -> "SpendingState":
        if self.itemized:
            return replace(self, items=tuple(replace(item, amount=item.amount * factor) for item in self.items))
        return replace(self, amount=self.amount * factor)

    def total(self) -> float:
        if self.itemized:
            return sum(item.amount for item in self.items)
        return self.amount


@dataclass(frozen=True)
class SimulationState:
    month: int
    capital: float
    income: float
    spending: SpendingState


class _Schedules:
    def __init__(self, data: ProjectionInput) -> None:
        self.spending = AdjustmentCursor(schedule_adjustments(data.dynamic_spending))
        self.income = AdjustmentCursor(schedule_adjustments(data.income_changes))
        self.lump_sums = AdjustmentCursor(schedule_adjustments(data.lump_sums))


def _calendar_label(start_year: int, start_month: int, month: int) -> str:
    offset = start_month + month - 1
    return f"{start_year + offset // 12}-{offset % 12 + 1:02d}"


def _advance(
    state: SimulationState,
    data: ProjectionInput,
    schedules: _Schedules,
    start: Tuple[int, int],
) -> Tuple[MonthRecord, SimulationState]:
    m = state.month
    year_num = m // 12
    month_in_year = (m % 12) + 1

    spending = state.spending
    for adjustment in schedules.spending.due(m):
        spending = spending.scaled(1 + adjustment.percentage / 100)

    income = state.income
    for change in schedules.income.due(m):
        income = change.amount

    lump_sum = 0.0
    for item in schedules.lump_sums.due(m):
        lump_sum += item.amount

    total_spending = spending.total()

    # inflation steps at simulated-year boundaries, after same-month adjustments
    if month_in_year == 1 and year_num > 0:
        spending = spending.scaled(1 + data.annual_inflation_rate / 100)
        total_spending = spending.total()

    investment_returns = state.capital * (data.avg_yearly_investment_return / 100 / 12)
    net_cashflow = income - total_spending + lump_sum
    capital_before_returns = state.capital + net_cashflow
    capital = capital_before_returns + investment_returns

    record = MonthRecord(
        month=m,
        year=year_num,
        month_in_year=month_in_year,
        date=_calendar_label(start[0], start[1], m),
        age=data.current_age + year_num,
        income=income,
        spending=total_spending,
        lump_sum=lump_sum,
        net_cash_flow=net_cashflow,
        investment_returns=investment_returns,
        capital_before_returns=capital_before_returns,
        capital=capital,
    )
    next_state = SimulationState(month=m + 1, capital=capital, income=income, spending=spending)
    return record, next_state


def iter_months(data: ProjectionInput, max_months: int = MAX_PROJECTION_MONTHS) -> Iterator[MonthRecord]:
    """Yield one MonthRecord per simulated month.

    Stops after the first month whose closing capital is negative, or after
    `max_months` months.
    """
    start = parse_start_date(data.projection_start_date)
    schedules = _Schedules(data)
    state = SimulationState(
        month=0,
        capital=data.initial_capital,
        income=data.initial_monthly_income or 0.0,
        spending=SpendingState.from_input(data),
    )
    while state.month < max_months and state.capital >= 0:
        record, state = _advance(state, data, schedules, start)
        yield record
        if state.capital < 0:
            break


def simulate_monthly(data: ProjectionInput, max_months: int = MAX_PROJECTION_MONTHS) -> List[MonthRecord]:
    return list(iter_months(data, max_months=max_months))


def run_projection(data: ProjectionInput) -> ProjectionResult:
    """Run the month-by-month projection.

    Never raises: any error during the loop comes back as a failed result
    with an empty record list.
    """
    logger.debug("Running projection: %s", data)
    try:
        results = simulate_monthly(data)
        summary = calculate_summary(results, data)
    except Exception as exc:
        logger.exception("Projection calculation failed")
        return ProjectionResult.failure(str(exc))
    logger.info("Projection complete: %d months calculated", len(results))
    return ProjectionResult(success=True, results=results, summary=summary)
