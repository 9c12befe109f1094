from __future__ import annotations

from typing import Sequence

from ..data_model import MonthRecord, ProjectionInput, Summary


def peak_record(results: Sequence[MonthRecord]) -> MonthRecord:
    """First record holding the highest capital."""
    peak = results[0]
    for record in results[1:]:
        if record.capital > peak.capital:
            peak = record
    return peak


def calculate_summary(results: Sequence[MonthRecord], data: ProjectionInput) -> Summary | None:
    if not results:
        return None

    last = results[-1]
    total_months = len(results)

    total_income = sum(r.income for r in results)
    total_spending = sum(r.spending for r in results)
    total_lump_sums = sum(r.lump_sum for r in results)
    total_returns = sum(r.investment_returns for r in results)

    peak = peak_record(results)
    depleted = last.capital <= 0

    return Summary(
        total_months=total_months,
        total_years=total_months // 12,
        total_income=total_income,
        total_spending=total_spending,
        total_lump_sums=total_lump_sums,
        total_investment_returns=total_returns,
        final_capital=last.capital,
        final_age=last.age,
        peak_capital=peak.capital,
        peak_capital_age=peak.age,
        peak_capital_date=peak.date,
        capital_depleted=depleted,
        depletion_age=last.age if depleted else None,
        avg_monthly_income=total_income / total_months,
        avg_monthly_spending=total_spending / total_months,
        avg_monthly_returns=total_returns / total_months,
        net_gain=last.capital - data.initial_capital,
        total_net_cash_flow=total_income + total_lump_sums - total_spending,
    )
