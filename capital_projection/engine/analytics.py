"""Interpretive metrics derived from a finished projection.

Every function is a read-only pass over the month records (and the input that
produced them). `compute_advanced_analytics` computes the risk and cash-flow
aggregates once and hands them to the recommendation rules.
"""
from __future__ import annotations

import logging
import math
from typing import List, Sequence

import pandas as pd

from ..data_model import (
    AdvancedAnalytics,
    BreakEvenAnalysis,
    CashFlowAnalysis,
    Milestone,
    MonthRecord,
    ProjectionInput,
    Recommendation,
    RetirementReadiness,
    RiskMetrics,
    Scenario,
    ScenarioComparison,
    ScenarioMetrics,
)
from .summary import peak_record

logger = logging.getLogger(__name__)

RETIREMENT_AGE = 65
LIFE_EXPECTANCY = 85
SPENDING_WINDOW_MONTHS = 120
FIRST_MILLION = 1_000_000


def _round_half_up(value: float) -> float:
    if not math.isfinite(value):
        return value
    return math.floor(value + 0.5)


def _capped_score(value: float) -> float:
    score = _round_half_up(value)
    return score if math.isnan(score) else min(100, score)


def _ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, resolving a zero denominator to its limit."""
    if denominator:
        return numerator / denominator
    if not numerator or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator)


def calculate_break_even(results: Sequence[MonthRecord], data: ProjectionInput) -> BreakEvenAnalysis:
    initial = data.initial_capital
    for index in range(1, len(results)):
        record = results[index]
        if record.capital >= initial and results[index - 1].capital < initial:
            return BreakEvenAnalysis(
                achieved=True,
                month=index,
                year=record.year,
                age=record.age,
                date=record.date,
                message=f"Break-even achieved at age {record.age} ({record.date})",
            )
    return BreakEvenAnalysis(achieved=False, message="Break-even not achieved within projection period")


def _readiness_rating(score: float) -> str:
    if score >= 80:
        return "Excellent"
    if score >= 60:
        return "Good"
    if score >= 40:
        return "Fair"
    return "Poor"


def calculate_retirement_readiness(results: Sequence[MonthRecord], data: ProjectionInput) -> RetirementReadiness:
    years_to_retirement = max(0, RETIREMENT_AGE - data.current_age)
    years_in_retirement = LIFE_EXPECTANCY - RETIREMENT_AGE
    retirement_month = years_to_retirement * 12

    retirement_record = next((r for r in results if r.month == retirement_month), None)
    if retirement_record is None:
        return RetirementReadiness(
            ready=False,
            score=0,
            message="Insufficient data to calculate retirement readiness",
        )

    window = results[:SPENDING_WINDOW_MONTHS]
    avg_monthly_spending = sum(r.spending for r in window) / len(window)
    required_capital = avg_monthly_spending * 12 * years_in_retirement
    retirement_capital = retirement_record.capital

    score = _capped_score(_ratio(retirement_capital, required_capital) * 100)
    rating = _readiness_rating(score)
    return RetirementReadiness(
        ready=score >= 60,
        score=score,
        rating=rating,
        retirement_age=RETIREMENT_AGE,
        retirement_capital=retirement_capital,
        required_capital=required_capital,
        surplus=retirement_capital - required_capital,
        years_to_retirement=years_to_retirement,
        message=f"Retirement readiness: {rating} ({score}/100)",
    )


def calculate_risk_metrics(results: Sequence[MonthRecord], data: ProjectionInput) -> RiskMetrics:
    capital = pd.Series([r.capital for r in results], dtype="float64")
    avg_capital = capital.mean()
    volatility = capital.std(ddof=0)
    volatility_percent = volatility / avg_capital * 100 if avg_capital else 0.0

    negative_months = sum(1 for r in results if r.net_cash_flow < 0)
    negative_months_percent = negative_months / len(results) * 100

    min_capital = capital.min()
    if min_capital <= 0:
        depletion_risk = 100.0
    else:
        depletion_risk = max(0.0, 100 - _ratio(min_capital, data.initial_capital) * 100)

    risk_score = _capped_score(volatility_percent * 0.3 + negative_months_percent * 0.3 + depletion_risk * 0.4)
    if risk_score >= 70:
        risk_level = "High"
    elif risk_score >= 40:
        risk_level = "Medium"
    else:
        risk_level = "Low"

    return RiskMetrics(
        risk_score=risk_score,
        risk_level=risk_level,
        volatility=float(volatility),
        volatility_percent=float(volatility_percent),
        negative_months=negative_months,
        negative_months_percent=negative_months_percent,
        min_capital=float(min_capital),
        depletion_risk=float(depletion_risk),
        message=f"Risk level: {risk_level} ({risk_score}/100)",
    )


def _longest_streaks(results: Sequence[MonthRecord]) -> tuple[int, int]:
    """Longest runs of non-negative and of negative net cash flow."""
    max_positive = 0
    max_negative = 0
    streak = 0
    positive: bool | None = None
    for record in results:
        is_positive = record.net_cash_flow >= 0
        streak = streak + 1 if is_positive == positive else 1
        positive = is_positive
        if positive:
            max_positive = max(max_positive, streak)
        else:
            max_negative = max(max_negative, streak)
    return max_positive, max_negative


def analyze_cash_flow(results: Sequence[MonthRecord]) -> CashFlowAnalysis:
    months = len(results)
    total_income = sum(r.income for r in results)
    total_spending = sum(r.spending for r in results)
    total_lump_sums = sum(r.lump_sum for r in results)
    total_returns = sum(r.investment_returns for r in results)

    avg_income = total_income / months
    avg_spending = total_spending / months
    max_positive, max_negative = _longest_streaks(results)

    return CashFlowAnalysis(
        total_income=total_income,
        total_spending=total_spending,
        total_lump_sums=total_lump_sums,
        total_returns=total_returns,
        avg_monthly_income=avg_income,
        avg_monthly_spending=avg_spending,
        avg_monthly_returns=total_returns / months,
        savings_rate=_ratio(avg_income - avg_spending, avg_income) * 100,
        max_positive_streak=max_positive,
        max_negative_streak=max_negative,
        net_cash_flow=total_income + total_lump_sums - total_spending,
    )


def _milestone(kind: str, record: MonthRecord) -> Milestone:
    return Milestone(type=kind, month=record.month, age=record.age, date=record.date, value=record.capital)


def identify_milestones(results: Sequence[MonthRecord], data: ProjectionInput) -> List[Milestone]:
    milestones: List[Milestone] = []

    first_million = next((r for r in results if r.capital >= FIRST_MILLION), None)
    if first_million is not None:
        milestones.append(_milestone("First Million", first_million))

    doubled = next((r for r in results if r.capital >= data.initial_capital * 2), None)
    if doubled is not None:
        milestones.append(_milestone("Double Initial Capital", doubled))

    if results:
        milestones.append(_milestone("Peak Capital", peak_record(results)))

    retired = next((r for r in results if r.age >= RETIREMENT_AGE), None)
    if retired is not None:
        milestones.append(_milestone(f"Retirement Age ({RETIREMENT_AGE})", retired))

    return sorted(milestones, key=lambda milestone: milestone.month)


def generate_recommendations(
    results: Sequence[MonthRecord],
    data: ProjectionInput,
    risk: RiskMetrics | None = None,
    cash_flow: CashFlowAnalysis | None = None,
) -> List[Recommendation]:
    risk = risk or calculate_risk_metrics(results, data)
    cash_flow = cash_flow or analyze_cash_flow(results)
    final_capital = results[-1].capital
    recommendations: List[Recommendation] = []

    if final_capital <= 0:
        recommendations.append(
            Recommendation(
                priority="high",
                category="Capital Depletion",
                message="Your capital is projected to deplete. Consider reducing spending or increasing income.",
                action="Reduce monthly spending by 10-20% or find additional income sources.",
            )
        )

    if cash_flow.savings_rate < 10:
        recommendations.append(
            Recommendation(
                priority="medium",
                category="Low Savings Rate",
                message=f"Your savings rate is {cash_flow.savings_rate:.1f}%, which is below recommended 10-20%.",
                action="Try to increase your savings rate by reducing discretionary spending.",
            )
        )

    if data.avg_yearly_investment_return < 5:
        recommendations.append(
            Recommendation(
                priority="medium",
                category="Investment Returns",
                message="Your expected investment return is conservative. Consider diversifying your portfolio.",
                action="Review your investment strategy with a financial advisor.",
            )
        )

    if data.annual_inflation_rate > data.avg_yearly_investment_return:
        recommendations.append(
            Recommendation(
                priority="high",
                category="Inflation Risk",
                message="Your investment returns are not keeping pace with inflation.",
                action="Seek investments with returns above inflation rate to preserve purchasing power.",
            )
        )

    if final_capital > data.initial_capital * 2 and risk.risk_level == "Low":
        recommendations.append(
            Recommendation(
                priority="low",
                category="Great Progress",
                message="Your financial projection looks excellent! You're on track to more than double your capital.",
                action="Continue with your current strategy and review periodically.",
            )
        )

    return recommendations


def compute_advanced_analytics(results: Sequence[MonthRecord], data: ProjectionInput) -> AdvancedAnalytics | None:
    if not results:
        return None

    risk = calculate_risk_metrics(results, data)
    cash_flow = analyze_cash_flow(results)
    return AdvancedAnalytics(
        break_even_analysis=calculate_break_even(results, data),
        retirement_readiness=calculate_retirement_readiness(results, data),
        risk_analysis=risk,
        cash_flow_analysis=cash_flow,
        milestones=identify_milestones(results, data),
        recommendations=generate_recommendations(results, data, risk=risk, cash_flow=cash_flow),
    )


def compare_scenarios(scenarios: Sequence[Scenario] | None) -> ScenarioComparison | None:
    """Headline metrics per scenario plus the winner on each axis.

    Ties go to the earliest scenario.
    """
    if not scenarios or len(scenarios) < 2:
        return None

    metrics: List[ScenarioMetrics] = []
    for index, scenario in enumerate(scenarios, start=1):
        name = scenario.name or f"Scenario {index}"
        analytics = compute_advanced_analytics(scenario.results, scenario.input_data)
        if analytics is None:
            raise ValueError(f"{name} has no projection results to compare")
        last = scenario.results[-1]
        metrics.append(
            ScenarioMetrics(
                name=name,
                final_capital=last.capital,
                final_age=last.age,
                total_months=len(scenario.results),
                retirement_readiness=analytics.retirement_readiness.score,
                risk_score=analytics.risk_analysis.risk_score,
                savings_rate=analytics.cash_flow_analysis.savings_rate,
            )
        )

    best_by_capital = metrics[0]
    best_by_retirement = metrics[0]
    best_by_risk = metrics[0]
    for current in metrics[1:]:
        if current.final_capital > best_by_capital.final_capital:
            best_by_capital = current
        if current.retirement_readiness > best_by_retirement.retirement_readiness:
            best_by_retirement = current
        if current.risk_score < best_by_risk.risk_score:
            best_by_risk = current

    logger.debug("Compared %d scenarios", len(metrics))
    return ScenarioComparison(
        scenarios=metrics,
        best_by_capital=best_by_capital.name,
        best_by_retirement=best_by_retirement.name,
        best_by_risk=best_by_risk.name,
    )
