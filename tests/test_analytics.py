import math

import pytest

from capital_projection.data_model import Scenario
from capital_projection.engine import (
    analyze_cash_flow,
    calculate_break_even,
    calculate_retirement_readiness,
    calculate_risk_metrics,
    compare_scenarios,
    compute_advanced_analytics,
    generate_recommendations,
    identify_milestones,
    run_projection,
)


def test_break_even_found_at_first_upward_crossing(make_input, make_records):
    records = make_records([90.0, 92.0, 94.0, 96.0, 98.0, 100.0, 102.0])

    result = calculate_break_even(records, make_input(initial_capital=100.0))

    assert result.achieved
    assert result.month == 5
    assert result.date == "2024-06"
    assert result.message == "Break-even achieved at age 30 (2024-06)"


def test_break_even_not_achieved_without_crossing(make_input, make_records):
    records = make_records([110.0, 120.0, 130.0])

    result = calculate_break_even(records, make_input(initial_capital=100.0))

    assert not result.achieved
    assert result.month is None


def test_break_even_after_dip_and_recovery(make_input, make_records):
    records = make_records([100.0, 95.0, 101.0])

    assert calculate_break_even(records, make_input(initial_capital=100.0)).month == 2


def test_retirement_readiness_scores_capital_against_twenty_years_of_spending(make_input, make_records):
    capitals = [200000.0] * 12 + [180000.0]
    records = make_records(capitals, spending=1000.0, start_age=64)

    result = calculate_retirement_readiness(records, make_input(current_age=64))

    assert result.required_capital == pytest.approx(240000.0)
    assert result.score == 75
    assert result.rating == "Good"
    assert result.ready
    assert result.years_to_retirement == 1
    assert result.surplus == pytest.approx(-60000.0)


def test_retirement_readiness_rounds_half_up(make_input, make_records):
    records = make_records([150000.0], spending=1000.0, start_age=70)

    result = calculate_retirement_readiness(records, make_input(current_age=70))

    assert result.years_to_retirement == 0
    assert result.score == 63


def test_retirement_readiness_caps_at_one_hundred(make_input, make_records):
    records = make_records([10_000_000.0], spending=1000.0, start_age=65)

    result = calculate_retirement_readiness(records, make_input(current_age=65))

    assert result.score == 100
    assert result.rating == "Excellent"


def test_retirement_readiness_without_retirement_month(make_input, make_records):
    records = make_records([1000.0] * 12)

    result = calculate_retirement_readiness(records, make_input(current_age=30))

    assert not result.ready
    assert result.score == 0
    assert result.rating is None


def test_risk_metrics_flat_series_is_low_risk(make_input, make_records):
    records = make_records([100.0] * 6)

    risk = calculate_risk_metrics(records, make_input(initial_capital=100.0))

    assert risk.volatility == 0
    assert risk.negative_months == 0
    assert risk.depletion_risk == 0
    assert risk.risk_score == 0
    assert risk.risk_level == "Low"


def test_risk_metrics_blend_volatility_negative_months_and_depletion(make_input, make_records):
    records = make_records([100.0, 50.0], net_flows=[0.0, -50.0])

    risk = calculate_risk_metrics(records, make_input(initial_capital=100.0))

    assert risk.volatility == pytest.approx(25.0)
    assert risk.volatility_percent == pytest.approx(100 / 3)
    assert risk.negative_months_percent == 50.0
    assert risk.depletion_risk == pytest.approx(50.0)
    assert risk.risk_score == 45
    assert risk.risk_level == "Medium"


def test_risk_metrics_depleted_series_is_high_risk(make_input, make_records):
    records = make_records([100.0, -10.0], net_flows=[0.0, -110.0])

    risk = calculate_risk_metrics(records, make_input(initial_capital=100.0))

    assert risk.depletion_risk == 100.0
    assert risk.risk_score == 92
    assert risk.risk_level == "High"


def test_cash_flow_streaks_include_the_final_run(make_records):
    flows = [10.0, 10.0, -5.0, -5.0, -5.0, 10.0, 0.0, 3.0, 1.0]
    records = make_records([100.0] * len(flows), net_flows=flows)

    cash_flow = analyze_cash_flow(records)

    assert cash_flow.max_negative_streak == 3
    assert cash_flow.max_positive_streak == 4


def test_cash_flow_savings_rate(make_records):
    cash_flow = analyze_cash_flow(make_records([100.0] * 4, income=1000.0, spending=800.0))

    assert cash_flow.savings_rate == pytest.approx(20.0)
    assert cash_flow.total_income == 4000.0
    assert cash_flow.net_cash_flow == 800.0


def test_cash_flow_savings_rate_without_income(make_records):
    cash_flow = analyze_cash_flow(make_records([100.0] * 2, income=0.0, spending=500.0))

    assert cash_flow.savings_rate == -math.inf


def test_milestones_sorted_by_month(make_input, make_records):
    capitals = [400000.0, 600000.0, 800000.0, 1_000_000.0, 900000.0]
    records = make_records(capitals, start_age=64)

    milestones = identify_milestones(records, make_input(initial_capital=400000.0))

    assert [(m.type, m.month) for m in milestones] == [
        ("Double Initial Capital", 2),
        ("First Million", 3),
        ("Peak Capital", 3),
    ]


def test_milestones_include_retirement_age(make_input, make_records):
    records = make_records([100.0] * 14, start_age=64)

    milestones = identify_milestones(records, make_input(initial_capital=100.0))

    assert [m.type for m in milestones] == ["Peak Capital", "Retirement Age (65)"]
    assert milestones[1].month == 12
    assert milestones[1].age == 65


def test_recommendations_for_a_struggling_plan(make_input, make_records):
    records = make_records([100.0, -10.0], net_flows=[-50.0, -110.0], income=100.0, spending=150.0)
    data = make_input(initial_capital=150.0, avg_yearly_investment_return=3.0, annual_inflation_rate=4.0)

    recommendations = generate_recommendations(records, data)

    assert [r.category for r in recommendations] == [
        "Capital Depletion",
        "Low Savings Rate",
        "Investment Returns",
        "Inflation Risk",
    ]
    assert [r.priority for r in recommendations] == ["high", "medium", "medium", "high"]
    assert recommendations[1].message.startswith("Your savings rate is -50.0%")


def test_recommendations_praise_a_strong_low_risk_plan(make_input, make_records):
    records = make_records([100.0, 250.0], income=1000.0, spending=500.0)
    data = make_input(initial_capital=100.0, avg_yearly_investment_return=7.0, annual_inflation_rate=2.0)

    recommendations = generate_recommendations(records, data)

    assert [r.category for r in recommendations] == ["Great Progress"]
    assert recommendations[0].priority == "low"


def test_advanced_analytics_empty_results(make_input):
    assert compute_advanced_analytics([], make_input()) is None


def test_advanced_analytics_over_a_projection(make_input):
    data = make_input(
        initial_capital=300000.0,
        current_age=55,
        initial_monthly_income=6000.0,
        total_monthly_spending=4000.0,
        avg_yearly_investment_return=6.0,
        annual_inflation_rate=2.0,
    )
    result = run_projection(data)

    analytics = compute_advanced_analytics(result.results, data)

    assert analytics.retirement_readiness.years_to_retirement == 10
    assert analytics.retirement_readiness.retirement_capital == result.results[120].capital
    assert analytics.cash_flow_analysis.total_income == pytest.approx(result.summary.total_income)
    months = [m.month for m in analytics.milestones]
    assert months == sorted(months)
    assert analytics.to_dict()["risk_analysis"]["risk_level"] == analytics.risk_analysis.risk_level


def test_compare_scenarios_needs_two(make_input, make_records):
    scenario = Scenario(name="Only", results=make_records([100.0]), input_data=make_input())

    assert compare_scenarios([scenario]) is None
    assert compare_scenarios(None) is None


def test_compare_scenarios_ranks_each_axis_independently(make_input, make_records):
    short = Scenario(name="Short", results=make_records([100.0, 300.0, 500.0]), input_data=make_input(initial_capital=100.0))
    long = Scenario(name=None, results=make_records([100.0] * 10), input_data=make_input(initial_capital=100.0))

    comparison = compare_scenarios([short, long])

    assert [s.name for s in comparison.scenarios] == ["Short", "Scenario 2"]
    assert [s.total_months for s in comparison.scenarios] == [3, 10]
    assert comparison.best_by_capital == "Short"
    assert comparison.best_by_risk == "Scenario 2"
    assert comparison.best_by_retirement == "Short"


def test_compare_scenarios_rejects_empty_results(make_input, make_records):
    scenarios = [
        Scenario(name="A", results=make_records([100.0]), input_data=make_input()),
        Scenario(name="B", results=[], input_data=make_input()),
    ]

    with pytest.raises(ValueError):
        compare_scenarios(scenarios)
