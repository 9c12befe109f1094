from .aggregate import aggregate_period
from .analytics import (
    analyze_cash_flow,
    calculate_break_even,
    calculate_retirement_readiness,
    calculate_risk_metrics,
    compare_scenarios,
    compute_advanced_analytics,
    generate_recommendations,
    identify_milestones,
)
from .export import csv_rows, export_csv, results_to_frame
from .scheduler import AdjustmentCursor, ScheduledAdjustment, effective_month_index, schedule_adjustments
from .simulator import MAX_PROJECTION_MONTHS, iter_months, run_projection, simulate_monthly
from .summary import calculate_summary

__all__ = [
    "MAX_PROJECTION_MONTHS",
    "AdjustmentCursor",
    "ScheduledAdjustment",
    "aggregate_period",
    "analyze_cash_flow",
    "calculate_break_even",
    "calculate_retirement_readiness",
    "calculate_risk_metrics",
    "calculate_summary",
    "compare_scenarios",
    "compute_advanced_analytics",
    "csv_rows",
    "effective_month_index",
    "export_csv",
    "generate_recommendations",
    "identify_milestones",
    "iter_months",
    "results_to_frame",
    "run_projection",
    "schedule_adjustments",
    "simulate_monthly",
]
