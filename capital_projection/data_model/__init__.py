from .analytics import (
    AdvancedAnalytics,
    BreakEvenAnalysis,
    CashFlowAnalysis,
    Milestone,
    Recommendation,
    RetirementReadiness,
    RiskMetrics,
    ScenarioComparison,
    ScenarioMetrics,
)
from .inputs import (
    SPENDING_MODES,
    IncomeChange,
    LumpSum,
    ProjectionInput,
    Scenario,
    SpendingAdjustment,
    SpendingItem,
    parse_start_date,
    projection_input_from_payload,
)
from .records import MonthRecord, ProjectionResult, Summary
from .validation import validate_projection_input

__all__ = [
    "SPENDING_MODES",
    "AdvancedAnalytics",
    "BreakEvenAnalysis",
    "CashFlowAnalysis",
    "IncomeChange",
    "LumpSum",
    "Milestone",
    "MonthRecord",
    "ProjectionInput",
    "ProjectionResult",
    "Recommendation",
    "RetirementReadiness",
    "RiskMetrics",
    "Scenario",
    "ScenarioComparison",
    "ScenarioMetrics",
    "SpendingAdjustment",
    "SpendingItem",
    "Summary",
    "parse_start_date",
    "projection_input_from_payload",
    "validate_projection_input",
]
