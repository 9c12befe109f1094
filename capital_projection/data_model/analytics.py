from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Literal


@dataclass(frozen=True)
class BreakEvenAnalysis:
    achieved: bool
    message: str
    month: int | None = None
    year: int | None = None
    age: int | None = None
    date: str | None = None


@dataclass(frozen=True)
class RetirementReadiness:
    ready: bool
    score: float
    message: str
    rating: str | None = None
    retirement_age: int | None = None
    retirement_capital: float | None = None
    required_capital: float | None = None
    surplus: float | None = None
    years_to_retirement: int | None = None


@dataclass(frozen=True)
class RiskMetrics:
    risk_score: float
    risk_level: Literal["Low", "Medium", "High"]
    volatility: float
    volatility_percent: float
    negative_months: int
    negative_months_percent: float
    min_capital: float
    depletion_risk: float
    message: str


@dataclass(frozen=True)
class CashFlowAnalysis:
    total_income: float
    total_spending: float
    total_lump_sums: float
    total_returns: float
    avg_monthly_income: float
    avg_monthly_spending: float
    avg_monthly_returns: float
    savings_rate: float
    max_positive_streak: int
    max_negative_streak: int
    net_cash_flow: float


@dataclass(frozen=True)
class Milestone:
    type: str
    month: int
    age: int
    date: str
    value: float


@dataclass(frozen=True)
class Recommendation:
    priority: Literal["high", "medium", "low"]
    category: str
    message: str
    action: str


@dataclass(frozen=True)
class AdvancedAnalytics:
    break_even_analysis: BreakEvenAnalysis
    retirement_readiness: RetirementReadiness
    risk_analysis: RiskMetrics
    cash_flow_analysis: CashFlowAnalysis
    milestones: List[Milestone] = field(default_factory=list)
    recommendations: List[Recommendation] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ScenarioMetrics:
    name: str
    final_capital: float
    final_age: int
    total_months: int
    retirement_readiness: float
    risk_score: float
    savings_rate: float


@dataclass(frozen=True)
class ScenarioComparison:
    scenarios: List[ScenarioMetrics]
    best_by_capital: str
    best_by_retirement: str
    best_by_risk: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
