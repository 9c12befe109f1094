from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class MonthRecord:
    month: int
    year: int
    month_in_year: int
    date: str
    age: int
    income: float
    spending: float
    lump_sum: float
    net_cash_flow: float
    investment_returns: float
    capital_before_returns: float
    capital: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Summary:
    total_months: int
    total_years: int
    total_income: float
    total_spending: float
    total_lump_sums: float
    total_investment_returns: float
    final_capital: float
    final_age: int
    peak_capital: float
    peak_capital_age: int
    peak_capital_date: str
    capital_depleted: bool
    depletion_age: int | None
    avg_monthly_income: float
    avg_monthly_spending: float
    avg_monthly_returns: float
    net_gain: float
    total_net_cash_flow: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ProjectionResult:
    success: bool
    results: List[MonthRecord] = field(default_factory=list)
    summary: Summary | None = None
    error: str | None = None

    @classmethod
    def failure(cls, message: str) -> "ProjectionResult":
        return cls(success=False, results=[], summary=None, error=message)

    def to_dict(self) -> Dict[str, Any]:
        if not self.success:
            return {"success": False, "error": self.error, "results": [], "summary": None}
        return {
            "success": True,
            "results": [record.to_dict() for record in self.results],
            "summary": self.summary.to_dict() if self.summary else None,
        }
