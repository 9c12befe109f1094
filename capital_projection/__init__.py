"""Month-by-month projection of personal capital."""

from .engine import compare_scenarios, compute_advanced_analytics, run_projection

__all__ = ["compare_scenarios", "compute_advanced_analytics", "run_projection"]
