"""Analyzers computing batch averages and budget verdicts."""

from .budget import attach_budget_errors, check_budgets
from .performance import MetricsAccumulator

__all__ = ["MetricsAccumulator", "attach_budget_errors", "check_budgets"]
