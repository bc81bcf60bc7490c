"""Batch Lighthouse audits with score budgets."""

from .models import BatchOptions, BatchResult, BudgetThresholds, Site, Summary
from .runner import BatchOutcome, BatchRunner

__all__ = [
    "BatchOptions",
    "BatchOutcome",
    "BatchResult",
    "BatchRunner",
    "BudgetThresholds",
    "Site",
    "Summary",
]

__version__ = "1.0.0"
