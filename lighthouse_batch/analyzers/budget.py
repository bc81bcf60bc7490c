"""Check summaries against configured score budgets."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from ..models import BudgetThresholds, Summary, SummaryErrors

# (threshold field, category id, message label, url prefix)
CATEGORY_BUDGETS: Sequence[Tuple[str, str, str, str]] = (
    ("accessibility", "accessibility", "accessibility", "for"),
    ("performance", "performance", "performance", "for"),
    ("best_practices", "best-practices", "best practices", "for"),
    ("seo", "seo", "seo", "for site"),
    ("pwa", "pwa", "pwa", "for site"),
)


def format_number(value: float) -> str:
    """Render ``85.0`` as ``85`` and keep fractional values as they are."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def to_percent(score: Optional[float]) -> float:
    """Rescale a 0-1 category score to a percentage."""
    return round(float(score or 0.0) * 100, 2)


def check_budgets(summary: Summary, thresholds: BudgetThresholds) -> List[str]:
    """Return one message per threshold ``summary`` fails to meet."""
    errors: List[str] = []

    if thresholds.is_active("score"):
        # summary.score is already a percentage
        if summary.score < thresholds.score:
            errors.append(
                f"average score {format_number(summary.score)} < "
                f"{format_number(thresholds.score)} for {summary.url}"
            )

    if summary.detail is None:
        return errors

    for field, category_id, label, target in CATEGORY_BUDGETS:
        if not thresholds.is_active(field) or category_id not in summary.detail:
            continue
        threshold = getattr(thresholds, field)
        score = to_percent(summary.detail[category_id])
        if score < threshold:
            errors.append(
                f"{label} score {format_number(score)} < "
                f"{format_number(threshold)} {target} {summary.url}"
            )

    return errors


def attach_budget_errors(summary: Summary, errors: List[str]) -> Summary:
    """Return a copy of ``summary`` carrying ``errors`` under ``errors.budget``."""
    if not errors:
        return summary
    merged = SummaryErrors(budget=list(errors), other=summary.errors)
    return summary.model_copy(update={"errors": merged})
