"""Utilities for parsing Lighthouse JSON reports."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import ValidationError

from ..errors import MalformedReport
from ..models import (
    TRACKED_AUDITS,
    AuditReport,
    AuditValue,
    CategoryListReport,
    CategoryMapReport,
    NormalizedScores,
    Site,
    Summary,
)
from .base import BaseReportParser


class LighthouseReportParser(BaseReportParser):
    """Parse the JSON report written by the Lighthouse CLI.

    Two report shapes exist: engine v1/v2 list categories under
    ``reportCategories`` while v3+ key them by id under ``categories``. The
    shape is resolved once in :meth:`parse`; everything downstream works on
    the resulting model.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def _load_json(path: Path) -> Any:
        if not path.exists():
            raise FileNotFoundError(f"Report not found at: {path}")

        try:
            with path.open("r", encoding="utf-8") as handle:
                return json.load(handle)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise MalformedReport(f"Unable to decode report JSON: {path}") from exc
        except FileNotFoundError:
            raise
        except OSError as exc:
            raise MalformedReport(f"Unable to read report: {path} ({exc})") from exc

    def parse(self, source: Union[str, Path, Mapping[str, Any]]) -> AuditReport:
        """Load a report from a path or an already decoded mapping."""
        payload = source if isinstance(source, Mapping) else self._load_json(Path(source))
        if not isinstance(payload, Mapping):
            raise MalformedReport("Report must be a JSON object.")

        try:
            if payload.get("categories") is not None:
                return CategoryMapReport.model_validate(payload)
            if payload.get("reportCategories") is not None:
                return CategoryListReport.model_validate(payload)
        except ValidationError as exc:
            raise MalformedReport(f"Report categories are invalid: {exc}") from exc

        raise MalformedReport("Report has neither 'categories' nor 'reportCategories'.")

    def normalize(self, report: AuditReport) -> NormalizedScores:
        """Collect category scores and average them.

        Categories without an ``id`` are left out of ``detail`` but still
        count toward the mean. A ``null`` score counts as zero.
        """
        categories = report.category_list()
        if not categories:
            raise MalformedReport("Report contains no categories.")

        total = 0.0
        detail: Dict[str, Optional[float]] = {}
        for category in categories:
            if category.id:
                detail[category.id] = category.score
            total += category.score or 0.0

        mean = total / len(categories)
        return NormalizedScores(
            score=round(mean, 2),
            detail=detail,
            percent=round(mean * 100, 2),
        )

    @staticmethod
    def _safe_float(value: Any) -> Optional[float]:
        if isinstance(value, bool) or value is None:
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None

    def audit_snapshot(self, report: AuditReport) -> Dict[str, AuditValue]:
        """Keep display and numeric values of the tracked timing audits."""
        snapshot: Dict[str, AuditValue] = {}
        for audit_id in TRACKED_AUDITS:
            raw = report.audits.get(audit_id)
            if not isinstance(raw, Mapping):
                self.logger.debug("Audit '%s' missing from report", audit_id)
                raw = {}
            display = raw.get("displayValue")
            snapshot[audit_id] = AuditValue(
                display_value=None if display is None else str(display),
                numeric_value=self._safe_float(raw.get("numericValue")),
            )
        return snapshot

    def summarize(self, site: Site, path: Union[str, Path]) -> Summary:
        """Build the summary entry for a site whose engine run succeeded."""
        report = self.parse(path)
        scores = self.normalize(report)
        return Summary.from_site(
            site,
            audits=self.audit_snapshot(report),
            score=scores.percent,
            detail=scores.detail,
        )
