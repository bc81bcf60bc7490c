"""Pydantic models and domain entities for batch runs."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_OUT = "./report/lighthouse"
SUMMARY_FILE = "summary.json"
JSON_EXT = ".report.json"
HTML_EXT = ".report.html"
CSV_EXT = ".report.csv"

# Audit id in the engine report -> key used in the batch averages.
TRACKED_AUDITS: Dict[str, str] = {
    "first-contentful-paint": "firstContentfulPaint",
    "largest-contentful-paint": "largestContentfulPaint",
    "total-blocking-time": "totalBlockingTime",
    "speed-index": "speedIndex",
    "cumulative-layout-shift": "cumulativeLayoutShift",
}


class Site(BaseModel):
    """One input URL together with the file names generated for it."""

    model_config = ConfigDict(frozen=True)

    url: str
    name: str
    file: str
    html: Optional[str] = None
    csv: Optional[str] = None


class AuditValue(BaseModel):
    """Snapshot of a single timing audit."""

    model_config = ConfigDict(populate_by_name=True)

    display_value: Optional[str] = Field(default=None, alias="displayValue")
    numeric_value: Optional[float] = Field(default=None, alias="numericValue")


class Category(BaseModel):
    id: Optional[str] = None
    score: Optional[float] = None


class CategoryListReport(BaseModel):
    """Report written by engine v1/v2 (``reportCategories`` list)."""

    categories: List[Category] = Field(alias="reportCategories")
    audits: Dict[str, Any] = Field(default_factory=dict)

    def category_list(self) -> List[Category]:
        return list(self.categories)


class CategoryMapReport(BaseModel):
    """Report written by engine v3+ (``categories`` keyed by id)."""

    categories: Dict[str, Category]
    audits: Dict[str, Any] = Field(default_factory=dict)

    def category_list(self) -> List[Category]:
        return list(self.categories.values())


AuditReport = Union[CategoryListReport, CategoryMapReport]


class NormalizedScores(BaseModel):
    """Category scores extracted from one report.

    ``score`` is the rounded mean on the engine's 0-1 scale, ``percent`` is
    the same mean expressed as a percentage.
    """

    score: float
    detail: Dict[str, Optional[float]]
    percent: float


class SummaryErrors(BaseModel):
    budget: List[str]
    other: Optional[Any] = None


class Summary(BaseModel):
    """Per-site entry of the batch summary document."""

    url: str
    name: str
    file: str
    html: Optional[str] = None
    csv: Optional[str] = None
    audits: Optional[Dict[str, AuditValue]] = None
    score: float = 0
    detail: Optional[Dict[str, Optional[float]]] = None
    error: Optional[str] = None
    errors: Optional[SummaryErrors] = None

    @classmethod
    def from_site(cls, site: Site, **fields: Any) -> "Summary":
        return cls(**site.model_dump(), **fields)

    @property
    def succeeded(self) -> bool:
        return self.error is None


class BatchResult(BaseModel):
    """Document written to ``summary.json`` at the end of a run."""

    reports: List[Summary]
    averages: Dict[str, str]

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self, indent: Optional[int] = None) -> str:
        if indent is None:
            return json.dumps(self.to_payload(), ensure_ascii=False, separators=(",", ":"))
        return json.dumps(self.to_payload(), ensure_ascii=False, indent=indent)


class BudgetThresholds(BaseModel):
    """Minimum acceptable scores (0-100). A value is active when above zero."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    score: Optional[float] = None
    accessibility: Optional[float] = None
    performance: Optional[float] = None
    best_practices: Optional[float] = Field(default=None, alias="bestPractices")
    seo: Optional[float] = None
    pwa: Optional[float] = None

    def is_active(self, name: str) -> bool:
        value = getattr(self, name)
        return value is not None and value > 0

    def any_active(self) -> bool:
        return any(self.is_active(name) for name in type(self).model_fields)


class BatchOptions(BaseModel):
    """Validated options for one batch run."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    sites: List[str] = Field(default_factory=list)
    file: Optional[str] = None
    out: str = DEFAULT_OUT
    html: bool = False
    csv: bool = False
    report: bool = True
    print_summary: bool = Field(default=False, alias="print")
    fail_fast: bool = Field(default=False, alias="failFast")
    params: str = ""
    verbose: bool = False
    engine: str = "lighthouse"
    budgets: BudgetThresholds = Field(default_factory=BudgetThresholds)
