"""Base classes and interfaces for report parsers."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Mapping, Union

from ..models import AuditReport, NormalizedScores


class BaseReportParser(ABC):
    """Abstract base class for audit report parsers."""

    @abstractmethod
    def parse(self, source: Union[str, Path, Mapping[str, Any]]) -> AuditReport:
        """Parse the provided source and return a resolved report variant."""
        raise NotImplementedError

    @abstractmethod
    def normalize(self, report: AuditReport) -> NormalizedScores:
        """Reduce a parsed report to per-category scores and their mean."""
        raise NotImplementedError
