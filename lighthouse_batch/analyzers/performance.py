"""Aggregate timing metrics over the sites of a batch run."""

from typing import Dict, List, Mapping, Optional

import pandas as pd

from ..models import TRACKED_AUDITS, AuditValue

AVERAGE_DIGITS = 10


class MetricsAccumulator:
    """Collect the tracked timing metrics of each analysed site."""

    def __init__(self) -> None:
        self._rows: List[Dict[str, Optional[float]]] = []

    def __len__(self) -> int:
        return len(self._rows)

    def record(self, audits: Mapping[str, AuditValue]) -> None:
        """Append one site's numeric values; absent audits are skipped by the sum."""
        row: Dict[str, Optional[float]] = {}
        for audit_id, key in TRACKED_AUDITS.items():
            audit = audits.get(audit_id)
            row[key] = audit.numeric_value if audit is not None else None
        self._rows.append(row)

    def compute_averages(self, site_count: int) -> Dict[str, str]:
        """Return ``sum / site_count`` per metric as a fixed-point string.

        ``site_count`` is the number of reports kept in the summary, which can
        exceed the number of recorded rows when some engine runs failed.
        """
        columns = list(TRACKED_AUDITS.values())
        if site_count <= 0:
            return {key: f"{0:.{AVERAGE_DIGITS}f}" for key in columns}

        frame = pd.DataFrame(self._rows, columns=columns, dtype="float64")
        totals = frame.sum(skipna=True)
        return {
            key: f"{float(totals[key]) / site_count:.{AVERAGE_DIGITS}f}"
            for key in columns
        }
