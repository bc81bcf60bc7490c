"""Sequential batch run: audit each site, summarise, enforce budgets."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel

from .analyzers import MetricsAccumulator, attach_budget_errors, check_budgets
from .config import read_url_file
from .engine import BaseEngine, LighthouseEngine
from .errors import MalformedReport
from .models import (
    CSV_EXT,
    HTML_EXT,
    JSON_EXT,
    SUMMARY_FILE,
    BatchOptions,
    BatchResult,
    Site,
    Summary,
)
from .naming import SiteNamer
from .parsers import LighthouseReportParser
from .utils.logging import get_logger

_GENERATED_SUFFIXES = (JSON_EXT, HTML_EXT, CSV_EXT)


class BatchOutcome(BaseModel):
    """Written summary plus every budget violation seen during the run."""

    result: BatchResult
    budget_errors: List[str]
    summary_path: str

    @property
    def exit_code(self) -> int:
        return 1 if self.budget_errors else 0


def clear_previous_reports(out_dir: Path, logger: logging.Logger) -> None:
    """Delete report files and the summary left over from an earlier run."""
    if not out_dir.is_dir():
        return
    for path in sorted(out_dir.iterdir()):
        if not path.is_file():
            continue
        if path.name == SUMMARY_FILE or path.name.endswith(_GENERATED_SUFFIXES):
            logger.debug("Removing old report file: %s", path)
            path.unlink()


class BatchRunner:
    """Audit sites one at a time and assemble the batch summary.

    The runner owns all cross-site state of a run: the set of generated
    names, the metric accumulator and the list of budget violations.
    """

    def __init__(
        self,
        options: BatchOptions,
        engine: Optional[BaseEngine] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.options = options
        self.logger = logger or get_logger(verbose=options.verbose)
        self.engine = engine or LighthouseEngine(options.engine, logger=self.logger)
        self.parser = LighthouseReportParser(logger=self.logger)
        self.out_dir = Path(options.out)

    def sites(self) -> List[Site]:
        """Sites from the URL file first, then the ones given directly."""
        urls: List[str] = []
        if self.options.file:
            urls.extend(read_url_file(self.options.file))
        urls.extend(self.options.sites)

        namer = SiteNamer()
        return [namer.build(url, html=self.options.html, csv=self.options.csv) for url in urls]

    def _audit(self, site: Site, prefix: str) -> Summary:
        report_path = self.out_dir / site.file
        self.logger.debug("%sLighthouse analyzing '%s'", prefix, site.url)
        outcome = self.engine.run(site, report_path, self.options)

        if not outcome.ok:
            self.logger.warning("%sLighthouse analysis FAILED for %s", prefix, site.url)
            return Summary.from_site(site, score=0, error=outcome.stderr)

        try:
            summary = self.parser.summarize(site, report_path)
        except (MalformedReport, FileNotFoundError) as exc:
            self.logger.warning("%sUnusable report for %s: %s", prefix, site.url, exc)
            return Summary.from_site(site, score=0, error=str(exc))
        self.logger.debug(
            "%sLighthouse analysis of '%s' complete with score %s",
            prefix,
            site.url,
            summary.score,
        )
        if not self.options.report:
            self.logger.debug("Removing generated report file '%s'", report_path)
            report_path.unlink(missing_ok=True)
        return summary

    def run(self) -> BatchOutcome:
        sites = self.sites()
        clear_previous_reports(self.out_dir, self.logger)
        self.out_dir.mkdir(parents=True, exist_ok=True)

        count = len(sites)
        self.logger.debug(
            "Lighthouse batch run begin for %d site%s", count, "s" if count > 1 else ""
        )

        metrics = MetricsAccumulator()
        budget_errors: List[str] = []
        reports: List[Summary] = []

        for index, site in enumerate(sites):
            if budget_errors and self.options.fail_fast:
                self.logger.debug("Fail-fast: skipping %d remaining site(s)", count - index)
                break

            summary = self._audit(site, f"{index + 1}/{count}: ")
            if summary.succeeded and summary.audits is not None:
                metrics.record(summary.audits)

            errors = check_budgets(summary, self.options.budgets)
            if errors:
                summary = attach_budget_errors(summary, errors)
                budget_errors.extend(errors)
            reports.append(summary)

        self.logger.info("Lighthouse batch run end")
        result = BatchResult(reports=reports, averages=metrics.compute_averages(len(reports)))

        summary_path = self.out_dir / SUMMARY_FILE
        self.logger.info("Writing reports summary to %s", summary_path)
        summary_path.write_text(result.to_json(), encoding="utf-8")

        return BatchOutcome(
            result=result,
            budget_errors=budget_errors,
            summary_path=str(summary_path),
        )
