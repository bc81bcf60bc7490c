"""Pytest configuration and fixtures."""
import json
import sys
from pathlib import Path

import pytest

# Add repository root to path
repo_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(repo_root))

from lighthouse_batch.engine import BaseEngine, EngineOutcome  # noqa: E402

DEFAULT_TIMINGS = {
    "first-contentful-paint": 100.0,
    "largest-contentful-paint": 200.0,
    "total-blocking-time": 10.0,
    "speed-index": 300.0,
    "cumulative-layout-shift": 0.1,
}


def build_report(scores, timings=None):
    """Engine v3+ style report with the given category scores."""
    timings = DEFAULT_TIMINGS if timings is None else timings
    return {
        "categories": {
            category_id: {"id": category_id, "score": score}
            for category_id, score in scores.items()
        },
        "audits": {
            audit_id: {"displayValue": f"{value}", "numericValue": value}
            for audit_id, value in timings.items()
        },
    }


class StubEngine(BaseEngine):
    """Engine double writing canned reports instead of running Lighthouse."""

    def __init__(self, reports=None, failures=None):
        self.reports = reports or {}
        self.failures = failures or {}
        self.calls = []

    def run(self, site, report_path, options):
        self.calls.append(site.url)
        if site.url in self.failures:
            return EngineOutcome(code=1, stderr=self.failures[site.url])
        payload = self.reports.get(site.url, build_report({"performance": 1.0, "seo": 1.0}))
        if isinstance(payload, bytes):
            Path(report_path).write_bytes(payload)
        else:
            Path(report_path).write_text(
                payload if isinstance(payload, str) else json.dumps(payload),
                encoding="utf-8",
            )
        return EngineOutcome(code=0)


@pytest.fixture
def examples_dir():
    """Directory holding sample reports and the stub engine script."""
    return repo_root / "examples"


@pytest.fixture
def sample_report_path(examples_dir):
    """Path to an engine v3+ report."""
    return examples_dir / "sample_report.json"


@pytest.fixture
def sample_report_v2_path(examples_dir):
    """Path to an engine v2 report."""
    return examples_dir / "sample_report_v2.json"


@pytest.fixture
def sites_file_path(examples_dir):
    """Path to a sample URL list."""
    return examples_dir / "sites.txt"


@pytest.fixture
def budgets_yaml_path(examples_dir):
    """Path to the sample options file."""
    return examples_dir / "budgets.yaml"


@pytest.fixture
def stub_engine_script(examples_dir):
    """Path to the deterministic command line stub engine."""
    return examples_dir / "stub_engine.py"


@pytest.fixture
def report_factory():
    return build_report


@pytest.fixture
def stub_engine():
    return StubEngine
