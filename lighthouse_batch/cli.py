"""Command line entry point for batch Lighthouse runs."""

from __future__ import annotations

import argparse
import sys
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from .config import build_options, load_config_file
from .engine import BaseEngine
from .errors import LighthouseBatchError
from .runner import BatchRunner
from .utils.logging import get_logger


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lighthouse-batch",
        description="Run Lighthouse against many sites and enforce score budgets.",
    )
    parser.add_argument(
        "-s", "--sites", action="append", default=None,
        help="Comma separated list of sites (may be repeated)",
    )
    parser.add_argument("-f", "--file", help="Newline delimited file of sites")
    parser.add_argument("-o", "--out", help="Output directory for reports and summary.json")
    parser.add_argument("-p", "--params", help="Extra parameters passed to the engine")
    parser.add_argument("-c", "--config", help="YAML file with options and budgets")
    parser.add_argument("--engine", help="Command used to invoke the audit engine")
    parser.add_argument("--html", action="store_true", default=None, help="Also write HTML reports")
    parser.add_argument("--csv", action="store_true", default=None, help="Also write CSV reports")
    parser.add_argument(
        "--no-report", dest="report", action="store_false", default=None,
        help="Remove per-site JSON reports after summarising them",
    )
    parser.add_argument(
        "--print", dest="print_summary", action="store_true", default=None,
        help="Print the summary document to stdout",
    )
    parser.add_argument(
        "-F", "--fail-fast", dest="fail_fast", action="store_true", default=None,
        help="Stop after the first site that misses a budget",
    )
    parser.add_argument("--score", type=float, help="Minimum average score (0-100)")
    parser.add_argument("--accessibility", type=float, help="Minimum accessibility score")
    parser.add_argument("--performance", type=float, help="Minimum performance score")
    parser.add_argument(
        "--best-practices", dest="best_practices", type=float,
        help="Minimum best practices score",
    )
    parser.add_argument("--seo", type=float, help="Minimum SEO score")
    parser.add_argument("--pwa", type=float, help="Minimum PWA score")
    parser.add_argument("-v", "--verbose", action="store_true", default=None, help="Log progress")
    return parser


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    values = vars(args).copy()
    values.pop("config", None)
    sites: Optional[List[str]] = values.pop("sites", None)
    if sites:
        values["sites"] = ",".join(sites)
    return values


def main(argv: Optional[List[str]] = None, engine: Optional[BaseEngine] = None) -> int:
    load_dotenv()
    args = build_argument_parser().parse_args(argv)

    try:
        config = load_config_file(args.config) if args.config else {}
        options = build_options(config, _overrides(args))
    except LighthouseBatchError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    logger = get_logger("lighthouse_batch", verbose=options.verbose)
    if not options.sites and not options.file:
        print("Error: no sites given, use --sites or --file", file=sys.stderr)
        return 1

    try:
        outcome = BatchRunner(options, engine=engine, logger=logger).run()
    except LighthouseBatchError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        logger.debug("Exiting with code 1")
        return 1

    if options.print_summary:
        print("Printing reports summary")
        print(outcome.result.to_json(indent=2))

    if outcome.budget_errors:
        print("Error: failed to meet budget thresholds", file=sys.stderr)
        for message in outcome.budget_errors:
            print(f" - {message}", file=sys.stderr)
        logger.debug("Exiting with code 1")

    return outcome.exit_code


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
