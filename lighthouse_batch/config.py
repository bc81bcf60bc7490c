"""Option loading from the environment, YAML config files and the CLI."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import yaml
from pydantic import ValidationError

from .errors import ConfigError, UrlListError
from .models import DEFAULT_OUT, BatchOptions, BudgetThresholds

logger = logging.getLogger(__name__)

BUDGET_KEYS = {"score", "accessibility", "performance", "best_practices", "seo", "pwa"}

# Spellings accepted in config files -> BatchOptions / BudgetThresholds fields.
_KEY_ALIASES = {
    "bestPractices": "best_practices",
    "best-practices": "best_practices",
    "failFast": "fail_fast",
    "fail-fast": "fail_fast",
    "print": "print_summary",
    "engineCommand": "engine",
}


def env_defaults() -> Dict[str, Any]:
    """Defaults taken from the environment (``.env`` is loaded by the CLI)."""
    return {
        "out": os.getenv("LIGHTHOUSE_BATCH_OUT", DEFAULT_OUT),
        "engine": os.getenv("LIGHTHOUSE_CMD", "lighthouse"),
    }


def load_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Parse a YAML options file and return its top-level mapping."""
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found at: {config_path}")

    with config_path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Unable to parse YAML file: {config_path}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a mapping: {config_path}")
    logger.debug("Loaded options from %s", config_path)
    return data


def read_url_file(path: Union[str, Path]) -> List[str]:
    """Return the non-blank lines of a newline-delimited URL list."""
    try:
        contents = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise UrlListError(f"Failed to read file {path}, aborting.") from exc
    return [line.strip() for line in contents.splitlines() if line.strip()]


def _canonical_keys(values: Mapping[str, Any]) -> Dict[str, Any]:
    return {_KEY_ALIASES.get(str(key), str(key)): value for key, value in values.items()}


def _split_budgets(values: Mapping[str, Any]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    options = _canonical_keys(values)
    nested = options.pop("budgets", None) or {}
    if not isinstance(nested, Mapping):
        raise ConfigError("'budgets' must be a mapping of threshold names to numbers.")
    budgets = _canonical_keys(nested)
    for key in list(options):
        if key in BUDGET_KEYS:
            budgets[key] = options.pop(key)
    return options, budgets


def _coerce_sites(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return [str(item).strip() for item in value if str(item).strip()]


def build_options(
    config: Optional[Mapping[str, Any]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> BatchOptions:
    """Merge environment defaults, config file values and CLI overrides.

    Later sources win. ``None`` values in ``overrides`` mean "not given on
    the command line" and never replace a configured value.
    """
    merged: Dict[str, Any] = env_defaults()
    budgets: Dict[str, Any] = {}

    for source in (config or {}, overrides or {}):
        options, source_budgets = _split_budgets(source)
        merged.update({key: value for key, value in options.items() if value is not None})
        budgets.update({key: value for key, value in source_budgets.items() if value is not None})

    merged["sites"] = _coerce_sites(merged.get("sites"))
    try:
        merged["budgets"] = BudgetThresholds(**budgets)
        return BatchOptions(**merged)
    except (ValidationError, TypeError) as exc:
        raise ConfigError(f"Invalid options: {exc}") from exc
