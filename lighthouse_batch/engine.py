"""Invocation of the external audit engine."""

from __future__ import annotations

import logging
import shlex
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pydantic import BaseModel

from .errors import EngineNotFound
from .models import JSON_EXT, BatchOptions, Site

CHROME_FLAGS_OPTION = "--chrome-flags="
DEFAULT_CHROME_FLAGS = f"{CHROME_FLAGS_OPTION}--no-sandbox --headless --disable-gpu"


class EngineOutcome(BaseModel):
    """Exit status and captured output of one engine run."""

    code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.code == 0


def output_path_for(report_path: Union[str, Path], options: BatchOptions) -> str:
    """Path handed to ``--output-path``.

    With several output formats the engine appends ``.report.<ext>`` itself,
    so the JSON suffix is dropped.
    """
    path = str(report_path)
    if options.html or options.csv:
        return path[: -len(JSON_EXT)]
    return path


def build_engine_args(
    command: Union[str, Sequence[str]],
    site: Site,
    report_path: Union[str, Path],
    options: BatchOptions,
) -> List[str]:
    """Return the argument vector for auditing ``site``."""
    args = shlex.split(command) if isinstance(command, str) else list(command)
    args += [site.url, "--output", "json"]
    if options.html:
        args += ["--output", "html"]
    if options.csv:
        args += ["--output", "csv"]
    args += ["--output-path", output_path_for(report_path, options)]
    if CHROME_FLAGS_OPTION not in options.params:
        args.append(DEFAULT_CHROME_FLAGS)
    args += shlex.split(options.params)
    return args


class BaseEngine(ABC):
    """Abstract audit engine: audits one site and writes its JSON report."""

    @abstractmethod
    def run(self, site: Site, report_path: Path, options: BatchOptions) -> EngineOutcome:
        raise NotImplementedError


class LighthouseEngine(BaseEngine):
    """Run the Lighthouse CLI as a subprocess."""

    def __init__(
        self,
        command: Union[str, Sequence[str]] = "lighthouse",
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.command = command
        self.logger = logger or logging.getLogger(__name__)

    def run(self, site: Site, report_path: Path, options: BatchOptions) -> EngineOutcome:
        args = build_engine_args(self.command, site, report_path, options)
        self.logger.debug("%s", shlex.join(args))
        try:
            proc = subprocess.run(args, capture_output=True, text=True, check=False)
        except FileNotFoundError as exc:
            raise EngineNotFound(f"Audit engine not found: {args[0]}") from exc
        except PermissionError as exc:
            raise EngineNotFound(f"Audit engine is not executable: {args[0]}") from exc

        return EngineOutcome(
            code=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )
