"""Logging configuration helpers."""

import logging
import os
from typing import Optional


def get_logger(name: Optional[str] = None, verbose: bool = False) -> logging.Logger:
    """Return a configured logger for batch runs.

    ``verbose`` switches the logger to DEBUG so per-site progress lines are
    shown; otherwise the level comes from ``LOG_LEVEL`` (default INFO).
    """
    logger = logging.getLogger(name or "lighthouse_batch")
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    if verbose:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())
    return logger
