"""Parsers converting raw engine reports into structured scores."""

from .base import BaseReportParser
from .lighthouse_parser import LighthouseReportParser

__all__ = ["BaseReportParser", "LighthouseReportParser"]
