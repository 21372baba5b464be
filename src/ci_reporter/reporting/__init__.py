"""
Report generators for finished test suites.
"""

from .base import ReportGenerator
from .json_reporter import JSONReporter
from .junit import JUnitReporter

GENERATORS = {
    "junit": JUnitReporter,
    "json": JSONReporter,
}

__all__ = ["GENERATORS", "ReportGenerator", "JSONReporter", "JUnitReporter"]
