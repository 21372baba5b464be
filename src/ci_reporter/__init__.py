"""
CI Reporter - structured per-suite test reports from test lifecycle events.
"""

from .aggregator import EventAggregator
from .backtrace import BacktraceFormatter
from .config import ConfigurationError, ReporterConfig, load_config, validate_config
from .exceptions import MissingExceptionError, ReporterError, ReportWriteError
from .failure import PYTHON_ASSERTIONS, AssertionFramework, Failure
from .models import CaseStatus, FailureKind, TestCase, TestSuite
from .naming import UNKNOWN, description_for
from .report_manager import ReportManager

__version__ = "0.1.0"

__all__ = [
    "AssertionFramework",
    "BacktraceFormatter",
    "CaseStatus",
    "ConfigurationError",
    "EventAggregator",
    "Failure",
    "FailureKind",
    "MissingExceptionError",
    "PYTHON_ASSERTIONS",
    "ReportManager",
    "ReportWriteError",
    "ReporterConfig",
    "ReporterError",
    "TestCase",
    "TestSuite",
    "UNKNOWN",
    "description_for",
    "load_config",
    "validate_config",
]
