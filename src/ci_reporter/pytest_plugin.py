"""
pytest integration: feeds pytest's run protocol into an EventAggregator.

Enable with ``--ci-reporter``, ``--ci-reports DIR`` or the ``CI_REPORTS``
environment variable.
"""

import logging
import os
from typing import Any, Dict, Optional

import pytest

from .aggregator import EventAggregator
from .config import VALID_FORMATS, ConfigurationError, load_config, validate_config
from .failure import AssertionFramework

logger = logging.getLogger(__name__)

PYTEST_ASSERTIONS = AssertionFramework(
    types=(AssertionError, pytest.fail.Exception),
    markers=("AssertionError", "_pytest"),
)

PLUGIN_NAME = "ci-reporter"


def group_id(nodeid: str) -> str:
    """Return the node id of the collector owning a test: its module or class."""
    if "::" not in nodeid:
        return nodeid
    return nodeid.rsplit("::", 1)[0]


class PytestGroup:
    def __init__(self, nodeid: str):
        self.full_description = nodeid


class PytestExample:
    """A test item as seen by the aggregator."""

    def __init__(self, nodeid: str, exception: Optional[BaseException] = None):
        self.full_description = nodeid
        self.execution_result: Dict[str, Any] = {"exception": exception}


class RunSummary:
    def __init__(self, exitstatus: int):
        self.exitstatus = exitstatus


class CIReporterPlugin:
    """Translates pytest hooks into aggregator events."""

    def __init__(self, aggregator: EventAggregator):
        self.aggregator = aggregator
        self._group: Optional[str] = None

    def pytest_runtest_logstart(self, nodeid: str, location: Any) -> None:
        group = group_id(nodeid)
        if group != self._group:
            self._group = group
            self.aggregator.group_started(PytestGroup(group))
        self.aggregator.case_started(PytestExample(nodeid))

    @pytest.hookimpl(hookwrapper=True, tryfirst=True)
    def pytest_runtest_makereport(self, item: pytest.Item, call: pytest.CallInfo) -> Any:
        outcome = yield
        self.handle_report(outcome.get_result(), call)

    def handle_report(self, report: pytest.TestReport, call: pytest.CallInfo) -> None:
        if report.failed:
            self.aggregator.case_failed(
                PytestExample(report.nodeid, self._exception_for(report, call))
            )
        elif report.skipped:
            self.aggregator.case_pending(PytestExample(report.nodeid))
        elif report.when == "call":
            self.aggregator.case_passed(PytestExample(report.nodeid))

    def pytest_sessionfinish(self, session: pytest.Session, exitstatus: int) -> None:
        self.aggregator.run_finished(RunSummary(int(exitstatus)))

    @staticmethod
    def _exception_for(report: pytest.TestReport, call: pytest.CallInfo) -> BaseException:
        if call.excinfo is not None:
            return call.excinfo.value
        # Failures without a raised exception, e.g. a strict xpass
        return pytest.fail.Exception(str(report.longrepr or f"{report.when} failed"))


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("ci-reporter", "CI report generation")
    group.addoption(
        "--ci-reporter",
        action="store_true",
        default=False,
        help="Write one report file per test group.",
    )
    group.addoption(
        "--ci-reports",
        metavar="DIR",
        default=None,
        help="Directory for report files (implies --ci-reporter).",
    )
    group.addoption(
        "--ci-reports-format",
        choices=VALID_FORMATS,
        default=None,
        help="Report format (overrides config).",
    )
    group.addoption(
        "--ci-reporter-config",
        metavar="FILE",
        default=None,
        help="Path to reporter configuration file (YAML).",
    )


def _enabled(config: pytest.Config) -> bool:
    return bool(
        config.getoption("ci_reporter")
        or config.getoption("ci_reports")
        or "CI_REPORTS" in os.environ
    )


def pytest_configure(config: pytest.Config) -> None:
    if not _enabled(config) or config.pluginmanager.has_plugin(PLUGIN_NAME):
        return

    try:
        reporter_config = load_config(config.getoption("ci_reporter_config"))
    except (ConfigurationError, FileNotFoundError) as e:
        raise pytest.UsageError(f"ci-reporter: {e}")

    if config.getoption("ci_reports"):
        reporter_config.report_dir = config.getoption("ci_reports")
    if config.getoption("ci_reports_format"):
        reporter_config.report_format = config.getoption("ci_reports_format")

    errors = validate_config(reporter_config)
    if errors:
        raise pytest.UsageError("ci-reporter configuration errors: " + "; ".join(errors))

    aggregator = EventAggregator.from_config(reporter_config, assertions=PYTEST_ASSERTIONS)
    config.pluginmanager.register(CIReporterPlugin(aggregator), PLUGIN_NAME)
    logger.debug("CI reporter writing to %s", aggregator.report_manager.report_dir)
