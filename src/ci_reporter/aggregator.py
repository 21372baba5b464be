"""
Event aggregation: turns test lifecycle events into suite reports.
"""

import logging
from typing import Any, Optional

from .backtrace import BacktraceFormatter
from .config import ReporterConfig
from .failure import PYTHON_ASSERTIONS, AssertionFramework, Failure
from .models import TestCase, TestSuite
from .naming import UNKNOWN, description_for
from .report_manager import ReportManager

logger = logging.getLogger(__name__)


class EventAggregator:
    """
    Sequential state machine over test lifecycle events.

    Holds at most one open suite. A suite is handed to the report manager when
    the next group starts or when the run finishes, and is never touched
    again afterwards. Events that arrive out of order are recorded on a best
    effort basis instead of raising.
    """

    def __init__(
        self,
        report_manager: ReportManager,
        backtrace_formatter: Optional[BacktraceFormatter] = None,
        assertions: AssertionFramework = PYTHON_ASSERTIONS,
    ):
        self.report_manager = report_manager
        self.backtrace_formatter = backtrace_formatter or BacktraceFormatter()
        self.assertions = assertions
        self.suite: Optional[TestSuite] = None

    @classmethod
    def from_config(
        cls, config: ReporterConfig, assertions: AssertionFramework = PYTHON_ASSERTIONS
    ) -> "EventAggregator":
        """
        Build an aggregator and its collaborators from configuration.

        Args:
            config: Reporter configuration
            assertions: Which exception types count as assertion failures

        Returns:
            EventAggregator writing through a ReportManager
        """
        report_manager = ReportManager(
            config.report_kind,
            report_dir=config.report_dir,
            report_format=config.report_format,
            clean=config.clean_reports,
        )
        backtrace_formatter = BacktraceFormatter(
            exclusion_patterns=config.backtrace_exclusions,
            full_backtrace=config.full_backtrace,
        )
        return cls(report_manager, backtrace_formatter, assertions)

    def group_started(self, group: Any) -> None:
        self.new_suite(description_for(group))

    def case_started(self, example: Any = None) -> TestCase:
        if self.suite is None:
            logger.warning("Example started with no open suite; opening '%s'", UNKNOWN)
            self.new_suite(UNKNOWN)

        case = TestCase()
        case.start()
        self.suite.testcases.append(case)
        logger.debug("Case started in suite '%s'", self.suite.name)
        return case

    def case_passed(self, example: Any) -> TestCase:
        return self._finish_case(example)

    def case_failed(self, example: Any, context: Any = None) -> TestCase:
        """
        Record a failed example.

        A failure can arrive without a prior ``case_started`` when it happens
        during group-level setup; a case is synthesized for it.

        Args:
            example: The failed example, used for naming
            context: Object holding the raised exception (defaults to example)

        Returns:
            The finished case the failure was attached to

        Raises:
            MissingExceptionError: If no exception can be found
        """
        failure = Failure.from_example(
            context if context is not None else example,
            self.backtrace_formatter,
            self.assertions,
        )
        if self.suite is None or not self.suite.testcases:
            self.case_started(example)

        case = self._finish_case(example)
        case.failures.append(failure)
        logger.debug("Case '%s' recorded %s: %s", case.name, failure.kind.value, failure.name)
        return case

    def case_pending(self, example: Any) -> TestCase:
        case = self._finish_case(example)
        case.skipped = True
        return case

    def run_finished(self, summary: Any = None) -> None:
        """Write the open suite, if any. Nothing is written for an empty run."""
        if self.suite is not None:
            self.write_report()

    def new_suite(self, name: str) -> TestSuite:
        if self.suite is not None:
            self.write_report()
        self.suite = TestSuite(name)
        self.suite.start()
        logger.debug("Suite '%s' started", name)
        return self.suite

    def write_report(self) -> None:
        """
        Finish the open suite and hand it to the report manager.

        The suite is detached first so that it is submitted once, even when
        the write fails.

        Raises:
            ReportWriteError: If the report manager cannot write the suite
        """
        suite, self.suite = self.suite, None
        for case in suite.testcases:
            if not case.finished:
                logger.warning("Suite '%s' closed with an unfinished case", suite.name)
                case.finish()
                case.name = case.name or UNKNOWN
        suite.finish()
        self.report_manager.write_report(suite)

    def _finish_case(self, example: Any) -> TestCase:
        if self.suite is None or not self.suite.testcases:
            logger.warning("Example '%s' finished without starting", description_for(example))
            self.case_started(example)

        case = self.suite.testcases[-1]
        case.finish()
        case.name = description_for(example)
        return case
