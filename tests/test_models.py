"""Tests for data models."""

from unittest.mock import patch

from ci_reporter.failure import Failure
from ci_reporter.models import CaseStatus, FailureKind, TestCase, TestSuite


def _failure(exception):
    return Failure(exception)


class TestFailureKind:
    """Tests for FailureKind enum."""

    def test_values(self):
        assert FailureKind.ASSERTION.value == "failure"
        assert FailureKind.ERROR.value == "error"


class TestCaseStatus:
    """Tests for CaseStatus enum."""

    def test_values(self):
        assert CaseStatus.PASSED.value == "passed"
        assert CaseStatus.FAILED.value == "failed"
        assert CaseStatus.ERROR.value == "error"
        assert CaseStatus.SKIPPED.value == "skipped"


class TestTestCase:
    """Tests for TestCase lifecycle."""

    def test_defaults(self):
        case = TestCase()
        assert case.name is None
        assert case.start_time is None
        assert case.end_time is None
        assert case.failures == []
        assert case.skipped is False
        assert case.finished is False

    def test_start_and_finish(self):
        case = TestCase()
        with patch("ci_reporter.models._now", side_effect=[100.0, 102.5]):
            case.start()
            case.finish()
        assert case.start_time == 100.0
        assert case.end_time == 102.5
        assert case.duration == 2.5
        assert case.finished is True

    def test_end_time_set_once(self):
        case = TestCase()
        with patch("ci_reporter.models._now", side_effect=[100.0, 101.0]):
            case.start()
            case.finish()
            case.finish()
        assert case.end_time == 101.0

    def test_end_time_never_before_start(self):
        case = TestCase()
        with patch("ci_reporter.models._now", side_effect=[100.0, 99.0]):
            case.start()
            case.finish()
        assert case.end_time == case.start_time

    def test_finish_without_start(self):
        case = TestCase()
        case.finish()
        assert case.start_time is not None
        assert case.end_time >= case.start_time

    def test_duration_unfinished(self):
        case = TestCase()
        case.start()
        assert case.duration == 0.0

    def test_status_passed(self):
        assert TestCase().status == CaseStatus.PASSED

    def test_status_skipped(self):
        assert TestCase(skipped=True).status == CaseStatus.SKIPPED

    def test_status_failed(self):
        case = TestCase(failures=[_failure(AssertionError("boom"))])
        assert case.is_failure is True
        assert case.is_error is False
        assert case.status == CaseStatus.FAILED

    def test_status_error(self):
        case = TestCase(failures=[_failure(ValueError("bad"))])
        assert case.is_error is True
        assert case.status == CaseStatus.ERROR

    def test_mixed_failures(self):
        case = TestCase(failures=[_failure(AssertionError("a")), _failure(KeyError("b"))])
        assert case.is_failure is True
        assert case.is_error is True
        assert case.status == CaseStatus.ERROR


class TestTestSuite:
    """Tests for TestSuite lifecycle and counters."""

    def test_required_name(self):
        suite = TestSuite("math")
        assert suite.name == "math"
        assert suite.testcases == []
        assert suite.test_count == 0

    def test_start_and_finish(self):
        suite = TestSuite("math")
        with patch("ci_reporter.models._now", side_effect=[10.0, 15.0]):
            suite.start()
            suite.finish()
        assert suite.duration == 5.0

    def test_timestamp(self):
        suite = TestSuite("math")
        assert suite.timestamp == ""
        suite.start()
        assert "T" in suite.timestamp

    def test_counters(self):
        suite = TestSuite(
            "math",
            testcases=[
                TestCase(name="passes"),
                TestCase(name="fails", failures=[_failure(AssertionError("x"))]),
                TestCase(name="errors", failures=[_failure(RuntimeError("y"))]),
                TestCase(name="skips", skipped=True),
            ],
        )
        assert suite.test_count == 4
        assert suite.failure_count == 1
        assert suite.error_count == 1
        assert suite.skipped_count == 1

    def test_failure_takes_precedence_over_skipped(self):
        suite = TestSuite(
            "math",
            testcases=[
                TestCase(name="skips", skipped=True),
                TestCase(
                    name="skip then teardown",
                    skipped=True,
                    failures=[_failure(RuntimeError("t"))],
                ),
            ],
        )
        assert suite.skipped_count == 1
        assert suite.error_count == 1
        assert suite.test_count == 2

    def test_not_collected_by_pytest(self):
        assert TestCase.__test__ is False
        assert TestSuite.__test__ is False
