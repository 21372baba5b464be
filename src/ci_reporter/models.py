"""
Data models for the CI reporter.
"""

import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .failure import Failure


class FailureKind(Enum):
    """Classification of a recorded failure."""

    ASSERTION = "failure"
    ERROR = "error"


class CaseStatus(Enum):
    """Outcome of a finished test case."""

    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"
    SKIPPED = "skipped"


def _now() -> float:
    return time.time()


@dataclass
class TestCase:
    """One executed example.

    The name stays unset while the case runs and is assigned when a terminal
    event arrives for it.
    """

    __test__ = False

    name: Optional[str] = None
    start_time: Optional[float] = None
    end_time: Optional[float] = None
    failures: List["Failure"] = field(default_factory=list)
    skipped: bool = False

    def start(self) -> None:
        self.start_time = _now()

    def finish(self) -> None:
        """Stamp the end time. Later calls keep the first stamp."""
        if self.end_time is not None:
            return
        if self.start_time is None:
            self.start()
        self.end_time = max(_now(), self.start_time)

    @property
    def finished(self) -> bool:
        return self.end_time is not None

    @property
    def duration(self) -> float:
        """Return elapsed seconds, or 0.0 if the case never finished."""
        if self.start_time is None or self.end_time is None:
            return 0.0
        return self.end_time - self.start_time

    @property
    def is_failure(self) -> bool:
        return any(f.is_failure for f in self.failures)

    @property
    def is_error(self) -> bool:
        return any(f.is_error for f in self.failures)

    @property
    def status(self) -> CaseStatus:
        if self.is_error:
            return CaseStatus.ERROR
        if self.is_failure:
            return CaseStatus.FAILED
        if self.skipped:
            return CaseStatus.SKIPPED
        return CaseStatus.PASSED


@dataclass
class TestSuite:
    """A named group of test cases, written out as one report."""

    __test__ = False

    name: str
    start_time: Optional[float] = None
    end_time: Optional[float] = None
    testcases: List[TestCase] = field(default_factory=list)

    def start(self) -> None:
        self.start_time = _now()

    def finish(self) -> None:
        if self.start_time is None:
            self.start()
        self.end_time = max(_now(), self.start_time)

    @property
    def duration(self) -> float:
        if self.start_time is None or self.end_time is None:
            return 0.0
        return self.end_time - self.start_time

    @property
    def timestamp(self) -> str:
        """Return the suite start time as a local ISO-8601 string."""
        if self.start_time is None:
            return ""
        return datetime.fromtimestamp(self.start_time).isoformat(timespec="seconds")

    @property
    def test_count(self) -> int:
        return len(self.testcases)

    @property
    def failure_count(self) -> int:
        return sum(1 for tc in self.testcases if tc.is_failure)

    @property
    def error_count(self) -> int:
        return sum(1 for tc in self.testcases if tc.is_error)

    @property
    def skipped_count(self) -> int:
        return sum(1 for tc in self.testcases if tc.status is CaseStatus.SKIPPED)
