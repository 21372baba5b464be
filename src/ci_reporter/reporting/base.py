"""
Base class for report generators.
"""

from abc import ABC, abstractmethod

from ..models import TestSuite


class ReportGenerator(ABC):
    """Base class for rendering one finished suite."""

    # File extension, without the dot
    extension = "txt"

    @abstractmethod
    def generate(self, suite: TestSuite) -> str:
        """
        Generate a report for a finished suite.

        Args:
            suite: TestSuite with its test cases

        Returns:
            Report as a string
        """
        pass
