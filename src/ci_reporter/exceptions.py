"""
Custom exceptions for the CI reporter.
"""


class ReporterError(Exception):
    """Base exception for CI reporter errors."""

    pass


class MissingExceptionError(ReporterError, LookupError):
    """Raised when a failure event carries no exception to report.

    This means the test framework delivered an example in a shape the reporter
    does not understand, which is a compatibility bug rather than a test result.
    """

    def __init__(self, example_name: str, reason: str):
        self.example_name = example_name
        self.reason = reason
        super().__init__(f"No exception recorded for failed example '{example_name}': {reason}")


class ReportWriteError(ReporterError):
    """Raised when a finished suite cannot be written to disk."""

    def __init__(self, path: str, original_error: Exception):
        self.path = path
        self.original_error = original_error
        super().__init__(f"Failed to write report to {path}: {original_error}")
