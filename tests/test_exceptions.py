"""Tests for custom exceptions."""

from ci_reporter.exceptions import MissingExceptionError, ReporterError, ReportWriteError


class TestReporterError:
    """Tests for base exception."""

    def test_is_exception(self):
        assert issubclass(ReporterError, Exception)

    def test_message(self):
        err = ReporterError("reporter error")
        assert str(err) == "reporter error"


class TestMissingExceptionError:
    """Tests for missing exception data."""

    def test_inherits_from_base(self):
        assert issubclass(MissingExceptionError, ReporterError)

    def test_is_lookup_error(self):
        assert issubclass(MissingExceptionError, LookupError)

    def test_attributes(self):
        err = MissingExceptionError("math adds", "unsupported example shape")
        assert err.example_name == "math adds"
        assert err.reason == "unsupported example shape"
        assert "math adds" in str(err)
        assert "unsupported example shape" in str(err)


class TestReportWriteError:
    """Tests for report write failures."""

    def test_inherits_from_base(self):
        assert issubclass(ReportWriteError, ReporterError)

    def test_attributes(self):
        orig = PermissionError("denied")
        err = ReportWriteError("/reports/SPEC-a.xml", orig)
        assert err.path == "/reports/SPEC-a.xml"
        assert err.original_error is orig
        assert "/reports/SPEC-a.xml" in str(err)
        assert "denied" in str(err)
