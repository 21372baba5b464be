"""
JUnit XML reporter for finished test suites.
"""

import re
import xml.etree.ElementTree as ET

from ..models import CaseStatus, TestSuite
from .base import ReportGenerator

# Characters that are not allowed anywhere in an XML 1.0 document.
_INVALID_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


def _clean(text: str) -> str:
    return _INVALID_XML_CHARS.sub("", text)


class JUnitReporter(ReportGenerator):
    """Generate JUnit XML format for CI/CD integration."""

    extension = "xml"

    def generate(self, suite: TestSuite) -> str:
        """Generate JUnit XML report."""
        testsuite = ET.Element("testsuite")
        testsuite.set("name", _clean(suite.name))
        testsuite.set("tests", str(suite.test_count))
        testsuite.set("failures", str(suite.failure_count))
        testsuite.set("errors", str(suite.error_count))
        testsuite.set("skipped", str(suite.skipped_count))
        testsuite.set("time", f"{suite.duration:.3f}")
        testsuite.set("timestamp", suite.timestamp)

        for case in suite.testcases:
            testcase = ET.SubElement(testsuite, "testcase")
            testcase.set("name", _clean(case.name or ""))
            testcase.set("classname", _clean(suite.name))
            testcase.set("time", f"{case.duration:.3f}")

            # A case may carry several failures; each gets its own element.
            for failure in case.failures:
                element = ET.SubElement(testcase, failure.kind.value)
                element.set("type", failure.name)
                element.set("message", _clean(failure.message))
                element.text = _clean(failure.location)

            if case.status is CaseStatus.SKIPPED:
                ET.SubElement(testcase, "skipped")

        # Reports are always written as UTF-8, whatever the locale says.
        ET.indent(testsuite, space="  ")
        return XML_DECLARATION + ET.tostring(testsuite, encoding="unicode")
