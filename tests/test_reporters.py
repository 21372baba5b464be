"""Tests for report generators."""

import json
import xml.etree.ElementTree as ET

from ci_reporter.failure import Failure
from ci_reporter.models import TestCase, TestSuite
from ci_reporter.reporting import GENERATORS, JSONReporter, JUnitReporter


def _make_suite(testcases=None):
    """Helper to create a finished suite."""
    if testcases is None:
        testcases = [
            TestCase(name="adds"),
            TestCase(name="subtracts", failures=[Failure(AssertionError("expected 1, got 2"))]),
            TestCase(name="divides", failures=[Failure(ZeroDivisionError("division by zero"))]),
            TestCase(name="multiplies", skipped=True),
        ]
    suite = TestSuite("Math", testcases=testcases)
    suite.start()
    for case in testcases:
        case.start()
        case.finish()
    suite.finish()
    return suite


def _parse(report):
    xml_body = report.split("?>", 1)[1] if "?>" in report else report
    return ET.fromstring(xml_body)


class TestGenerators:
    """Tests for the generator registry."""

    def test_registry(self):
        assert GENERATORS == {"junit": JUnitReporter, "json": JSONReporter}

    def test_extensions(self):
        assert JUnitReporter.extension == "xml"
        assert JSONReporter.extension == "json"


class TestJUnitReporter:
    """Tests for JUnitReporter."""

    def test_xml_declaration(self):
        report = JUnitReporter().generate(_make_suite())
        assert report.startswith("<?xml")

    def test_testsuite_attributes(self):
        root = _parse(JUnitReporter().generate(_make_suite()))
        assert root.tag == "testsuite"
        assert root.get("name") == "Math"
        assert root.get("tests") == "4"
        assert root.get("failures") == "1"
        assert root.get("errors") == "1"
        assert root.get("skipped") == "1"
        assert root.get("time") is not None
        assert root.get("timestamp")

    def test_testcase_elements(self):
        root = _parse(JUnitReporter().generate(_make_suite()))
        testcases = root.findall("testcase")
        assert [tc.get("name") for tc in testcases] == ["adds", "subtracts", "divides", "multiplies"]
        assert all(tc.get("classname") == "Math" for tc in testcases)

    def test_failure_element(self):
        root = _parse(JUnitReporter().generate(_make_suite()))
        failures = root.findall(".//failure")
        assert len(failures) == 1
        assert failures[0].get("type") == "AssertionError"
        assert failures[0].get("message") == "expected 1, got 2"
        assert failures[0].text.startswith("expected 1, got 2")

    def test_error_element(self):
        root = _parse(JUnitReporter().generate(_make_suite()))
        errors = root.findall(".//error")
        assert len(errors) == 1
        assert errors[0].get("type") == "ZeroDivisionError"
        assert errors[0].text.startswith("ZeroDivisionError:\ndivision by zero")

    def test_skipped_element(self):
        root = _parse(JUnitReporter().generate(_make_suite()))
        assert len(root.findall(".//skipped")) == 1

    def test_skipped_case_with_teardown_error(self):
        case = TestCase(name="skips", skipped=True, failures=[Failure(RuntimeError("teardown"))])
        root = _parse(JUnitReporter().generate(_make_suite([case])))
        assert root.get("skipped") == "0"
        assert root.get("errors") == "1"
        assert root.findall(".//skipped") == []
        assert len(root.findall(".//error")) == 1

    def test_multiple_failures_on_one_case(self):
        case = TestCase(
            name="soft",
            failures=[Failure(AssertionError("first")), Failure(AssertionError("second"))],
        )
        root = _parse(JUnitReporter().generate(_make_suite([case])))
        assert [f.get("message") for f in root.findall(".//failure")] == ["first", "second"]
        assert root.get("failures") == "1"

    def test_invalid_xml_characters_removed(self):
        case = TestCase(name="colors", failures=[Failure(AssertionError("\x1b[31mred\x1b[0m"))])
        root = _parse(JUnitReporter().generate(_make_suite([case])))
        assert root.find(".//failure").get("message") == "[31mred[0m"

    def test_empty_suite(self):
        root = _parse(JUnitReporter().generate(_make_suite([])))
        assert root.get("tests") == "0"
        assert root.findall("testcase") == []


class TestJSONReporter:
    """Tests for JSONReporter."""

    def test_generates_valid_json(self):
        data = json.loads(JSONReporter().generate(_make_suite()))
        assert isinstance(data, dict)

    def test_suite_fields(self):
        data = json.loads(JSONReporter().generate(_make_suite()))
        suite = data["suite"]
        assert suite["name"] == "Math"
        assert suite["tests"] == 4
        assert suite["failures"] == 1
        assert suite["errors"] == 1
        assert suite["skipped"] == 1
        assert suite["duration_seconds"] >= 0

    def test_testcases_array(self):
        data = json.loads(JSONReporter().generate(_make_suite()))
        statuses = [(c["name"], c["status"]) for c in data["testcases"]]
        assert statuses == [
            ("adds", "passed"),
            ("subtracts", "failed"),
            ("divides", "error"),
            ("multiplies", "skipped"),
        ]

    def test_failure_fields(self):
        data = json.loads(JSONReporter().generate(_make_suite()))
        failure = data["testcases"][2]["failures"][0]
        assert failure["name"] == "ZeroDivisionError"
        assert failure["kind"] == "error"
        assert failure["message"] == "division by zero"
        assert failure["location"].startswith("ZeroDivisionError:")

    def test_skipped_case_with_teardown_error(self):
        case = TestCase(name="skips", skipped=True, failures=[Failure(RuntimeError("teardown"))])
        data = json.loads(JSONReporter().generate(_make_suite([case])))
        assert data["suite"]["skipped"] == 0
        assert data["suite"]["errors"] == 1
        assert data["testcases"][0]["status"] == "error"

    def test_empty_suite(self):
        data = json.loads(JSONReporter().generate(_make_suite([])))
        assert data["suite"]["tests"] == 0
        assert data["testcases"] == []
