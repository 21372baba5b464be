"""
JSON reporter for finished test suites.
"""

import json

from ..models import TestSuite
from .base import ReportGenerator


class JSONReporter(ReportGenerator):
    """Generate JSON format for programmatic analysis."""

    extension = "json"

    def generate(self, suite: TestSuite) -> str:
        """Generate JSON report."""
        report = {
            "suite": {
                "name": suite.name,
                "tests": suite.test_count,
                "failures": suite.failure_count,
                "errors": suite.error_count,
                "skipped": suite.skipped_count,
                "duration_seconds": suite.duration,
                "timestamp": suite.timestamp,
            },
            "testcases": [
                {
                    "name": case.name,
                    "status": case.status.value,
                    "duration_seconds": case.duration,
                    "failures": [
                        {
                            "name": f.name,
                            "kind": f.kind.value,
                            "message": f.message,
                            "location": f.location,
                        }
                        for f in case.failures
                    ],
                }
                for case in suite.testcases
            ],
        }

        return json.dumps(report, indent=2)
