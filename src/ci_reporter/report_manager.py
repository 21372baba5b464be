"""
Report manager: writes each finished suite to its own file.
"""

import glob
import hashlib
import logging
import os
import re
from typing import List, Optional

from .exceptions import ReportWriteError
from .models import TestSuite
from .reporting import GENERATORS

logger = logging.getLogger(__name__)

MAX_FILENAME_SIZE = 240

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9]+")


class ReportManager:
    """Writes finished suites as report files under one directory.

    Files are named ``<KIND>-<suite name>.<ext>``. Suites that share a name
    get a numeric suffix instead of overwriting each other.
    """

    def __init__(
        self,
        kind: str,
        report_dir: Optional[str] = None,
        report_format: str = "junit",
        clean: bool = True,
    ):
        if report_format not in GENERATORS:
            raise ValueError(
                f"Unknown report format '{report_format}'. "
                f"Available formats: {', '.join(GENERATORS)}"
            )
        self.kind = kind
        self.report_dir = report_dir or os.path.join(os.getcwd(), kind.lower(), "reports")
        self.generator = GENERATORS[report_format]()
        self.basename = kind.upper()
        self.written: List[str] = []

        os.makedirs(self.report_dir, exist_ok=True)
        if clean:
            self._remove_stale_reports()

    def write_report(self, suite: TestSuite) -> str:
        """
        Write one finished suite.

        Args:
            suite: Finished TestSuite; it is not modified

        Returns:
            Path of the written report

        Raises:
            ReportWriteError: If the report file cannot be written
        """
        path = self.filename_for(suite)
        report = self.generator.generate(suite)
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(report)
        except OSError as e:
            raise ReportWriteError(path, e)

        self.written.append(path)
        logger.info(
            "Wrote report for suite '%s' (%d tests) to %s", suite.name, suite.test_count, path
        )
        return path

    def filename_for(self, suite: TestSuite) -> str:
        """Return an unused report path for the suite."""
        basename = f"{self.basename}-{_UNSAFE_CHARS.sub('-', suite.name or '')}"
        if len(basename) > MAX_FILENAME_SIZE:
            digest = hashlib.sha1(basename.encode("utf-8")).hexdigest()
            basename = basename[: MAX_FILENAME_SIZE - len(digest)] + digest

        extension = self.generator.extension
        path = os.path.join(self.report_dir, f"{basename}.{extension}")
        counter = 0
        while os.path.exists(path):
            counter += 1
            path = os.path.join(self.report_dir, f"{basename}-{counter}.{extension}")
        return path

    def _remove_stale_reports(self) -> None:
        pattern = os.path.join(
            glob.escape(self.report_dir), f"{self.basename}-*.{self.generator.extension}"
        )
        for stale in glob.glob(pattern):
            logger.debug("Removing stale report %s", stale)
            os.remove(stale)
