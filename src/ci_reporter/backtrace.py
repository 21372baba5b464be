"""
Backtrace filtering and formatting for failure reports.
"""

import os
import re
import traceback
from typing import List, Optional, Sequence

# Frames from the test runner itself carry no information about the failure.
DEFAULT_BACKTRACE_EXCLUSIONS = [
    r"[\\/]_pytest[\\/]",
    r"[\\/]pluggy[\\/]",
    r"[\\/]unittest[\\/]",
    r"^<frozen ",
]


class BacktraceFormatter:
    """Turn an exception's traceback into readable, filtered lines."""

    def __init__(
        self,
        exclusion_patterns: Optional[Sequence[str]] = None,
        full_backtrace: bool = False,
        base_dir: Optional[str] = None,
    ):
        if exclusion_patterns is None:
            exclusion_patterns = DEFAULT_BACKTRACE_EXCLUSIONS
        self.exclusion_patterns = [re.compile(p) for p in exclusion_patterns]
        self.full_backtrace = full_backtrace
        self.base_dir = base_dir

    def is_excluded(self, filename: str) -> bool:
        return any(p.search(filename) for p in self.exclusion_patterns)

    def format_backtrace(self, exception: BaseException) -> List[str]:
        """
        Format the traceback of an exception.

        Args:
            exception: Exception whose ``__traceback__`` should be formatted

        Returns:
            One entry per kept frame, innermost last. An entry may span two
            lines when the frame's source line is available.
        """
        frames = traceback.extract_tb(exception.__traceback__)
        kept = frames
        if not self.full_backtrace:
            kept = [f for f in frames if not self.is_excluded(f.filename)]
            # Show everything rather than nothing.
            if not kept:
                kept = frames

        return [self._format_frame(frame) for frame in kept]

    def _format_frame(self, frame: traceback.FrameSummary) -> str:
        entry = f'File "{self._display_path(frame.filename)}", line {frame.lineno}, in {frame.name}'
        if frame.line:
            entry += f"\n  {frame.line.strip()}"
        return entry

    def _display_path(self, filename: str) -> str:
        base_dir = self.base_dir or os.getcwd()
        try:
            relative = os.path.relpath(filename, base_dir)
        except ValueError:
            # Different drive on Windows
            return filename
        if relative.startswith(os.pardir):
            return filename
        return relative
