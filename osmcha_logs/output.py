"""Output formatting and display for changeset discussion reports."""

import sys
import threading
from typing import List

from .models import UserReport


class ReportFormatter:
    """Formats and prints per-user report blocks."""

    def __init__(self, stream=None):
        """Initialize the report formatter.

        Args:
            stream: File object to print to (defaults to sys.stdout at print time)
        """
        self.stream = stream
        # Blocks are printed from worker threads
        self._print_lock = threading.Lock()

    def format_report(self, report: UserReport) -> str:
        """Render one user's report block."""
        lines = [
            f"LOG FOR USERNAME :  {report.username}",
            f"-- Changeset count : {report.total_changesets}",
            f"-- Count of Changesets with comments : {report.with_comments}",
            f"-- Count of Changesets without comments : {report.without_comments}",
            f"-- Count of Resolved changesets :  {report.resolved_count}",
            f"-- Count of Unresolved changesets :  {report.unresolved_count}",
            "-- List of Unresolved changesets below",
            self._format_url_list(report.unresolved_changeset_urls),
        ]
        return '\n'.join(lines)

    @staticmethod
    def _format_url_list(urls: List[str]) -> str:
        if not urls:
            return "[]"
        return f"[ {', '.join(urls)} ]"

    def print_report(self, report: UserReport):
        """Print one user's report block without interleaving with other blocks."""
        block = self.format_report(report)
        with self._print_lock:
            print(block, file=self.stream or sys.stdout, flush=True)
