from __future__ import annotations

from dataclasses import dataclass

from order_reports.parsing.types import ReportType


@dataclass(frozen=True)
class StreamSummary:
    """What one report stream produced."""
    report_type: ReportType
    file_name: str | None       # `None` when no report file was found
    yielded: int
    skipped: int                # rows outside the date range

    def render_one_line(self) -> str:
        """How the summary is formatted for the terminal."""
        return f"{self.report_type.value.lower()}: yielded={self.yielded} skipped={self.skipped} file={self.file_name or '-'}"
