from __future__ import annotations

import logging
import os
from pathlib import Path

from order_reports.ingest.firstline import first_line
from order_reports.logging_utils import LoggerLike, log_event
from order_reports.parsing.registry import get_report_spec
from order_reports.parsing.types import ReportLocation, ReportType

_log = logging.getLogger(__name__)


def find_report(
    directory: str | Path,
    report_type: ReportType,
    *,
    logger: LoggerLike | None = None,
) -> ReportLocation | None:
    """
    Find the first file in `directory` whose first line matches `report_type`'s signature.

    Entries are checked in the order the filesystem lists them (not sorted), and
    sub-directories are skipped. Scanning stops on the first match, so when several
    files match the first-listed one wins.

    Returns `None` if nothing matches or `directory` is empty.
    Raises `OSError` if `directory` cannot be listed or a file cannot be read.
    """
    logger = logger or _log
    spec = get_report_spec(report_type)
    directory = str(directory)

    with os.scandir(directory) as entries:
        for entry in entries:
            if not entry.is_file():
                continue
            log_event(logger, logging.DEBUG, "report_file_checked", file=entry.name, report_type=report_type.value)
            if spec.matches(first_line(entry.path)):
                return ReportLocation(file_name=entry.name, full_path=f"{directory}/{entry.name}")

    return None
