"""
Environment-driven settings for locating and archiving reports.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from order_reports.logging_utils import LogLevel

DEFAULT_FILE_LOC = "./reports"
DEFAULT_ARCHIVE_LOC = "./reports/archive"


@dataclass(frozen=True)
class Settings:
    """Where reports are picked up, where they go once consumed, how loud to be."""
    file_loc: str = DEFAULT_FILE_LOC
    archive_loc: str = DEFAULT_ARCHIVE_LOC
    log_level: LogLevel = LogLevel.NONE


def load_settings() -> Settings:
    """
    Read settings from the environment:
    - `ORDER_REPORTS_DIR`
    - `ORDER_REPORTS_ARCHIVE_DIR`
    - `ORDER_REPORTS_LOG_LEVEL`

    Unset or empty variables fall back to the module defaults.
    Raises `ValueError` on an unknown log level.
    """
    return Settings(
        file_loc=os.getenv("ORDER_REPORTS_DIR") or DEFAULT_FILE_LOC,
        archive_loc=os.getenv("ORDER_REPORTS_ARCHIVE_DIR") or DEFAULT_ARCHIVE_LOC,
        log_level=LogLevel.parse(os.getenv("ORDER_REPORTS_LOG_LEVEL") or LogLevel.NONE),
    )

