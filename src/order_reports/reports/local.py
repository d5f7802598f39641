from __future__ import annotations

import logging
from contextlib import closing
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType
from typing import Generic, Iterator, TypeVar

from order_reports.config import DEFAULT_ARCHIVE_LOC, DEFAULT_FILE_LOC, Settings, load_settings
from order_reports.ingest.archive import archive_report
from order_reports.ingest.classifier import find_report
from order_reports.ingest.readers import stream_csv_dict_rows
from order_reports.ingest.summary import StreamSummary
from order_reports.logging_utils import LoggerLike, LogLevel, create_logger, log_event
from order_reports.parsing.primitives import normalize_header
from order_reports.parsing.registry import ReportSpec, get_report_spec
from order_reports.parsing.types import DateRange, OrderItem, Refund, ReportRecord, ReportType, Shipment

R = TypeVar("R", bound=ReportRecord)

DEFAULT_RANGE_DAYS = 30


@dataclass
class _StreamState:
    """Mutable bookkeeping for one stream, read back by `ReportStream.summary`."""
    file_name: str | None = None
    yielded: int = 0
    skipped: int = 0


class ReportStream(Generic[R]):
    """
    Lazy, finite, non-restartable sequence of records from one report file.

    Rows are read, coerced and filtered one at a time as the caller advances. The source
    file is archived once iteration ends, whichever way it ends: exhaustion, an error,
    `close()`, or leaving a `with` block early.
    """

    def __init__(self, report_type: ReportType, records: Iterator[R], state: _StreamState) -> None:
        self._report_type = report_type
        self._records = records
        self._state = state

    def __iter__(self) -> ReportStream[R]:
        return self

    def __next__(self) -> R:
        return next(self._records)

    def close(self) -> None:
        """Stop early. Releases the file handle and archives the file if one was opened."""
        self._records.close()   # type: ignore[attr-defined]

    def __enter__(self) -> ReportStream[R]:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def summary(self) -> StreamSummary:
        """Counts so far. Final once iteration has ended."""
        return StreamSummary(
            report_type=self._report_type,
            file_name=self._state.file_name,
            yielded=self._state.yielded,
            skipped=self._state.skipped,
        )


class OrderReportsCsv:
    """
    Reads Amazon order reports dropped as CSV files into a local directory.

    Each `get_*` call finds the matching report by its header, streams its rows in the
    requested date range, then moves the file to the archive directory.
    """

    def __init__(
        self,
        file_loc: str | None = None,
        archive_loc: str | None = None,
        *,
        log_level: LogLevel | str = LogLevel.NONE,
        logger: LoggerLike | None = None,
    ) -> None:
        """
        - `file_loc`: directory to look for reports, default `./reports`.
        - `archive_loc`: directory to move reports to after use, default `./reports/archive`.
        - `log_level`: level for the default logger, ignored when `logger` is given.
        - `logger`: use this logger instead of building one.
        """
        self._file_loc = file_loc or DEFAULT_FILE_LOC
        self._archive_loc = archive_loc or DEFAULT_ARCHIVE_LOC
        self._logger = logger or create_logger(log_level)

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **overrides: object) -> OrderReportsCsv:
        """Build from environment settings. Keyword `overrides` win over them."""
        settings = settings or load_settings()
        kwargs: dict[str, object] = {
            "file_loc": settings.file_loc,
            "archive_loc": settings.archive_loc,
            "log_level": settings.log_level,
        }
        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)  # type: ignore[arg-type]

    @property
    def file_loc(self) -> str:
        return self._file_loc

    @property
    def archive_loc(self) -> str:
        return self._archive_loc

    def get_items(self, date_range: DateRange | None = None) -> ReportStream[OrderItem]:
        """
        Retrieve ordered items in the given date range. If no date range is given, the
        previous 30 days will be used.
        """
        return self._get_report(ReportType.ITEMS, date_range)  # type: ignore[return-value]

    def get_refunds(self, date_range: DateRange | None = None) -> ReportStream[Refund]:
        """
        Retrieve refunds in the given date range. If no date range is given, the previous
        30 days will be used.
        """
        return self._get_report(ReportType.REFUNDS, date_range)  # type: ignore[return-value]

    def get_shipments(self, date_range: DateRange | None = None) -> ReportStream[Shipment]:
        """
        Retrieve shipments in the given date range. If no date range is given, the previous
        30 days will be used.
        """
        return self._get_report(ReportType.SHIPMENTS, date_range)  # type: ignore[return-value]

    def _get_report(self, report_type: ReportType, date_range: DateRange | None) -> ReportStream[ReportRecord]:
        # default range is fixed at call time, not at first iteration
        date_range = date_range or DateRange.last_days(DEFAULT_RANGE_DAYS)
        state = _StreamState()
        records = self._stream_records(get_report_spec(report_type), date_range, state)
        return ReportStream(report_type, records, state)

    def _stream_records(self, spec: ReportSpec, date_range: DateRange, state: _StreamState) -> Iterator[ReportRecord]:
        """
        Generator body of a `ReportStream`:
          - locate the report file (none found -> empty stream, nothing archived),
          - stream rows with normalized headers,
          - coerce each row, yield it if its `orderDate` is strictly inside `date_range`,
          - archive the file on every exit path.

        Coercion (`MalformedRowError`, `ReportFormatError`) and I/O (`OSError`) errors propagate.
        """
        location = find_report(self._file_loc, spec.report_type, logger=self._logger)
        if location is None:
            log_event(self._logger, logging.DEBUG, "report_not_found", report_type=spec.report_type.value, file_loc=self._file_loc)
            return

        state.file_name = location.file_name
        log_event(self._logger, logging.DEBUG, "report_located", report_type=spec.report_type.value, file=location.file_name)

        try:
            # the file handle is closed before the archive move below
            with closing(stream_csv_dict_rows(Path(location.full_path), header_transform=normalize_header)) as rows:
                for source_row, raw in rows:
                    record = spec.parse_row(raw, source_row=source_row)
                    if not date_range.contains(record.order_date):
                        state.skipped += 1
                        continue
                    state.yielded += 1
                    yield record

            log_event(
                self._logger,
                logging.INFO,
                "report_streamed",
                report_type=spec.report_type.value,
                file=location.file_name,
                yielded=state.yielded,
                skipped=state.skipped,
            )
        finally:
            self._archive(location.file_name)

    def _archive(self, file_name: str) -> None:
        """Archive `file_name`. Failures are logged, never raised."""
        try:
            archived = archive_report(file_name, file_loc=self._file_loc, archive_loc=self._archive_loc)
        except OSError as e:
            log_event(
                self._logger,
                logging.WARNING,
                "report_archive_failed",
                exc_info=True,
                file=file_name,
                archive_loc=self._archive_loc,
                error=str(e),
            )
            return
        log_event(self._logger, logging.DEBUG, "report_archived", file=file_name, archived_to=str(archived))
