from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime
from typing import Any, Mapping

from order_reports.logging_utils import LogLevel
from order_reports.parsing.types import DateRange, MalformedRowError, ReportFormatError
from order_reports.reports.local import DEFAULT_RANGE_DAYS, OrderReportsCsv


def _parse_when(raw: str) -> datetime:
    """ISO-8601 date or datetime for `--start`/`--end`. Naive values are taken as UTC."""
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid ISO date/datetime: {raw!r}")


def _record_to_json(record: Mapping[str, Any]) -> str:
    """One JSON line per record, datetimes as ISO-8601."""
    return json.dumps(
        {k: (v.isoformat() if isinstance(v, datetime) else v) for k, v in record.items()},
        ensure_ascii=False,
    )


def main(argv: list[str] | None = None) -> int:
    """
    A CLI for reading Amazon order reports out of a local directory.

    The `cmd` options are `items`, `refunds` and `shipments`. Each one:
    - finds the matching report in `--dir` by its header,
    - prints every record in the date range to stdout as a JSON line,
    - moves the report to `--archive-dir`.

    A results summary will print to stderr upon completion.

    ### Example usage:
    - `order-reports items --dir reports --start 2020-12-01 --end 2021-01-01`

    Directories and log level default to the `ORDER_REPORTS_*` environment settings.
    """
    p = argparse.ArgumentParser(prog="order-reports")
    sub = p.add_subparsers(dest="cmd", required=True)

    for cmd, help_text in (
        ("items", "Stream ordered items."),
        ("refunds", "Stream refunds."),
        ("shipments", "Stream shipments."),
    ):
        c = sub.add_parser(cmd, help=help_text)
        c.add_argument("--dir", default=None, help="Directory to look for reports in.")
        c.add_argument("--archive-dir", default=None, help="Directory to move consumed reports to.")
        c.add_argument("--start", type=_parse_when, default=None, help="Start of range (exclusive, ISO-8601).")
        c.add_argument("--end", type=_parse_when, default=None, help="End of range (exclusive, ISO-8601).")
        c.add_argument("--log-level", default=None, choices=[lv.value for lv in LogLevel])

    args = p.parse_args(argv)

    api = OrderReportsCsv.from_settings(
        file_loc=args.dir,
        archive_loc=args.archive_dir,
        log_level=args.log_level,
    )

    date_range = None
    if args.start is not None or args.end is not None:
        default = DateRange.last_days(DEFAULT_RANGE_DAYS)
        date_range = DateRange(
            start_date=args.start or default.start_date,
            end_date=args.end or default.end_date,
        )

    getter = {
        "items": api.get_items,
        "refunds": api.get_refunds,
        "shipments": api.get_shipments,
    }[args.cmd]

    with getter(date_range) as stream:
        try:
            for record in stream:
                print(_record_to_json(record))
        except (MalformedRowError, ReportFormatError) as e:
            print(f"error: {e}", file=sys.stderr)
            return 1

    print(stream.summary().render_one_line(), file=sys.stderr)
    return 0
