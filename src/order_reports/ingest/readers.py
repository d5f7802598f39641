from __future__ import annotations

import csv
from pathlib import Path
from typing import Callable, Iterator

from order_reports.parsing.types import RawRecord, ReportFormatError

HeaderTransform = Callable[[str], str]


def stream_csv_dict_rows(
    path: Path,
    *,
    header_transform: HeaderTransform | None = None,
    encoding: str = "utf-8-sig",
) -> Iterator[tuple[int, RawRecord]]:
    """
    Yields `(source_row, dict)` for CSV data rows.

    The header row is passed through `header_transform` before any data row is read.
    `source_row` is 1-based for the first real data row encountered, header is not counted.
    Blank lines are skipped. A row whose cell count differs from the header, in either
    direction, raises `ReportFormatError`.

    The file handle is held only while the generator is running, and released when it
    is exhausted or closed.
    """
    with path.open("r", encoding=encoding, newline="") as f:
        reader = csv.reader(f)
        header = next(reader, None)
        if header is None:
            raise ReportFormatError(f"{path.name}: missing header row")
        columns = [header_transform(h) if header_transform else h for h in header]

        source_row = 0
        for cells in reader:
            if not cells:
                continue
            source_row += 1
            if len(cells) != len(columns):
                raise ReportFormatError(
                    f"{path.name}: row {source_row} has {len(cells)} cells, header has {len(columns)}"
                )
            yield source_row, dict(zip(columns, cells))     # pairs
