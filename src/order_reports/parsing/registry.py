from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Pattern

from .types import RawRecord, ReportRecord, ReportType

# Typing:
# RowParser takes one raw row and its 1-based `source_row`, returns the typed record.
RowParser = Callable[..., ReportRecord]


@dataclass(frozen=True)
class ReportSpec:
    """Contains a report type's expectations."""
    report_type: ReportType
    signature: Pattern[str]     # tested against the file's first line
    parse_row: RowParser        # which profile parser this report expects

    def matches(self, first_line: str) -> bool:
        return self.signature.search(first_line) is not None


def get_report_spec(report_type: ReportType) -> ReportSpec:
    """
    A registry that assigns a report type its signature and row parser.
    Column conversion rules live inside the profile modules.
    """
    if report_type == ReportType.ITEMS:
        from .profiles.items import ITEMS_SIGNATURE, parse_order_item_row
        return ReportSpec(report_type=ReportType.ITEMS, signature=ITEMS_SIGNATURE, parse_row=parse_order_item_row)

    if report_type == ReportType.REFUNDS:
        from .profiles.refunds import REFUNDS_SIGNATURE, parse_refund_row
        return ReportSpec(report_type=ReportType.REFUNDS, signature=REFUNDS_SIGNATURE, parse_row=parse_refund_row)

    if report_type == ReportType.SHIPMENTS:
        from .profiles.shipments import SHIPMENTS_SIGNATURE, parse_shipment_row
        return ReportSpec(report_type=ReportType.SHIPMENTS, signature=SHIPMENTS_SIGNATURE, parse_row=parse_shipment_row)

    raise ValueError(f"Unknown report_type: {report_type}")


def coerce(report_type: ReportType, raw: RawRecord, *, source_row: int = 0) -> ReportRecord:
    """Coerce `raw` with the column table registered for `report_type`."""
    return get_report_spec(report_type).parse_row(raw, source_row=source_row)
