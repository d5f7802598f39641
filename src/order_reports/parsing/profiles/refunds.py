from __future__ import annotations

import re
from typing import Any, Mapping

from order_reports.parsing.primitives import parse_price, parse_quantity, parse_report_date
from order_reports.parsing.schema import RecordCoercer
from order_reports.parsing.types import Refund


REFUNDS_SIGNATURE = re.compile(r".*Refund Date.*")


_REFUNDS_COLUMNS: dict[str, Any] = {
    "orderDate": parse_report_date,
    "quantity": parse_quantity,
    "refundAmount": parse_price,
    "refundDate": parse_report_date,
    "refundTaxAmount": parse_price,
}

refunds_coercer = RecordCoercer(record_type=Refund, columns=_REFUNDS_COLUMNS)


def parse_refund_row(raw: Mapping[str, str], *, source_row: int) -> Refund:
    """Parse a single refund's row."""
    return refunds_coercer.coerce(raw, source_row=source_row)
