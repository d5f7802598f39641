from __future__ import annotations

import re
from typing import Any, Mapping

from order_reports.parsing.primitives import parse_price, parse_report_date
from order_reports.parsing.schema import RecordCoercer
from order_reports.parsing.types import Shipment


SHIPMENTS_SIGNATURE = re.compile(r".*Shipping Charge.*")


_SHIPMENTS_COLUMNS: dict[str, Any] = {
    "orderDate": parse_report_date,
    "shipmentDate": parse_report_date,
    "subtotal": parse_price,
    "shippingCharge": parse_price,
    "taxBeforePromotions": parse_price,
    "totalPromotions": parse_price,
    "taxCharged": parse_price,
    "totalCharged": parse_price,
}

shipments_coercer = RecordCoercer(record_type=Shipment, columns=_SHIPMENTS_COLUMNS)


def parse_shipment_row(raw: Mapping[str, str], *, source_row: int) -> Shipment:
    """Parse a single shipment's row. Quantities are not part of this report."""
    return shipments_coercer.coerce(raw, source_row=source_row)
