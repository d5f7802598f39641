from __future__ import annotations

import re
from typing import Any, Mapping

from order_reports.parsing.primitives import parse_price, parse_quantity, parse_report_date
from order_reports.parsing.schema import RecordCoercer
from order_reports.parsing.types import OrderItem


# first line of an "Items" report always carries this column
ITEMS_SIGNATURE = re.compile(r".*List Price Per Unit.*")


# column key -> converter, for the columns that are not plain text
_ITEMS_COLUMNS: dict[str, Any] = {
    "itemSubtotal": parse_price,
    "itemSubtotalTax": parse_price,
    "itemTotal": parse_price,
    "listPricePerUnit": parse_price,
    "orderDate": parse_report_date,
    "purchasePricePerUnit": parse_price,
    "quantity": parse_quantity,
    "releaseDate": parse_report_date,
    "shipmentDate": parse_report_date,
}

items_coercer = RecordCoercer(record_type=OrderItem, columns=_ITEMS_COLUMNS)


def parse_order_item_row(raw: Mapping[str, str], *, source_row: int) -> OrderItem:
    """Parse a single ordered item's row."""
    return items_coercer.coerce(raw, source_row=source_row)
