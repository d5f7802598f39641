from __future__ import annotations

from datetime import datetime, timezone

import pytest

from order_reports.parsing.primitives import (
    ParseError,
    normalize_header,
    parse_price,
    parse_quantity,
    parse_report_date,
)
from order_reports.parsing.types import ErrorCode


@pytest.mark.parametrize(
    "header, expected",
    [
        ("Order Date", "orderDate"),
        ("ASIN/ISBN", "asinIsbn"),
        ("UNSPSC Code", "unspscCode"),
        ("PO Line Number", "poLineNumber"),
        ("Carrier Name & Tracking Number", "carrierNameTrackingNumber"),
        ("Exemption Opt-Out", "exemptionOptOut"),
        ("Shipping Address Street 1", "shippingAddressStreet1"),
        ("Website", "website"),
        ("  Refund Date ", "refundDate"),
        ("\ufeffOrder Date", "orderDate"),
        ("orderDate", "orderDate"),
    ],
)
def test_normalize_header(header: str, expected: str) -> None:
    """Raw Amazon headers camel-case into record keys."""
    assert normalize_header(header) == expected


def test_parse_price_strips_symbols_and_separators() -> None:
    """`$1,234.56` -> 1234.56."""
    assert parse_price("$1,234.56", field="itemTotal") == 1234.56
    assert parse_price("12", field="itemTotal") == 12.0


def test_parse_price_invalid_raises() -> None:
    """Nothing numeric left after stripping -> `invalid_numeric`."""
    with pytest.raises(ParseError) as e:
        parse_price("N/A", field="itemTotal")
    assert e.value.code == ErrorCode.invalid_numeric
    assert "itemTotal" in e.value.detail

    with pytest.raises(ParseError):
        parse_price("1.2.3", field="itemTotal")


def test_parse_quantity_truncates_suffix() -> None:
    """Leading integer is kept, trailing junk dropped."""
    assert parse_quantity("3", field="quantity") == 3
    assert parse_quantity("3 units", field="quantity") == 3
    assert parse_quantity("2.5", field="quantity") == 2


def test_parse_quantity_invalid_raises() -> None:
    """No leading digits -> `invalid_int`."""
    with pytest.raises(ParseError) as e:
        parse_quantity("many", field="quantity")
    assert e.value.code == ErrorCode.invalid_int


def test_parse_report_date_is_pacific_midnight() -> None:
    """Winter dates are UTC-8, summer dates UTC-7."""
    assert parse_report_date("12/01/20", field="orderDate") == datetime(2020, 12, 1, 8, tzinfo=timezone.utc)
    assert parse_report_date("07/04/21", field="orderDate") == datetime(2021, 7, 4, 7, tzinfo=timezone.utc)


def test_parse_report_date_invalid_raises() -> None:
    """Wrong format -> `invalid_timestamp`, never a default date."""
    with pytest.raises(ParseError) as e:
        parse_report_date("2020-12-01", field="orderDate")
    assert e.value.code == ErrorCode.invalid_timestamp
    assert "orderDate" in str(e.value)
