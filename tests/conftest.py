from __future__ import annotations

import csv
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Mapping, Sequence

import pytest

from order_reports.parsing.primitives import REPORT_TZ
from order_reports.parsing.types import ReportType

# Headers as Amazon exports them.
ITEMS_HEADER = [
    "Order Date", "Order ID", "Title", "Category", "ASIN/ISBN", "UNSPSC Code", "Website",
    "Release Date", "Condition", "Seller", "Seller Credentials", "List Price Per Unit",
    "Purchase Price Per Unit", "Quantity", "Payment Instrument Type", "Purchase Order Number",
    "PO Line Number", "Ordering Customer Email", "Shipment Date", "Shipping Address Name",
    "Shipping Address Street 1", "Shipping Address Street 2", "Shipping Address City",
    "Shipping Address State", "Shipping Address Zip", "Order Status",
    "Carrier Name & Tracking Number", "Item Subtotal", "Item Subtotal Tax", "Item Total",
    "Tax Exemption Applied", "Tax Exemption Type", "Exemption Opt-Out", "Buyer Name",
    "Currency", "Group Name",
]

REFUNDS_HEADER = [
    "Order ID", "Order Date", "Title", "Category", "ASIN/ISBN", "Website",
    "Purchase Order Number", "Refund Date", "Refund Condition", "Refund Amount",
    "Refund Tax Amount", "Tax Exemption Applied", "Refund Reason", "Quantity", "Seller",
    "Seller Credentials", "Buyer Name", "Group Name",
]

SHIPMENTS_HEADER = [
    "Order Date", "Order ID", "Payment Instrument Type", "Website", "Purchase Order Number",
    "Ordering Customer Email", "Shipment Date", "Shipping Address Name",
    "Shipping Address Street 1", "Shipping Address Street 2", "Shipping Address City",
    "Shipping Address State", "Shipping Address Zip", "Order Status",
    "Carrier Name & Tracking Number", "Subtotal", "Shipping Charge", "Tax Before Promotions",
    "Total Promotions", "Tax Charged", "Total Charged", "Buyer Name", "Group Name",
]

HEADERS: dict[ReportType, list[str]] = {
    ReportType.ITEMS: ITEMS_HEADER,
    ReportType.REFUNDS: REFUNDS_HEADER,
    ReportType.SHIPMENTS: SHIPMENTS_HEADER,
}

WriteReport = Callable[..., Path]


def days_ago(n: int) -> str:
    """A report-formatted (`MM/DD/YY`) date `n` days before today, Pacific time."""
    return (datetime.now(REPORT_TZ).date() - timedelta(days=n)).strftime("%m/%d/%y")


@pytest.fixture()
def reports_dir(tmp_path: Path) -> Path:
    """An empty drop directory for reports."""
    d = tmp_path / "reports"
    d.mkdir()
    return d


@pytest.fixture()
def archive_dir(tmp_path: Path) -> Path:
    """Where consumed reports go (not created up front)."""
    return tmp_path / "reports" / "archive"


@pytest.fixture()
def write_report(reports_dir: Path) -> WriteReport:
    """
    Returns a writer for a report CSV inside `reports_dir`.

    Rows are dicts keyed by the raw header name; missing columns are written empty.
    """
    def _write(
        name: str,
        report_type: ReportType,
        rows: Sequence[Mapping[str, str]] = (),
        *,
        directory: Path | None = None,
        bom: bool = False,
    ) -> Path:
        path = (directory or reports_dir) / name
        header = HEADERS[report_type]
        with path.open("w", encoding="utf-8-sig" if bom else "utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=header, restval="")
            writer.writeheader()
            for row in rows:
                writer.writerow(row)
        return path

    return _write


@pytest.fixture()
def recent_item_rows() -> list[dict[str, str]]:
    """Three item rows, all inside the default 30 day window."""
    return [
        {
            "Order Date": days_ago(1),
            "Order ID": "111-0000001-0000001",
            "Title": "USB-C Cable, 6ft",
            "Category": "Electronics",
            "ASIN/ISBN": "B000000001",
            "List Price Per Unit": "$12.99",
            "Purchase Price Per Unit": "$9.99",
            "Quantity": "2",
            "Shipment Date": days_ago(1),
            "Item Subtotal": "$19.98",
            "Item Subtotal Tax": "$2.04",
            "Item Total": "$22.02",
            "Currency": "USD",
        },
        {
            "Order Date": days_ago(3),
            "Order ID": "111-0000002-0000002",
            "Title": "Espresso Machine",
            "List Price Per Unit": "$1,299.00",
            "Purchase Price Per Unit": "$1,234.56",
            "Quantity": "1",
            "Item Total": "$1,342.59",
        },
        {
            "Order Date": days_ago(5),
            "Order ID": "111-0000003-0000003",
            "Title": "Notebook",
            "Quantity": "10",
            "Item Total": "$30.00",
        },
    ]


@pytest.fixture()
def report_date() -> Callable[[int], str]:
    """`days_ago` as a fixture, for tests building their own rows."""
    return days_ago
