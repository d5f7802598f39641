from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from .types import ErrorCode


@dataclass(eq=False)
class ParseError(Exception):
    """Handles a rejected field value, with details from the failed conversion."""
    code: ErrorCode             # used to classify the failure
    detail: str                 # error message that led to the failure

    def __str__(self) -> str:
        return self.detail


# Amazon timestamps every report in Pacific time, whatever the buyer's locale.
REPORT_TZ = ZoneInfo("America/Los_Angeles")
REPORT_DATE_FORMAT = "%m/%d/%y"

_NON_WORD = re.compile(r"[^A-Za-z0-9_]")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_NOT_PRICE_CHAR = re.compile(r"[^\d.]")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


## -- headers

def normalize_header(header: str) -> str:
    """
    Camel-case a raw header cell into a record key.

    Non-word characters become word breaks, all-caps words are lowered:
    - `"Order Date"` -> `orderDate`
    - `"ASIN/ISBN"` -> `asinIsbn`
    - `"Carrier Name & Tracking Number"` -> `carrierNameTrackingNumber`
    """
    words: list[str] = []
    for token in re.split(r"[\s_]+", _NON_WORD.sub(" ", header)):
        if token:
            words.extend(_CAMEL_BOUNDARY.split(token))
    if not words:
        return ""
    head, *rest = (w.lower() for w in words)
    return head + "".join(w[:1].upper() + w[1:] for w in rest)


## -- typed fields (invalid input raises `ParseError`)

def parse_report_date(v: str, *, field: str) -> datetime:
    """Parse `MM/DD/YY` as midnight Pacific time. Returns an aware UTC `datetime`."""
    try:
        local = datetime.strptime(v.strip(), REPORT_DATE_FORMAT)
    except ValueError:
        raise ParseError(ErrorCode.invalid_timestamp, f"{field}: invalid date (expected MM/DD/YY): {v!r}")
    return local.replace(tzinfo=REPORT_TZ).astimezone(timezone.utc)


def parse_price(v: str, *, field: str) -> float:
    """
    Parse a currency cell. Currency symbols and thousands separators are stripped
    before conversion, so `"$1,234.56"` gives `1234.56`.
    """
    s = _NOT_PRICE_CHAR.sub("", v)
    try:
        return float(s)
    except ValueError:
        raise ParseError(ErrorCode.invalid_numeric, f"{field}: invalid currency value {v!r}")


def parse_quantity(v: str, *, field: str) -> int:
    """Parse the leading base-10 integer. Any trailing suffix is truncated (`"3 units"` -> 3)."""
    m = _LEADING_INT.match(v)
    if m is None:
        raise ParseError(ErrorCode.invalid_int, f"{field}: invalid int value {v!r}")
    return int(m.group(1))
