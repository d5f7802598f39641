from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterator, Mapping


class ReportType(str, Enum):
    """The three Amazon report kinds, told apart by header content only."""
    ITEMS = "ITEMS"
    REFUNDS = "REFUNDS"
    SHIPMENTS = "SHIPMENTS"


class ErrorCode(str, Enum):
    """Typed coercion failure classifications."""
    invalid_int = "invalid_int"
    invalid_numeric = "invalid_numeric"         # also used for currency values
    invalid_timestamp = "invalid_timestamp"     # also used for date parsing errors


# one physical CSV row keyed by normalized column name
RawRecord = Mapping[str, str]


@dataclass(eq=False)
class MalformedRowError(Exception):
    """A row whose value could not be coerced. Aborts the stream it came from."""
    code: ErrorCode
    detail: str
    source_row: int                 # 1-based data row, header is not counted
    raw_payload: Mapping[str, Any]  # the raw unmutated row

    def __str__(self) -> str:
        return f"row {self.source_row}: {self.detail}"


class ReportFormatError(ValueError):
    """The file is not a usable CSV report (no header, ragged rows)."""


@dataclass(frozen=True, slots=True)
class ReportLocation:
    """A discovered, not yet archived, report file."""
    file_name: str
    full_path: str


def _as_aware(dt: datetime) -> datetime:
    # assumption: UTC for naive datetimes
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


@dataclass(frozen=True, slots=True)
class DateRange:
    """
    Range used to filter records on `orderDate`.

    Both bounds are exclusive: a record dated exactly `start_date` or `end_date` is dropped.
    """
    start_date: datetime
    end_date: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "start_date", _as_aware(self.start_date))
        object.__setattr__(self, "end_date", _as_aware(self.end_date))

    @classmethod
    def last_days(cls, days: int = 30, *, now: datetime | None = None) -> DateRange:
        """The previous `days` days through `now` (evaluated at call time when omitted)."""
        end = _as_aware(now) if now is not None else datetime.now(timezone.utc)
        return cls(start_date=end - timedelta(days=days), end_date=end)

    def contains(self, when: datetime | None) -> bool:
        """Strict `start_date < when < end_date`. A missing date is never contained."""
        if when is None:
            return False
        when = _as_aware(when)
        return self.start_date < when < self.end_date


@dataclass(frozen=True, slots=True, eq=False)
class ReportRecord(Mapping[str, Any]):
    """
    Read-only mapping of field name to typed value for one coerced row.

    Empty source cells are absent, never `""`, `0` or `None`.
    """
    data: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ReportRecord):
            return type(self) is type(other) and dict(self.data) == dict(other.data)
        if isinstance(other, Mapping):
            return dict(self.data) == dict(other)
        return NotImplemented

    __hash__ = None     # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self.data)!r})"

    @property
    def order_date(self) -> datetime | None:
        return self.data.get("orderDate")


class OrderItem(ReportRecord):
    """One row of the "Items" report."""
    __slots__ = ()


class Refund(ReportRecord):
    """One row of the "Refunds and returns" report."""
    __slots__ = ()


class Shipment(ReportRecord):
    """One row of the "Orders and shipments" report."""
    __slots__ = ()
