from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from .primitives import ParseError
from .types import MalformedRowError, RawRecord, ReportRecord

# Typing:
# Converter takes the raw cell and the column name, returns the typed value.
Converter = Callable[..., Any]


@dataclass(frozen=True, slots=True)
class RecordCoercer:
    """
    Coerce a single raw row into a typed record.

    - empty cells are dropped from the output,
    - registered columns go through their converter,
    - every other column passes through as the original `str`.

    The first conversion failure raises `MalformedRowError`.
    """
    record_type: type[ReportRecord]                              # output record shape
    columns: Mapping[str, Converter] = field(default_factory=dict)  # column key -> converter

    def coerce(self, raw: RawRecord, *, source_row: int = 0) -> ReportRecord:
        """Returns the coerced record. `source_row` is only used for error context."""
        out: dict[str, Any] = {}
        for key, value in raw.items():
            if value is None or value == "":
                continue
            convert = self.columns.get(key)
            if convert is None:
                out[key] = value
                continue
            try:
                out[key] = convert(value, field=key)
            except ParseError as e:
                raise MalformedRowError(
                    code=e.code,
                    detail=e.detail,
                    source_row=source_row,
                    raw_payload=dict(raw),
                ) from e

        return self.record_type(out)
