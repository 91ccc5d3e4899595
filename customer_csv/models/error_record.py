from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

"""ErrorEntry model for the parse error sink.

Row 0 is reserved for header / file-level errors; data rows use their physical
line number. Entries are immutable once created and serialize to a fixed
JSON Lines schema (customer_csv/contracts/error_log_schema.json).
"""

__all__ = [
    "ErrorKind",
    "ErrorEntry",
]

FILE_LEVEL_ROW = 0


class ErrorKind(Enum):
    """Error classification.

    - VALIDATION: a cell / row / record rule failed
    - PARSING: structural or file-level failure (bad header, file too short)
    - TRANSFORMATION: a value could not be normalized
    - EXCEPTION: unexpected failure while processing a row or file
    """
    VALIDATION = "validation"
    PARSING = "parsing"
    TRANSFORMATION = "transformation"
    EXCEPTION = "exception"

    @property
    def label(self) -> str:
        return self.value.capitalize()


def _utc_now_iso() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class ErrorEntry:
    """One recorded parse error.

    Attributes:
        kind: Error classification
        row: Row number (>= 0). 0 for header / file-level errors
        column: 1-based column number, None when row- or file-scoped
        message: Human readable description (never empty when recorded via the sink)
        expected: Optional expected value
        actual: Optional offending value
        field_name: Optional column name
        context: Optional free-text context label
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
    """
    kind: ErrorKind
    row: int
    message: str
    column: int | None = None
    expected: str | None = None
    actual: str | None = None
    field_name: str | None = None
    context: str | None = None
    timestamp: str = ""

    def __post_init__(self) -> None:
        if self.row < FILE_LEVEL_ROW:
            raise ValueError(f"row must be >= {FILE_LEVEL_ROW}, got {self.row}")
        if not self.timestamp:
            object.__setattr__(self, "timestamp", _utc_now_iso())

    @staticmethod
    def create(
        kind: ErrorKind,
        row: int,
        message: str,
        *,
        column: int | None = None,
        expected: str | None = None,
        actual: str | None = None,
        field_name: str | None = None,
        context: str | None = None,
    ) -> ErrorEntry:
        """Create a new ErrorEntry stamped with the current UTC time."""
        return ErrorEntry(
            kind=kind,
            row=row,
            message=message,
            column=column,
            expected=expected,
            actual=actual,
            field_name=field_name,
            context=context,
            timestamp=_utc_now_iso(),
        )

    @property
    def location(self) -> str:
        if self.column is not None:
            return f"Row {self.row}, Column {self.column}"
        return f"Row {self.row}"

    def __str__(self) -> str:
        return f"[{self.kind.label}] {self.location}: {self.message}"

    def to_json_line(self) -> str:
        """Serialize to one JSON Lines record (fixed key set)."""
        payload = {
            "timestamp": self.timestamp,
            "kind": self.kind.value,
            "row": self.row,
            "column": self.column,
            "message": self.message,
            "expected": self.expected,
            "actual": self.actual,
            "field_name": self.field_name,
            "context": self.context,
        }
        return json.dumps(payload, ensure_ascii=False)
