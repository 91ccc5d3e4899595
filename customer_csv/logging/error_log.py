from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import ErrorEntry, ErrorKind
from ..models.validation_outcome import ValidationOutcome

"""Error sink: structured collection of parse errors.

- Entries accumulate in insertion order until clear()
- Blank messages are dropped, never stored
- export_json_lines() appends every entry to a JSON Lines file
  (`logs/errors-YYYYMMDD-HHMMSS.log`, UTC) without clearing the sink

Not thread/task safe: share one instance between parses only when they run
one after another.
"""

__all__ = [
    "ErrorEntry",
    "ErrorKind",
    "ErrorSink",
    "NO_ERRORS",
    "default_log_path",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"

NO_ERRORS = "No errors recorded."
REPORT_TITLE = "CSV Parsing Error Report - {stamp} UTC"
REPORT_STAMP_FMT = "%Y-%m-%d %H:%M:%S"


def default_log_path(logs_dir: Path = LOGS_DIR) -> Path:
    """Return `<logs_dir>/errors-YYYYMMDD-HHMMSS.log` for the current UTC time."""
    stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
    return logs_dir / f"errors-{stamp}.log"


def _blank(message: str | None) -> bool:
    return message is None or not message.strip()


class ErrorSink:
    """In-memory store of ErrorEntry objects with summary and report helpers."""

    def __init__(self) -> None:
        self._entries: list[ErrorEntry] = []

    # ------------------------------------------------------------------
    # recording
    # ------------------------------------------------------------------
    def record_validation(self, outcome: ValidationOutcome) -> None:
        """Expand every message of ``outcome`` into one validation entry."""
        if outcome is None:
            raise TypeError("outcome must not be None")
        for message in outcome.errors:
            if _blank(message):
                continue
            self._entries.append(
                ErrorEntry.create(
                    ErrorKind.VALIDATION,
                    outcome.row_number,
                    message,
                    column=outcome.column_number,
                )
            )

    def record_parsing(
        self,
        row: int,
        column: int | None,
        message: str,
        expected: str | None = None,
        actual: str | None = None,
    ) -> None:
        if _blank(message):
            return
        self._entries.append(
            ErrorEntry.create(
                ErrorKind.PARSING, row, message, column=column, expected=expected, actual=actual
            )
        )

    def record_exception(self, row: int, error: BaseException, context: str) -> None:
        if error is None:
            raise TypeError("error must not be None")
        self._entries.append(
            ErrorEntry.create(ErrorKind.EXCEPTION, row, f"{context}: {error}", context=context)
        )

    def record_transformation(self, row: int, field_name: str, actual_value: str | None, message: str) -> None:
        if _blank(message):
            return
        self._entries.append(
            ErrorEntry.create(
                ErrorKind.TRANSFORMATION, row, message, field_name=field_name, actual=actual_value
            )
        )

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------
    def error_count(self) -> int:
        return len(self._entries)

    def has_errors(self) -> bool:
        return bool(self._entries)

    def all_errors(self) -> list[ErrorEntry]:
        return list(self._entries)

    def errors_for_row(self, row: int) -> list[ErrorEntry]:
        return [e for e in self._entries if e.row == row]

    def summary(self) -> dict[ErrorKind, int]:
        """Count entries per kind (first-seen kind order)."""
        counts: dict[ErrorKind, int] = {}
        for entry in self._entries:
            counts[entry.kind] = counts.get(entry.kind, 0) + 1
        return counts

    def errors_by_row(self) -> dict[int, list[ErrorEntry]]:
        grouped: dict[int, list[ErrorEntry]] = {}
        for entry in self._entries:
            grouped.setdefault(entry.row, []).append(entry)
        return grouped

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._entries)

    # ------------------------------------------------------------------
    # output
    # ------------------------------------------------------------------
    def report(self) -> str:
        """Render a human readable report grouped by error kind."""
        if not self._entries:
            return NO_ERRORS

        grouped: dict[ErrorKind, list[ErrorEntry]] = {}
        for entry in self._entries:
            grouped.setdefault(entry.kind, []).append(entry)

        stamp = datetime.now(UTC).strftime(REPORT_STAMP_FMT)
        lines = [
            REPORT_TITLE.format(stamp=stamp),
            f"Total Errors: {len(self._entries)}",
            "",
        ]
        for kind, entries in grouped.items():
            lines.append(f"{kind.label} Errors ({len(entries)}):")
            lines.extend(f"  {entry}" for entry in entries)
            lines.append("")
        return "\n".join(lines)

    def export_json_lines(self, path: Path | None = None) -> Path:
        """Append all entries to ``path`` (default: timestamped file in ./logs)."""
        if path is None:
            path = default_log_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as fh:
            for entry in self._entries:
                fh.write(entry.to_json_line() + "\n")
        return path

    def clear(self) -> None:
        self._entries.clear()
