from __future__ import annotations

from collections.abc import Iterable, Mapping

import pandas as pd

from ..models.customer_record import CustomerRecord
from ..models.error_record import ErrorKind
from ..models.processing_result import ProcessingResult

"""Summary rendering for a parsing run.

SUMMARY line format:
SUMMARY files={total}/{total} success={success} partial={partial} failed={failed}
records={records} errors={errors} elapsed_sec={elapsed} throughput_rps={throughput}
"""

__all__ = [
    "RECORD_COLUMNS",
    "render_summary_line",
    "render_error_breakdown",
    "records_to_frame",
]

RECORD_COLUMNS = ["identifier", "full_name", "email", "secondary_email", "phone", "salary", "phone_source"]


def _format_number(value: float) -> str:
    # 整数値は小数点なし, 極小値は指数表記を避ける
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_summary_line(result: ProcessingResult) -> str:
    """Render the one-line run summary.

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> r = ProcessingResult(
        ...     success_files=2, partial_files=1, failed_files=0, total_records=10,
        ...     total_errors=3, start_time=t, end_time=t, elapsed_seconds=2.0,
        ...     throughput_rows_per_sec=5.0,
        ... )
        >>> render_summary_line(r)
        'SUMMARY files=3/3 success=2 partial=1 failed=0 records=10 errors=3 elapsed_sec=2 throughput_rps=5'
    """
    total = result.total_files
    return (
        f"SUMMARY files={total}/{total} "
        f"success={result.success_files} "
        f"partial={result.partial_files} "
        f"failed={result.failed_files} "
        f"records={result.total_records} "
        f"errors={result.total_errors} "
        f"elapsed_sec={_format_number(result.elapsed_seconds)} "
        f"throughput_rps={_format_number(result.throughput_rows_per_sec)}"
    )


def render_error_breakdown(summary: Mapping[ErrorKind, int]) -> list[str]:
    """``Validation: 3`` style lines, one per kind with at least one error."""
    return [f"{kind.label}: {count}" for kind, count in summary.items() if count > 0]


def records_to_frame(records: Iterable[CustomerRecord]) -> pd.DataFrame:
    """Tabulate records for display; salary kept as its decimal string."""
    rows = []
    for record in records:
        data = record.to_dict()
        data["phone_source"] = record.metadata.get("PhoneSource")
        rows.append({column: data.get(column) for column in RECORD_COLUMNS})
    return pd.DataFrame(rows, columns=RECORD_COLUMNS)
