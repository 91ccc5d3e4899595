from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .customer_record import CustomerRecord

"""Processing result models for a multi-file parse run.

FileStat tracks one configured source; ProcessingResult aggregates the run
and feeds the SUMMARY line.
"""

__all__ = [
    "FileStatus",
    "FileStat",
    "ProcessingResult",
]


class FileStatus(Enum):
    """Outcome of parsing one source file.

    - SUCCESS: records produced, no errors recorded
    - PARTIAL: records produced, some rows rejected
    - FAILED: file rejected outright or no row accepted
    """
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"

    @staticmethod
    def classify(records: int, errors: int) -> FileStatus:
        if errors == 0 and records > 0:
            return FileStatus.SUCCESS
        if records > 0:
            return FileStatus.PARTIAL
        if errors == 0:
            # データ行がすべて空行 (拒否行なし)
            return FileStatus.SUCCESS
        return FileStatus.FAILED


@dataclass(frozen=True)
class FileStat:
    """Per-file processing statistics."""
    file_name: str  # ファイル名
    format_tag: str  # TypeA / TypeB / TypeC
    status: FileStatus
    records: int  # 採用レコード数
    errors: int  # このファイルで記録されたエラー数
    elapsed_seconds: float
    structure_valid: bool = True


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results and summary output for one run."""
    success_files: int
    partial_files: int
    failed_files: int
    total_records: int
    total_errors: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    throughput_rows_per_sec: float  # total_records / elapsed
    file_stats: list[FileStat] = field(default_factory=list)
    records: dict[str, list[CustomerRecord]] = field(default_factory=dict)

    @property
    def total_files(self) -> int:
        return self.success_files + self.partial_files + self.failed_files
