from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path

from ..csvfile.reader import missing_headers, parse_cells, parse_header, read_lines, zip_row
from ..logging.error_log import ErrorSink
from ..models.customer_record import CustomerRecord
from ..models.error_record import FILE_LEVEL_ROW
from ..models.validation_outcome import ValidationOutcome
from ..transformation.customer_transformer import CustomerTransformer
from ..validation.customer_validator import CustomerValidator

"""Shared CSV parsing pipeline.

One generic parser is configured per layout by a small FormatSpec value
(tag, expected headers, optional extra row check) instead of one subclass
per layout.

Per data row: split -> cell + row validation -> build record -> enrich ->
record validation. A rejected or failing row is recorded in the ErrorSink
and skipped; it never aborts the file.
"""

__all__ = [
    "FormatSpec",
    "RowCheck",
    "CsvFormatParser",
    "MIN_FILE_LINES",
]

logger = logging.getLogger(__name__)

MIN_FILE_LINES = 2  # header + at least one data row
HEADER_ROW_INDEX = 0
DATA_ROW_START_INDEX = 1

MSG_STRUCTURE_INCOMPATIBLE = "File structure is not compatible with {tag} parser"
MSG_FILE_TOO_SHORT = "CSV file must contain at least a header row and one data row"
MSG_DATA_ROW = "Error parsing data row {row}"
MSG_COLUMN_VALIDATION = "Column '{column}': {errors}"

RowCheck = Callable[[Mapping[str, str], int, ValidationOutcome], None]


@dataclass(frozen=True)
class FormatSpec:
    """Static description of one CSV layout.

    Attributes:
        tag: Format name used by the factory (e.g. "TypeA")
        expected_headers: Columns that must all be present (order/case independent)
        row_check: Layout-specific rule adding errors to the row outcome
        description: Human readable layout summary
    """
    tag: str
    expected_headers: tuple[str, ...]
    row_check: RowCheck | None = None
    description: str = ""


class CsvFormatParser:
    """Parses one CSV layout into CustomerRecords, recording errors in ``sink``."""

    def __init__(
        self,
        spec: FormatSpec,
        validator: CustomerValidator,
        transformer: CustomerTransformer,
        sink: ErrorSink,
    ) -> None:
        self.spec = spec
        self.validator = validator
        self.transformer = transformer
        self.sink = sink
        self.structure_valid: bool | None = None  # parse() 実行後に確定

    @property
    def format_tag(self) -> str:
        return self.spec.tag

    @property
    def expected_headers(self) -> tuple[str, ...]:
        return self.spec.expected_headers

    # ------------------------------------------------------------------
    # structure
    # ------------------------------------------------------------------
    def validate_structure(self, path: Path) -> bool:
        """Return True when the header row holds every expected column.

        Extra columns are tolerated. An unreadable or empty file is incompatible.
        """
        return self._read_compatible(path) is not None

    def _read_compatible(self, path: Path) -> list[str] | None:
        """Return the file's lines when its header fits this layout, else None."""
        try:
            lines = read_lines(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("structure check: cannot read %s: %s", path, e)
            return None
        if not lines or not self.headers_match(parse_header(lines[HEADER_ROW_INDEX])):
            return None
        return lines

    def headers_match(self, headers: list[str]) -> bool:
        missing = missing_headers(headers, self.spec.expected_headers)
        if missing:
            logger.debug("format=%s missing headers=%s", self.spec.tag, missing)
        return not missing

    # ------------------------------------------------------------------
    # pipeline
    # ------------------------------------------------------------------
    async def parse(self, path: Path) -> list[CustomerRecord]:
        """Parse ``path`` and return accepted records in input order.

        A file failing the structure check (or too short) yields an empty list
        and a single row-0 parsing error; no data row is processed. The file is
        read once; ``structure_valid`` keeps the outcome of the check.
        """
        path = Path(path)
        lines = self._read_compatible(path)
        self.structure_valid = lines is not None
        if lines is None:
            self.sink.record_parsing(
                FILE_LEVEL_ROW, None, MSG_STRUCTURE_INCOMPATIBLE.format(tag=self.spec.tag)
            )
            return []

        if len(lines) < MIN_FILE_LINES:
            self.sink.record_parsing(FILE_LEVEL_ROW, None, MSG_FILE_TOO_SHORT)
            return []

        headers = parse_header(lines[HEADER_ROW_INDEX])
        records: list[CustomerRecord] = []
        for index in range(DATA_ROW_START_INDEX, len(lines)):
            line = lines[index]
            row_number = index + 1  # 物理行番号 (ヘッダ = 1 行目)
            try:
                record = await self.parse_row(line, headers, row_number)
            except Exception as e:
                logger.debug("format=%s row=%d failed: %s", self.spec.tag, row_number, e)
                self.sink.record_exception(row_number, e, MSG_DATA_ROW.format(row=row_number))
                continue
            if record is not None:
                records.append(record)

        logger.debug(
            "format=%s file=%s rows=%d accepted=%d",
            self.spec.tag,
            path.name,
            len(lines) - DATA_ROW_START_INDEX,
            len(records),
        )
        return records

    async def parse_row(self, line: str, headers: list[str], row_number: int) -> CustomerRecord | None:
        """Run one data line through the pipeline; None when the row is rejected."""
        row = zip_row(headers, parse_cells(line))

        outcome = self.validate_row_data(row, row_number)
        if not outcome.is_valid:
            self.sink.record_validation(outcome)
            return None

        record = self.transformer.build_record(row)
        record = await self.transformer.enrich(record)

        final = self.validator.validate_record(record, row_number)
        if not final.is_valid:
            self.sink.record_validation(final)
            return None
        return record

    def validate_row_data(self, row: Mapping[str, str], row_number: int) -> ValidationOutcome:
        """Cell rules for every present column, then row rules, then the layout check."""
        outcome = ValidationOutcome(row_number)
        for column_number, (column, value) in enumerate(row.items(), start=1):
            cell = self.validator.validate_cell(value, column, row_number, column_number)
            if not cell.is_valid:
                outcome.add_error(
                    MSG_COLUMN_VALIDATION.format(column=column, errors=", ".join(cell.errors))
                )

        outcome.merge(self.validator.validate_row(row, row_number))

        if self.spec.row_check is not None:
            self.spec.row_check(row, row_number, outcome)
        return outcome
