from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

"""Plain CSV line reading and splitting.

Deliberately simple: comma separated, one record per physical line, no support
for quoted separators or embedded newlines. Cells are trimmed and surrounding
double quotes stripped; header cells are trimmed only.
"""

__all__ = [
    "SEPARATOR",
    "QUOTE_CHAR",
    "CsvPreview",
    "read_lines",
    "parse_header",
    "parse_cells",
    "missing_headers",
    "zip_row",
    "preview_file",
]

SEPARATOR = ","
QUOTE_CHAR = '"'
ENCODING = "utf-8-sig"  # BOM 付き UTF-8 も許容


@dataclass
class CsvPreview:
    path: Path
    columns: list[str]
    rows: list[dict[str, str]]  # 先頭数行 (列名→値)
    total_lines: int


def read_lines(path: Path) -> list[str]:
    """Read all lines of a text file (line terminators removed)."""
    return Path(path).read_text(encoding=ENCODING).splitlines()


def parse_header(header_line: str) -> list[str]:
    return [h.strip() for h in header_line.split(SEPARATOR)]


def parse_cells(data_line: str) -> list[str]:
    return [cell.strip().strip(QUOTE_CHAR) for cell in data_line.split(SEPARATOR)]


def missing_headers(headers: Iterable[str], expected: Iterable[str]) -> list[str]:
    """Return expected headers absent from ``headers`` (case-insensitive, order kept)."""
    present = {h.lower() for h in headers}
    return [e for e in expected if e.lower() not in present]


def zip_row(headers: list[str], cells: list[str]) -> dict[str, str]:
    """Map header -> cell positionally; the shorter side wins."""
    return dict(zip(headers, cells, strict=False))


def preview_file(path: Path, max_rows: int = 3) -> CsvPreview:
    """Return header plus the first ``max_rows`` non-blank data rows."""
    lines = read_lines(path)
    if not lines:
        return CsvPreview(path=Path(path), columns=[], rows=[], total_lines=0)
    columns = parse_header(lines[0])
    rows: list[dict[str, str]] = []
    for line in lines[1:]:
        if len(rows) >= max_rows:
            break
        if not line.strip():
            continue
        rows.append(zip_row(columns, parse_cells(line)))
    return CsvPreview(path=Path(path), columns=columns, rows=rows, total_lines=len(lines))
