from __future__ import annotations

import json
from pathlib import Path

import pytest

from customer_csv.logging.error_log import ErrorSink
from customer_csv.models.validation_outcome import ValidationOutcome

"""Error log JSON Lines schema contract."""

try:
    import jsonschema
except ImportError:  # pragma: no cover
    jsonschema = None

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "customer_csv" / "contracts" / "error_log_schema.json"


def _schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


@pytest.mark.skipif(jsonschema is None, reason="jsonschema library not installed")
def test_error_log_schema_valid_example():
    record = {
        "timestamp": "2025-09-26T10:12:33.123456Z",
        "kind": "validation",
        "row": 2,
        "column": None,
        "message": "Full Name must contain at least first and last name (Row 2)",
        "expected": None,
        "actual": None,
        "field_name": None,
        "context": None,
    }
    jsonschema.validate(record, _schema())


@pytest.mark.skipif(jsonschema is None, reason="jsonschema library not installed")
def test_error_log_schema_rejects_extra_key():
    record = {
        "timestamp": "2025-09-26T10:12:33Z",
        "kind": "parsing",
        "row": 0,
        "column": None,
        "message": "File structure is not compatible with TypeA parser",
        "expected": None,
        "actual": None,
        "field_name": None,
        "context": None,
        "file": "a.csv",
    }
    with pytest.raises(jsonschema.exceptions.ValidationError):
        jsonschema.validate(record, _schema())


@pytest.mark.skipif(jsonschema is None, reason="jsonschema library not installed")
@pytest.mark.parametrize("key,value", [("row", -1), ("kind", "warning"), ("message", ""), ("column", 0)])
def test_error_log_schema_rejects_bad_values(key, value):
    record = {
        "timestamp": "2025-09-26T10:12:33Z",
        "kind": "exception",
        "row": 3,
        "column": None,
        "message": "Error parsing data row 3: boom",
        "expected": None,
        "actual": None,
        "field_name": None,
        "context": "Error parsing data row 3",
    }
    record[key] = value
    with pytest.raises(jsonschema.exceptions.ValidationError):
        jsonschema.validate(record, _schema())


@pytest.mark.skipif(jsonschema is None, reason="jsonschema library not installed")
def test_every_exported_entry_matches_schema(tmp_path: Path):
    sink = ErrorSink()
    outcome = ValidationOutcome(4, 2)
    outcome.add_error("Invalid email format: x")
    sink.record_validation(outcome)
    sink.record_parsing(0, None, "CSV file must contain at least a header row and one data row")
    sink.record_transformation(5, "Salary", "12,3,4", "cannot normalize salary")
    sink.record_exception(6, RuntimeError("boom"), "Error parsing data row 6")

    path = sink.export_json_lines(tmp_path / "errors.log")
    schema = _schema()
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 4
    for line in lines:
        jsonschema.validate(json.loads(line), schema)
