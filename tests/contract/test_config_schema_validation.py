from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

try:
    import jsonschema  # type: ignore
    from jsonschema.exceptions import ValidationError  # type: ignore
except ImportError:  # pragma: no cover
    jsonschema = None  # type: ignore
    ValidationError = Exception  # type: ignore

"""Config schema contract test."""

ROOT = Path(__file__).resolve().parents[2]
SCHEMA_PATH = ROOT / "customer_csv" / "contracts" / "config_schema.json"


def _schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


@pytest.mark.skipif(jsonschema is None, reason="jsonschema library not installed")
def test_config_schema_valid_example():
    config = {
        "source_directory": "./samples",
        "sources": [
            {"file": "a.csv", "format": "TypeA"},
            {"file": "b.csv", "format": "TypeB", "label": "employees"},
        ],
        "enrichment": {"enabled": False, "delay_ms": 0, "phone_prefix": "+1-555-"},
        "error_log_directory": "./logs",
    }
    jsonschema.validate(config, _schema())


@pytest.mark.skipif(jsonschema is None, reason="jsonschema library not installed")
def test_shipped_config_is_valid():
    config = yaml.safe_load((ROOT / "config" / "sources.yml").read_text(encoding="utf-8"))
    jsonschema.validate(config, _schema())
    for source in config["sources"]:
        assert (ROOT / config["source_directory"] / source["file"]).exists()


@pytest.mark.skipif(jsonschema is None, reason="jsonschema library not installed")
@pytest.mark.parametrize(
    "config",
    [
        {"sources": []},
        {"source_directory": "./x"},
        {"source_directory": "", "sources": []},
        {"source_directory": "./x", "sources": [{"file": "a.csv"}]},
        {"source_directory": "./x", "sources": [{"file": "a.csv", "format": "TypeA", "sheet": "x"}]},
        {"source_directory": "./x", "sources": [], "enrichment": {"delay_ms": "100"}},
        {"source_directory": "./x", "sources": [], "enrichment": {"retries": 3}},
        {"source_directory": "./x", "sources": [], "database": {}},
    ],
)
def test_config_schema_rejects(config):
    with pytest.raises(ValidationError):
        jsonschema.validate(config, _schema())
