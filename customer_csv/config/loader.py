from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader for the customer CSV parser.

Responsibilities:
- Load YAML config (default: config/sources.yml)
- Validate against contracts/config_schema.json
- Apply defaults (enrichment enabled, 100 ms delay, "+1-555-" prefix)
"""

__all__ = [
    "ConfigError",
    "SourceConfig",
    "EnrichmentConfig",
    "AppConfig",
    "DEFAULT_CONFIG_PATH",
    "load_config",
]

DEFAULT_CONFIG_PATH = Path("config/sources.yml")

# customer_csv/config/loader.py -> customer_csv/contracts
SCHEMA_PATH = Path(__file__).resolve().parent.parent / "contracts" / "config_schema.json"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class SourceConfig:
    """One CSV file to parse and the layout it is expected to follow."""
    file: str
    format: str
    label: str | None = None


@dataclass(frozen=True)
class EnrichmentConfig:
    enabled: bool = True
    delay_ms: int = 100
    phone_prefix: str = "+1-555-"

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000


@dataclass(frozen=True)
class AppConfig:
    source_directory: str
    sources: list[SourceConfig]
    enrichment: EnrichmentConfig = field(default_factory=EnrichmentConfig)
    error_log_directory: str | None = None  # 未指定なら ./logs

    def source_path(self, source: SourceConfig) -> Path:
        return Path(self.source_directory) / source.file


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or invalid, or the config
            data fails validation (missing required keys, wrong types,
            unknown keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    enrichment_raw = data.get("enrichment") or {}
    defaults = EnrichmentConfig()
    enrichment = EnrichmentConfig(
        enabled=enrichment_raw.get("enabled", defaults.enabled),
        delay_ms=enrichment_raw.get("delay_ms", defaults.delay_ms),
        phone_prefix=enrichment_raw.get("phone_prefix", defaults.phone_prefix),
    )
    sources = [
        SourceConfig(file=s["file"], format=s["format"], label=s.get("label"))
        for s in data["sources"]
    ]
    return AppConfig(
        source_directory=data["source_directory"],
        sources=sources,
        enrichment=enrichment,
        error_log_directory=data.get("error_log_directory"),
    )
