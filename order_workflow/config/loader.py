from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Workflow config loader.

Responsibilities:
- Load YAML config/workflow.yml
- Validate against config_schema.json (shipped next to this module)
- Apply defaults (timezone=UTC, output_directory=./exports, sheet names)
- Apply environment overrides (ORDER_WORKBOOK / ORDER_ENDPOINT_URL)

Environment values win over the YAML file so that a `.env` loaded by the CLI
can point the same config at a different workbook or endpoint.
"""

__all__ = [
    "ConfigError",
    "EndpointConfig",
    "TableNames",
    "WorkflowConfig",
    "load_config",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/workflow.yml")

ENV_WORKBOOK = "ORDER_WORKBOOK"
ENV_ENDPOINT_URL = "ORDER_ENDPOINT_URL"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class TableNames:
    """Sheet names of the four workflow tables."""
    requested: str = "Requested"
    raw_responses: str = "Raw Responses"
    approved: str = "Approved"
    ordered: str = "Ordered"


@dataclass(frozen=True)
class EndpointConfig:
    url: str
    timeout_seconds: float | None = None  # None -> httpx default


@dataclass(frozen=True)
class WorkflowConfig:
    workbook: str
    output_directory: str = "./exports"
    timezone: str = "UTC"
    tables: TableNames = field(default_factory=TableNames)
    endpoint: EndpointConfig | None = None


def _validate_config_schema(data: dict) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: If the schema file is missing or unreadable, or the
            config data fails validation (missing keys, wrong types, extra keys).
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


def _check_timezone(name: str) -> None:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"unknown timezone: {name}") from e


def load_config(path: Path, env: Mapping[str, str] | None = None) -> WorkflowConfig:
    if env is None:
        env = os.environ
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config validation failed: top level must be a mapping")

    _validate_config_schema(data)

    tz = data.get("timezone", "UTC")
    _check_timezone(tz)

    tables = TableNames(**data.get("tables", {}))

    endpoint_raw = data.get("endpoint")
    endpoint_url = env.get(ENV_ENDPOINT_URL) or (endpoint_raw or {}).get("url")
    endpoint = None
    if endpoint_url:
        endpoint = EndpointConfig(
            url=endpoint_url,
            timeout_seconds=(endpoint_raw or {}).get("timeout_seconds"),
        )

    return WorkflowConfig(
        workbook=env.get(ENV_WORKBOOK) or data["workbook"],
        output_directory=data.get("output_directory", "./exports"),
        timezone=tz,
        tables=tables,
        endpoint=endpoint,
    )
