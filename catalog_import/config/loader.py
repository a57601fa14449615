from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..contracts import CONFIG_SCHEMA_PATH
from ..models.config_models import DatabaseConfig, ImportConfig, ImportDefaults

"""Config loader.

Responsibilities:
- Load YAML config (config/import.yml by default)
- Validate against contracts/config_schema.json (unknown keys rejected)
- Apply defaults for everything optional
"""

DEFAULT_CONFIG_PATH = Path("config/import.yml")
SCHEMA_PATH = CONFIG_SCHEMA_PATH


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or the
            config data fails schema validation.
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


def load_config(path: Path) -> ImportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    base = ImportDefaults()
    defaults_raw = data.get("defaults") or {}
    defaults = ImportDefaults(
        currency=data.get("currency", base.currency),
        category=defaults_raw.get("category", base.category),
        stock_quantity=defaults_raw.get("stock_quantity", base.stock_quantity),
        product_type=defaults_raw.get("product_type", base.product_type),
    )
    db_raw = data.get("database") or {}
    db = DatabaseConfig(
        host=db_raw.get("host"),
        port=db_raw.get("port"),
        user=db_raw.get("user"),
        password=db_raw.get("password"),
        database=db_raw.get("database"),
        dsn=db_raw.get("dsn"),
    )
    return ImportConfig(table=data["table"], defaults=defaults, database=db)
