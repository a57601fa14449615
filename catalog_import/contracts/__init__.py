"""JSON schema contracts shipped with the package."""

from pathlib import Path

CONTRACTS_DIR = Path(__file__).parent
CONFIG_SCHEMA_PATH = CONTRACTS_DIR / "config_schema.json"
ERROR_LOG_SCHEMA_PATH = CONTRACTS_DIR / "error_log_schema.json"
