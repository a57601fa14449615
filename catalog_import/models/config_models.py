from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the product CSV importer.

Built by catalog_import.config.loader from config/import.yml after schema
validation; everything downstream only sees these typed values.
"""


@dataclass(frozen=True)
class DatabaseConfig:
    """Database connection configuration.

    Used as fallback when environment variables are not set.
    Environment variables take precedence over these values.
    """
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str | None = None
    dsn: str | None = None


@dataclass(frozen=True)
class ImportDefaults:
    """Values the record builder falls back to when a cell is missing or unusable."""
    currency: str = "AED"
    category: str = "general"
    stock_quantity: int = 10
    product_type: str = "simple"


@dataclass(frozen=True)
class ImportConfig:
    """Root configuration object for an import run."""
    table: str = "products"  # Target table of the product store
    defaults: ImportDefaults = field(default_factory=ImportDefaults)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
