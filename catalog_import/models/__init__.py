"""Domain models for the product CSV importer.

This package contains the dataclasses shared by the reader, the parsers,
the record builder and the import driver.
"""

from .config_models import DatabaseConfig, ImportConfig, ImportDefaults
from .error_record import ErrorRecord
from .import_result import ImportResult, ImportResultAccumulator
from .product_record import CanonicalProductRecord, ValidatedProductRecord
from .source_format import SourceFormat

__all__ = [
    # Configuration models
    "DatabaseConfig",
    "ImportConfig",
    "ImportDefaults",
    # Processing models
    "CanonicalProductRecord",
    "ErrorRecord",
    "ImportResult",
    "ImportResultAccumulator",
    "SourceFormat",
    "ValidatedProductRecord",
]
