from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..csvfile.reader import CSVReadError
from ..db.product_store import ProductStore
from ..logging.error_log import ErrorLogBuffer
from ..models.config_models import ImportConfig
from ..models.import_result import ImportResult
from ..models.source_format import SourceFormat
from .importer import ProgressCallback, import_products
from .parsers import ParsedCatalog, parse_products
from .record_builder import build_product_records

"""End-to-end import of one CSV file.

raw text -> detect -> parse -> build/validate -> persist loop -> result.
Each stage runs to completion before the next one starts.
"""

logger = logging.getLogger(__name__)

NO_PRODUCTS_NOTICE = "no valid products found in CSV"


class ProcessingError(Exception):
    """Fatal error that prevents the run from starting."""


@dataclass(frozen=True)
class ImportRun:
    source_format: SourceFormat
    result: ImportResult
    error_log_path: Path | None = None


def load_catalog(csv_path: Path, source_format: SourceFormat | None = None) -> ParsedCatalog:
    """Read and parse a CSV file without touching the product store.

    Raises:
        ProcessingError: If the file is missing, unreadable or not CSV at all
    """
    if not csv_path.exists():
        raise ProcessingError(f"file not found: {csv_path}")
    if not csv_path.is_file():
        raise ProcessingError(f"path is not a file: {csv_path}")
    try:
        text = csv_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise ProcessingError(f"error reading {csv_path}: {e}") from e
    try:
        return parse_products(text, source_format)
    except CSVReadError as e:
        raise ProcessingError(f"{csv_path.name}: {e}") from e


def run_import(
    csv_path: Path,
    config: ImportConfig,
    store: ProductStore,
    *,
    source_format: SourceFormat | None = None,
    error_log: ErrorLogBuffer | None = None,
    progress_callback: ProgressCallback | None = None,
) -> ImportRun:
    """Import every product of ``csv_path`` into ``store``.

    An empty file, or one without any usable row, is not an error: the
    notice is logged and an empty result is returned.
    """
    catalog = load_catalog(csv_path, source_format)
    logger.info(
        "file=%s source=%s products=%d", csv_path.name, catalog.source_format.value, len(catalog.records)
    )

    if not catalog.records:
        logger.warning(NO_PRODUCTS_NOTICE)
        return ImportRun(
            source_format=catalog.source_format,
            result=ImportResult(total=0, success=0, failed=0, errors=[]),
        )

    records = build_product_records(catalog.records, config.defaults)
    if error_log is None:
        error_log = ErrorLogBuffer()
    result = import_products(
        records,
        store,
        source_file=csv_path.name,
        error_log=error_log,
        progress_callback=progress_callback,
    )

    if result.success > 0:
        logger.info("imported %d products successfully", result.success)
    if result.failed > 0:
        logger.error("failed to import %d products", result.failed)

    log_path = None
    try:
        log_path = error_log.flush()
    except OSError as e:
        # The per-row errors are still in the result; only the file copy is lost
        logger.warning("could not write error log: %s", e)
    if log_path is not None:
        logger.info("error log: %s", log_path)

    return ImportRun(source_format=catalog.source_format, result=result, error_log_path=log_path)

