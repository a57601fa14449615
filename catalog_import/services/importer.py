from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from ..db.product_store import ProductStore, StoreError
from ..logging.error_log import ErrorLogBuffer
from ..models.import_result import ImportResult, ImportResultAccumulator
from ..models.product_record import ValidatedProductRecord
from .progress import ProgressTracker

"""Importer driver.

Attempts to persist every validated record, one at a time, in order. A
failing row is counted, described as "{name}: {reason}" in the result and
recorded in the error log; the loop then moves on. There is no retry, no
abort and no rollback of earlier successes. A store that is down entirely
shows up as one failure per row.
"""

__all__ = [
    "UNKNOWN_ERROR",
    "import_products",
]

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "Unknown error"

ProgressCallback = Callable[[int], None]


def import_products(
    records: Sequence[ValidatedProductRecord],
    store: ProductStore,
    *,
    source_file: str = "",
    error_log: ErrorLogBuffer | None = None,
    progress_callback: ProgressCallback | None = None,
) -> ImportResult:
    """Persist ``records`` through ``store`` and return the aggregate result.

    Args:
        records: Persistence-ready products, in import order
        store: Product store whose ``create`` persists one row
        source_file: CSV name used in error log records
        error_log: Optional JSON Lines buffer receiving one record per failure
        progress_callback: Called with the completed percentage after each row
    """
    acc = ImportResultAccumulator(total=len(records))

    with ProgressTracker(len(records), description="Importing products") as progress:
        for position, record in enumerate(records, start=1):
            error_type: str | None = None
            reason = ""
            try:
                store.create(record.to_row())
            except StoreError as e:
                error_type = e.error_type
                reason = str(e)
            except Exception as e:  # any other store failure is still per-row
                error_type = "UNEXPECTED_ERROR"
                reason = str(e)

            if error_type is None:
                acc.add_success()
                logger.debug("row=%d imported slug=%s", position, record.slug)
            else:
                reason = reason or UNKNOWN_ERROR
                acc.add_failure(record.name, reason)
                logger.warning("row=%d product=%r failed: %s", position, record.name, reason)
                if error_log is not None:
                    error_log.record_product_failure(
                        source_file, position, record.name, error_type, reason
                    )

            percent = progress.advance(success=acc.success, failed=acc.failed)
            if progress_callback is not None:
                progress_callback(percent)

    return acc.build()
