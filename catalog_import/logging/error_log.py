from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import ErrorRecord

"""Per-run JSON Lines log of products that could not be imported.

One ``errors-YYYYMMDD-HHMMSS.log`` (UTC) per run under ``logs/``. The file
is only created once there is something to write, so a clean import leaves
no log behind.
"""

__all__ = [
    "ErrorLogBuffer",
    "FILE_LEVEL_ROW",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"

# row value for failures that concern the whole CSV file
FILE_LEVEL_ROW = -1


class ErrorLogBuffer:
    """Collects failed products for one CSV import and writes them on flush()."""

    def __init__(self, logs_dir: Path | None = None) -> None:
        self._logs_dir = logs_dir if logs_dir is not None else LOGS_DIR
        self._pending: list[ErrorRecord] = []
        self._path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._path = self._logs_dir / f"errors-{stamp}.log"
        return self._path

    def record_product_failure(
        self, source_file: str, position: int, product: str, error_type: str, reason: str
    ) -> ErrorRecord:
        """Log one product (1-based position in the parsed catalog) that the store rejected."""
        record = ErrorRecord.create(
            file=source_file, row=position, product=product, error_type=error_type, db_message=reason
        )
        self._pending.append(record)
        return record

    def record_file_failure(self, source_file: str, error_type: str, reason: str) -> ErrorRecord:
        """Log a failure that stopped the whole file, such as an unreachable database."""
        record = ErrorRecord.create(
            file=source_file, row=FILE_LEVEL_ROW, product="", error_type=error_type, db_message=reason
        )
        self._pending.append(record)
        return record

    def __len__(self) -> int:
        return len(self._pending)

    def flush(self) -> Path | None:
        """Append pending records to the run's log file; None when nothing was pending."""
        if not self._pending:
            return None
        path = self.file_path
        path.parent.mkdir(parents=True, exist_ok=True)
        lines = "".join(r.to_json_line() + "\n" for r in self._pending)
        with path.open("a", encoding="utf-8") as f:
            f.write(lines)
        self._pending.clear()
        return path
