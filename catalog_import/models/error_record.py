from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the JSON Lines error log.

Row-level persistence failures are recorded with the 1-based position of the
product in the parsed sequence; file-level failures use ``row=-1`` because
no single product can be blamed.

The record adheres to the contract in
catalog_import/contracts/error_log_schema.json (no extra keys).
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: CSV filename being imported
        row: 1-based product position. Use -1 for file-level errors
        product: Product name ("" for file-level errors)
        error_type: Error classification in UPPER_SNAKE_CASE format
        db_message: Database error message or description
    """
    timestamp: str  # ISO8601 UTC
    file: str
    row: int
    product: str
    error_type: str  # UPPER_SNAKE
    db_message: str

    @staticmethod
    def create(file: str, row: int, product: str, error_type: str, db_message: str) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            row=row,
            product=product,
            error_type=error_type,
            db_message=db_message,
        )

    def to_json_line(self) -> str:
        """Serialize to one JSON Lines entry (contract keys only)."""
        return json.dumps(asdict(self), ensure_ascii=False)
