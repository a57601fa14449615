from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

"""Import result models.

The driver owns a single ImportResultAccumulator for the duration of one run,
mutates it once per attempted row, and freezes it into an ImportResult when
every row has been attempted. Results are never persisted or merged across runs.
"""

__all__ = [
    "ImportResult",
    "ImportResultAccumulator",
]


@dataclass(frozen=True)
class ImportResult:
    """Aggregate outcome of one import run."""
    total: int  # rows attempted
    success: int
    failed: int
    errors: list[str] = field(default_factory=list)  # "{name}: {reason}", in row order
    elapsed_seconds: float = 0.0

    @property
    def throughput_rows_per_sec(self) -> float:
        if self.elapsed_seconds <= 0:
            return 0.0
        return self.success / self.elapsed_seconds

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "success": self.success,
            "failed": self.failed,
            "errors": list(self.errors),
        }


class ImportResultAccumulator:
    """Mutable per-run counter that the driver updates after each row."""

    def __init__(self, total: int) -> None:
        self.total = total
        self.success = 0
        self.failed = 0
        self.errors: list[str] = []
        self._started = time.perf_counter()

    def add_success(self) -> None:
        self.success += 1

    def add_failure(self, name: str, reason: str) -> None:
        self.failed += 1
        self.errors.append(f"{name}: {reason}")

    def build(self) -> ImportResult:
        """Freeze the accumulated counts into an ImportResult."""
        return ImportResult(
            total=self.total,
            success=self.success,
            failed=self.failed,
            errors=list(self.errors),
            elapsed_seconds=time.perf_counter() - self._started,
        )
