from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display service with tqdm (TTY only).

The bar advances once per attempted product. In non-TTY environments (CI,
piped output) no bar is created, so no ANSI control sequences leak into logs.
The percentage is tracked either way so callers can report it themselves.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """True if stdout is a TTY and a progress bar should be displayed."""
    return sys.stdout.isatty()


class ProgressTracker:
    """Per-product progress tracker backed by a single tqdm bar."""

    def __init__(self, total: int, *, description: str = "Importing products") -> None:
        self.total = total
        self.description = description
        self.completed = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total,
                desc=description,
                unit="product",
                disable=False,
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    @property
    def percent(self) -> int:
        """Whole-number percentage of products attempted so far."""
        if self.total <= 0:
            return 100
        return round(self.completed / self.total * 100)

    def advance(self, *, success: int, failed: int) -> int:
        """Mark one more product as attempted and return the new percentage."""
        self.completed += 1
        if self.enabled and self.pbar is not None:
            self.pbar.update(1)
            self.pbar.set_postfix(success=success, failed=failed)
        return self.percent

    def close(self) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
