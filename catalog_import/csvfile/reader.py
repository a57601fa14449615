from __future__ import annotations

import io
from pathlib import Path

import pandas as pd

"""Delimited text reader.

Turns an uploaded CSV into raw rows (lists of string cells). The first row is
the header; every other row is interpreted through the same header-to-index
mapping by the parsers, so rows are normalized to the header width here:
short rows are padded with "", long rows are truncated.

Quoted fields may contain the delimiter (and newlines) verbatim, also when
the opening quote follows a space after the delimiter. Blank lines
are dropped. No NA conversion is applied: "NA", "null" etc. stay strings.
"""

__all__ = [
    "CSVReadError",
    "read_csv_file",
    "read_csv_text",
]

_BOM = "\ufeff"


class CSVReadError(Exception):
    """Raised when the text cannot be tokenized as CSV at all."""


def _read_frame(text: str, **kwargs) -> pd.DataFrame:
    return pd.read_csv(
        io.StringIO(text),
        header=None,
        dtype=object,
        keep_default_na=False,
        na_filter=False,
        skip_blank_lines=True,
        skipinitialspace=True,
        engine="python",
        **kwargs,
    )


def read_csv_text(text: str) -> list[list[str]]:
    """Split CSV text into rows of string cells (header row included)."""
    if text.startswith(_BOM):
        text = text[len(_BOM):]
    if not text.strip():
        return []

    try:
        # Header row fixes the width every data row is read with
        width = _read_frame(text, nrows=1).shape[1]
        df = _read_frame(
            text,
            names=list(range(width)),
            on_bad_lines=lambda bad_line: bad_line[:width],
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise CSVReadError(f"unable to parse CSV: {e}") from e

    rows: list[list[str]] = []
    for raw in df.itertuples(index=False, name=None):
        cells = [v if isinstance(v, str) else "" for v in raw]
        if not any(c.strip() for c in cells):
            continue
        rows.append(cells)
    return rows


def read_csv_file(path: Path) -> list[list[str]]:
    """Read a CSV file from disk (UTF-8, optional BOM)."""
    return read_csv_text(path.read_text(encoding="utf-8-sig"))
