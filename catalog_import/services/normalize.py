from __future__ import annotations

import re
from collections.abc import Sequence

"""Text normalization shared by the parsers and the record builder."""

__all__ = [
    "normalize_header",
    "parse_integer",
    "parse_number",
    "row_to_dict",
    "slugify",
]

_WHITESPACE_OR_HYPHEN = re.compile(r"[\s\-]+")
_NON_SLUG = re.compile(r"[^a-z0-9]+")


def normalize_header(header: str, strip_chars: str = "") -> str:
    """Lower-case, whitespace/hyphen runs -> "_", then drop ``strip_chars``.

    >>> normalize_header("Body (HTML)", strip_chars="()")
    'body_html'
    >>> normalize_header("Is featured?", strip_chars="?()")
    'is_featured'
    """
    key = _WHITESPACE_OR_HYPHEN.sub("_", header.strip().lower())
    for ch in strip_chars:
        key = key.replace(ch, "")
    return key


def row_to_dict(keys: Sequence[str], values: Sequence[str]) -> dict[str, str]:
    """Map normalized header keys to trimmed cell values ("" for missing cells).

    A later duplicate header overwrites an earlier one.
    """
    data: dict[str, str] = {}
    for index, key in enumerate(keys):
        data[key] = values[index].strip() if index < len(values) else ""
    return data


def slugify(text: str) -> str:
    """Lower-case, non ``[a-z0-9]`` runs -> "-", edge hyphens stripped.

    >>> slugify("Ceramic Pot!!")
    'ceramic-pot'
    """
    return _NON_SLUG.sub("-", text.lower()).strip("-")


_LEADING_FLOAT = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_LEADING_INT = re.compile(r"^\s*[+-]?\d+")


def parse_number(value: str | None) -> float | None:
    """Parse the leading numeric prefix of a cell ("29.99 AED" -> 29.99).

    Returns None when the cell is empty or does not start with a number.
    """
    if not value:
        return None
    m = _LEADING_FLOAT.match(value)
    if m is None:
        return None
    return float(m.group(0))


def parse_integer(value: str | None) -> int | None:
    """Parse the leading integer prefix of a cell ("12.5" -> 12)."""
    if not value:
        return None
    m = _LEADING_INT.match(value)
    if m is None:
        return None
    return int(m.group(0))
