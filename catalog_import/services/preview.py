from __future__ import annotations

from collections.abc import Sequence

from ..models.product_record import CanonicalProductRecord
from .normalize import parse_number

"""Pre-import preview of parsed products (shown by ``--inspect-data``)."""

__all__ = [
    "PREVIEW_LIMIT",
    "preview_discount",
    "render_preview",
]

PREVIEW_LIMIT = 10


def preview_discount(record: CanonicalProductRecord) -> float:
    """Discount percentage displayed next to a parsed product.

    With a compare-at price and a positive price this is the rounded
    markdown; otherwise the raw discount_percentage cell, else 0.
    """
    price = parse_number(record.price)
    compare = parse_number(record.compare_at_price)
    if record.compare_at_price and price is not None and price > 0:
        if not compare:
            return 0
        return round((1 - price / compare) * 100)
    if record.discount_percentage:
        return parse_number(record.discount_percentage) or 0
    return 0


def render_preview(
    records: Sequence[CanonicalProductRecord],
    currency: str = "AED",
    limit: int = PREVIEW_LIMIT,
    default_category: str = "general",
) -> list[str]:
    lines: list[str] = []
    for record in records[:limit]:
        discount = preview_discount(record)
        discount_str = f"{discount:g}% OFF" if discount > 0 else "-"
        lines.append(
            f"{record.name} | {record.category or default_category} | {currency} {record.price} | "
            f"{discount_str} | {record.sku or '-'}"
        )
    if len(records) > limit:
        lines.append(f"+{len(records) - limit} more products")
    return lines
