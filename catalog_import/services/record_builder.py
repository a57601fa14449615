from __future__ import annotations

import re
from collections.abc import Iterable

from ..models.config_models import ImportDefaults
from ..models.product_record import CanonicalProductRecord, ValidatedProductRecord
from .normalize import parse_integer, parse_number, slugify

"""Record builder / validator: CanonicalProductRecord -> ValidatedProductRecord.

Never fails: every unusable cell is absorbed into a default.

Rules, in order:
1. price: leading number of the cell, 0 when unparseable
2. compare-at price: parsed when present
3. no compare price + discount strictly in (0, 100): derive price / (1 - d/100)
4. images: split on "|" or ",", trimmed, empties dropped
5. tags: split on ",", trimmed, empties dropped
6. category: split on "," or ">"; first piece (or the default category) is the
   primary category, second piece (or the record's subcategory) the subcategory
7. flags: case-insensitive truthy tokens {"true", "yes", "1", "on"}
8. is_on_sale: flag OR resolved compare price > price
9. slug: explicit slug, else slugify(name)
10. stock: leading integer of the cell, default when missing/unparseable
"""

__all__ = [
    "TRUTHY_TOKENS",
    "build_product_record",
    "build_product_records",
    "split_category",
    "to_bool",
]

TRUTHY_TOKENS = frozenset({"true", "yes", "1", "on"})

_IMAGE_SEPARATORS = re.compile(r"[|,]")
_CATEGORY_SEPARATORS = re.compile(r"[,>]")
_TAG_SEPARATOR = re.compile(",")


def to_bool(value: str | None) -> bool:
    if not value:
        return False
    return value.strip().lower() in TRUTHY_TOKENS


def _split_list(value: str | None, separators: re.Pattern[str]) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in separators.split(value) if part.strip()]


def split_category(
    category: str, subcategory: str | None, default_category: str = "general"
) -> tuple[str, str | None]:
    """Split an embedded hierarchy ("Plants > Mixed Plant") into (category, subcategory)."""
    parts = [part.strip() for part in _CATEGORY_SEPARATORS.split(category or "")]
    main = parts[0] if parts and parts[0] else default_category
    sub = parts[1] if len(parts) > 1 and parts[1] else None
    return main, sub or subcategory or None


def _resolve_compare_price(price: float, record: CanonicalProductRecord) -> float | None:
    compare = parse_number(record.compare_at_price)
    if compare:
        return compare
    discount = parse_number(record.discount_percentage)
    if discount is not None and 0 < discount < 100:
        return price / (1 - discount / 100)
    return compare


def build_product_record(
    record: CanonicalProductRecord, defaults: ImportDefaults | None = None
) -> ValidatedProductRecord:
    """Coerce one canonical record into its persistence-ready shape."""
    defaults = defaults or ImportDefaults()

    price = parse_number(record.price) or 0.0
    compare_price = _resolve_compare_price(price, record)
    category, subcategory = split_category(record.category, record.subcategory, defaults.category)

    stock = parse_integer(record.stock_quantity)
    if stock is None:
        stock = defaults.stock_quantity

    on_sale = to_bool(record.is_on_sale) or (compare_price is not None and compare_price > price)

    return ValidatedProductRecord(
        name=record.name,
        name_ar=record.name_ar or None,
        slug=record.slug or slugify(record.name),
        description=record.description or None,
        description_ar=record.description_ar or None,
        category=category,
        subcategory=subcategory,
        price=price,
        compare_at_price=compare_price,
        currency=defaults.currency,
        sku=record.sku or None,
        stock_quantity=stock,
        featured_image=record.featured_image or None,
        images=_split_list(record.images, _IMAGE_SEPARATORS),
        tags=_split_list(record.tags, _TAG_SEPARATOR),
        is_featured=to_bool(record.is_featured),
        is_on_sale=on_sale,
        is_new=to_bool(record.is_new),
        is_active=True,
        product_type=defaults.product_type,
    )


def build_product_records(
    records: Iterable[CanonicalProductRecord], defaults: ImportDefaults | None = None
) -> list[ValidatedProductRecord]:
    return [build_product_record(r, defaults) for r in records]
