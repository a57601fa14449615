from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from ..csvfile.reader import read_csv_text
from ..models.product_record import CanonicalProductRecord
from ..models.source_format import SourceFormat
from .detection import detect_source
from .normalize import normalize_header, parse_number, row_to_dict, slugify

"""Schema parsers: raw CSV rows -> CanonicalProductRecord list.

One parser per SourceFormat, all with the same signature
``(rows, header) -> list[CanonicalProductRecord]`` where ``rows`` are the
data rows (header excluded). Rows that lack the format's required
discriminator are dropped silently; they are not import failures.
"""

__all__ = [
    "ParsedCatalog",
    "STANDARD_HEADER_FIELDS",
    "parse_products",
    "parse_shopify",
    "parse_standard",
    "parse_woocommerce",
]

RawRow = Sequence[str]
Parser = Callable[[Sequence[RawRow], Sequence[str]], list[CanonicalProductRecord]]


# Standard schema: normalized header -> CanonicalProductRecord field.
# Unlisted headers are ignored.
STANDARD_HEADER_FIELDS: dict[str, str] = {
    "name": "name",
    "title": "name",
    "product_name": "name",
    "name_ar": "name_ar",
    "arabic_name": "name_ar",
    "slug": "slug",
    "handle": "slug",
    "description": "description",
    "body": "description",
    "body_html": "description",
    "body_(html)": "description",
    "description_ar": "description_ar",
    "arabic_description": "description_ar",
    "category": "category",
    "product_type": "category",
    "type": "category",
    "categories": "category",
    "subcategory": "subcategory",
    "vendor": "subcategory",
    "price": "price",
    "variant_price": "price",
    "regular_price": "price",
    "compare_at_price": "compare_at_price",
    "compare_price": "compare_at_price",
    "original_price": "compare_at_price",
    "variant_compare_at_price": "compare_at_price",
    "sku": "sku",
    "variant_sku": "sku",
    "_sku": "sku",
    "stock": "stock_quantity",
    "stock_quantity": "stock_quantity",
    "inventory_quantity": "stock_quantity",
    "variant_inventory_qty": "stock_quantity",
    "_stock": "stock_quantity",
    "featured_image": "featured_image",
    "image_src": "featured_image",
    "image": "featured_image",
    "image_url": "featured_image",
    "images": "featured_image",
    "gallery": "images",
    "additional_images": "images",
    "product_gallery": "images",
    "tags": "tags",
    "is_featured": "is_featured",
    "featured": "is_featured",
    "is_on_sale": "is_on_sale",
    "on_sale": "is_on_sale",
    "sale": "is_on_sale",
    "is_new": "is_new",
    "new": "is_new",
    "discount_percentage": "discount_percentage",
    "discount": "discount_percentage",
    "discount_percent": "discount_percentage",
    "weight": "weight",
    "weight_kg": "weight",
    "dimensions": "dimensions",
}

# Empty cells for these fields fall back instead of clearing the default.
_STANDARD_EMPTY_FALLBACKS = {
    "price": "0",
}

# featured_image has several sources; the first non-empty one wins.
_FIRST_WINS_FIELDS = frozenset({"featured_image"})


def parse_standard(rows: Sequence[RawRow], header: Sequence[str]) -> list[CanonicalProductRecord]:
    """One row = one product; headers are resolved through STANDARD_HEADER_FIELDS.

    Fields are last-write-wins in header order, except featured_image.
    Rows without a name are dropped.
    """
    fields = [STANDARD_HEADER_FIELDS.get(normalize_header(h)) for h in header]
    products: list[CanonicalProductRecord] = []

    for values in rows:
        product = CanonicalProductRecord()
        for index, field_name in enumerate(fields):
            if field_name is None:
                continue
            value = values[index].strip() if index < len(values) else ""
            if field_name in _FIRST_WINS_FIELDS:
                if not getattr(product, field_name):
                    setattr(product, field_name, value)
                continue
            if not value and field_name in _STANDARD_EMPTY_FALLBACKS:
                value = _STANDARD_EMPTY_FALLBACKS[field_name]
            setattr(product, field_name, value)

        if product.name:
            products.append(product)

    return products


def _is_greater(left: str | None, right: str | None) -> bool:
    lhs = parse_number(left)
    rhs = parse_number(right or "0")
    return lhs is not None and rhs is not None and lhs > rhs


_GALLERY_SEPARATORS = re.compile(r"[|,]")


def _gallery(images: str | None, featured: str | None) -> list[str]:
    """Split a gallery cell into unique image URLs, excluding the featured image."""
    gallery: list[str] = []
    for img in _GALLERY_SEPARATORS.split(images or ""):
        img = img.strip()
        if img and img != featured and img not in gallery:
            gallery.append(img)
    return gallery


def parse_shopify(rows: Sequence[RawRow], header: Sequence[str]) -> list[CanonicalProductRecord]:
    """Collapse Shopify's one-row-per-variant/image export into one record per Handle.

    The first row seen for a handle seeds the record; later rows only
    contribute their ``Image Src`` to the gallery when it is neither the
    featured image nor already in the gallery. Rows without a handle are dropped.
    """
    keys = [normalize_header(h, strip_chars="()") for h in header]
    by_handle: dict[str, CanonicalProductRecord] = {}

    for values in rows:
        data = row_to_dict(keys, values)
        handle = data.get("handle", "")
        if not handle:
            continue

        existing = by_handle.get(handle)
        if existing is None:
            price = data.get("variant_price") or "0"
            featured = data.get("image_src") or None
            seed_gallery = _gallery(data.get("gallery_image_urls"), featured)
            compare = data.get("variant_compare_at_price", "")
            by_handle[handle] = CanonicalProductRecord(
                name=data.get("title", ""),
                slug=handle,
                description=data.get("body_html") or data.get("body") or None,
                category=data.get("type") or data.get("product_category") or "",
                subcategory=data.get("vendor") or None,
                price=price,
                compare_at_price=compare or None,
                sku=data.get("variant_sku") or None,
                stock_quantity=data.get("variant_inventory_qty") or "10",
                featured_image=featured,
                images="|".join(seed_gallery) or None,
                tags=data.get("tags") or None,
                is_featured="true" if data.get("published", "").lower() == "true" else "false",
                is_on_sale="true" if compare and _is_greater(compare, price) else "false",
                is_new="false",
                weight=data.get("variant_grams") or None,
            )
            continue

        new_image = data.get("image_src", "")
        if not new_image or new_image == existing.featured_image:
            continue
        gallery = _gallery(existing.images, existing.featured_image)
        if new_image in gallery:
            continue
        gallery.append(new_image)
        existing.images = "|".join(gallery)

    return list(by_handle.values())


_PARENT_SUFFIX = re.compile(r"-parent$")


def _woocommerce_record(data: dict[str, str], name: str, slug: str) -> CanonicalProductRecord:
    images = [img.strip() for img in data.get("images", "").split(",") if img.strip()]
    featured = images[0] if images else None
    gallery = "|".join(images[1:])

    regular = data.get("regular_price", "")
    sale = data.get("sale_price", "")
    featured_flag = data.get("is_featured") or data.get("featured") or ""

    return CanonicalProductRecord(
        name=name,
        slug=slug,
        description=data.get("description") or data.get("short_description") or None,
        category=data.get("categories") or "",
        price=sale or regular or "0",
        compare_at_price=regular if sale and regular else None,
        sku=data.get("sku") or None,
        stock_quantity=data.get("stock") or "10",
        featured_image=featured,
        images=gallery or data.get("gallery_image_urls") or None,
        tags=data.get("tags") or None,
        is_featured="true" if featured_flag == "1" else "false",
        is_on_sale="true" if sale else "false",
        is_new="false",
        weight=data.get("weight_kg") or None,
    )


def parse_woocommerce(rows: Sequence[RawRow], header: Sequence[str]) -> list[CanonicalProductRecord]:
    """Read a WooCommerce export, keeping simple and variable (parent) products.

    ``variation`` rows are sub-SKUs of a parent and are skipped. A variable
    parent takes its slug from the SKU minus a trailing ``-parent``. Price is
    the sale price when present, else the regular price; the regular price
    only becomes the compare-at price when a sale price is also set.
    Rows without a name are dropped.
    """
    keys = [normalize_header(h, strip_chars="?()") for h in header]
    products: list[CanonicalProductRecord] = []

    for values in rows:
        data = row_to_dict(keys, values)
        product_type = data.get("type", "").lower()
        if product_type == "variation":
            continue

        name = data.get("name", "")
        if not name:
            continue

        sku = data.get("sku", "")
        if product_type == "variable":
            slug = _PARENT_SUFFIX.sub("", sku) if sku else slugify(name)
        else:
            slug = sku or slugify(name)
        products.append(_woocommerce_record(data, name, slug))

    return products


_PARSERS: dict[SourceFormat, Parser] = {
    SourceFormat.STANDARD: parse_standard,
    SourceFormat.SHOPIFY: parse_shopify,
    SourceFormat.WOOCOMMERCE: parse_woocommerce,
}


@dataclass(frozen=True)
class ParsedCatalog:
    """Parser output for one file."""
    source_format: SourceFormat
    records: list[CanonicalProductRecord] = field(default_factory=list)
    header: list[str] = field(default_factory=list)


def parse_products(text: str, source_format: SourceFormat | None = None) -> ParsedCatalog:
    """Read, detect and parse a whole CSV document.

    ``source_format`` overrides detection. Input with fewer than two rows
    (header + one data row) yields no records.
    """
    rows = read_csv_text(text)
    if not rows:
        return ParsedCatalog(source_format=source_format or SourceFormat.STANDARD)

    header = [h.strip() for h in rows[0]]
    fmt = source_format or detect_source(header)
    if len(rows) < 2:
        return ParsedCatalog(source_format=fmt, header=header)

    return ParsedCatalog(source_format=fmt, records=_PARSERS[fmt](rows[1:], header), header=header)
