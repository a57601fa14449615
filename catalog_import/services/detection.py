from __future__ import annotations

from collections.abc import Sequence

from ..models.source_format import SourceFormat

"""Source format detection from the CSV header row.

Rules are ordered and mutually exclusive; Shopify is checked before
WooCommerce so a header satisfying both heuristics is treated as Shopify.
Classification is total: anything unrecognized is Standard. A Standard file
that happens to carry both a "handle" and a "variant sku"-like column is
therefore read as Shopify; there is no confidence score.
"""

__all__ = [
    "detect_source",
]

_SHOPIFY_KEY = ("handle",)
_SHOPIFY_MARKERS = (
    "variant sku", "variant_sku",
    "image src", "image_src",
    "variant price", "variant_price",
    "variant grams", "variant_grams",
)
_WOO_PRICE_MARKERS = (
    "regular price", "regular_price",
    "sale price", "sale_price",
)
_WOO_MARKERS = ("type", "sku")


def _contains_any(haystack: str, needles: Sequence[str]) -> bool:
    return any(n in haystack for n in needles)


def detect_source(header: Sequence[str]) -> SourceFormat:
    """Classify a header row into one of the known source formats."""
    scan = ",".join(header).lower()

    if _contains_any(scan, _SHOPIFY_KEY) and _contains_any(scan, _SHOPIFY_MARKERS):
        return SourceFormat.SHOPIFY
    if _contains_any(scan, _WOO_PRICE_MARKERS) and _contains_any(scan, _WOO_MARKERS):
        return SourceFormat.WOOCOMMERCE
    return SourceFormat.STANDARD
