from __future__ import annotations

from enum import Enum

"""SourceFormat enum for the product CSV importer.

A file has exactly one source format, chosen once from its header row and
applied to every data row. Mixed-format files are not supported.
"""

__all__ = [
    "SourceFormat",
]


class SourceFormat(Enum):
    """Known tabular schemas a product CSV can be exported in.

    - STANDARD: generic schema with per-field header synonyms
    - SHOPIFY: multi-row export grouped by ``Handle`` (one row per variant/image)
    - WOOCOMMERCE: parent/variation export discriminated by ``Type``
    """
    STANDARD = "standard"
    SHOPIFY = "shopify"
    WOOCOMMERCE = "woocommerce"

    @property
    def label(self) -> str:
        return {
            SourceFormat.STANDARD: "Standard CSV",
            SourceFormat.SHOPIFY: "Shopify",
            SourceFormat.WOOCOMMERCE: "WooCommerce",
        }[self]
