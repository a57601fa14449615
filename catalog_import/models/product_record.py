from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""Product record models.

CanonicalProductRecord is the parser output shared by all three source
formats: every value is still the raw string taken from the CSV cell.
ValidatedProductRecord is the record builder output, with numbers coerced,
lists split and flags resolved, ready to be handed to the product store.
"""

__all__ = [
    "CanonicalProductRecord",
    "ValidatedProductRecord",
]


@dataclass
class CanonicalProductRecord:
    """Intermediate, pre-validation product shape.

    Only ``name``, ``category`` and ``price`` carry defaults; every other
    field stays None when the source file did not provide it. Parsers mutate
    instances while they reconcile rows (e.g. appending Shopify gallery images).
    """
    name: str = ""
    category: str = ""  # empty: the record builder applies the configured default
    price: str = "0"
    name_ar: str | None = None
    slug: str | None = None
    description: str | None = None
    description_ar: str | None = None
    subcategory: str | None = None
    compare_at_price: str | None = None
    sku: str | None = None
    stock_quantity: str | None = None
    featured_image: str | None = None
    images: str | None = None  # "|" or "," delimited
    tags: str | None = None  # "," delimited
    is_featured: str | None = None
    is_on_sale: str | None = None
    is_new: str | None = None
    discount_percentage: str | None = None
    weight: str | None = None
    dimensions: str | None = None


@dataclass(frozen=True)
class ValidatedProductRecord:
    """Persistence-ready product produced by the record builder."""
    name: str
    slug: str
    category: str
    price: float
    stock_quantity: int
    name_ar: str | None = None
    description: str | None = None
    description_ar: str | None = None
    subcategory: str | None = None
    compare_at_price: float | None = None
    currency: str = "AED"
    sku: str | None = None
    featured_image: str | None = None
    images: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    is_featured: bool = False
    is_on_sale: bool = False
    is_new: bool = False
    is_active: bool = True
    product_type: str = "simple"

    def to_row(self) -> dict[str, Any]:
        """Column -> value mapping handed to the product store's create operation."""
        return {
            "name": self.name,
            "name_ar": self.name_ar,
            "slug": self.slug,
            "description": self.description,
            "description_ar": self.description_ar,
            "category": self.category,
            "subcategory": self.subcategory,
            "price": self.price,
            "compare_at_price": self.compare_at_price,
            "currency": self.currency,
            "sku": self.sku,
            "stock_quantity": self.stock_quantity,
            "featured_image": self.featured_image,
            "images": list(self.images),
            "tags": list(self.tags),
            "is_featured": self.is_featured,
            "is_on_sale": self.is_on_sale,
            "is_new": self.is_new,
            "is_active": self.is_active,
            "product_type": self.product_type,
        }
