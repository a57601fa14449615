from __future__ import annotations

from catalog_import.models.product_record import CanonicalProductRecord
from catalog_import.services.preview import preview_discount, render_preview


def test_discount_from_compare_price():
    assert preview_discount(CanonicalProductRecord(name="a", price="80", compare_at_price="100")) == 20


def test_discount_from_percentage_column():
    assert preview_discount(CanonicalProductRecord(name="a", price="80", discount_percentage="15")) == 15


def test_no_discount():
    assert preview_discount(CanonicalProductRecord(name="a", price="80")) == 0
    assert preview_discount(CanonicalProductRecord(name="a", price="80", compare_at_price="abc")) == 0


def test_render_preview_lines_and_overflow():
    records = [
        CanonicalProductRecord(name=f"P{i}", category="Plants", price="10", sku=f"S{i}") for i in range(12)
    ]
    records[0].compare_at_price = "20"
    lines = render_preview(records, currency="AED")
    assert len(lines) == 11
    assert lines[0] == "P0 | Plants | AED 10 | 50% OFF | S0"
    assert lines[1] == "P1 | Plants | AED 10 | - | S1"
    assert lines[-1] == "+2 more products"


def test_missing_sku_shows_dash():
    (line,) = render_preview([CanonicalProductRecord(name="Fern")], currency="USD")
    assert line == "Fern | general | USD 0 | - | -"


def test_empty_category_shows_configured_default():
    (line,) = render_preview([CanonicalProductRecord(name="Fern", price="5")], default_category="misc")
    assert line == "Fern | misc | AED 5 | - | -"
