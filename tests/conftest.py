# Shared pytest fixtures
from __future__ import annotations
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pytest

from catalog_import.db.product_store import StoreError
from catalog_import.logging.init import reset_logging


class RecordingStore:
    """In-memory product store; fails rows whose name is listed in ``failures``."""

    def __init__(self, failures: Mapping[str, BaseException] | None = None) -> None:
        self.failures = dict(failures or {})
        self.rows: list[dict[str, Any]] = []
        self.attempts: list[str] = []

    def create(self, row: Mapping[str, Any]) -> None:
        self.attempts.append(row["name"])
        exc = self.failures.get(row["name"])
        if exc is not None:
            raise exc
        self.rows.append(dict(row))


@pytest.fixture()
def recording_store():
    def factory(**failures: BaseException) -> RecordingStore:
        return RecordingStore(failures)
    return factory


@pytest.fixture()
def duplicate_sku_error() -> StoreError:
    return StoreError("duplicate SKU", "CONSTRAINT_VIOLATION")


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """table: products
currency: AED
defaults:
  category: general
  stock_quantity: 10
  product_type: simple
database:
  host: localhost
  port: 5432
  user: appuser
  password: secret
  database: appdb
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def standard_csv() -> str:
    return (
        "name,category,price,compare_at_price,discount_percentage,sku,stock_quantity,gallery,tags\n"
        '"Fern",Plants,29.99,39.99,,FERN-1,5,,"indoor, green"\n'
        '"Ceramic Pot","Pots > Ceramic Pot",80,,20,POT-1,,a.jpg|b.jpg,\n'
        ',Plants,10,,,,,,\n'
    )


@pytest.fixture()
def shopify_csv() -> str:
    return (
        "Handle,Title,Body (HTML),Vendor,Type,Tags,Published,Variant SKU,Variant Grams,"
        "Variant Inventory Qty,Variant Price,Variant Compare At Price,Image Src\n"
        'monstera,Monstera,"<p>Big leaves</p>",Green Grass,Plants,"indoor,green",TRUE,MON-S,500,7,45.00,60.00,https://cdn/m1.jpg\n'
        "monstera,,,,,,,MON-L,900,3,55.00,,https://cdn/m2.jpg\n"
        "monstera,,,,,,,,,,,,https://cdn/m1.jpg\n"
        "monstera,,,,,,,,,,,,https://cdn/m2.jpg\n"
        ",,,,,,,,,,,,https://cdn/orphan.jpg\n"
        "pot,Pot,,Green Grass,Pots,,FALSE,POT-1,1000,,19.99,,https://cdn/p1.jpg\n"
    )


@pytest.fixture()
def woocommerce_csv() -> str:
    return (
        "ID,Type,SKU,Name,Published,Is featured?,Short description,Description,Regular price,"
        "Sale price,Categories,Tags,Images,Stock\n"
        '1,simple,PLANT-001,Example Plant,1,1,Short,"<p>Long</p>",39.99,29.99,"Plants > Mixed Plant",'
        '"indoor,green","https://cdn/a.jpg, https://cdn/b.jpg, https://cdn/c.jpg",50\n'
        "2,variable,SHIRT-parent,Shirt,1,0,Soft shirt,,,,Clothing,,,\n"
        "3,variation,SHIRT-S,Shirt - S,1,0,,,20,,,,,5\n"
        "4,simple,,No Sku Pot,1,0,Pot,,19.99,,Pots,,https://cdn/pot.jpg,\n"
        "5,simple,NONAME,,1,0,,,5,,,,,\n"
    )


@pytest.fixture()
def write_csv(temp_workdir: Path):
    def _write(text: str, name: str = "products.csv") -> Path:
        path = temp_workdir / "data" / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
