from __future__ import annotations

import json
from pathlib import Path

from catalog_import.db.product_store import StoreError
from catalog_import.logging.error_log import ErrorLogBuffer
from catalog_import.logging.init import setup_logging
from catalog_import.models.product_record import ValidatedProductRecord
from catalog_import.services.importer import UNKNOWN_ERROR, import_products


def _product(name: str) -> ValidatedProductRecord:
    return ValidatedProductRecord(
        name=name, slug=name.lower(), category="general", price=1.0, stock_quantity=10
    )


def test_partial_failure_is_counted_and_loop_continues(recording_store, duplicate_sku_error):
    store = recording_store(Pot=duplicate_sku_error)
    result = import_products([_product("Fern"), _product("Pot"), _product("Vase")], store)

    assert result.to_dict() == {
        "total": 3,
        "success": 2,
        "failed": 1,
        "errors": ["Pot: duplicate SKU"],
    }
    assert store.attempts == ["Fern", "Pot", "Vase"]
    assert [r["name"] for r in store.rows] == ["Fern", "Vase"]


def test_every_row_attempted_even_when_all_fail(recording_store):
    down = StoreError("connection refused", "CONNECTION_ERROR")
    store = recording_store(A=down, B=down)
    result = import_products([_product("A"), _product("B")], store)
    assert (result.total, result.success, result.failed) == (2, 0, 2)
    assert result.errors == ["A: connection refused", "B: connection refused"]


def test_empty_reason_becomes_unknown_error(recording_store):
    store = recording_store(A=StoreError(""))
    result = import_products([_product("A")], store)
    assert result.errors == [f"A: {UNKNOWN_ERROR}"]


def test_unexpected_exception_is_a_row_failure(recording_store, tmp_path: Path):
    store = recording_store(A=ValueError("boom"))
    buf = ErrorLogBuffer(logs_dir=tmp_path)
    result = import_products([_product("A"), _product("B")], store, error_log=buf)
    assert result.success == 1
    assert result.errors == ["A: boom"]

    path = buf.flush()
    assert path is not None
    (line,) = path.read_text(encoding="utf-8").splitlines()
    assert json.loads(line)["error_type"] == "UNEXPECTED_ERROR"


def test_error_log_records_position_and_classification(
    recording_store, duplicate_sku_error, tmp_path: Path
):
    store = recording_store(Pot=duplicate_sku_error)
    buf = ErrorLogBuffer(logs_dir=tmp_path)
    import_products(
        [_product("Fern"), _product("Pot")], store, source_file="products.csv", error_log=buf
    )
    path = buf.flush()
    assert path is not None
    (line,) = path.read_text(encoding="utf-8").splitlines()
    rec = json.loads(line)
    assert rec["file"] == "products.csv"
    assert rec["row"] == 2
    assert rec["product"] == "Pot"
    assert rec["error_type"] == "CONSTRAINT_VIOLATION"
    assert rec["db_message"] == "duplicate SKU"


def test_progress_callback_reports_percentages(recording_store):
    seen: list[int] = []
    import_products(
        [_product(n) for n in "ABCD"], recording_store(), progress_callback=seen.append
    )
    assert seen == [25, 50, 75, 100]


def test_no_records_no_callback(recording_store):
    seen: list[int] = []
    result = import_products([], recording_store(), progress_callback=seen.append)
    assert result.to_dict() == {"total": 0, "success": 0, "failed": 0, "errors": []}
    assert seen == []


def test_failures_are_logged_as_warnings(recording_store, duplicate_sku_error, capsys):
    setup_logging()
    import_products([_product("Pot")], recording_store(Pot=duplicate_sku_error))
    out = capsys.readouterr().out
    assert "WARN row=1 product='Pot' failed: duplicate SKU" in out
