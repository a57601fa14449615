from __future__ import annotations

import json
from contextlib import contextmanager
from pathlib import Path
from typing import Any
from unittest.mock import patch

import psycopg2

from catalog_import.cli import main as cli_main
from catalog_import.cli.__main__ import EXIT_FATAL, EXIT_PARTIAL_FAILURE, EXIT_SUCCESS_ALL


class FailingCursor:
    """Cursor that rejects inserts whose first value is in ``reject``."""

    def __init__(self, reject: dict[str, BaseException]) -> None:
        self.reject = reject
        self.inserted: list[list[Any]] = []

    def execute(self, query: Any, params: list[Any]) -> None:
        exc = self.reject.get(params[0])
        if exc is not None:
            raise exc
        self.inserted.append(params)


def _fake_connection(cursor: FailingCursor):
    @contextmanager
    def _conn(_db_cfg):
        yield cursor
    return _conn


def test_dry_run_imports_everything(write_config: Path, write_csv, standard_csv: str, capsys):
    csv_path = write_csv(standard_csv)
    code = cli_main([str(csv_path), "--dry-run"])
    out = capsys.readouterr().out
    assert code == EXIT_SUCCESS_ALL
    assert "INFO dry-run: nothing will be persisted" in out
    assert "SUMMARY source=standard products=2 success=2 failed=0" in out


def test_live_partial_failure_exits_2(write_config: Path, write_csv, shopify_csv: str, temp_workdir: Path, capsys):
    csv_path = write_csv(shopify_csv)
    cursor = FailingCursor({"Pot": psycopg2.IntegrityError("duplicate key value")})
    with patch("catalog_import.cli.__main__.db_connection", _fake_connection(cursor)):
        code = cli_main([str(csv_path)])
    out = capsys.readouterr().out
    assert code == EXIT_PARTIAL_FAILURE
    assert [p[0] for p in cursor.inserted] == ["Monstera"]
    assert "WARN row=2 product='Pot' failed: duplicate key value" in out
    assert "SUMMARY source=shopify products=2 success=1 failed=1" in out

    (log,) = (temp_workdir / "logs").glob("errors-*.log")
    rec = json.loads(log.read_text(encoding="utf-8").strip())
    assert rec["row"] == 2
    assert rec["error_type"] == "CONSTRAINT_VIOLATION"


def test_connection_failure_is_fatal(write_config: Path, write_csv, standard_csv: str, temp_workdir: Path, capsys):
    csv_path = write_csv(standard_csv)
    with patch(
        "catalog_import.cli.__main__.db_connection",
        side_effect=psycopg2.OperationalError("could not connect"),
    ):
        code = cli_main([str(csv_path)])
    assert code == EXIT_FATAL
    assert "ERROR database: could not connect" in capsys.readouterr().out
    (log,) = (temp_workdir / "logs").glob("errors-*.log")
    rec = json.loads(log.read_text(encoding="utf-8").strip())
    assert rec["row"] == -1
    assert rec["error_type"] == "CONNECTION_ERROR"


def test_missing_csv_is_fatal(write_config: Path, capsys):
    assert cli_main(["data/nope.csv", "--dry-run"]) == EXIT_FATAL
    assert "ERROR file not found: data/nope.csv" in capsys.readouterr().out


def test_no_csv_argument_is_fatal(temp_workdir: Path, capsys):
    assert cli_main([]) == EXIT_FATAL
    assert "ERROR no CSV file given" in capsys.readouterr().out


def test_bad_config_is_fatal(temp_workdir: Path, write_csv, standard_csv: str, capsys):
    (temp_workdir / "config" / "import.yml").write_text("table: products\nbogus: 1\n", encoding="utf-8")
    code = cli_main([str(write_csv(standard_csv)), "--dry-run"])
    assert code == EXIT_FATAL
    assert "ERROR config: config validation failed" in capsys.readouterr().out


def test_empty_file_exits_zero_with_notice(write_config: Path, write_csv, capsys):
    csv_path = write_csv("name,price\n")
    code = cli_main([str(csv_path), "--dry-run"])
    out = capsys.readouterr().out
    assert code == EXIT_SUCCESS_ALL
    assert "WARN no valid products found in CSV" in out
    assert "SUMMARY source=standard products=0 success=0 failed=0" in out


def test_inspect_data_prints_preview(write_config: Path, write_csv, woocommerce_csv: str, capsys):
    csv_path = write_csv(woocommerce_csv)
    with patch("catalog_import.cli.__main__.db_connection") as conn:
        code = cli_main([str(csv_path), "--inspect-data"])
    out = capsys.readouterr().out
    assert code == EXIT_SUCCESS_ALL
    conn.assert_not_called()
    assert "FILE: products.csv" in out
    assert "FORMAT: WooCommerce" in out
    assert "PRODUCTS: 3" in out
    assert "Example Plant | Plants > Mixed Plant | AED 29.99 | 25% OFF | PLANT-001" in out


def test_source_override(write_config: Path, write_csv, capsys):
    csv_path = write_csv("Type,SKU,Name,Price\nsimple,F1,Fern,10\n")
    code = cli_main([str(csv_path), "--dry-run", "--source", "woocommerce"])
    assert code == EXIT_SUCCESS_ALL
    assert "source=woocommerce products=1" in capsys.readouterr().out


def test_write_template(temp_workdir: Path, capsys):
    code = cli_main(["--write-template", "shopify", "--output-dir", "out"])
    assert code == EXIT_SUCCESS_ALL
    assert (temp_workdir / "out" / "shopify_product_template.csv").exists()
    assert "INFO template written:" in capsys.readouterr().out


def test_debug_flag(write_config: Path, write_csv, standard_csv: str, capsys):
    code = cli_main([str(write_csv(standard_csv)), "--dry-run", "--debug"])
    out = capsys.readouterr().out
    assert code == EXIT_SUCCESS_ALL
    assert "DEBUG debug mode enabled" in out
    assert "DEBUG dry-run: would insert slug=fern" in out
