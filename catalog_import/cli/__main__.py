from __future__ import annotations

import argparse
import sys
from pathlib import Path

import psycopg2
from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..db.connection import db_connection
from ..db.product_store import DryRunProductStore, PostgresProductStore
from ..logging.error_log import ErrorLogBuffer
from ..logging.init import log_summary, set_debug, setup_logging
from ..models.config_models import ImportConfig
from ..models.source_format import SourceFormat
from ..services.orchestrator import ImportRun, ProcessingError, load_catalog, run_import
from ..services.preview import render_preview
from ..services.summary import render_summary_fields
from ..services.templates import write_template

"""CLI entrypoint.

    catalog-import products.csv                 # detect format, import into the product store
    catalog-import products.csv --dry-run       # parse + validate, persist nothing
    catalog-import products.csv --inspect-data  # print detected format and a preview, then exit
    catalog-import --write-template shopify     # write an example CSV

Exit codes: 0 = every product imported (or nothing to import),
2 = at least one product failed, 1 = fatal (config, missing file, database).
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

_FORMAT_CHOICES = [f.value for f in SourceFormat]


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env; override=True lets .env win over the inherited environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="catalog-import",
        description="Import products from Shopify, WooCommerce or standard CSV files",
    )
    p.add_argument("csv_file", nargs="?", type=Path, help="CSV file to import")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="YAML config file")
    p.add_argument(
        "--source", choices=_FORMAT_CHOICES, default=None, help="Skip detection and use this format"
    )
    p.add_argument("--dry-run", action="store_true", help="Parse and validate without persisting")
    p.add_argument("--inspect-data", action="store_true", help="Print detected format & preview then exit")
    p.add_argument("--write-template", choices=_FORMAT_CHOICES, help="Write an example CSV and exit")
    p.add_argument("--output-dir", type=Path, default=Path("."), help="Directory for --write-template")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _inspect_data(csv_path: Path, cfg: ImportConfig, source_format: SourceFormat | None) -> int:
    try:
        catalog = load_catalog(csv_path, source_format)
    except ProcessingError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    print(f"FILE: {csv_path.name}")
    print(f"  FORMAT: {catalog.source_format.label} cols={catalog.header}")
    print(f"  PRODUCTS: {len(catalog.records)}")
    for line in render_preview(
        catalog.records, currency=cfg.defaults.currency, default_category=cfg.defaults.category
    ):
        print(f"    {line}")
    return EXIT_SUCCESS_ALL


def _finish(run: ImportRun) -> int:
    log_summary(render_summary_fields(run.source_format, run.result))
    if run.result.failed > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an explicit [] must not pick up pytest's own argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    if args.write_template:
        path = write_template(SourceFormat(args.write_template), args.output_dir)
        logger.info(f"template written: {path}")
        return EXIT_SUCCESS_ALL

    if args.csv_file is None:
        logger.error("no CSV file given")
        return EXIT_FATAL

    _load_env_file(Path(".env"), override=True)
    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    csv_path: Path = args.csv_file
    if not csv_path.exists():
        logger.error(f"file not found: {csv_path}")
        return EXIT_FATAL

    source_format = SourceFormat(args.source) if args.source else None

    if args.inspect_data:
        return _inspect_data(csv_path, cfg, source_format)

    logger.info(f"Importing products from: {csv_path}")
    error_log = ErrorLogBuffer()

    if args.dry_run:
        logger.info("dry-run: nothing will be persisted")
        try:
            run = run_import(csv_path, cfg, DryRunProductStore(), source_format=source_format, error_log=error_log)
        except ProcessingError as e:
            logger.error(f"processing: {e}")
            return EXIT_FATAL
        return _finish(run)

    try:
        with db_connection(cfg.database) as cur:
            store = PostgresProductStore(cur, table=cfg.table)
            run = run_import(csv_path, cfg, store, source_format=source_format, error_log=error_log)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL
    except psycopg2.Error as e:
        logger.error(f"database: {e}")
        error_log.record_file_failure(csv_path.name, "CONNECTION_ERROR", str(e))
        error_log.flush()
        return EXIT_FATAL

    return _finish(run)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
