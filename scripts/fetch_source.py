#!/usr/bin/env python3
"""Print variation sources from a DuckDB source store as JSON."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from variationhub import DuckDBSourceStore, SourceNotFoundError, StoreConfig  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch variation sources by id or name")
    store_group = parser.add_mutually_exclusive_group(required=True)
    store_group.add_argument("--db", help="Path to the DuckDB database file")
    store_group.add_argument("--store-config", help="Path to a store JSON config")
    parser.add_argument("--table", default="source", help="Source table name (with --db)")

    lookup = parser.add_mutually_exclusive_group(required=True)
    lookup.add_argument("--id", type=int, dest="source_id", help="Primary key of the source")
    lookup.add_argument("--name", help="Unique source name")
    lookup.add_argument("--all", action="store_true", help="List every stored source")

    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level.",
    )
    return parser.parse_args()


def build_store(args: argparse.Namespace) -> DuckDBSourceStore:
    if args.store_config:
        return DuckDBSourceStore.from_config(StoreConfig.from_json(args.store_config))
    return DuckDBSourceStore(db_path=args.db, table_name=args.table)


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    logger = logging.getLogger("variationhub.scripts.fetch_source")

    store = build_store(args)
    logger.info("Source store: %s (table %s)", store.db_path, store.table_name)

    try:
        if args.all:
            sources = store.fetch_all()
        elif args.name:
            sources = [store.fetch_by_name(args.name)]
        else:
            sources = [store.fetch_by_dbID(args.source_id)]
    except SourceNotFoundError as exc:
        logger.error("%s", exc)
        return 1

    payload = [source.to_row() for source in sources]
    print(json.dumps(payload if args.all else payload[0], indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
