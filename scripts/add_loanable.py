#!/usr/bin/env python3
"""
Register a new loanable item in the SQLite store.

Usage:
  python scripts/add_loanable.py --name "Cordless drill" --barcode LB0001 [--db path/to/store.db]
"""
from __future__ import annotations

import argparse
import sys

from itemtracker.core.config import get_settings
from itemtracker.core.log import configure_logging
from itemtracker.domain.entities import Loanable
from itemtracker.repositories.sql_repository import SQLRepository


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Register a loanable item")
    ap.add_argument("--name", required=True, help="Item name (max 50 chars)")
    ap.add_argument("--barcode", required=True, help="Barcode printed on the item")
    ap.add_argument("--db", help="SQLite file (default: ITEMTRACKER_DB_PATH)")
    args = ap.parse_args(argv)

    configure_logging()
    repo = SQLRepository(args.db or get_settings().database_path)
    name = (args.name or "").strip()
    barcode = (args.barcode or "").strip()
    if not name or not barcode:
        raise SystemExit("Name and barcode are required")
    existing = repo.get_loanable_by_barcode(barcode)
    if existing.failed:
        raise SystemExit(f"Store unavailable: {existing.error}")
    if existing.ok:
        raise SystemExit(f"Barcode '{barcode}' already belongs to loanable {existing.value.id}")

    result = repo.add_loanable(Loanable(id=None, name=name, barcode=barcode))
    if not result.ok:
        raise SystemExit(f"Could not add loanable: {result.error}")
    print("OK: loanable registered")
    print(f"  ID: {result.value.id}")
    print(f"  Name: {result.value.name}")
    print(f"  Barcode: {result.value.barcode}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
