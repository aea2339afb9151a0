#!/usr/bin/env python3
"""
Register a new loanee (borrower) in the SQLite store.

Usage:
  python scripts/add_loanee.py --first Ann --last Lee --barcode LE0001 [--email ann@example.com] [--db store.db]
"""
from __future__ import annotations

import argparse
import sys

from itemtracker.core.config import get_settings
from itemtracker.core.log import configure_logging
from itemtracker.domain.entities import Loanee
from itemtracker.repositories.sql_repository import SQLRepository


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Register a loanee")
    ap.add_argument("--first", required=True, help="First name")
    ap.add_argument("--last", required=True, help="Last name")
    ap.add_argument("--barcode", required=True, help="Barcode on the loanee's card")
    ap.add_argument("--email", help="Optional e-mail address")
    ap.add_argument("--db", help="SQLite file (default: ITEMTRACKER_DB_PATH)")
    args = ap.parse_args(argv)

    configure_logging()
    repo = SQLRepository(args.db or get_settings().database_path)
    barcode = (args.barcode or "").strip()
    if not barcode:
        raise SystemExit("Barcode is required")
    existing = repo.get_loanee_by_barcode(barcode)
    if existing.failed:
        raise SystemExit(f"Store unavailable: {existing.error}")
    if existing.ok:
        raise SystemExit(f"Barcode '{barcode}' already belongs to loanee {existing.value.id}")

    loanee = Loanee(
        id=None,
        first_name=args.first.strip(),
        last_name=args.last.strip(),
        email=(args.email or "").strip() or None,
        barcode=barcode,
    )
    result = repo.add_loanee(loanee)
    if not result.ok:
        raise SystemExit(f"Could not add loanee: {result.error}")
    print("OK: loanee registered")
    print(f"  ID: {result.value.id}")
    print(f"  Name: {result.value.full_name}")
    print(f"  Barcode: {result.value.barcode}")
    if result.value.email:
        print(f"  Email: {result.value.email}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
