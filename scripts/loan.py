#!/usr/bin/env python3
"""
Loan desk from the command line.

Usage:
  python scripts/loan.py checkout --item LB0001 --loanee LE0001 [--db store.db]
  python scripts/loan.py checkin --item LB0001
  python scripts/loan.py list
  python scripts/loan.py history --loanee LE0001
"""
from __future__ import annotations

import argparse
import sys

from itemtracker.core.config import get_settings
from itemtracker.core.log import configure_logging
from itemtracker.core.utils import format_date
from itemtracker.domain.entities import Loan
from itemtracker.repositories.sql_repository import SQLRepository
from itemtracker.services.loan_service import LoanError, LoanService


def describe(loan: Loan) -> str:
    item = loan.loanable.name if loan.loanable else "(removed item)"
    who = loan.loanee.full_name if loan.loanee else "(removed loanee)"
    returned = format_date(loan.check_in) or "out"
    return f"#{loan.id} {item} -> {who} [{format_date(loan.check_out)} / {returned}]"


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Check items in and out")
    ap.add_argument("--db", help="SQLite file (default: ITEMTRACKER_DB_PATH)")
    sub = ap.add_subparsers(dest="command", required=True)
    out = sub.add_parser("checkout", help="Lend an item")
    out.add_argument("--item", required=True, help="Loanable barcode")
    out.add_argument("--loanee", required=True, help="Loanee barcode")
    back = sub.add_parser("checkin", help="Return an item")
    back.add_argument("--item", required=True, help="Loanable barcode")
    sub.add_parser("list", help="Show outstanding loans")
    hist = sub.add_parser("history", help="Show every loan of a loanee")
    hist.add_argument("--loanee", required=True, help="Loanee barcode")
    args = ap.parse_args(argv)

    configure_logging()
    service = LoanService(SQLRepository(args.db or get_settings().database_path))
    try:
        if args.command == "checkout":
            print("OK: checked out " + describe(service.check_out(args.item, args.loanee)))
        elif args.command == "checkin":
            print("OK: checked in " + describe(service.check_in(args.item)))
        elif args.command == "list":
            for loan in service.outstanding():
                print(describe(loan))
        else:
            for loan in service.history(args.loanee):
                print(describe(loan))
    except LoanError as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
