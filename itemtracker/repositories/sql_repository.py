"""High-level data access helpers backed by SQLAlchemy and a single SQLite file."""
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence, TypeVar

from sqlalchemy import or_, select, update
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from itemtracker.core.config import get_settings
from itemtracker.core.utils import normalize_store_path, today
from itemtracker.db.create_tables import recreate_all
from itemtracker.db.models import LoanableRow, LoaneeRow, LoanRow
from itemtracker.db.session import build_engine, make_sessionmaker, session_scope
from itemtracker.domain.entities import Loan, Loanable, Loanee
from .results import Result, StoreUnavailable

logger = logging.getLogger(__name__)

R = TypeVar("R")

_STORE_ERRORS = (SQLAlchemyError, StoreUnavailable)


def _to_loanable(row: LoanableRow) -> Loanable:
    return Loanable(
        id=row.loanable_id,
        name=row.loanable_name,
        barcode=row.loanable_barcode,
        active=bool(row.loanable_active),
    )


def _to_loanee(row: LoaneeRow) -> Loanee:
    return Loanee(
        id=row.loanee_id,
        first_name=row.loanee_first_name,
        last_name=row.loanee_last_name,
        email=row.loanee_email,
        barcode=row.loanee_barcode,
        active=bool(row.loanee_active),
    )


class SQLRepository:
    """
    CRUD helpers for loanables, loanees and loans.

    Each public method is one unit of work: it checks out a fresh connection,
    runs its statements in a session and closes both before returning, on
    success and on failure alike. Nothing raises; every method answers with a
    ``Result`` whose outcome tells success, no match and failure apart.
    """

    def __init__(self, path: str, *, echo: bool | None = None) -> None:
        self.path = normalize_store_path(path)
        self._lock = threading.RLock()
        self._engine: Optional[Engine] = None
        self._sessionmaker = None
        if echo is None:
            echo = get_settings().sql_echo
        try:
            self._engine = build_engine(self.path, echo=echo)
            self._sessionmaker = make_sessionmaker(self._engine)
        except (SQLAlchemyError, ImportError) as exc:
            logger.error("SQLite driver could not be initialised for %s: %s", self.path, exc)

    # -------------------------- plumbing --------------------------
    def _require_engine(self) -> Engine:
        if self._engine is None:
            raise StoreUnavailable(f"no SQLite engine for {self.path}")
        return self._engine

    @contextmanager
    def _session(self) -> Iterator[Session]:
        self._require_engine()
        with self._lock, session_scope(self._sessionmaker) as session:
            yield session

    def _failed(self, operation: str, exc: BaseException) -> Result:
        logger.error("%s failed on %s: %s", operation, self.path, exc)
        return Result.failure(exc)

    @staticmethod
    def _last_match(rows: Sequence[R], what: str) -> Result[R]:
        if not rows:
            return Result.not_found()
        if len(rows) > 1:
            logger.warning("%d rows matched %s; keeping the last one", len(rows), what)
        return Result.success(rows[-1])

    @staticmethod
    def _affected(rowcount: int) -> Result[int]:
        if rowcount and rowcount > 0:
            return Result.success(rowcount)
        return Result.not_found()

    def open_connection(self) -> Result[Connection]:
        """Check out a connection the caller is responsible for closing."""
        try:
            return Result.success(self._require_engine().connect())
        except _STORE_ERRORS as exc:
            return self._failed("connect", exc)

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()

    # -------------------------- schema --------------------------
    def create_database(self) -> Result[None]:
        """Drop and recreate Loans, Loanables and Loanees. Destroys all data."""
        try:
            engine = self._require_engine()
            with self._lock:
                recreate_all(engine)
        except _STORE_ERRORS as exc:
            return self._failed("create_database", exc)
        logger.info("Recreated item tracker schema in %s", self.path)
        return Result.success()

    # -------------------------- loanables --------------------------
    def add_loanable(self, loanable: Loanable) -> Result[Loanable]:
        row = LoanableRow(
            loanable_name=loanable.name,
            loanable_barcode=loanable.barcode,
            loanable_active=True,
        )
        try:
            with self._session() as session:
                session.add(row)
                session.commit()
                entity = _to_loanable(row)
        except _STORE_ERRORS as exc:
            return self._failed("add_loanable", exc)
        logger.debug("Added loanable %s (%s)", entity.id, entity.barcode)
        return Result.success(entity)

    def remove_loanable(self, loanable: Loanable) -> Result[int]:
        try:
            with self._session() as session:
                stmt = (
                    update(LoanableRow)
                    .where(LoanableRow.loanable_id == loanable.id)
                    .values(loanable_active=False)
                )
                rowcount = session.execute(stmt).rowcount
                session.commit()
        except _STORE_ERRORS as exc:
            return self._failed("remove_loanable", exc)
        return self._affected(rowcount)

    def get_loanable_by_id(self, loanable_id: int) -> Result[Loanable]:
        # Not filtered on active: removed loanables stay reachable by id.
        try:
            with self._session() as session:
                stmt = (
                    select(LoanableRow)
                    .where(LoanableRow.loanable_id == loanable_id)
                    .order_by(LoanableRow.loanable_id)
                )
                rows = session.execute(stmt).scalars().all()
                found = self._last_match(rows, f"loanable id {loanable_id!r}")
        except _STORE_ERRORS as exc:
            return self._failed("get_loanable_by_id", exc)
        return Result.success(_to_loanable(found.value)) if found.ok else found

    def get_loanable_by_barcode(self, barcode: str) -> Result[Loanable]:
        try:
            with self._session() as session:
                stmt = (
                    select(LoanableRow)
                    .where(LoanableRow.loanable_barcode == barcode)
                    .order_by(LoanableRow.loanable_id)
                )
                rows = session.execute(stmt).scalars().all()
                found = self._last_match(rows, f"loanable barcode {barcode!r}")
        except _STORE_ERRORS as exc:
            return self._failed("get_loanable_by_barcode", exc)
        return Result.success(_to_loanable(found.value)) if found.ok else found

    def list_loanables(self) -> Result[List[Loanable]]:
        try:
            with self._session() as session:
                stmt = (
                    select(LoanableRow)
                    .where(LoanableRow.loanable_active)
                    .order_by(LoanableRow.loanable_id)
                )
                rows = session.execute(stmt).scalars().all()
                return Result.success([_to_loanable(row) for row in rows])
        except _STORE_ERRORS as exc:
            return self._failed("list_loanables", exc)

    # -------------------------- loanees --------------------------
    def add_loanee(self, loanee: Loanee) -> Result[Loanee]:
        row = LoaneeRow(
            loanee_first_name=loanee.first_name,
            loanee_last_name=loanee.last_name,
            loanee_email=loanee.email,
            loanee_barcode=loanee.barcode,
            loanee_active=True,
        )
        try:
            with self._session() as session:
                session.add(row)
                session.commit()
                entity = _to_loanee(row)
        except _STORE_ERRORS as exc:
            return self._failed("add_loanee", exc)
        logger.debug("Added loanee %s (%s)", entity.id, entity.barcode)
        return Result.success(entity)

    def remove_loanee(self, loanee: Loanee) -> Result[int]:
        """Deactivate every loanee sharing the id or the barcode of ``loanee``."""
        try:
            with self._session() as session:
                stmt = (
                    update(LoaneeRow)
                    .where(
                        or_(
                            LoaneeRow.loanee_id == loanee.id,
                            LoaneeRow.loanee_barcode == loanee.barcode,
                        )
                    )
                    .values(loanee_active=False)
                )
                rowcount = session.execute(stmt).rowcount
                session.commit()
        except _STORE_ERRORS as exc:
            return self._failed("remove_loanee", exc)
        return self._affected(rowcount)

    def get_loanee_by_id(self, loanee_id: int) -> Result[Loanee]:
        try:
            with self._session() as session:
                stmt = select(LoaneeRow).where(LoaneeRow.loanee_id == loanee_id).order_by(LoaneeRow.loanee_id)
                rows = session.execute(stmt).scalars().all()
                found = self._last_match(rows, f"loanee id {loanee_id!r}")
        except _STORE_ERRORS as exc:
            return self._failed("get_loanee_by_id", exc)
        return Result.success(_to_loanee(found.value)) if found.ok else found

    def get_loanee_by_barcode(self, barcode: str) -> Result[Loanee]:
        try:
            with self._session() as session:
                stmt = select(LoaneeRow).where(LoaneeRow.loanee_barcode == barcode).order_by(LoaneeRow.loanee_id)
                rows = session.execute(stmt).scalars().all()
                found = self._last_match(rows, f"loanee barcode {barcode!r}")
        except _STORE_ERRORS as exc:
            return self._failed("get_loanee_by_barcode", exc)
        return Result.success(_to_loanee(found.value)) if found.ok else found

    def list_loanees(self) -> Result[List[Loanee]]:
        try:
            with self._session() as session:
                stmt = select(LoaneeRow).where(LoaneeRow.loanee_active).order_by(LoaneeRow.loanee_id)
                rows = session.execute(stmt).scalars().all()
                return Result.success([_to_loanee(row) for row in rows])
        except _STORE_ERRORS as exc:
            return self._failed("list_loanees", exc)

    # -------------------------- loans --------------------------
    def add_loan(self, loanable: Loanable, loanee: Loanee) -> Result[Loan]:
        checked_out = today()
        row = LoanRow(
            loanable_id=loanable.id,
            loanee_id=loanee.id,
            check_out=checked_out,
            check_in=None,
        )
        try:
            with self._session() as session:
                session.add(row)
                session.commit()
                loan = Loan(id=row.loan_id, loanable=loanable, loanee=loanee, check_out=checked_out)
        except _STORE_ERRORS as exc:
            return self._failed("add_loan", exc)
        logger.debug("Loan %s: loanable %s to loanee %s", loan.id, loanable.id, loanee.id)
        return Result.success(loan)

    def remove_loan(self, loanable: Loanable) -> Result[int]:
        """
        Stamp today's check-in date on the loans of ``loanable``.

        Every loan row for the loanable is updated, including ones already
        checked in. ``close_loan`` closes a single outstanding loan.
        """
        try:
            with self._session() as session:
                stmt = update(LoanRow).where(LoanRow.loanable_id == loanable.id).values(check_in=today())
                rowcount = session.execute(stmt).rowcount
                session.commit()
        except _STORE_ERRORS as exc:
            return self._failed("remove_loan", exc)
        return self._affected(rowcount)

    def close_loan(self, loan_id: int) -> Result[int]:
        """Stamp today's check-in date on one loan, only if it is still outstanding."""
        try:
            with self._session() as session:
                stmt = (
                    update(LoanRow)
                    .where(LoanRow.loan_id == loan_id, LoanRow.check_in.is_(None))
                    .values(check_in=today())
                )
                rowcount = session.execute(stmt).rowcount
                session.commit()
        except _STORE_ERRORS as exc:
            return self._failed("close_loan", exc)
        return self._affected(rowcount)

    def list_open_loans(self) -> Result[List[Loan]]:
        try:
            with self._session() as session:
                stmt = select(LoanRow).where(LoanRow.check_in.is_(None)).order_by(LoanRow.loan_id)
                rows = session.execute(stmt).scalars().all()
                return Result.success(self._hydrate_loans(session, rows))
        except _STORE_ERRORS as exc:
            return self._failed("list_open_loans", exc)

    def list_loans_for_loanee(self, loanee: Loanee) -> Result[List[Loan]]:
        try:
            with self._session() as session:
                stmt = select(LoanRow).where(LoanRow.loanee_id == loanee.id).order_by(LoanRow.loan_id)
                rows = session.execute(stmt).scalars().all()
                return Result.success(self._hydrate_loans(session, rows))
        except _STORE_ERRORS as exc:
            return self._failed("list_loans_for_loanee", exc)

    def get_open_loan(self, loanable: Loanable) -> Result[Loan]:
        try:
            with self._session() as session:
                stmt = (
                    select(LoanRow)
                    .where(LoanRow.loanable_id == loanable.id, LoanRow.check_in.is_(None))
                    .order_by(LoanRow.loan_id)
                )
                rows = session.execute(stmt).scalars().all()
                found = self._last_match(rows, f"open loans for loanable {loanable.id!r}")
                if not found.ok:
                    return found
                return Result.success(self._hydrate_loans(session, [found.value])[0])
        except _STORE_ERRORS as exc:
            return self._failed("get_open_loan", exc)

    def get_loan(self, loan_id: int) -> Result[Loan]:
        try:
            with self._session() as session:
                stmt = select(LoanRow).where(LoanRow.loan_id == loan_id).order_by(LoanRow.loan_id)
                found = self._last_match(session.execute(stmt).scalars().all(), f"loan id {loan_id!r}")
                if not found.ok:
                    return found
                return Result.success(self._hydrate_loans(session, [found.value])[0])
        except _STORE_ERRORS as exc:
            return self._failed("get_loan", exc)

    def _hydrate_loans(self, session: Session, rows: Sequence[LoanRow]) -> List[Loan]:
        """Resolve the loanable/loanee of each loan among active rows only."""
        loanables: dict[int, Optional[Loanable]] = {}
        loanees: dict[int, Optional[Loanee]] = {}
        loans: List[Loan] = []
        for row in rows:
            if row.loanable_id not in loanables:
                stmt = (
                    select(LoanableRow)
                    .where(LoanableRow.loanable_id == row.loanable_id, LoanableRow.loanable_active)
                    .order_by(LoanableRow.loanable_id)
                )
                found = self._last_match(session.execute(stmt).scalars().all(), f"loanable id {row.loanable_id!r}")
                loanables[row.loanable_id] = _to_loanable(found.value) if found.ok else None
            if row.loanee_id not in loanees:
                stmt = (
                    select(LoaneeRow)
                    .where(LoaneeRow.loanee_id == row.loanee_id, LoaneeRow.loanee_active)
                    .order_by(LoaneeRow.loanee_id)
                )
                found = self._last_match(session.execute(stmt).scalars().all(), f"loanee id {row.loanee_id!r}")
                loanees[row.loanee_id] = _to_loanee(found.value) if found.ok else None
            loans.append(
                Loan(
                    id=row.loan_id,
                    loanable=loanables[row.loanable_id],
                    loanee=loanees[row.loanee_id],
                    check_out=row.check_out,
                    check_in=row.check_in,
                )
            )
        return loans
