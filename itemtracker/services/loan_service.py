"""Loan desk use cases (check out, check in, history)."""

from __future__ import annotations

import logging
from typing import List

from itemtracker.domain.entities import Loan, Loanable, Loanee
from itemtracker.repositories.results import Outcome, Result
from itemtracker.repositories.sql_repository import SQLRepository

logger = logging.getLogger(__name__)


class LoanError(Exception):
    """Base exception for the loan desk workflow."""


class LoanableNotFoundError(LoanError):
    """Raised when no loanable carries the scanned barcode."""


class LoaneeNotFoundError(LoanError):
    """Raised when no loanee carries the scanned barcode."""


class InactiveEntityError(LoanError):
    """Raised when the loanable or loanee has been removed."""


class LoanableUnavailableError(LoanError):
    """Raised when the loanable is already out, or not out when checking in."""


class StoreFailureError(LoanError):
    """Raised when the store could not complete an operation."""

    def __init__(self, operation: str, cause: BaseException | None):
        super().__init__(f"{operation} failed: {cause}")
        self.operation = operation
        self.cause = cause


def _unwrap(result: Result, operation: str):
    if result.outcome is Outcome.FAILURE:
        raise StoreFailureError(operation, result.error)
    return result.value


class LoanService:
    """Enforces one outstanding loan per loanable on top of the repository."""

    def __init__(self, repository: SQLRepository) -> None:
        self.repository = repository

    def normalize(self, barcode: str | None) -> str:
        return (barcode or "").strip()

    def _loanable(self, barcode: str) -> Loanable:
        loanable = _unwrap(self.repository.get_loanable_by_barcode(self.normalize(barcode)), "loanable lookup")
        if loanable is None:
            raise LoanableNotFoundError(f"Loanable {barcode!r} not found")
        return loanable

    def _loanee(self, barcode: str) -> Loanee:
        loanee = _unwrap(self.repository.get_loanee_by_barcode(self.normalize(barcode)), "loanee lookup")
        if loanee is None:
            raise LoaneeNotFoundError(f"Loanee {barcode!r} not found")
        return loanee

    def check_out(self, loanable_barcode: str, loanee_barcode: str) -> Loan:
        loanable = self._loanable(loanable_barcode)
        if not loanable.active:
            raise InactiveEntityError(f"Loanable {loanable.barcode!r} has been removed")
        loanee = self._loanee(loanee_barcode)
        if not loanee.active:
            raise InactiveEntityError(f"Loanee {loanee.barcode!r} has been removed")
        if _unwrap(self.repository.get_open_loan(loanable), "open loan lookup") is not None:
            raise LoanableUnavailableError(f"Loanable {loanable.barcode!r} is already on loan")
        loan = _unwrap(self.repository.add_loan(loanable, loanee), "add loan")
        logger.info("Checked out %s to %s", loanable.barcode, loanee.barcode)
        return loan

    def check_in(self, loanable_barcode: str) -> Loan:
        loanable = self._loanable(loanable_barcode)
        loan = _unwrap(self.repository.get_open_loan(loanable), "open loan lookup")
        if loan is None:
            raise LoanableUnavailableError(f"Loanable {loanable.barcode!r} is not on loan")
        result = self.repository.close_loan(loan.id)
        if result.failed:
            raise StoreFailureError("close loan", result.error)
        if not result.ok:
            raise LoanableUnavailableError(f"Loanable {loanable.barcode!r} is no longer on loan")
        logger.info("Checked in %s", loanable.barcode)
        return _unwrap(self.repository.get_loan(loan.id), "loan lookup") or loan

    def history(self, loanee_barcode: str) -> List[Loan]:
        return self.history_for(self._loanee(loanee_barcode))

    def history_for(self, loanee: Loanee) -> List[Loan]:
        return _unwrap(self.repository.list_loans_for_loanee(loanee), "loan history") or []

    def outstanding(self) -> List[Loan]:
        return _unwrap(self.repository.list_open_loans(), "open loans") or []
