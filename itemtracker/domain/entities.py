"""Plain value carriers for loanables, loanees and loans."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Loanable:
    """An item that can be lent out. ``id`` is None until the store assigns one."""

    id: Optional[int]
    name: str
    barcode: str
    active: bool = True


@dataclass(frozen=True)
class Loanee:
    """A person who borrows loanables."""

    id: Optional[int]
    first_name: str
    last_name: str
    email: Optional[str]
    barcode: str
    active: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class Loan:
    """
    A borrowing record. ``check_in`` is None while the loan is outstanding.

    ``loanable`` and ``loanee`` are hydrated from active rows only, so either
    may be None when the referenced entity has since been removed.
    """

    id: Optional[int]
    loanable: Optional[Loanable]
    loanee: Optional[Loanee]
    check_out: date
    check_in: Optional[date] = None

    @property
    def is_outstanding(self) -> bool:
        return self.check_in is None
