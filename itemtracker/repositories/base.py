"""Contract every item tracker store backend provides."""
from __future__ import annotations

from typing import List, Optional, Protocol, Union, runtime_checkable

from itemtracker.domain.entities import Loan, Loanable, Loanee


@runtime_checkable
class DatabaseManager(Protocol):
    """
    Operation set for accessing a loan store.

    Every operation is independently atomic: it opens its own connection,
    runs its statements and releases the connection before returning. No
    exception crosses this boundary. Writes answer ``True`` when at least one
    row was affected; reads answer ``None`` when the operation could not
    complete.
    """

    def connect(self) -> None:
        """Open a connection to the store, held until ``disconnect``."""

    def disconnect(self) -> None:
        """Close the held connection. Safe to call when not connected."""

    def add_loan(self, loanable: Loanable, loanee: Loanee) -> bool:
        """Record a loan checked out today with no check-in date."""

    def remove_loan(self, loanable: Loanable) -> bool:
        """Set today's check-in date on the loans of ``loanable``."""

    def get_loans(self, loanee: Optional[Loanee] = None) -> Optional[List[Loan]]:
        """Outstanding loans, or every loan of ``loanee`` when one is given."""

    def add_loanable(self, loanable: Loanable) -> bool:
        """Insert an active loanable."""

    def remove_loanable(self, loanable: Loanable) -> bool:
        """Mark the loanable inactive by id."""

    def get_loanable(self, key: Union[int, str]) -> Optional[Loanable]:
        """Loanable by id (``int``) or barcode (``str``), active or not. ``None`` for any other key."""

    def get_loanables(self) -> Optional[List[Loanable]]:
        """Every active loanable."""

    def add_loanee(self, loanee: Loanee) -> bool:
        """Insert an active loanee."""

    def remove_loanee(self, loanee: Loanee) -> bool:
        """Mark inactive every loanee matching the id or the barcode."""

    def get_loanee(self, key: Union[int, str]) -> Optional[Loanee]:
        """Loanee by id (``int``) or barcode (``str``), active or not. ``None`` for any other key."""

    def get_loanees(self) -> Optional[List[Loanee]]:
        """Every active loanee."""

    def create_database(self) -> bool:
        """Drop and recreate all tables. Destroys existing data."""
