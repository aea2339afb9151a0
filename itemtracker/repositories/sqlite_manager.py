"""SQLite implementation of the ``DatabaseManager`` contract."""
from __future__ import annotations

import logging
from typing import List, Optional, Union

from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from itemtracker.domain.entities import Loan, Loanable, Loanee
from .base import DatabaseManager
from .sql_repository import SQLRepository

logger = logging.getLogger(__name__)


class SQLiteManager(DatabaseManager):
    """
    Store manager for a single SQLite file.

    Delegates to ``SQLRepository`` and folds its results into the coarse
    answers of the contract: ``bool`` for writes, the entity or ``None`` for
    lookups, a list or ``None`` for listings. Use ``repository`` directly when
    "no match" has to be told apart from "the store failed".
    """

    def __init__(self, db_location: str, *, echo: bool | None = None) -> None:
        self.repository = SQLRepository(db_location, echo=echo)
        self._connection: Optional[Connection] = None

    @property
    def db_location(self) -> str:
        return self.repository.path

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    def __enter__(self) -> "SQLiteManager":
        self.connect()
        return self

    def __exit__(self, *exc_info) -> None:
        self.disconnect()

    # -------------------------- connection --------------------------
    def connect(self) -> None:
        if self._connection is not None:
            return
        result = self.repository.open_connection()
        if result.ok:
            self._connection = result.value

    def disconnect(self) -> None:
        if self._connection is None:
            return
        try:
            self._connection.close()
        except SQLAlchemyError as exc:
            logger.error("Closing connection to %s failed: %s", self.db_location, exc)
        finally:
            self._connection = None

    # -------------------------- loans --------------------------
    def add_loan(self, loanable: Loanable, loanee: Loanee) -> bool:
        return self.repository.add_loan(loanable, loanee).ok

    def remove_loan(self, loanable: Loanable) -> bool:
        return self.repository.remove_loan(loanable).ok

    def get_loans(self, loanee: Optional[Loanee] = None) -> Optional[List[Loan]]:
        if loanee is None:
            return self.repository.list_open_loans().unwrap_or()
        return self.repository.list_loans_for_loanee(loanee).unwrap_or()

    # -------------------------- loanables --------------------------
    def add_loanable(self, loanable: Loanable) -> bool:
        return self.repository.add_loanable(loanable).ok

    def remove_loanable(self, loanable: Loanable) -> bool:
        return self.repository.remove_loanable(loanable).ok

    def get_loanable(self, key: Union[int, str]) -> Optional[Loanable]:
        if isinstance(key, str):
            return self.repository.get_loanable_by_barcode(key).unwrap_or()
        if isinstance(key, int) and not isinstance(key, bool):
            return self.repository.get_loanable_by_id(key).unwrap_or()
        logger.error("Loanable key must be an int id or a str barcode, not %r", key)
        return None

    def get_loanables(self) -> Optional[List[Loanable]]:
        return self.repository.list_loanables().unwrap_or()

    # -------------------------- loanees --------------------------
    def add_loanee(self, loanee: Loanee) -> bool:
        return self.repository.add_loanee(loanee).ok

    def remove_loanee(self, loanee: Loanee) -> bool:
        return self.repository.remove_loanee(loanee).ok

    def get_loanee(self, key: Union[int, str]) -> Optional[Loanee]:
        if isinstance(key, str):
            return self.repository.get_loanee_by_barcode(key).unwrap_or()
        if isinstance(key, int) and not isinstance(key, bool):
            return self.repository.get_loanee_by_id(key).unwrap_or()
        logger.error("Loanee key must be an int id or a str barcode, not %r", key)
        return None

    def get_loanees(self) -> Optional[List[Loanee]]:
        return self.repository.list_loanees().unwrap_or()

    # -------------------------- schema --------------------------
    def create_database(self) -> bool:
        return self.repository.create_database().ok
