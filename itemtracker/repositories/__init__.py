"""
Persistence adapters.

``DatabaseManager`` is the contract callers depend on; ``SQLiteManager`` is its
SQLite implementation, built on top of ``SQLRepository`` which reports
results with the finer ``Result`` type.
"""

from .base import DatabaseManager
from .results import Outcome, Result, StoreUnavailable
from .sql_repository import SQLRepository
from .sqlite_manager import SQLiteManager

__all__ = [
    "DatabaseManager",
    "Outcome",
    "Result",
    "SQLRepository",
    "SQLiteManager",
    "StoreUnavailable",
]
