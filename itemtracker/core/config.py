"""
Configuration helpers for the item tracker.

Settings only provide defaults for the command-line scripts and optional SQL
echo. The persistence classes always receive the store path explicitly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    database_path: str
    sql_echo: bool
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    return Settings(
        database_path=(os.getenv("ITEMTRACKER_DB_PATH") or "itemtracker.db").strip(),
        sql_echo=_bool(os.getenv("ITEMTRACKER_SQL_ECHO"), False),
        log_level=(os.getenv("ITEMTRACKER_LOG_LEVEL") or "INFO").strip().upper(),
    )
