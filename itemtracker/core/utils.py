"""
Utility helpers shared by the persistence layer.
"""

from datetime import date

DATE_FORMAT = "%Y-%m-%d"


def normalize_store_path(path: str) -> str:
    """Use forward slashes regardless of how the caller spelled the path."""
    return (path or "").replace("\\", "/")


def today() -> date:
    """Current store-local date. Kept as a seam so tests can pin the clock."""
    return date.today()


def format_date(value: date | None) -> str | None:
    if value is None:
        return None
    return value.strftime(DATE_FORMAT)
