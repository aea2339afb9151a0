from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import pytest

# Make the itemtracker package importable when running from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from itemtracker.core import config as core_config  # noqa: E402
from itemtracker.repositories import sql_repository  # noqa: E402
from itemtracker.repositories.sqlite_manager import SQLiteManager  # noqa: E402

FIXED_TODAY = date(2024, 3, 14)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Keep ITEMTRACKER_* variables from the developer shell out of the tests."""
    for name in ("ITEMTRACKER_DB_PATH", "ITEMTRACKER_SQL_ECHO", "ITEMTRACKER_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    core_config.get_settings.cache_clear()
    yield
    core_config.get_settings.cache_clear()


@pytest.fixture()
def fixed_today(monkeypatch):
    monkeypatch.setattr(sql_repository, "today", lambda: FIXED_TODAY)
    return FIXED_TODAY


@pytest.fixture()
def db_path(tmp_path) -> Path:
    return tmp_path / "store.db"


@pytest.fixture()
def store(db_path):
    """A manager over a freshly created store file."""
    manager = SQLiteManager(str(db_path))
    assert manager.create_database() is True
    yield manager
    manager.disconnect()
    manager.repository.dispose()


@pytest.fixture()
def repo(store):
    return store.repository
