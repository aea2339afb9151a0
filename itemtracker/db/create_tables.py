"""Utility script to (re)create the item tracker schema."""
from __future__ import annotations

import sys

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from itemtracker.core.config import get_settings
from itemtracker.core.log import configure_logging
from .session import Base, build_engine
from . import models


def drop_all(engine: Engine) -> None:
    Base.metadata.drop_all(bind=engine, tables=list(models.TABLES))


def create_all(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine, tables=list(models.TABLES))


def recreate_all(engine: Engine) -> None:
    """Destructive: drop Loans, Loanables and Loanees, then create them empty."""
    drop_all(engine)
    create_all(engine)


if __name__ == "__main__":
    configure_logging()
    path = sys.argv[1] if len(sys.argv) > 1 else get_settings().database_path
    engine = build_engine(path)
    try:
        recreate_all(engine)
        print(f"Database tables created successfully in {path}.")
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
    finally:
        engine.dispose()
