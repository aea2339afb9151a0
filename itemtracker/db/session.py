"""Engine/session helpers for the SQLite store."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import NullPool

from itemtracker.core.utils import normalize_store_path

Base = declarative_base()


def sqlite_url(path: str) -> str:
    return f"sqlite:///{normalize_store_path(path)}"


def build_engine(path: str, *, echo: bool = False) -> Engine:
    """
    Engine bound to a single store file.

    NullPool gives every checkout a brand new DBAPI connection and closes it on
    release, so nothing is reused between operations.
    """
    return create_engine(sqlite_url(path), future=True, echo=echo, poolclass=NullPool)


def make_sessionmaker(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)


@contextmanager
def session_scope(factory: sessionmaker) -> Iterator[Session]:
    session: Session = factory()
    try:
        yield session
    finally:
        session.close()
