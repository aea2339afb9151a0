"""Database helpers (engine/session export)."""

from .session import Base, build_engine, make_sessionmaker, session_scope

__all__ = ["Base", "build_engine", "make_sessionmaker", "session_scope"]
