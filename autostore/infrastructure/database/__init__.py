"""Database infrastructure helpers (engine, sessions, migrations)."""

from .base import Base
from .session import build_engine, build_session_factory, init_db, open_session

__all__ = ["Base", "build_engine", "build_session_factory", "init_db", "open_session"]
