"""Database configuration and session management."""

from __future__ import annotations

import logging
from collections.abc import Generator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from notifier.config import Settings, get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


logger = logging.getLogger(__name__)


def build_engine(database_url: str | None = None, *, settings: Settings | None = None) -> Engine:
    """Create the SQLAlchemy engine for ``database_url``.

    SQLite connections are shared across the fan-out worker threads, so the
    same-thread check is disabled and a busy timeout lets concurrent writers
    wait for each other instead of failing immediately.
    """

    settings = settings or get_settings()
    url = make_url(database_url or settings.database_url)
    connect_args: dict[str, object] = {}
    if url.get_backend_name() == "sqlite":
        connect_args = {
            "check_same_thread": False,
            "timeout": settings.sqlite_busy_timeout_seconds,
        }
    logger.debug("Creating engine for backend %s", url.get_backend_name())
    return create_engine(url, pool_pre_ping=True, connect_args=connect_args)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Return a session factory bound to ``engine``."""

    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def initialize_database(engine: Engine) -> None:
    """Ensure all ORM models have corresponding database tables."""

    from notifier.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=engine, checkfirst=True)


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


__all__ = [
    "Base",
    "build_engine",
    "create_session_factory",
    "get_db",
    "initialize_database",
]
