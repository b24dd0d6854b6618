# -*- coding: utf-8 -*-
"""
Database access

Public API:
- `Base`
- `create_db_engine`
- `get_engine`
- `get_session_factory`
- `get_db`
- `init_db`
- `utcnow`

Internal:
- `_enable_sqlite_foreign_keys`

Purpose:
- Hold the declarative base shared by every ORM model and build engines and
  sessions from the configured URL. SQLite connections get foreign keys turned
  on so `ON DELETE CASCADE` behaves as it does on PostgreSQL.
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import app_config


class Base(DeclarativeBase):
    pass


_engine: Engine | None = None
_engine_url: str | None = None
_session_factory: sessionmaker[Session] | None = None


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(url: str, *, echo: bool = False) -> Engine:
    """Create an engine for `url`; in-memory SQLite shares one connection."""
    kwargs: dict = {"echo": echo}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    engine = create_engine(url, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def get_engine(url: str | None = None) -> Engine:
    """Return the process-wide engine, creating it on first use."""
    global _engine, _engine_url, _session_factory
    target = url or app_config.gator_database_url
    if _engine is None or _engine_url != target:
        _engine = create_db_engine(target, echo=app_config.gator_sql_echo)
        _engine_url = target
        _session_factory = None
    return _engine


def get_session_factory(engine: Engine | None = None) -> sessionmaker[Session]:
    global _session_factory
    if engine is not None:
        return sessionmaker(bind=engine, expire_on_commit=False)
    if _session_factory is None:
        _session_factory = sessionmaker(bind=get_engine(), expire_on_commit=False)
    return _session_factory


@contextmanager
def get_db(engine: Engine | None = None) -> Iterator[Session]:
    """Yield a session and always close it."""
    db = get_session_factory(engine)()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine | None = None) -> None:
    """Create all tables that do not exist yet."""
    # Registers every model on Base.metadata.
    from .users import models as _user_models  # noqa: F401
    from .rss import models as _rss_models  # noqa: F401

    Base.metadata.create_all(bind=engine or get_engine())
