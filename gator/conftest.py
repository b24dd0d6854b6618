# -*- coding: utf-8 -*-
"""
Shared pytest fixtures
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest
from sqlalchemy import Engine
from sqlalchemy.orm import Session

from gator.database import create_db_engine, get_session_factory, init_db
from gator.users.dao import UserDAO
from gator.users.models import User
from gator.users.session import SessionConfig


@pytest.fixture()
def test_db_engine(tmp_path: Path) -> Iterator[Engine]:
    """A fresh SQLite database file per test."""
    engine = create_db_engine(f"sqlite:///{tmp_path / 'gator.db'}")
    init_db(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def test_db_session(test_db_engine: Engine) -> Iterator[Session]:
    db = get_session_factory(test_db_engine)()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def session_config(tmp_path: Path) -> SessionConfig:
    return SessionConfig.read(tmp_path / "gatorconfig.json")


@pytest.fixture()
def test_user(test_db_session: Session) -> User:
    return UserDAO(test_db_session).create_user(name="alice")
