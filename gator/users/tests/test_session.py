# -*- coding: utf-8 -*-
"""
Session file tests
"""

from __future__ import annotations

import stat
from pathlib import Path

import pytest

from gator.errors import GatorError
from gator.users.session import SessionConfig


def test_missing_file_reads_as_empty(tmp_path: Path) -> None:
    session = SessionConfig.read(tmp_path / "absent.json")
    assert session.current_user_name is None
    assert session.db_url is None
    assert not session.path.exists()


def test_set_user_persists(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "gatorconfig.json"
    session = SessionConfig.read(path)

    session.set_user("alice")

    assert SessionConfig.read(path).current_user_name == "alice"
    assert stat.S_IMODE(path.stat().st_mode) == 0o600


def test_db_url_is_preserved(tmp_path: Path) -> None:
    path = tmp_path / "gatorconfig.json"
    path.write_text('{"db_url": "sqlite:///other.db"}', encoding="utf-8")

    session = SessionConfig.read(path)
    session.set_user("bob")

    reread = SessionConfig.read(path)
    assert reread.db_url == "sqlite:///other.db"
    assert reread.current_user_name == "bob"


def test_corrupt_file_is_reported(tmp_path: Path) -> None:
    path = tmp_path / "gatorconfig.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(GatorError):
        SessionConfig.read(path)
