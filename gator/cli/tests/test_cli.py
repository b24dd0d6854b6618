# -*- coding: utf-8 -*-
"""
Command line tests

Each test points the CLI at its own database and session file.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from gator.cli import main
from gator.cli.commands import AddFeed, Agg, Browse, Register, parse_command
from gator.config import app_config
from gator.database import get_db, get_engine
from gator.rss.dao import FeedDAO, PostDAO


@pytest.fixture(autouse=True)
def isolated_cli(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    monkeypatch.setattr(app_config, "gator_database_url", f"sqlite:///{tmp_path / 'cli.db'}")
    monkeypatch.setattr(app_config, "gator_session_path", tmp_path / "gatorconfig.json")
    return tmp_path


def test_parse_command_builds_typed_variants() -> None:
    assert parse_command(["register", "alice"])[0] == Register("alice")
    assert parse_command(["ADDFEED", "News", "https://example.com/rss"])[0] == AddFeed(
        "News", "https://example.com/rss"
    )
    assert parse_command(["browse"])[0] == Browse(None)
    assert parse_command(["browse", "5"])[0] == Browse(5)
    assert parse_command(["agg", "1m"])[0] == Agg(60.0, "1m", None)


def test_unknown_command_exits_non_zero(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["explode"])
    assert excinfo.value.code != 0
    assert "invalid choice" in capsys.readouterr().err


def test_bad_duration_exits_non_zero(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["agg", "soon"])
    assert excinfo.value.code != 0
    assert "duration" in capsys.readouterr().err


def test_missing_argument_exits_non_zero() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["register"])
    assert excinfo.value.code != 0


def test_register_and_login(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["register", "alice"]) == 0
    assert "User alice registered successfully" in capsys.readouterr().out

    assert main(["register", "alice"]) == 1
    assert "Error running command 'register'" in capsys.readouterr().err

    assert main(["login", "ghost"]) == 1
    assert "not found" in capsys.readouterr().err

    assert main(["register", "bob"]) == 0
    assert main(["login", "alice"]) == 0
    capsys.readouterr()

    assert main(["users"]) == 0
    out = capsys.readouterr().out
    assert "* alice (current)" in out
    assert "* bob\n" in out


def test_feed_commands_require_login(capsys: pytest.CaptureFixture[str]) -> None:
    for argv in (
        ["addfeed", "News", "https://example.com/rss"],
        ["follow", "https://example.com/rss"],
        ["unfollow", "https://example.com/rss"],
        ["following"],
        ["browse"],
    ):
        assert main(argv) == 1
        assert "not logged in" in capsys.readouterr().err


def test_feed_lifecycle(capsys: pytest.CaptureFixture[str]) -> None:
    url = "https://example.com/rss"
    assert main(["register", "alice"]) == 0
    assert main(["addfeed", "News", url]) == 0
    assert "Successfully added new feed" in capsys.readouterr().out

    assert main(["addfeed", "News again", url]) == 1
    assert "already exists" in capsys.readouterr().err

    assert main(["feeds"]) == 0
    out = capsys.readouterr().out
    assert "Feed Name:  News" in out
    assert "Created By: alice" in out

    assert main(["register", "bob"]) == 0
    assert main(["follow", url]) == 0
    assert "User bob is now following feed News." in capsys.readouterr().out

    assert main(["follow", url]) == 1
    assert "already following" in capsys.readouterr().err

    assert main(["following"]) == 0
    assert "  - News" in capsys.readouterr().out

    assert main(["unfollow", url]) == 0
    assert main(["following"]) == 0
    assert "not currently following" in capsys.readouterr().out

    assert main(["follow", "https://missing.example.com/rss"]) == 1
    assert "not found" in capsys.readouterr().err


def test_browse_prints_posts(capsys: pytest.CaptureFixture[str]) -> None:
    url = "https://example.com/rss"
    assert main(["register", "alice"]) == 0
    assert main(["addfeed", "News", url]) == 0
    assert main(["browse"]) == 0
    assert "No posts yet" in capsys.readouterr().out

    with get_db(get_engine()) as db:
        feed = FeedDAO(db).get_by_url(url)
        for n in range(3):
            PostDAO(db).create_post(
                feed_id=feed.id,
                url=f"https://example.com/{n}",
                title=f"Post {n}",
                description="Body",
                published_at=None,
            )

    assert main(["browse", "5"]) == 0
    out = capsys.readouterr().out
    assert "Found 3 posts" in out
    assert "--- Post 0 ---" in out

    assert main(["browse"]) == 0
    assert "Found 2 posts" in capsys.readouterr().out


def test_reset(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["register", "alice"]) == 0
    assert main(["reset"]) == 0
    assert "Database reset successfully." in capsys.readouterr().out
    assert main(["login", "alice"]) == 1


def test_agg_runs_scheduler(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    calls = []

    def fake_run_scheduler(interval, *, engine=None, max_cycles=None):
        calls.append((interval, max_cycles))

    monkeypatch.setattr("gator.cli.handlers.run_scheduler", fake_run_scheduler)

    assert main(["agg", "1m30s", "--cycles", "3"]) == 0
    assert calls == [(90.0, 3)]
    assert "Collecting feeds every 1m30s" in capsys.readouterr().out
