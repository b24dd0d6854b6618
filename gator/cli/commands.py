# -*- coding: utf-8 -*-
"""
Command variants

Public API:
- `Command`
- `Register`, `Login`, `Users`, `Reset`
- `AddFeed`, `Feeds`, `Follow`, `Unfollow`, `Following`, `Browse`
- `Agg`
- `build_parser`
- `parse_command`

Purpose:
- Turn argv into exactly one typed command value. Every subcommand is a frozen
  dataclass carrying its already-validated arguments.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from .duration import parse_duration

COMMAND_NAMES = frozenset(
    {
        "register",
        "login",
        "users",
        "reset",
        "addfeed",
        "feeds",
        "follow",
        "unfollow",
        "following",
        "browse",
        "agg",
    }
)


@dataclass(frozen=True)
class Register:
    name: str


@dataclass(frozen=True)
class Login:
    name: str


@dataclass(frozen=True)
class Users:
    pass


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class AddFeed:
    name: str
    url: str


@dataclass(frozen=True)
class Feeds:
    pass


@dataclass(frozen=True)
class Follow:
    url: str


@dataclass(frozen=True)
class Unfollow:
    url: str


@dataclass(frozen=True)
class Following:
    pass


@dataclass(frozen=True)
class Browse:
    limit: Optional[int] = None


@dataclass(frozen=True)
class Agg:
    interval: float
    interval_text: str
    max_cycles: Optional[int] = None


Command = Union[
    Register,
    Login,
    Users,
    Reset,
    AddFeed,
    Feeds,
    Follow,
    Unfollow,
    Following,
    Browse,
    Agg,
]


def _interval(text: str) -> float:
    try:
        seconds = parse_duration(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc
    if seconds <= 0:
        raise argparse.ArgumentTypeError("interval must be greater than zero")
    return seconds


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from exc
    if value < 1:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gator",
        description="gator - RSS/Atom feed aggregator",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (defaults to GATOR_LOG_LEVEL)",
    )
    sub = parser.add_subparsers(dest="command", metavar="<command>", required=True)

    p = sub.add_parser("register", help="Create a user and log in as it")
    p.add_argument("name")
    p = sub.add_parser("login", help="Log in as an existing user")
    p.add_argument("name")
    sub.add_parser("users", help="List users")
    sub.add_parser("reset", help="Delete all users, feeds, follows and posts")

    p = sub.add_parser("addfeed", help="Register a feed and follow it")
    p.add_argument("name")
    p.add_argument("url")
    sub.add_parser("feeds", help="List all feeds")
    p = sub.add_parser("follow", help="Follow a registered feed")
    p.add_argument("url")
    p = sub.add_parser("unfollow", help="Stop following a feed")
    p.add_argument("url")
    sub.add_parser("following", help="List feeds the current user follows")
    p = sub.add_parser("browse", help="Show the newest posts of followed feeds")
    p.add_argument("limit", nargs="?", type=_positive_int, default=None)

    p = sub.add_parser("agg", help="Poll feeds forever, one per interval")
    p.add_argument("duration", help="Wait between cycles, e.g. 30s, 1m, 1h30m")
    p.add_argument(
        "--cycles",
        type=_positive_int,
        default=None,
        help="Stop after this many cycles",
    )
    return parser


def parse_command(
    argv: Sequence[str],
    parser: argparse.ArgumentParser | None = None,
) -> tuple[Command, argparse.Namespace]:
    """Parse argv (without the program name) into a command value."""
    parser = parser or build_parser()
    args = list(argv)
    # Command names are case-insensitive.
    for index, arg in enumerate(args):
        if arg.lower() in COMMAND_NAMES:
            args[index] = arg.lower()
            break
    ns = parser.parse_args(args)

    match ns.command:
        case "register":
            command: Command = Register(ns.name)
        case "login":
            command = Login(ns.name)
        case "users":
            command = Users()
        case "reset":
            command = Reset()
        case "addfeed":
            command = AddFeed(ns.name, ns.url)
        case "feeds":
            command = Feeds()
        case "follow":
            command = Follow(ns.url)
        case "unfollow":
            command = Unfollow(ns.url)
        case "following":
            command = Following()
        case "browse":
            command = Browse(ns.limit)
        case "agg":
            try:
                interval = _interval(ns.duration)
            except argparse.ArgumentTypeError as exc:
                parser.error(f"argument duration: {exc}")
            command = Agg(interval, ns.duration, ns.cycles)
        case _:
            parser.error(f"unknown command: {ns.command}")
    return command, ns

