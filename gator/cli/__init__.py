# -*- coding: utf-8 -*-
"""
Command line entry

Public API:
- `main`

Usage: `gator <command> [args]`. Exits 0 on success; on failure prints
`Error running command '<name>': <reason>` to stderr and exits 1.
"""

from __future__ import annotations

import sys
from typing import Sequence

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from gator.config import app_config
from gator.database import get_engine, init_db
from gator.errors import GatorError
from gator.logger import setup_logger
from gator.users.session import SessionConfig
from .commands import build_parser, parse_command
from .handlers import run_command

__all__ = ["main"]


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    command, ns = parse_command(sys.argv[1:] if argv is None else argv, parser)
    setup_logger(ns.log_level or app_config.gator_log_level)

    try:
        session = SessionConfig.read()
        engine = get_engine(session.db_url)
        init_db(engine)
        run_command(command, session, engine)
    except (GatorError, SQLAlchemyError, OSError) as exc:
        logger.debug("command failed: command={}, error={!r}", ns.command, exc)
        print(f"Error running command '{ns.command}': {exc}", file=sys.stderr)
        return 1
    return 0
