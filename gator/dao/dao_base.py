# -*- coding: utf-8 -*-
"""
DAO base class

Public API:
- `BaseDAO`
"""

from __future__ import annotations

from sqlalchemy.orm import Session


class BaseDAO:
    """Every DAO wraps one session; methods commit their own writes."""

    def __init__(self, db_session: Session) -> None:
        self.db_session = db_session
