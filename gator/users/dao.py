# -*- coding: utf-8 -*-
"""
User DAO

Public API:
- `UserDAO`
"""

from __future__ import annotations

from typing import List

from sqlalchemy import delete, select

from gator.dao import BaseDAO
from .models import User


class UserDAO(BaseDAO):
    def list_all(self) -> List[User]:
        stmt = select(User).order_by(User.name.asc())
        return list(self.db_session.scalars(stmt))

    def get_by_name(self, name: str) -> User | None:
        stmt = select(User).where(User.name == name)
        return self.db_session.scalars(stmt).first()

    def create_user(self, *, name: str) -> User:
        user = User(name=name)
        self.db_session.add(user)
        self.db_session.commit()
        self.db_session.refresh(user)
        return user

    def delete_all(self) -> int:
        """Delete every user; feeds, follows and posts go with them."""
        result = self.db_session.execute(delete(User))
        self.db_session.commit()
        return result.rowcount or 0
