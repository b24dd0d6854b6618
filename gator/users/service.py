# -*- coding: utf-8 -*-
"""
User services

Public API:
- `register_user`
- `login_user`
- `list_users`
- `reset_database`
- `require_current_user`
"""

from __future__ import annotations

from typing import List

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from gator.errors import ConflictError, NotFoundError, NotLoggedInError
from .dao import UserDAO
from .models import User
from .schemas import UserSchema
from .session import SessionConfig


def register_user(db: Session, session: SessionConfig, name: str) -> UserSchema:
    """Create a user and make it the current one."""
    user_dao = UserDAO(db)
    if user_dao.get_by_name(name):
        raise ConflictError(f"user '{name}' already exists")
    try:
        user = user_dao.create_user(name=name)
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(f"user '{name}' already exists") from exc
    session.set_user(user.name)
    logger.info("user registered: name={}, id={}", user.name, user.id)
    return UserSchema.model_validate(user)


def login_user(db: Session, session: SessionConfig, name: str) -> UserSchema:
    user = UserDAO(db).get_by_name(name)
    if not user:
        raise NotFoundError(f"user '{name}' not found. Please register first.")
    session.set_user(user.name)
    return UserSchema.model_validate(user)


def list_users(db: Session) -> List[UserSchema]:
    return [UserSchema.model_validate(user) for user in UserDAO(db).list_all()]


def reset_database(db: Session) -> int:
    """Remove every user and, transitively, all feeds, follows and posts."""
    removed = UserDAO(db).delete_all()
    logger.warning("database reset: users_removed={}", removed)
    return removed


def require_current_user(db: Session, session: SessionConfig) -> User:
    """Resolve the logged-in user or fail the command."""
    if not session.current_user_name:
        raise NotLoggedInError()
    user = UserDAO(db).get_by_name(session.current_user_name)
    if not user:
        raise NotFoundError(
            f"current user '{session.current_user_name}' no longer exists. "
            "Please register or log in again."
        )
    return user
