# -*- coding: utf-8 -*-
"""
Users module

Public API:
- `register_user`
- `login_user`
- `list_users`
- `reset_database`
- `require_current_user`
- `SessionConfig`
"""

from .session import SessionConfig
from .service import (
    list_users,
    login_user,
    register_user,
    require_current_user,
    reset_database,
)

__all__ = [
    "SessionConfig",
    "register_user",
    "login_user",
    "list_users",
    "reset_database",
    "require_current_user",
]
