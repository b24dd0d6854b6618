# -*- coding: utf-8 -*-
"""
Session file

Public API:
- `SessionConfig`

Purpose:
- Remember which user is logged in between invocations. The file lives at
  `~/.gatorconfig.json` unless `GATOR_SESSION_PATH` points elsewhere.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from loguru import logger
from pydantic import BaseModel, Field, PrivateAttr, ValidationError

from gator.config import app_config
from gator.errors import GatorError


class SessionConfig(BaseModel):
    """Persisted per-user state."""

    current_user_name: Optional[str] = Field(default=None)
    db_url: Optional[str] = Field(
        default=None,
        description="Overrides GATOR_DATABASE_URL when set",
    )

    _path: Path = PrivateAttr(default_factory=lambda: app_config.gator_session_path)

    @classmethod
    def read(cls, path: Path | None = None) -> "SessionConfig":
        """Load the file, or return an empty session when it does not exist."""
        target = Path(path or app_config.gator_session_path).expanduser()
        if not target.exists():
            session = cls()
        else:
            try:
                session = cls.model_validate_json(target.read_text(encoding="utf-8"))
            except ValidationError as exc:
                raise GatorError(f"failed to read session file {target}: {exc}") from exc
        session._path = target
        return session

    @property
    def path(self) -> Path:
        return self._path

    def save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        os.chmod(self._path, 0o600)
        logger.debug("session saved: path={}", self._path)

    def set_user(self, name: str) -> None:
        self.current_user_name = name
        self.save()
