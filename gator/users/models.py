# -*- coding: utf-8 -*-
"""
User data model

Public API:
- `User`

Notes:
- Removing a user removes their feeds and follows through `ON DELETE CASCADE`.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, TYPE_CHECKING

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gator.database import Base, utcnow

if TYPE_CHECKING:
    from gator.rss.models import Feed, FeedFollow


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    feeds: Mapped[List["Feed"]] = relationship(
        "Feed",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    follows: Mapped[List["FeedFollow"]] = relationship(
        "FeedFollow",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


# Feed and FeedFollow must be mapped before relationships are configured.
import gator.rss.models  # noqa: E402,F401
