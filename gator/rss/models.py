# -*- coding: utf-8 -*-
"""
RSS data models

Public API:
- `Feed`
- `FeedFollow`
- `Post`

Purpose:
- SQLAlchemy ORM models for registered feeds, user subscriptions and the posts
  discovered in them.

Notes:
- All timestamps are UTC.
- `Post.url` is globally unique and is the only deduplication key.
- `Post.published_at` is NULL when the feed gave no parsable date.
- `Feed.last_fetched_at` is NULL until the first fetch attempt; NULL sorts first.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import (
    DateTime,
    ForeignKey,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gator.database import Base, utcnow
from gator.users.models import User


class Feed(Base):
    __tablename__ = "feeds"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    url: Mapped[str] = mapped_column(String(2048), nullable=False, unique=True)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    last_fetched_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), default=None
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    user: Mapped["User"] = relationship("User", back_populates="feeds")
    follows: Mapped[List["FeedFollow"]] = relationship(
        "FeedFollow",
        back_populates="feed",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    posts: Mapped[List["Post"]] = relationship(
        "Post",
        back_populates="feed",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class FeedFollow(Base):
    __tablename__ = "feed_follows"
    __table_args__ = (
        UniqueConstraint("user_id", "feed_id", name="uq_feed_follows_user_feed"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    feed_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("feeds.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    user: Mapped["User"] = relationship("User", back_populates="follows")
    feed: Mapped["Feed"] = relationship("Feed", back_populates="follows")


class Post(Base):
    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    feed_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("feeds.id", ondelete="CASCADE"),
        nullable=False,
    )
    url: Mapped[str] = mapped_column(String(2048), nullable=False, unique=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, default=None)
    published_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), default=None
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    feed: Mapped["Feed"] = relationship("Feed", back_populates="posts")
