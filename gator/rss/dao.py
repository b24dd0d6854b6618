# -*- coding: utf-8 -*-
"""
RSS DAO

Public API:
- `FeedDAO`
- `FeedFollowDAO`
- `PostDAO`

Purpose:
- Database access for feeds, follows and posts. `FeedDAO.get_next_to_fetch`
  is the fetch cursor: oldest `last_fetched_at` first, never-fetched before all.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Tuple

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from gator.dao import BaseDAO
from gator.errors import DuplicateEntryError
from gator.users.models import User
from .models import Feed, FeedFollow, Post


class FeedDAO(BaseDAO):
    """Feed DAO"""

    def list_with_owner(self) -> List[Tuple[Feed, str]]:
        stmt = (
            select(Feed, User.name)
            .join(User, Feed.user_id == User.id)
            .order_by(Feed.name.asc(), Feed.created_at.asc())
        )
        return [(feed, user_name) for feed, user_name in self.db_session.execute(stmt)]

    def get_by_id(self, feed_id: uuid.UUID) -> Feed | None:
        return self.db_session.get(Feed, feed_id)

    def get_by_url(self, url: str) -> Feed | None:
        stmt = select(Feed).where(Feed.url == url)
        return self.db_session.scalars(stmt).first()

    def create_feed(self, *, name: str, url: str, user_id: uuid.UUID) -> Feed:
        feed = Feed(name=name, url=url, user_id=user_id)
        self.db_session.add(feed)
        self.db_session.commit()
        self.db_session.refresh(feed)
        return feed

    def get_next_to_fetch(self) -> Feed | None:
        """Return the least recently fetched feed, treating NULL as oldest."""
        stmt = select(Feed).order_by(
            Feed.last_fetched_at.asc().nullsfirst(),
            Feed.created_at.asc(),
            Feed.id.asc(),
        )
        return self.db_session.scalars(stmt.limit(1)).first()

    def mark_fetched(self, feed_id: uuid.UUID, timestamp: datetime) -> None:
        stmt = (
            update(Feed)
            .where(Feed.id == feed_id)
            .values(last_fetched_at=timestamp, updated_at=timestamp)
        )
        self.db_session.execute(stmt)
        self.db_session.commit()


class FeedFollowDAO(BaseDAO):
    """Feed follow DAO"""

    def create_follow(self, *, user_id: uuid.UUID, feed_id: uuid.UUID) -> FeedFollow:
        follow = FeedFollow(user_id=user_id, feed_id=feed_id)
        self.db_session.add(follow)
        self.db_session.commit()
        self.db_session.refresh(follow)
        return follow

    def exists(self, *, user_id: uuid.UUID, feed_id: uuid.UUID) -> bool:
        stmt = (
            select(func.count())
            .select_from(FeedFollow)
            .where(FeedFollow.user_id == user_id, FeedFollow.feed_id == feed_id)
        )
        return bool(self.db_session.execute(stmt).scalar() or 0)

    def delete_follow(self, *, user_id: uuid.UUID, feed_id: uuid.UUID) -> bool:
        stmt = delete(FeedFollow).where(
            FeedFollow.user_id == user_id, FeedFollow.feed_id == feed_id
        )
        result = self.db_session.execute(stmt)
        self.db_session.commit()
        return bool(result.rowcount)

    def list_for_user(self, user_id: uuid.UUID) -> List[FeedFollow]:
        stmt = (
            select(FeedFollow)
            .join(Feed, FeedFollow.feed_id == Feed.id)
            .where(FeedFollow.user_id == user_id)
            .order_by(Feed.name.asc())
            .options(selectinload(FeedFollow.feed), selectinload(FeedFollow.user))
        )
        return list(self.db_session.scalars(stmt))


class PostDAO(BaseDAO):
    """Post DAO"""

    def exists_url(self, url: str) -> bool:
        stmt = select(func.count()).select_from(Post).where(Post.url == url)
        return bool(self.db_session.execute(stmt).scalar() or 0)

    def create_post(
        self,
        *,
        feed_id: uuid.UUID,
        url: str,
        title: str,
        description: str | None,
        published_at: datetime | None,
    ) -> Post:
        """Insert and commit one post.

        Raises `DuplicateEntryError` when a post with `url` already exists; the
        existing row is left untouched.
        """
        post = Post(
            feed_id=feed_id,
            url=url,
            title=title,
            description=description,
            published_at=published_at,
        )
        self.db_session.add(post)
        try:
            self.db_session.commit()
        except IntegrityError as exc:
            self.db_session.rollback()
            if self.exists_url(url):
                raise DuplicateEntryError(url) from exc
            raise
        return post

    def list_for_user(self, user_id: uuid.UUID, limit: int) -> List[Post]:
        stmt = (
            select(Post)
            .join(FeedFollow, FeedFollow.feed_id == Post.feed_id)
            .where(FeedFollow.user_id == user_id)
            .order_by(
                Post.published_at.desc().nullslast(),
                Post.created_at.desc(),
            )
            .limit(limit)
            .options(selectinload(Post.feed))
        )
        return list(self.db_session.scalars(stmt))
