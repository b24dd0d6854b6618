# -*- coding: utf-8 -*-
"""
Feed management service

Features:
- Register feeds and manage who follows them
- Read the newest posts of followed feeds

Public API:
- `CreateFeedPayload`
- `add_feed`
- `list_feeds`
- `follow_feed`
- `unfollow_feed`
- `list_following`
- `browse_posts`

Internal:
- `_get_feed_by_url`
- `_to_follow_schema`
"""

from __future__ import annotations

from typing import List, Tuple

from loguru import logger
from pydantic import BaseModel, Field, HttpUrl, ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from gator.errors import CommandError, ConflictError, NotFoundError
from gator.users.models import User
from ..dao import FeedDAO, FeedFollowDAO, PostDAO
from ..models import Feed, FeedFollow
from ..schemas import FeedFollowSchema, FeedSchema, FeedWithOwnerSchema, PostSchema
from .utils import _to_post_schema


class CreateFeedPayload(BaseModel):
    """Arguments of `addfeed`"""

    name: str = Field(..., min_length=1, max_length=256, description="Feed name")
    url: HttpUrl = Field(..., description="Feed URL")


def _get_feed_by_url(db: Session, url: str) -> Feed:
    feed = FeedDAO(db).get_by_url(url)
    if not feed:
        raise NotFoundError(
            f"feed with URL '{url}' not found. Please add the feed first using 'gator addfeed'"
        )
    return feed


def _to_follow_schema(follow: FeedFollow) -> FeedFollowSchema:
    return FeedFollowSchema(
        id=follow.id,
        feed_id=follow.feed_id,
        user_id=follow.user_id,
        feed_name=follow.feed.name,
        user_name=follow.user.name,
    )


def add_feed(
    db: Session, user: User, name: str, url: str
) -> Tuple[FeedSchema, FeedFollowSchema | None]:
    """Create a feed owned by `user` and follow it on their behalf."""
    try:
        CreateFeedPayload(name=name, url=url)
    except ValidationError as exc:
        problems = "; ".join(err["msg"] for err in exc.errors())
        raise CommandError(f"invalid feed: {problems}") from exc

    feed_url = url.strip()
    feed_dao = FeedDAO(db)
    if feed_dao.get_by_url(feed_url):
        raise ConflictError(f"feed with URL '{feed_url}' already exists")
    try:
        feed = feed_dao.create_feed(name=name.strip(), url=feed_url, user_id=user.id)
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(f"feed with URL '{feed_url}' already exists") from exc
    logger.info("feed added: name={}, url={}, user={}", feed.name, feed.url, user.name)

    follow_schema: FeedFollowSchema | None = None
    try:
        follow = FeedFollowDAO(db).create_follow(user_id=user.id, feed_id=feed.id)
        follow_schema = _to_follow_schema(follow)
    except IntegrityError as exc:
        db.rollback()
        logger.warning("could not auto-follow new feed: url={}, error={}", feed_url, exc)

    return FeedSchema.model_validate(feed), follow_schema


def list_feeds(db: Session) -> List[FeedWithOwnerSchema]:
    return [
        FeedWithOwnerSchema(
            **FeedSchema.model_validate(feed).model_dump(), user_name=user_name
        )
        for feed, user_name in FeedDAO(db).list_with_owner()
    ]


def follow_feed(db: Session, user: User, url: str) -> FeedFollowSchema:
    feed = _get_feed_by_url(db, url)
    follow_dao = FeedFollowDAO(db)
    if follow_dao.exists(user_id=user.id, feed_id=feed.id):
        raise ConflictError("you are already following this feed")
    try:
        follow = follow_dao.create_follow(user_id=user.id, feed_id=feed.id)
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError("you are already following this feed") from exc
    return _to_follow_schema(follow)


def unfollow_feed(db: Session, user: User, url: str) -> FeedSchema:
    feed = _get_feed_by_url(db, url)
    if not FeedFollowDAO(db).delete_follow(user_id=user.id, feed_id=feed.id):
        raise NotFoundError("you are not following this feed")
    return FeedSchema.model_validate(feed)


def list_following(db: Session, user: User) -> List[FeedFollowSchema]:
    return [_to_follow_schema(f) for f in FeedFollowDAO(db).list_for_user(user.id)]


def browse_posts(db: Session, user: User, limit: int) -> List[PostSchema]:
    """Newest posts across the feeds `user` follows; undated posts sort last."""
    if limit < 1:
        raise CommandError("limit must be a positive integer")
    return [_to_post_schema(post) for post in PostDAO(db).list_for_user(user.id, limit)]
