# -*- coding: utf-8 -*-
"""
Command handlers

Public API:
- `run_command`

Internal:
- `_print_feed`
- `_print_post`

Purpose:
- Execute one typed command against the database and print its result. Any
  `GatorError` raised here is turned into a non-zero exit by `gator.cli.main`.
"""

from __future__ import annotations

from sqlalchemy import Engine

from gator.database import get_db
from gator.rss.config import rss_config
from gator.rss.scheduler import run_scheduler
from gator.rss.schemas import FeedWithOwnerSchema, PostSchema
from gator.rss.service import (
    add_feed,
    browse_posts,
    follow_feed,
    list_feeds,
    list_following,
    unfollow_feed,
)
from gator.users import (
    SessionConfig,
    list_users,
    login_user,
    register_user,
    require_current_user,
    reset_database,
)
from .commands import (
    AddFeed,
    Agg,
    Browse,
    Command,
    Feeds,
    Follow,
    Following,
    Login,
    Register,
    Reset,
    Unfollow,
    Users,
)

RULE = "-" * 80


def _print_feed(feed: FeedWithOwnerSchema) -> None:
    print(f"Feed Name:  {feed.name}")
    print(f"URL:        {feed.url}")
    print(f"Created By: {feed.user_name}")
    print(RULE)


def _print_post(post: PostSchema) -> None:
    published = (
        post.published_at.strftime("%a %b %d %Y %H:%M UTC")
        if post.published_at
        else "unknown date"
    )
    print(f"{published} from {post.feed_name}")
    print(f"--- {post.title} ---")
    if post.description:
        print(f"    {post.description}")
    print(f"Link: {post.url}")
    print("=" * 40)


def run_command(command: Command, session: SessionConfig, engine: Engine) -> None:
    match command:
        case Register(name=name):
            with get_db(engine) as db:
                user = register_user(db, session, name)
            print(f"User {user.name} registered successfully (ID: {user.id}).")

        case Login(name=name):
            with get_db(engine) as db:
                user = login_user(db, session, name)
            print(f"Successfully set current user to: {user.name} (ID: {user.id})")

        case Users():
            with get_db(engine) as db:
                users = list_users(db)
            for user in users:
                marker = " (current)" if user.name == session.current_user_name else ""
                print(f"* {user.name}{marker}")

        case Reset():
            with get_db(engine) as db:
                reset_database(db)
            print("Database reset successfully.")

        case AddFeed(name=name, url=url):
            with get_db(engine) as db:
                user = require_current_user(db, session)
                feed, follow = add_feed(db, user, name, url)
            print("Successfully added new feed and started following it:")
            print(f"  ID:         {feed.id}")
            print(f"  Name:       {feed.name}")
            print(f"  URL:        {feed.url}")
            print(f"  User ID:    {feed.user_id}")
            print(f"  Created At: {feed.created_at}")
            if follow is None:
                print("  (could not follow the feed automatically)")

        case Feeds():
            with get_db(engine) as db:
                feeds = list_feeds(db)
            if not feeds:
                print("No feeds found in the database.")
                return
            print(f"Found {len(feeds)} feeds:")
            print(RULE)
            for feed in feeds:
                _print_feed(feed)

        case Follow(url=url):
            with get_db(engine) as db:
                user = require_current_user(db, session)
                follow = follow_feed(db, user, url)
            print(f"User {follow.user_name} is now following feed {follow.feed_name}.")

        case Unfollow(url=url):
            with get_db(engine) as db:
                user = require_current_user(db, session)
                feed = unfollow_feed(db, user, url)
            print(f"User {user.name} unfollowed feed {feed.name}.")

        case Following():
            with get_db(engine) as db:
                user = require_current_user(db, session)
                follows = list_following(db, user)
            if not follows:
                print("You are not currently following any feeds.")
                return
            print(f"You are following {len(follows)} feeds:")
            for follow in follows:
                print(f"  - {follow.feed_name}")

        case Browse(limit=limit):
            with get_db(engine) as db:
                user = require_current_user(db, session)
                posts = browse_posts(db, user, limit or rss_config.rss_default_browse_limit)
            if not posts:
                print("No posts yet. Run 'gator agg <duration>' to collect some.")
                return
            print(f"Found {len(posts)} posts for user {user.name}:")
            for post in posts:
                _print_post(post)

        case Agg(interval=interval, interval_text=interval_text, max_cycles=max_cycles):
            print(f"Collecting feeds every {interval_text}")
            run_scheduler(interval, engine=engine, max_cycles=max_cycles)
