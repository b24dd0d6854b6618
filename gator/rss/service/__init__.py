# -*- coding: utf-8 -*-
"""
RSS service package

All RSS business logic lives here.
"""

from .feed_service import (
    add_feed,
    browse_posts,
    follow_feed,
    list_feeds,
    list_following,
    unfollow_feed,
)
from .fetch_service import fetch_feed, refresh_feed
from .parse_service import parse_feed, parse_feed_document
from .reconcile_service import reconcile_entries

__all__ = [
    "add_feed",
    "list_feeds",
    "follow_feed",
    "unfollow_feed",
    "list_following",
    "browse_posts",
    "fetch_feed",
    "refresh_feed",
    "parse_feed",
    "parse_feed_document",
    "reconcile_entries",
]
