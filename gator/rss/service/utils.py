# -*- coding: utf-8 -*-
"""
RSS service helpers

Public API:
- none (internal use only)

Internal:
- `_clean_text`
- `_resolve_link`
- `_resolve_datetime`
- `_resolve_description`
- `_normalize_datetime_utc`
- `_to_post_schema`
"""

from __future__ import annotations

import calendar
import html
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

import feedparser  # type: ignore

from ..models import Post
from ..schemas import PostSchema

UNKNOWN_FEED_NAME = "unknown feed"


def _clean_text(value: str | None) -> str | None:
    """Unescape HTML character entities and trim surrounding whitespace."""
    if value is None:
        return None
    text = html.unescape(value).strip()
    return text or None


def _resolve_link(entry: feedparser.FeedParserDict) -> str | None:
    """Canonical link of an entry; a permalink guid stands in when link is absent."""
    link = entry.get("link")
    if link:
        return str(link).strip()
    guid = entry.get("id")
    if guid and str(guid).startswith(("http://", "https://")):
        return str(guid).strip()
    return None


def _resolve_datetime(entry: feedparser.FeedParserDict) -> datetime | None:
    """Publication time in UTC, or None when the feed gives nothing parsable."""
    text_value = entry.get("published") or entry.get("updated") or entry.get("created")
    if text_value:
        try:
            parsed = parsedate_to_datetime(text_value)
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed.astimezone(timezone.utc)
        except (TypeError, ValueError, IndexError):
            pass

    # feedparser normalizes every date it understands to a UTC struct_time.
    struct_time = (
        entry.get("published_parsed")
        or entry.get("updated_parsed")
        or entry.get("created_parsed")
    )
    if not struct_time:
        return None
    try:
        return datetime.fromtimestamp(calendar.timegm(struct_time), tz=timezone.utc)
    except (OverflowError, TypeError, ValueError):
        return None


def _resolve_description(entry: feedparser.FeedParserDict) -> str | None:
    summary = entry.get("summary")
    if summary:
        return summary
    contents = entry.get("content")
    if isinstance(contents, list):
        for item in contents:
            value = item.get("value")
            if value:
                return value
    return None


def _normalize_datetime_utc(value: datetime | None) -> datetime | None:
    """SQLite hands back naive datetimes; they were stored as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _to_post_schema(post: Post) -> PostSchema:
    feed = post.feed
    return PostSchema(
        id=post.id,
        feed_id=post.feed_id,
        feed_name=feed.name if feed else UNKNOWN_FEED_NAME,
        url=post.url,
        title=post.title,
        description=post.description,
        published_at=_normalize_datetime_utc(post.published_at),
    )
