# -*- coding: utf-8 -*-
"""
RSS reconciliation

Public API:
- `reconcile_entries`

Purpose:
- Merge parsed entries into the posts table without duplicates and record the
  fetch on the feed.

Notes:
- Each post is committed on its own. An interrupted run leaves the inserted
  posts in place and the feed timestamp untouched; running it again with the
  same entries inserts nothing twice and then advances the timestamp.
- Within one batch the first entry for a URL wins; later ones are skipped.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Iterable

from loguru import logger
from sqlalchemy.orm import Session

from gator.errors import DuplicateEntryError
from ..dao import FeedDAO, PostDAO
from ..schemas import ParsedEntry, ReconcileResult


def reconcile_entries(
    db: Session,
    feed_id: uuid.UUID,
    entries: Iterable[ParsedEntry],
    *,
    fetched_at: datetime,
) -> ReconcileResult:
    """Insert unseen entries as posts of `feed_id`, then mark the feed fetched."""
    post_dao = PostDAO(db)
    inserted = 0
    skipped = 0

    for entry in entries:
        try:
            post_dao.create_post(
                feed_id=feed_id,
                url=entry.link,
                title=entry.title,
                description=entry.description,
                published_at=entry.published_at,
            )
        except DuplicateEntryError:
            skipped += 1
            logger.debug("post already known: url={}", entry.link)
            continue
        inserted += 1

    FeedDAO(db).mark_fetched(feed_id, fetched_at)
    return ReconcileResult(inserted=inserted, skipped=skipped)
