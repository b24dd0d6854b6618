# -*- coding: utf-8 -*-
"""
RSS pydantic models

Public API:
- `ParsedEntry`
- `ParsedFeed`
- `FetchResult`
- `ReconcileResult`
- `CycleOutcome`
- `FeedSchema`
- `FeedWithOwnerSchema`
- `FeedFollowSchema`
- `PostSchema`

Purpose:
- Value objects passed between fetcher, parser, reconciler and scheduler, and
  the read models rendered by the command layer.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel


@dataclass(frozen=True, slots=True)
class ParsedEntry:
    """One normalized item from a feed document."""

    title: str
    link: str
    description: Optional[str]
    published_at: Optional[datetime]


@dataclass(frozen=True, slots=True)
class ParsedFeed:
    title: str
    entries: List[ParsedEntry] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class FetchResult:
    url: str
    content: bytes
    content_type: Optional[str] = None
    status_code: int = 200


@dataclass(frozen=True, slots=True)
class ReconcileResult:
    inserted: int = 0
    skipped: int = 0


class CycleOutcome(BaseModel):
    """Result of one scheduler cycle"""

    status: Literal["idle", "success", "error"]
    feed_id: Optional[uuid.UUID] = None
    feed_name: Optional[str] = None
    feed_url: Optional[str] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    entries_seen: int = 0
    inserted: int = 0
    skipped: int = 0
    error_message: Optional[str] = None
    timestamp_advanced: bool = False


class FeedSchema(BaseModel):
    id: uuid.UUID
    name: str
    url: str
    user_id: uuid.UUID
    last_fetched_at: Optional[datetime] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class FeedWithOwnerSchema(FeedSchema):
    user_name: str


class FeedFollowSchema(BaseModel):
    id: uuid.UUID
    feed_id: uuid.UUID
    user_id: uuid.UUID
    feed_name: str
    user_name: str


class PostSchema(BaseModel):
    id: uuid.UUID
    feed_id: uuid.UUID
    feed_name: str
    url: str
    title: str
    description: Optional[str] = None
    published_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
