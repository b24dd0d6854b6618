# -*- coding: utf-8 -*-
"""
RSS fetch service

Features:
- Retrieve one feed document within a time budget
- Refresh one feed: fetch, parse, reconcile, record the attempt

Public API:
- `fetch_feed`
- `refresh_feed`

Internal:
- `_should_advance_on_error`
"""

from __future__ import annotations

import time
import uuid

import httpx
from loguru import logger
from sqlalchemy.orm import Session

from gator.database import utcnow
from gator.errors import (
    FetchError,
    FetchTimeoutError,
    HTTPStatusError,
    NetworkError,
    NotFoundError,
    ParseError,
)
from ..config import rss_config
from ..dao import FeedDAO
from ..schemas import CycleOutcome, FetchResult
from .parse_service import parse_feed_document
from .reconcile_service import reconcile_entries


def fetch_feed(
    url: str,
    *,
    timeout: float | None = None,
    user_agent: str | None = None,
    client: httpx.Client | None = None,
) -> FetchResult:
    """GET `url` and return the raw body.

    The whole exchange, body included, must finish within `timeout` seconds.
    Raises `FetchTimeoutError`, `NetworkError`, `HTTPStatusError`, or a plain
    `FetchError` for redirect loops and undecodable bodies.
    """
    budget = rss_config.rss_http_timeout if timeout is None else timeout
    headers = {"User-Agent": user_agent or rss_config.rss_user_agent}
    deadline = time.monotonic() + budget

    owns_client = client is None
    http = client or httpx.Client(follow_redirects=True)
    try:
        with http.stream("GET", url, headers=headers, timeout=budget) as response:
            if not response.is_success:
                raise HTTPStatusError(
                    response.status_code, url, response.reason_phrase
                )
            chunks = []
            for chunk in response.iter_bytes():
                chunks.append(chunk)
                if time.monotonic() > deadline:
                    raise FetchTimeoutError(
                        f"fetch of {url} exceeded {budget:g}s budget"
                    )
            return FetchResult(
                url=url,
                content=b"".join(chunks),
                content_type=response.headers.get("content-type"),
                status_code=response.status_code,
            )
    except httpx.TimeoutException as exc:
        raise FetchTimeoutError(f"timed out fetching {url}: {exc}") from exc
    except (httpx.TransportError, httpx.InvalidURL) as exc:
        raise NetworkError(f"failed to fetch feed {url}: {exc}") from exc
    except httpx.RequestError as exc:
        # TooManyRedirects, DecodingError
        raise FetchError(f"failed to fetch feed {url}: {exc}") from exc
    finally:
        if owns_client:
            http.close()


def _should_advance_on_error(exc: Exception, retry_transient: bool) -> bool:
    """Whether a failed attempt still moves the feed to the back of the queue."""
    if isinstance(exc, FetchError) and exc.transient:
        return not retry_transient
    return True


def refresh_feed(
    db: Session,
    feed_id: uuid.UUID,
    *,
    client: httpx.Client | None = None,
    retry_transient: bool | None = None,
) -> CycleOutcome:
    """Fetch, parse and reconcile one feed.

    Feed-level failures are logged and reported in the outcome, never raised.
    """
    if retry_transient is None:
        retry_transient = rss_config.rss_retry_transient_errors

    feed_dao = FeedDAO(db)
    feed = feed_dao.get_by_id(feed_id)
    if not feed:
        raise NotFoundError(f"feed {feed_id} not found")

    feed_name, feed_url = feed.name, feed.url
    started_at = utcnow()
    outcome = CycleOutcome(
        status="success",
        feed_id=feed.id,
        feed_name=feed_name,
        feed_url=feed_url,
        started_at=started_at,
    )

    failure: Exception | None = None
    try:
        fetched = fetch_feed(feed_url, client=client)
        parsed = parse_feed_document(fetched.content, content_type=fetched.content_type)
        result = reconcile_entries(db, feed.id, parsed.entries, fetched_at=started_at)
        outcome.entries_seen = len(parsed.entries)
        outcome.inserted = result.inserted
        outcome.skipped = result.skipped
        outcome.timestamp_advanced = True
        logger.info(
            "feed refreshed: name={}, url={}, entries={}, inserted={}, skipped={}",
            feed_name,
            feed_url,
            len(parsed.entries),
            result.inserted,
            result.skipped,
        )
    except (FetchError, ParseError) as exc:
        logger.error(
            "feed refresh failed: name={}, url={}, error={}", feed_name, feed_url, exc
        )
        failure = exc
    except Exception as exc:
        db.rollback()
        logger.exception(
            "unexpected error refreshing feed: name={}, url={}", feed_name, feed_url
        )
        failure = exc

    if failure is not None:
        outcome.status = "error"
        outcome.error_message = str(failure)
        if _should_advance_on_error(failure, retry_transient):
            feed_dao.mark_fetched(feed_id, started_at)
            outcome.timestamp_advanced = True
        else:
            logger.info(
                "transient failure, feed stays first in line: name={}", feed_name
            )

    outcome.finished_at = utcnow()
    return outcome
