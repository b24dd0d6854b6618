# -*- coding: utf-8 -*-
"""
Feed parsing

Public API:
- `parse_feed`
- `parse_feed_document`

Purpose:
- Turn the raw bytes of an RSS 2.0 / RSS 1.0 / Atom document into ordered
  `ParsedEntry` values. Decoding honors the document's XML encoding
  declaration and, when given, the HTTP Content-Type charset.

Notes:
- `published_at` is None when no date in the entry can be parsed; callers
  store that as NULL ("unknown"), never as the current time.
- Entries without any link are dropped: a post cannot exist without its URL.
"""

from __future__ import annotations

from typing import List

import feedparser  # type: ignore
from feedparser.exceptions import (  # type: ignore
    CharacterEncodingOverride,
    NonXMLContentType,
    UndeclaredNamespace,
)
from loguru import logger

from gator.errors import ParseError
from ..schemas import ParsedEntry, ParsedFeed
from .utils import _clean_text, _resolve_datetime, _resolve_description, _resolve_link

UNTITLED_ENTRY = "Untitled"

# feedparser flags these but still decodes the document correctly.
_TOLERATED_BOZO = (CharacterEncodingOverride, NonXMLContentType, UndeclaredNamespace)


def parse_feed_document(
    content: bytes, *, content_type: str | None = None
) -> ParsedFeed:
    """Parse a feed document into its title and entries."""
    response_headers = {"content-type": content_type} if content_type else None
    parsed = feedparser.parse(content, response_headers=response_headers)

    bozo_exception = parsed.get("bozo_exception")
    if parsed.get("bozo") and not isinstance(bozo_exception, _TOLERATED_BOZO):
        raise ParseError(f"failed to parse feed XML: {bozo_exception}") from bozo_exception
    if not parsed.get("version"):
        raise ParseError("document has no <rss> or <feed> root element")

    entries: List[ParsedEntry] = []
    for entry in parsed.entries:
        link = _resolve_link(entry)
        if not link:
            logger.debug("entry skipped, no link: title={}", entry.get("title"))
            continue
        entries.append(
            ParsedEntry(
                title=_clean_text(entry.get("title")) or UNTITLED_ENTRY,
                link=link,
                description=_clean_text(_resolve_description(entry)),
                published_at=_resolve_datetime(entry),
            )
        )

    title = _clean_text(parsed.feed.get("title")) or ""
    return ParsedFeed(title=title, entries=entries)


def parse_feed(content: bytes, *, content_type: str | None = None) -> List[ParsedEntry]:
    """Parse a feed document into an ordered list of entries."""
    return parse_feed_document(content, content_type=content_type).entries
