# -*- coding: utf-8 -*-
"""
Feed parser tests
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from gator.errors import ParseError
from gator.rss.service import parse_feed, parse_feed_document


SAMPLE_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Example Channel</title>
    <link>https://example.com</link>
    <description>Example content</description>
    <item>
      <title>First post</title>
      <link>https://example.com/post-1</link>
      <guid>post-1</guid>
      <description>First summary</description>
      <pubDate>Mon, 01 Jan 2024 00:00:00 +0000</pubDate>
    </item>
    <item>
      <title>Second post</title>
      <link>https://example.com/post-2</link>
      <guid>post-2</guid>
      <description>Second summary</description>
      <pubDate>Tue, 02 Jan 2024 12:30:00 +0000</pubDate>
    </item>
  </channel>
</rss>
"""


def test_parse_rss_entries_in_document_order() -> None:
    """Entries keep document order and carry title, link, description, date."""
    entries = parse_feed(SAMPLE_FEED)

    assert [e.link for e in entries] == [
        "https://example.com/post-1",
        "https://example.com/post-2",
    ]
    first = entries[0]
    assert first.title == "First post"
    assert first.description == "First summary"
    assert first.published_at == datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc)
    assert entries[1].published_at == datetime(
        2024, 1, 2, 12, 30, tzinfo=timezone.utc
    )


def test_parse_feed_document_returns_channel_title() -> None:
    parsed = parse_feed_document(SAMPLE_FEED)
    assert parsed.title == "Example Channel"
    assert len(parsed.entries) == 2


def test_parse_unescapes_html_entities() -> None:
    """Entity-encoded text ends up as readable plain text."""
    document = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"><channel><title>Entities</title>
  <item>
    <title>Tom &amp; Jerry&#39;s Show</title>
    <link>https://example.com/tom</link>
    <description>Bread &amp;amp; butter</description>
  </item>
</channel></rss>
"""
    (entry,) = parse_feed(document)
    assert entry.title == "Tom & Jerry's Show"
    assert entry.description == "Bread & butter"


def test_parse_honors_declared_encoding() -> None:
    """The XML encoding declaration decides how bytes are decoded."""
    document = (
        '<?xml version="1.0" encoding="ISO-8859-1"?>\n'
        '<rss version="2.0"><channel><title>Café</title>'
        "<item><title>Crème brûlée</title>"
        "<link>https://example.com/dessert</link></item>"
        "</channel></rss>"
    ).encode("iso-8859-1")

    parsed = parse_feed_document(document)
    assert parsed.title == "Café"
    assert parsed.entries[0].title == "Crème brûlée"


def test_parse_atom_feed() -> None:
    document = b"""<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Atom Example</title>
  <id>urn:example:feed</id>
  <updated>2024-01-02T03:04:05Z</updated>
  <entry>
    <title>Atom entry</title>
    <link href="https://example.com/atom-1"/>
    <id>urn:example:atom-1</id>
    <updated>2024-01-02T03:04:05Z</updated>
    <summary>Atom summary</summary>
  </entry>
</feed>
"""
    (entry,) = parse_feed(document)
    assert entry.link == "https://example.com/atom-1"
    assert entry.title == "Atom entry"
    assert entry.published_at == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def test_parse_unknown_date_is_none() -> None:
    """An unparsable date stays unknown rather than becoming "now"."""
    document = b"""<?xml version="1.0"?>
<rss version="2.0"><channel><title>Dates</title>
  <item>
    <title>Undated</title>
    <link>https://example.com/undated</link>
    <pubDate>sometime last week</pubDate>
  </item>
</channel></rss>
"""
    (entry,) = parse_feed(document)
    assert entry.published_at is None


def test_parse_empty_channel_yields_no_entries() -> None:
    document = b"""<?xml version="1.0"?>
<rss version="2.0"><channel><title>Quiet</title></channel></rss>
"""
    assert parse_feed(document) == []


def test_parse_skips_entries_without_link() -> None:
    document = b"""<?xml version="1.0"?>
<rss version="2.0"><channel><title>Links</title>
  <item><title>No link here</title></item>
  <item><title>Linked</title><link>https://example.com/linked</link></item>
</channel></rss>
"""
    entries = parse_feed(document)
    assert [e.title for e in entries] == ["Linked"]


def test_parse_missing_title_uses_placeholder() -> None:
    document = b"""<?xml version="1.0"?>
<rss version="2.0"><channel><title>Titles</title>
  <item><link>https://example.com/untitled</link></item>
</channel></rss>
"""
    (entry,) = parse_feed(document)
    assert entry.title == "Untitled"


def test_parse_malformed_xml_raises() -> None:
    with pytest.raises(ParseError):
        parse_feed(b"<rss version='2.0'><channel><item><title>oops</channel></rss>")


def test_parse_wrong_root_raises() -> None:
    """Well-formed XML that is not a feed is rejected."""
    with pytest.raises(ParseError):
        parse_feed(b"<?xml version='1.0'?><html><body><p>hi</p></body></html>")


def test_parse_empty_document_raises() -> None:
    with pytest.raises(ParseError):
        parse_feed(b"")
