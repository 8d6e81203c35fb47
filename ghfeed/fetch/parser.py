"""
Feed parsing into the core SourceFeed model.

feedparser handles Atom, RSS and RDF documents. HTML sanitizing and
relative-URI resolution are turned off so the activity markup reaches the
fact extractor exactly as the forge wrote it.
"""

from __future__ import annotations

from datetime import datetime, timezone
import logging
import time
from typing import Any

import feedparser

from ..core.types import FeedInfo, Person, SourceEntry, SourceFeed

logger = logging.getLogger(__name__)


def parse_feed(text: str) -> SourceFeed:
    """Parse a feed document.

    Args:
        text: The raw feed document

    Returns:
        The parsed SourceFeed

    Raises:
        ValueError: If the document is malformed and yields neither a feed
            title nor any entries
    """
    parsed = feedparser.parse(text, sanitize_html=False, resolve_relative_uris=False)
    feed = parsed.get("feed", {})
    raw_entries = parsed.get("entries", [])

    if parsed.get("bozo") and not raw_entries and not feed.get("title"):
        exc = parsed.get("bozo_exception")
        raise ValueError(f"Unable to parse feed: {exc}")

    info = FeedInfo(
        title=feed.get("title", ""),
        description=feed.get("subtitle", "") or feed.get("description", ""),
        link=feed.get("link", ""),
        feed_link=_self_link(feed.get("links", [])),
        updated=_to_datetime(_own(feed, "updated_parsed")),
        language=feed.get("language", ""),
        copyright=feed.get("rights", ""),
        generator=feed.get("generator", ""),
        categories=[tag.get("term", "") for tag in feed.get("tags", []) if tag.get("term")],
        authors=[_person(author) for author in feed.get("authors", [])],
        image=_image_url(feed),
        feed_type=parsed.get("version", ""),
    )
    entries = [_parse_entry(item) for item in raw_entries]
    logger.debug("Parsed %d entries from %s feed", len(entries), info.feed_type or "unknown")
    return SourceFeed(info=info, entries=entries)


def _parse_entry(item: Any) -> SourceEntry:
    """Convert one feedparser entry into a SourceEntry.

    The full content is preferred over the summary when both are present.
    """
    content = ""
    if item.get("content"):
        content = item["content"][0].get("value", "")
    if not content:
        content = item.get("summary", "")

    return SourceEntry(
        title=item.get("title", ""),
        content=content,
        link=item.get("link", ""),
        guid=item.get("id", ""),
        published=_to_datetime(item.get("published_parsed")),
        updated=_to_datetime(_own(item, "updated_parsed")),
        authors=tuple(_person(author) for author in item.get("authors", [])),
        published_text=item.get("published", ""),
        updated_text=_own(item, "updated", ""),
    )


def _to_datetime(value: time.struct_time | None) -> datetime | None:
    # feedparser normalizes parsed dates to UTC
    if value is None:
        return None
    return datetime(*value[:6], tzinfo=timezone.utc)


def _own(raw: Any, key: str, default: Any = None) -> Any:
    # feedparser maps a missing "updated" onto "published"; read only keys the document set
    if key in raw.keys():
        return raw[key]
    return default


def _person(raw: Any) -> Person:
    return Person(name=raw.get("name"), email=raw.get("email"), uri=raw.get("href"))


def _self_link(links: list[Any]) -> str:
    for link in links:
        if link.get("rel") == "self":
            return link.get("href", "")
    return ""


def _image_url(feed: Any) -> str:
    image = feed.get("image")
    if not image:
        return ""
    return image.get("href", "") or image.get("url", "")
