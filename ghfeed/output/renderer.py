"""
Feed serialization for Atom, RSS and JSON output.

Atom and RSS documents are generated from Jinja2 templates with XML
autoescaping, so entry HTML bodies are emitted as escaped text. JSON output
is a structured dump of the output feed.
"""

from __future__ import annotations

from datetime import datetime
from email.utils import format_datetime
import json
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..core.types import OutputEntry, OutputFeed, Person

FORMATS = ("atom", "rss", "json")


def render_feed(feed: OutputFeed, fmt: str) -> str:
    """Serialize a feed in the given format.

    Args:
        feed: The consolidated output feed
        fmt: "atom", "rss" or "json"

    Returns:
        The serialized document

    Raises:
        ValueError: If the format is not supported
    """
    if fmt == "atom":
        return render_atom(feed)
    if fmt == "rss":
        return render_rss(feed)
    if fmt == "json":
        return render_json(feed)
    raise ValueError(f"unsupported format: {fmt}")


def render_atom(feed: OutputFeed) -> str:
    template = _environment().get_template("atom.xml")
    return template.render(feed=feed.info, entries=feed.entries, updated=_feed_updated(feed))


def render_rss(feed: OutputFeed) -> str:
    template = _environment().get_template("rss.xml")
    return template.render(feed=feed.info, entries=feed.entries, updated=_feed_updated(feed))


def render_json(feed: OutputFeed) -> str:
    return json.dumps(_feed_to_dict(feed), indent=2, ensure_ascii=False) + "\n"


def _environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(Path(__file__).parent / "templates")),
        autoescape=select_autoescape(["xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["rfc3339"] = _rfc3339
    env.filters["rfc822"] = _rfc822
    return env


def _feed_updated(feed: OutputFeed) -> datetime | None:
    """Feed update time, falling back to the newest entry's timestamp."""
    if feed.info.updated is not None:
        return feed.info.updated
    timestamps = [entry.effective_timestamp for entry in feed.entries if entry.effective_timestamp]
    return max(timestamps) if timestamps else None


def _rfc3339(value: datetime | None) -> str:
    if value is None:
        return ""
    return value.isoformat().replace("+00:00", "Z")


def _rfc822(value: datetime | None) -> str:
    if value is None:
        return ""
    return format_datetime(value)


def _feed_to_dict(feed: OutputFeed) -> dict[str, Any]:
    info = feed.info
    return {
        "title": info.title,
        "description": info.description,
        "link": info.link,
        "feedLink": info.feed_link,
        "updated": _rfc3339(info.updated),
        "language": info.language,
        "copyright": info.copyright,
        "generator": info.generator,
        "categories": list(info.categories),
        "authors": [_person_to_dict(person) for person in info.authors],
        "image": info.image,
        "feedType": info.feed_type,
        "items": [_entry_to_dict(entry) for entry in feed.entries],
    }


def _entry_to_dict(entry: OutputEntry) -> dict[str, Any]:
    return {
        "title": entry.title,
        "description": entry.body,
        "content": entry.body,
        "link": entry.link,
        "published": _rfc3339(entry.published),
        "updated": _rfc3339(entry.updated),
        "authors": [_person_to_dict(person) for person in entry.authors],
        "guid": entry.guid or entry.link,
    }


def _person_to_dict(person: Person) -> dict[str, str]:
    data = {}
    if person.name:
        data["name"] = person.name
    if person.email:
        data["email"] = person.email
    if person.uri:
        data["uri"] = person.uri
    return data
