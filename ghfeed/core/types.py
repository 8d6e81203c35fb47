"""
Core data types for the GitHub feed consolidator.

This module defines the data structures that flow through the pipeline:
- SourceEntry / SourceFeed: the feed as parsed from the forge, read-only
- Commit / BranchActivity: push facts extracted from entry markup
- OutputEntry / OutputFeed: the rewritten feed handed to the serializer
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ActivityKind(Enum):
    """Closed set of activity types a feed entry can represent."""

    PUSH = "push"
    PULL_REQUEST = "pull_request"
    FORK = "fork"
    BRANCH_CREATE = "branch_create"
    BRANCH_DELETE = "branch_delete"
    TAG_DELETE = "tag_delete"
    OTHER = "other"


@dataclass(frozen=True)
class Person:
    """An author or contributor attached to a feed or entry."""

    name: str | None = None
    email: str | None = None
    uri: str | None = None


@dataclass
class FeedInfo:
    """Feed-level metadata copied from the source feed to the output feed.

    Attributes:
        title: Feed title
        description: Feed subtitle/description
        link: Human-facing link (e.g. https://github.com/<user>)
        feed_link: Self link of the feed document
        updated: Last update instant of the feed, if known
        language: Feed language code
        copyright: Rights statement
        generator: Generator string
        categories: Feed categories
        authors: Feed authors
        image: URL of the feed logo/image
        feed_type: Source syntax reported by the parser (e.g. "atom10")
    """

    title: str = ""
    description: str = ""
    link: str = ""
    feed_link: str = ""
    updated: datetime | None = None
    language: str = ""
    copyright: str = ""
    generator: str = ""
    categories: list[str] = field(default_factory=list)
    authors: list[Person] = field(default_factory=list)
    image: str = ""
    feed_type: str = ""


@dataclass(frozen=True)
class SourceEntry:
    """One feed item as parsed from the source feed.

    Attributes:
        title: Entry title, e.g. "cdzombak pushed dotfiles"
        content: Raw HTML body of the entry
        link: Entry URL
        guid: Globally unique id of the entry
        published: Published instant, if present
        updated: Updated instant, if present
        authors: Entry authors
        published_text: Raw published string from the document
        updated_text: Raw updated string from the document
    """

    title: str = ""
    content: str = ""
    link: str = ""
    guid: str = ""
    published: datetime | None = None
    updated: datetime | None = None
    authors: tuple[Person, ...] = ()
    published_text: str = ""
    updated_text: str = ""


@dataclass
class SourceFeed:
    info: FeedInfo
    entries: list[SourceEntry] = field(default_factory=list)


@dataclass(frozen=True)
class Commit:
    """A single commit pulled out of push markup.

    Attributes:
        hash: Short commit hash as displayed (7+ hex characters)
        message: Commit message, trimmed
        link: Absolute URL of the commit
    """

    hash: str
    message: str
    link: str


@dataclass(frozen=True)
class BranchKey:
    """Aggregation key for pushes to one repository branch."""

    repo: str
    branch: str


@dataclass
class BranchActivity:
    """All known pushes to one repository/branch within a run.

    Commits keep markup order (newest first within one push); commits of
    later-merged entries are appended, never re-sorted.

    Attributes:
        repo: Repository name (without owner)
        branch: Branch name, "master" when not determinable
        commits: Ordered commits
        latest_timestamp: Most recent push instant seen for this key
        compare_link: Link representing the whole activity
    """

    repo: str
    branch: str
    commits: list[Commit] = field(default_factory=list)
    latest_timestamp: datetime | None = None
    compare_link: str = ""

    @property
    def key(self) -> BranchKey:
        return BranchKey(self.repo, self.branch)


@dataclass(frozen=True)
class OutputEntry:
    """A rewritten feed entry.

    The HTML body serves as both the short description and the full content.
    """

    title: str
    body: str
    link: str
    guid: str
    published: datetime | None = None
    updated: datetime | None = None
    authors: tuple[Person, ...] = ()

    @property
    def effective_timestamp(self) -> datetime | None:
        """Updated time if present, else published time."""
        if self.updated is not None:
            return self.updated
        return self.published


@dataclass
class OutputFeed:
    info: FeedInfo
    entries: list[OutputEntry] = field(default_factory=list)
