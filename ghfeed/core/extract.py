"""
Fact extraction from GitHub activity markup.

Every function here is a best-effort pattern match over an entry's link,
title or HTML body. A pattern that does not match yields an empty value or a
default; nothing in this module raises on unexpected markup.

Commit extraction uses an ordered list of strategies, from the most specific
markup shape to the loosest, and stops at the first strategy that finds
anything.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import re
from typing import Callable
from urllib.parse import urljoin, urlparse

from .types import Commit, SourceEntry, SourceFeed

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://github.com"
DEFAULT_HOST = "github.com"
DEFAULT_USERNAME = "user"
DEFAULT_BRANCH = "master"

# Commit link inside <code>, followed by a <div>-wrapped <blockquote> message
QUOTED_WRAPPED_RE = re.compile(
    r'<code[^>]*><a[^>]*href="([^"]*commit/([a-f0-9]+))"[^>]*>([a-f0-9]+)</a></code>'
    r"\s*<div[^>]*>\s*<blockquote[^>]*>\s*([^<]*?)\s*</blockquote>"
)
# Same pairing without the wrapper; the gap must stay on one line
QUOTED_RE = re.compile(
    r'<code[^>]*><a[^>]*href="([^"]*commit/([a-f0-9]+))"[^>]*>([a-f0-9]+)</a></code>'
    r".*?<blockquote[^>]*>\s*([^<]*?)\s*</blockquote>"
)
BARE_LINK_RE = re.compile(r'href="([^"]*commit/([a-f0-9]+))"[^>]*>([a-f0-9]+)</a>')

BRANCH_NAME_RE = re.compile(
    r'<a class="branch-name"[^>]*href="[^"]*/tree/([^"]*)"[^>]*>([^<]+)</a>'
)
COMMIT_HASH_RE = re.compile(r"/commit/([a-f0-9]+)")
PR_NUMBER_RE = re.compile(r"/pull/(\d+)")
PR_TITLE_RE = re.compile(
    r'<span[^>]*class="[^"]*text-bold[^"]*"[^>]*><a[^>]*>([^<]+)</a></span>'
)
DIFF_STATS_RE = re.compile(
    r'<span class="color-fg-success">([^<]+)</span>\s*<span class="color-fg-danger">([^<]+)</span>'
)
FORK_TITLE_RE = re.compile(r"forked ([^/]+/[^/\s]+) from ([^/]+/[^/\s]+)")
BRANCH_CREATE_RE = re.compile(
    r'title="([^"]*)"[^>]*>([^<]+)</a> in <a[^>]*>([^/]+/[^<]+)</a>'
)
TAG_NAME_RE = re.compile(r'<span class="branch-name">([^<]+)</span>')
REPO_LINK_TEXT_RE = re.compile(r"<a[^>]*>([^/]+/([^<]+))</a>")

HEADS_PREFIX = "refs/heads/"
TAGS_PREFIX = "refs/tags/"

COMMIT_STRATEGIES = ("quoted_wrapped", "quoted", "bare_link")


@dataclass(frozen=True)
class PullRequestFacts:
    number: str = ""
    repo: str = ""
    title: str = ""
    diff_stats: str = ""


@dataclass(frozen=True)
class ForkFacts:
    source_repo: str = ""
    target_repo: str = ""


@dataclass(frozen=True)
class BranchCreateFacts:
    branch: str = ""
    repo: str = ""


@dataclass(frozen=True)
class TagDeleteFacts:
    tag: str = ""
    repo: str = ""


def host_from_base_url(base_url: str) -> str:
    """Return the host part of a base URL ("https://github.com" -> "github.com")."""
    return urlparse(base_url).netloc or DEFAULT_HOST


def extract_username(
    feed: SourceFeed,
    host: str = DEFAULT_HOST,
    default: str = DEFAULT_USERNAME,
) -> str:
    """Infer the feed owner's handle.

    Looks at the feed's own link first (``https://github.com/<user>`` or
    ``https://github.com/<user>.atom``), then at each entry link of the shape
    ``https://github.com/<user>/...``.

    Args:
        feed: The parsed source feed
        host: Forge host name
        default: Value returned when nothing matches

    Returns:
        The inferred handle, or ``default``
    """
    host_pattern = re.escape(host)
    if feed.info.link:
        match = re.search(host_pattern + r"/([^/\.]+)(?:\.atom)?", feed.info.link)
        if match:
            return match.group(1)

    item_re = re.compile(host_pattern + r"/([^/]+)/")
    for entry in feed.entries:
        if not entry.link:
            continue
        match = item_re.search(entry.link)
        if match:
            return match.group(1)

    return default


def extract_repo_name(link: str, username: str, host: str = DEFAULT_HOST) -> str | None:
    """Return the repository name from ``<host>/<username>/<repo>`` in a link."""
    if not link:
        return None
    pattern = re.escape(host) + "/" + re.escape(username) + r"/([\w-]+)"
    match = re.search(pattern, link)
    if not match:
        return None
    return match.group(1)


def extract_branch_name(markup: str, default: str = DEFAULT_BRANCH) -> str:
    """Return the visible text of the ``branch-name`` link, or ``default``."""
    if not markup:
        return default
    match = BRANCH_NAME_RE.search(markup)
    if not match:
        return default
    return match.group(2)


def extract_commits(
    markup: str,
    base_url: str = DEFAULT_BASE_URL,
    strategies: tuple[str, ...] = COMMIT_STRATEGIES,
) -> list[Commit]:
    """Extract commits from push markup, in markup order.

    Strategies are tried in order; the first one that yields at least one
    commit wins.

    Args:
        markup: HTML body of a push entry
        base_url: Site base URL used to absolutize commit links
        strategies: Strategy names to try, in priority order

    Returns:
        Commits found, possibly empty
    """
    if not markup:
        return []
    for name in strategies:
        strategy = _get_strategy(name)
        if not strategy:
            continue
        commits = strategy(markup, base_url)
        if commits:
            logger.debug("Extracted %d commits with %s strategy", len(commits), name)
            return commits
    return []


def _get_strategy(name: str) -> Callable[[str, str], list[Commit]] | None:
    if name == "quoted_wrapped":
        return extract_commits_quoted_wrapped
    if name == "quoted":
        return extract_commits_quoted
    if name == "bare_link":
        return extract_commits_bare_link
    return None


def extract_commits_quoted_wrapped(markup: str, base_url: str = DEFAULT_BASE_URL) -> list[Commit]:
    """Commit link followed by a ``<div>``-wrapped ``<blockquote>`` message."""
    return [
        Commit(hash=m.group(3), message=m.group(4).strip(), link=_absolute(base_url, m.group(1)))
        for m in QUOTED_WRAPPED_RE.finditer(markup)
    ]


def extract_commits_quoted(markup: str, base_url: str = DEFAULT_BASE_URL) -> list[Commit]:
    """Commit link followed by a ``<blockquote>`` message, no wrapper required."""
    return [
        Commit(hash=m.group(3), message=m.group(4).strip(), link=_absolute(base_url, m.group(1)))
        for m in QUOTED_RE.finditer(markup)
    ]


def extract_commits_bare_link(markup: str, base_url: str = DEFAULT_BASE_URL) -> list[Commit]:
    """Bare commit links; the message is synthesized from the hash."""
    return [
        Commit(hash=m.group(3), message=f"Commit {m.group(3)}", link=_absolute(base_url, m.group(1)))
        for m in BARE_LINK_RE.finditer(markup)
    ]


def extract_commit_hash(link: str) -> str:
    """Return the hash segment following ``/commit/`` in a link, or ""."""
    match = COMMIT_HASH_RE.search(link or "")
    if not match:
        return ""
    return match.group(1)


def extract_pull_request_facts(entry: SourceEntry, host: str = DEFAULT_HOST) -> PullRequestFacts:
    """PR number and target repo from the link; title and diff stats from the body."""
    number = ""
    repo = ""
    if entry.link:
        match = PR_NUMBER_RE.search(entry.link)
        if match:
            number = match.group(1)
        match = re.search(re.escape(host) + r"/([^/]+/[^/]+)", entry.link)
        if match:
            repo = match.group(1)

    title = ""
    diff_stats = ""
    if entry.content:
        match = PR_TITLE_RE.search(entry.content)
        if match:
            title = match.group(1).strip()
        match = DIFF_STATS_RE.search(entry.content)
        if match:
            # Values are kept verbatim, e.g. "+3,415 -146"
            diff_stats = f"{match.group(1)} {match.group(2)}"

    return PullRequestFacts(number=number, repo=repo, title=title, diff_stats=diff_stats)


def extract_fork_facts(entry: SourceEntry) -> ForkFacts:
    """Parse "<user> forked <target> from <source>" out of the title."""
    if not entry.title:
        return ForkFacts()
    match = FORK_TITLE_RE.search(entry.title)
    if not match:
        return ForkFacts()
    return ForkFacts(source_repo=match.group(2), target_repo=match.group(1))


def extract_branch_create_facts(entry: SourceEntry) -> BranchCreateFacts:
    """Branch name and repo from the body, falling back to the link's /tree/ path."""
    branch = ""
    repo = ""
    if entry.content:
        match = BRANCH_CREATE_RE.search(entry.content)
        if match:
            branch = _strip_prefix(match.group(1), HEADS_PREFIX)
            repo = match.group(3)

    if not branch and entry.link and "/tree/" in entry.link:
        branch = entry.link.split("/tree/")[1]

    return BranchCreateFacts(branch=branch, repo=repo)


def extract_tag_delete_facts(
    entry: SourceEntry,
    username: str,
    host: str = DEFAULT_HOST,
) -> TagDeleteFacts:
    """Tag name and containing repo of a tag deletion.

    Tag name: the ``branch-name`` span (``refs/tags/`` stripped), then the
    word following "<username> deleted [tag]" in the title. Repo: the first
    body link whose text is ``owner/repo`` (avatar links carry "@" and are
    skipped), then the entry link.
    """
    tag = ""
    repo = ""

    if entry.content:
        match = TAG_NAME_RE.search(entry.content)
        if match:
            tag = _strip_prefix(match.group(1), TAGS_PREFIX)

    if not tag and entry.title:
        match = re.search(re.escape(username) + r" deleted (?:tag )?(.*?)(?:\s|$)", entry.title)
        if match:
            tag = match.group(1).strip()

    if entry.content:
        for match in REPO_LINK_TEXT_RE.finditer(entry.content):
            if "@" in match.group(1):
                continue
            repo = match.group(2)
            break

    if not repo and entry.link:
        match = re.search(re.escape(host) + "/" + re.escape(username) + r"/([^/]+)", entry.link)
        if match:
            repo = match.group(1)

    return TagDeleteFacts(tag=tag, repo=repo)


def _absolute(base_url: str, path: str) -> str:
    return urljoin(base_url.rstrip("/") + "/", path)


def _strip_prefix(value: str, prefix: str) -> str:
    if value.startswith(prefix):
        return value[len(prefix):]
    return value
