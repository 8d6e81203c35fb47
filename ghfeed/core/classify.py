"""
Activity classification by keyword matching.

Classification is a pure function of an entry's title and body. Push-like
titles are recognized first and routed to aggregation; everything else is
matched against an ordered rule table where the first matching rule wins.
"""

from __future__ import annotations

from typing import Callable

from .types import ActivityKind

# Titles of commit-bearing activity, routed to the aggregator
PUSH_KEYWORDS = (
    "pushed",
    "created branch",
    "deleted branch",
    "created tag",
    "deleted tag",
)

PULL_REQUEST_KEYWORDS = ("opened a pull request", "contributed to")
PULL_REQUEST_BODY_MARKER = "pull_request"
FORK_KEYWORDS = ("forked",)
BRANCH_CREATE_KEYWORDS = ("created a branch", "created branch")
BRANCH_DELETE_KEYWORDS = ("deleted branch",)


def is_push_category(title: str) -> bool:
    """Return True if the title names push, branch or tag activity."""
    lowered = title.lower()
    return any(keyword in lowered for keyword in PUSH_KEYWORDS)


def classify(title: str, body: str = "") -> ActivityKind:
    """Classify an entry, including the push category."""
    if is_push_category(title):
        return ActivityKind.PUSH
    return classify_activity(title, body)


def classify_activity(title: str, body: str = "") -> ActivityKind:
    """Classify a non-push entry into its activity kind.

    Args:
        title: Entry title
        body: Entry HTML body

    Returns:
        The first matching kind from the rule table, or OTHER
    """
    lowered = title.lower()
    for kind, matches in _RULES:
        if matches(lowered, body):
            return kind
    return ActivityKind.OTHER


def _is_pull_request(title: str, body: str) -> bool:
    if _contains_any(title, PULL_REQUEST_KEYWORDS):
        return True
    return "opened" in title and PULL_REQUEST_BODY_MARKER in body


def _is_fork(title: str, body: str) -> bool:
    return _contains_any(title, FORK_KEYWORDS)


def _is_branch_create(title: str, body: str) -> bool:
    return _contains_any(title, BRANCH_CREATE_KEYWORDS)


def _is_branch_delete(title: str, body: str) -> bool:
    return _contains_any(title, BRANCH_DELETE_KEYWORDS)


def _is_tag_delete(title: str, body: str) -> bool:
    return "deleted" in title and ("tag" in title or "tag" in body)


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


_RULES: tuple[tuple[ActivityKind, Callable[[str, str], bool]], ...] = (
    (ActivityKind.PULL_REQUEST, _is_pull_request),
    (ActivityKind.FORK, _is_fork),
    (ActivityKind.BRANCH_CREATE, _is_branch_create),
    (ActivityKind.BRANCH_DELETE, _is_branch_delete),
    (ActivityKind.TAG_DELETE, _is_tag_delete),
)
