"""
Aggregation of push entries into per-branch activity.

Push entries that share a repository and branch are merged into a single
BranchActivity when consolidation is enabled. With consolidation disabled,
each push entry keeps its own BranchActivity. Comparison links are computed
once, after every entry has been added.
"""

from __future__ import annotations

import logging

from .compare import synthesize_compare_link
from .extract import (
    DEFAULT_BASE_URL,
    extract_branch_name,
    extract_commits,
    extract_repo_name,
    host_from_base_url,
)
from .types import BranchActivity, BranchKey, SourceEntry

logger = logging.getLogger(__name__)


def extract_branch_activity(
    entry: SourceEntry,
    username: str,
    base_url: str = DEFAULT_BASE_URL,
) -> BranchActivity | None:
    """Build a BranchActivity from one push entry.

    Args:
        entry: A push-category source entry
        username: Feed owner handle
        base_url: Site base URL

    Returns:
        The activity, or None when the repository cannot be found in the
        entry link
    """
    repo = extract_repo_name(entry.link, username, host_from_base_url(base_url))
    if not repo:
        return None

    timestamp = entry.published if entry.published is not None else entry.updated
    return BranchActivity(
        repo=repo,
        branch=extract_branch_name(entry.content),
        commits=extract_commits(entry.content, base_url),
        latest_timestamp=timestamp,
        compare_link=entry.link,
    )


def merge_activity(existing: BranchActivity, incoming: BranchActivity) -> None:
    """Merge ``incoming`` into ``existing`` in place.

    Commits are appended in arrival order. The timestamp and stored compare
    link move to the incoming entry's only when it is strictly later.
    """
    existing.commits.extend(incoming.commits)
    if incoming.latest_timestamp is None:
        return
    if existing.latest_timestamp is None or incoming.latest_timestamp > existing.latest_timestamp:
        existing.latest_timestamp = incoming.latest_timestamp
        existing.compare_link = incoming.compare_link


class BranchAggregator:
    """Accumulates push entries for one pipeline run."""

    def __init__(self, username: str, consolidate: bool = True, base_url: str = DEFAULT_BASE_URL):
        self.username = username
        self.consolidate = consolidate
        self.base_url = base_url
        self._groups: dict[BranchKey, BranchActivity] = {}
        self._individual: list[BranchActivity] = []

    def add(self, entry: SourceEntry) -> BranchActivity | None:
        """Add a push entry; returns None when its repository cannot be extracted."""
        activity = extract_branch_activity(entry, self.username, self.base_url)
        if activity is None:
            return None

        if not self.consolidate:
            self._individual.append(activity)
            return activity

        existing = self._groups.get(activity.key)
        if existing is None:
            self._groups[activity.key] = activity
            return activity

        merge_activity(existing, activity)
        logger.debug(
            "Merged push into %s/%s (%d commits)",
            existing.repo,
            existing.branch,
            len(existing.commits),
        )
        return existing

    def finalize(self) -> list[BranchActivity]:
        """Synthesize comparison links and return activities in first-seen order."""
        if self.consolidate:
            activities = list(self._groups.values())
        else:
            activities = list(self._individual)

        host = host_from_base_url(self.base_url)
        for activity in activities:
            activity.compare_link = synthesize_compare_link(activity, self.username, host)
        return activities
