"""Comparison-link synthesis for aggregated branch activity."""

from __future__ import annotations

from .extract import DEFAULT_HOST, extract_commit_hash
from .types import BranchActivity


def synthesize_compare_link(
    activity: BranchActivity,
    username: str,
    host: str = DEFAULT_HOST,
) -> str:
    """Return the single link that best represents an activity's commits.

    Commits are newest first, so the last commit is the oldest. One commit
    links to itself; several commits with distinct hashes link to a compare
    view ``<oldest>^...<newest>`` (the caret includes the oldest commit).

    Args:
        activity: The branch activity, after all merges
        username: Feed owner handle, the repository owner
        host: Forge host name

    Returns:
        A commit link, a compare link, or the stored compare link when the
        activity has no commits
    """
    if not activity.commits:
        return activity.compare_link

    if len(activity.commits) == 1:
        return activity.commits[0].link

    newest = activity.commits[0]
    oldest = activity.commits[-1]
    oldest_hash = extract_commit_hash(oldest.link)
    newest_hash = extract_commit_hash(newest.link)

    if oldest_hash and newest_hash and oldest_hash != newest_hash:
        return f"https://{host}/{username}/{activity.repo}/compare/{oldest_hash}^...{newest_hash}"

    return newest.link
