"""
Rendering of output entries.

Push activity becomes one entry listing its commits. Every other activity
kind is rewritten into a short, uniform summary; those entries keep the
source entry's link, timestamps, authors and GUID unless noted otherwise.
"""

from __future__ import annotations

from dataclasses import replace

from .extract import (
    DEFAULT_HOST,
    extract_branch_create_facts,
    extract_fork_facts,
    extract_pull_request_facts,
    extract_tag_delete_facts,
)
from .types import ActivityKind, BranchActivity, OutputEntry, SourceEntry

BLOCK_OPEN = "<div style='margin-bottom: 12px;'>"
BLOCK_CLOSE = "</div>"


def push_title(activity: BranchActivity, username: str) -> str:
    count = len(activity.commits)
    noun = "commit" if count == 1 else "commits"
    return f"{username} pushed {count} {noun} to {activity.repo}/{activity.branch}"


def push_body(activity: BranchActivity) -> str:
    """HTML listing each commit, newest first, plus a "View all changes" link."""
    parts = ["<div>"]
    for commit in activity.commits:
        parts.append(
            f"{BLOCK_OPEN}<tt><a href='{commit.link}'>{commit.hash}</a></tt>: {commit.message}{BLOCK_CLOSE}"
        )
    if activity.compare_link:
        parts.append(
            "<div style='margin-top: 16px; border-top: 1px solid #eee; padding-top: 8px;'>"
            f"<a href='{activity.compare_link}'>View all changes</a>"
            "</div>"
        )
    parts.append("</div>")
    return "".join(parts)


def push_guid(activity: BranchActivity, consolidated: bool) -> str:
    prefix = "consolidated" if consolidated else "individual"
    guid = f"{prefix}-{activity.repo}-{activity.branch}"
    if activity.latest_timestamp is not None:
        guid += f"-{int(activity.latest_timestamp.timestamp())}"
    return guid


def render_push(activity: BranchActivity, username: str, consolidated: bool = True) -> OutputEntry | None:
    """Render a branch activity; activities without commits are not rendered.

    Args:
        activity: Finalized branch activity
        username: Feed owner handle
        consolidated: Whether pushes were merged, selects the GUID prefix

    Returns:
        The output entry, or None when the activity has no commits
    """
    if not activity.commits:
        return None
    return OutputEntry(
        title=push_title(activity, username),
        body=push_body(activity),
        link=activity.compare_link,
        guid=push_guid(activity, consolidated),
        published=activity.latest_timestamp,
        updated=activity.latest_timestamp,
    )


def render_non_commit(
    entry: SourceEntry,
    username: str,
    kind: ActivityKind,
    host: str = DEFAULT_HOST,
) -> OutputEntry:
    """Dispatch a classified non-commit entry to its renderer."""
    if kind is ActivityKind.PULL_REQUEST:
        return render_pull_request(entry, username, host)
    if kind is ActivityKind.FORK:
        return render_fork(entry, username)
    if kind is ActivityKind.BRANCH_CREATE:
        return render_branch_create(entry, username)
    if kind is ActivityKind.BRANCH_DELETE:
        return render_branch_delete(entry, username)
    if kind is ActivityKind.TAG_DELETE:
        return render_tag_delete(entry, username, host)
    return render_other(entry)


def render_pull_request(entry: SourceEntry, username: str, host: str = DEFAULT_HOST) -> OutputEntry:
    facts = extract_pull_request_facts(entry, host)

    title = f"{username} opened PR #{facts.number} in {facts.repo}"
    if facts.title:
        title += f": {facts.title}"

    body = BLOCK_OPEN + f"<a href='{entry.link}'>View PR <tt>#{facts.number}</tt></a>"
    if facts.title:
        body += f"<div style='margin-top: 8px; font-weight: bold;'>{facts.title}</div>"
    if facts.diff_stats:
        body += f"<div style='margin-top: 8px; font-family: monospace; color: #666;'>{facts.diff_stats}</div>"
    body += BLOCK_CLOSE

    return _carry_over(entry, title, body)


def render_fork(entry: SourceEntry, username: str) -> OutputEntry:
    facts = extract_fork_facts(entry)
    title = f"{username} forked {facts.source_repo}"
    body = BLOCK_OPEN + f"<a href='{entry.link}'>View fork: <tt>{facts.target_repo}</tt></a>" + BLOCK_CLOSE
    return _carry_over(entry, title, body)


def render_branch_create(entry: SourceEntry, username: str) -> OutputEntry:
    facts = extract_branch_create_facts(entry)
    title = f"{username} created branch {facts.branch}"
    if facts.repo:
        title += f" in {facts.repo}"
    body = BLOCK_OPEN + f"<a href='{entry.link}'>View branch: <tt>{facts.branch}</tt></a>" + BLOCK_CLOSE
    return _carry_over(entry, title, body)


def render_branch_delete(entry: SourceEntry, username: str) -> OutputEntry:
    # Deletion markup does not reliably name the branch or repo
    return _carry_over(entry, f"{username} deleted a branch", BLOCK_OPEN + "Branch deleted" + BLOCK_CLOSE)


def render_tag_delete(entry: SourceEntry, username: str, host: str = DEFAULT_HOST) -> OutputEntry:
    facts = extract_tag_delete_facts(entry, username, host)
    tag = facts.tag or "tag"

    title = f"{username} deleted tag {tag}"
    body = BLOCK_OPEN + f"Deleted tag: <tt>{tag}</tt>"
    if facts.repo:
        title += f" in {facts.repo}"
        body += f" in <tt>{facts.repo}</tt>"
    body += BLOCK_CLOSE

    output = _carry_over(entry, title, body)
    if facts.repo:
        # The original link compares against the deleted ref
        output = replace(output, link=f"https://{host}/{username}/{facts.repo}")
    return output


def render_other(entry: SourceEntry) -> OutputEntry:
    if entry.link:
        body = BLOCK_OPEN + f"<a href='{entry.link}'>View activity</a>" + BLOCK_CLOSE
    else:
        body = BLOCK_OPEN + "GitHub activity" + BLOCK_CLOSE
    return _carry_over(entry, entry.title, body)


def _carry_over(entry: SourceEntry, title: str, body: str) -> OutputEntry:
    return OutputEntry(
        title=title,
        body=body,
        link=entry.link,
        guid=entry.guid,
        published=entry.published,
        updated=entry.updated,
        authors=entry.authors,
    )
