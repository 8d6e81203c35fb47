from __future__ import annotations

from feed_samples import (
    BRANCH_CREATE_HTML,
    COMMIT_8E9,
    FORK_HTML,
    PULL_REQUEST_HTML,
    T1,
    TAG_DELETE_HTML,
)

from ghfeed.core.entries import render_non_commit, render_push
from ghfeed.core.types import ActivityKind, BranchActivity, Commit, Person, SourceEntry


def _activity(count: int, ts=T1) -> BranchActivity:
    commits = [
        Commit(hash=f"{i:07x}", message=f"message {i}", link=f"https://github.com/cdzombak/dotfiles/commit/{i:07x}")
        for i in range(1, count + 1)
    ]
    return BranchActivity(
        repo="dotfiles",
        branch="master",
        commits=commits,
        latest_timestamp=ts,
        compare_link="https://github.com/cdzombak/dotfiles/compare/x...y",
    )


def test_push_title_pluralization() -> None:
    assert render_push(_activity(1), "cdzombak").title == "cdzombak pushed 1 commit to dotfiles/master"
    for count in (2, 5, 15):
        title = render_push(_activity(count), "cdzombak").title
        assert f"pushed {count} commits" in title
        assert title.endswith("to dotfiles/master")


def test_push_body_lists_commits_and_compare_link() -> None:
    entry = render_push(_activity(2), "cdzombak")

    assert "<tt><a href='https://github.com/cdzombak/dotfiles/commit/0000001'>0000001</a></tt>: message 1" in entry.body
    assert entry.body.index("0000001") < entry.body.index("0000002")
    assert "View all changes" in entry.body
    assert entry.link == "https://github.com/cdzombak/dotfiles/compare/x...y"
    assert entry.published == T1
    assert entry.updated == T1


def test_push_guid_prefix_and_timestamp() -> None:
    unix = int(T1.timestamp())

    assert render_push(_activity(1), "u").guid == f"consolidated-dotfiles-master-{unix}"
    assert render_push(_activity(1), "u", consolidated=False).guid == f"individual-dotfiles-master-{unix}"


def test_push_without_timestamp_has_no_time_suffix() -> None:
    entry = render_push(_activity(1, ts=None), "u")

    assert entry.guid == "consolidated-dotfiles-master"
    assert entry.published is None


def test_push_without_commits_is_not_rendered() -> None:
    assert render_push(_activity(0), "cdzombak") is None


def test_render_pull_request() -> None:
    author = Person(name="cdzombak", uri="https://github.com/cdzombak")
    entry = SourceEntry(
        title="cdzombak opened a pull request in gofeed",
        content=PULL_REQUEST_HTML,
        link="https://github.com/mmcdole/gofeed/pull/264",
        guid="tag:github.com,2008:PullRequestEvent/1",
        published=T1,
        authors=(author,),
    )

    output = render_non_commit(entry, "cdzombak", ActivityKind.PULL_REQUEST)

    assert output.title == "cdzombak opened PR #264 in mmcdole/gofeed: Allow outputting RSS, Atom, and JSON feeds"
    assert "View PR <tt>#264</tt>" in output.body
    assert "+3,415 -146" in output.body
    assert output.link == entry.link
    assert output.guid == entry.guid
    assert output.published == T1
    assert output.authors == (author,)


def test_render_pull_request_without_title() -> None:
    entry = SourceEntry(title="cdzombak opened a pull request in test", link="https://github.com/test/repo/pull/1")

    output = render_non_commit(entry, "cdzombak", ActivityKind.PULL_REQUEST)

    assert output.title == "cdzombak opened PR #1 in test/repo"
    assert "font-weight: bold" not in output.body


def test_render_fork() -> None:
    entry = SourceEntry(
        title="cdzombak forked cdzombak/gofeed from mmcdole/gofeed",
        content=FORK_HTML,
        link="https://github.com/cdzombak/gofeed",
    )

    output = render_non_commit(entry, "cdzombak", ActivityKind.FORK)

    assert output.title == "cdzombak forked mmcdole/gofeed"
    assert "cdzombak/gofeed" in output.body
    assert output.link == entry.link


def test_render_branch_create() -> None:
    entry = SourceEntry(
        title="cdzombak created a branch",
        content=BRANCH_CREATE_HTML,
        link="https://github.com/cdzombak/gofeed/tree/refs/heads/cdz/feed-creation",
    )

    output = render_non_commit(entry, "cdzombak", ActivityKind.BRANCH_CREATE)

    assert output.title == "cdzombak created branch cdz/feed-creation in cdzombak/gofeed"
    assert "View branch: <tt>cdz/feed-creation</tt>" in output.body


def test_render_branch_delete_drops_details() -> None:
    entry = SourceEntry(title="cdzombak deleted branch feature-test", link="https://github.com/cdzombak/x/compare/a...b")

    output = render_non_commit(entry, "cdzombak", ActivityKind.BRANCH_DELETE)

    assert output.title == "cdzombak deleted a branch"
    assert "Branch deleted" in output.body
    assert output.link == entry.link


def test_render_tag_delete_rebuilds_link() -> None:
    entry = SourceEntry(
        title="cdzombak deleted",
        content=TAG_DELETE_HTML,
        link="https://github.com/cdzombak/homebrew-gomod/compare/2b377a2203...0000000000",
    )

    output = render_non_commit(entry, "cdzombak", ActivityKind.TAG_DELETE)

    assert output.title == "cdzombak deleted tag v0.0.6 in homebrew-gomod"
    assert "<tt>v0.0.6</tt>" in output.body
    assert output.link == "https://github.com/cdzombak/homebrew-gomod"


def test_render_tag_delete_clean_markup() -> None:
    entry = SourceEntry(
        title="cdzombak deleted",
        content='<span class="branch-name">refs/tags/v2.1.0</span> in <a href="/cdzombak/project">cdzombak/project</a>',
        link="https://github.com/cdzombak/project/compare/abc...def",
    )

    output = render_non_commit(entry, "cdzombak", ActivityKind.TAG_DELETE)

    assert output.title == "cdzombak deleted tag v2.1.0 in project"


def test_render_tag_delete_without_any_facts() -> None:
    entry = SourceEntry(title="someone deleted", link="https://example.com/x")

    output = render_non_commit(entry, "cdzombak", ActivityKind.TAG_DELETE)

    assert output.title == "cdzombak deleted tag tag"
    assert output.link == "https://example.com/x"


def test_render_other() -> None:
    with_link = SourceEntry(title="cdzombak starred mmcdole/gofeed", link="https://github.com/mmcdole/gofeed")
    without_link = SourceEntry(title="cdzombak did something")

    assert render_non_commit(with_link, "cdzombak", ActivityKind.OTHER).title == with_link.title
    assert "View activity" in render_non_commit(with_link, "cdzombak", ActivityKind.OTHER).body
    assert "GitHub activity" in render_non_commit(without_link, "cdzombak", ActivityKind.OTHER).body


def test_sample_commit_link_survives_rendering() -> None:
    activity = BranchActivity(
        repo="dotfiles",
        branch="master",
        commits=[Commit("8e9b024", "remove Instapaper Save app", COMMIT_8E9)],
        latest_timestamp=T1,
        compare_link=COMMIT_8E9,
    )

    assert f"href='{COMMIT_8E9}'" in render_push(activity, "cdzombak").body
