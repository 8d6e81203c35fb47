"""Activity markup and feed documents shared by the tests.

The markup blocks are trimmed copies of what github.com serves in
``https://github.com/<user>.atom`` entry bodies.
"""

from __future__ import annotations

from datetime import datetime, timezone
from html import escape

from ghfeed.core.types import FeedInfo, SourceEntry, SourceFeed

PUSH_HTML = """<div class="git-push js-feed-item-view"><div class="body">
<!-- push -->
<div class="d-flex flex-items-baseline py-4">
  <div class="d-flex flex-column width-full">
    <div class="d-flex flex-items-baseline">
      <div class="color-fg-muted">
        <span class="mr-2"><a class="d-inline-block" href="/cdzombak" rel="noreferrer"><img class="avatar avatar-user" src="https://avatars.githubusercontent.com/u/102904?s=64&amp;v=4" width="32" height="32" alt="@cdzombak"></a></span>
        <a class="Link--primary no-underline wb-break-all" href="/cdzombak" rel="noreferrer">cdzombak</a>

        pushed to
        <a class="branch-name" href="/cdzombak/dotfiles/tree/master" rel="noreferrer">master</a>
        in
        <a class="Link--primary no-underline wb-break-all" href="/cdzombak/dotfiles" rel="noreferrer">cdzombak/dotfiles</a>
      </div>
    </div>

    <div class="commits pusher-is-only-committer">
      <ul class="list-style-none">
          <li class="d-flex flex-items-baseline">
            <code><a class="mr-1" href="/cdzombak/dotfiles/commit/8e9b024bede1064de870417f7e3f7aa876fa3b47" rel="noreferrer">8e9b024</a></code>
            <div class="dashboard-break-word lh-condensed">
              <blockquote>
                remove Instapaper Save app
              </blockquote>
            </div>
          </li>
          <li class="d-flex flex-items-baseline">
            <code><a class="mr-1" href="/cdzombak/dotfiles/commit/b19a1b604e77908604438ab33529c6a6a9d7f9d1" rel="noreferrer">b19a1b6</a></code>
            <div class="dashboard-break-word lh-condensed">
              <blockquote>
                fix Red Eye install
              </blockquote>
            </div>
          </li>
      </ul>
    </div>
  </div>
</div>
</div></div>"""

PULL_REQUEST_HTML = """<div class="git-pull-request js-feed-item-view"><div class="body">
<div class="d-flex flex-items-baseline py-4">
  <div class="d-flex flex-column width-full">
    <div class="color-fg-muted">
      <span class="mr-2"><a class="d-inline-block" href="/cdzombak" rel="noreferrer"><img class="avatar avatar-user" src="https://avatars.githubusercontent.com/u/102904?s=64&amp;v=4" width="32" height="32" alt="@cdzombak"></a></span>
      <a class="Link--primary no-underline wb-break-all" href="/cdzombak" rel="noreferrer">cdzombak</a>
      opened
      <a class="Link--primary no-underline wb-break-all" aria-label="mmcdole/gofeed#264" href="https://github.com/mmcdole/gofeed/pull/264" rel="noreferrer">mmcdole/gofeed#264</a>
    </div>

    <div class="Box p-3 my-2 color-shadow-medium color-bg-overlay">
      <div class="ml-4">
        <div>
          <span class="f4 lh-condensed text-bold color-fg-default"><a class="color-fg-default text-bold" aria-label="Allow outputting RSS, Atom, and JSON feeds" href="https://github.com/mmcdole/gofeed/pull/264" rel="noreferrer">Allow outputting RSS, Atom, and JSON feeds</a></span>
          <span class="f4 color-fg-muted ml-1">#264</span>
        </div>

          <div class="diffstat d-inline-block mt-1">
            <span class="color-fg-success">+3,415</span>
            <span class="color-fg-danger">-146</span>
          </div>

      </div>
    </div>
  </div>
</div>
</div></div>"""

FORK_HTML = """<div class="fork js-feed-item-view"><div class="body">
<div class="d-flex flex-items-baseline py-4">
  <div class="color-fg-muted">
    <a class="Link--primary no-underline wb-break-all" href="/cdzombak" rel="noreferrer">cdzombak</a>
    forked
    <a class="Link--primary no-underline wb-break-all" title="mmcdole/gofeed" href="/mmcdole/gofeed" rel="noreferrer">mmcdole/gofeed</a>
    from
    <a class="Link--primary no-underline wb-break-all" href="/cdzombak/gofeed" rel="noreferrer">cdzombak/gofeed</a>
  </div>
</div>
</div></div>"""

BRANCH_CREATE_HTML = """<div class="git-branch js-feed-item-view"><div class="body">
<div class="d-flex flex-items-baseline py-4">
  <div class="d-flex flex-column width-full">
    <div class="color-fg-muted">
      <a class="Link--primary no-underline wb-break-all" href="/cdzombak" rel="noreferrer">cdzombak</a>
      created a
      branch
      in
      <a class="Link--primary no-underline wb-break-all" href="/cdzombak/gofeed" rel="noreferrer">cdzombak/gofeed</a>
    </div>
    <div class="Box p-3 mt-2 color-shadow-medium color-bg-overlay">
      <div class="d-inline-block">
        <a class="css-truncate css-truncate-target branch-name v-align-middle" title="refs/heads/cdz/feed-creation" href="https://github.com/cdzombak/gofeed/tree/refs/heads/cdz/feed-creation" rel="noreferrer">refs/heads/cdz/feed-creation</a> in <a class="Link--primary text-bold no-underline wb-break-all d-inline-block" href="/cdzombak/gofeed" rel="noreferrer">cdzombak/gofeed</a>
      </div>
    </div>
  </div>
</div>
</div></div>"""

TAG_DELETE_HTML = """<div class="git-branch js-feed-item-view"><div class="body">
<div class="d-flex flex-items-baseline py-4">
  <div class="d-flex flex-column width-full">
    <div class="color-fg-muted">
      <span class="mr-2"><a class="d-inline-block" href="/cdzombak" rel="noreferrer"><img class="avatar avatar-user" src="https://avatars.githubusercontent.com/u/102904?s=64&amp;v=4" width="32" height="32" alt="@cdzombak"></a></span>
      <a class="Link--primary no-underline wb-break-all" href="/cdzombak" rel="noreferrer">cdzombak</a>
      deleted
      tag
      <span class="branch-name">refs/tags/v0.0.6</span>
      in
      <a class="Link--primary no-underline wb-break-all" href="/cdzombak/homebrew-gomod" rel="noreferrer">cdzombak/homebrew-gomod</a>
    </div>
  </div>
</div>
</div></div>"""

T1 = datetime(2025, 9, 15, 1, 28, 2, tzinfo=timezone.utc)
T2 = datetime(2025, 9, 15, 2, 30, 0, tzinfo=timezone.utc)
T3 = datetime(2025, 9, 15, 3, 45, 0, tzinfo=timezone.utc)

COMMIT_8E9 = "https://github.com/cdzombak/dotfiles/commit/8e9b024bede1064de870417f7e3f7aa876fa3b47"
COMMIT_B19 = "https://github.com/cdzombak/dotfiles/commit/b19a1b604e77908604438ab33529c6a6a9d7f9d1"


def single_commit_push_html(repo: str, branch: str, full_hash: str, message: str) -> str:
    """Push markup carrying one commit."""
    return (
        '<div class="git-push js-feed-item-view"><div class="body">\n'
        f'<a class="branch-name" href="/cdzombak/{repo}/tree/{branch}" rel="noreferrer">{branch}</a>\n'
        f'<code><a class="mr-1" href="/cdzombak/{repo}/commit/{full_hash}" rel="noreferrer">{full_hash[:7]}</a></code>\n'
        '<div class="dashboard-break-word lh-condensed">\n'
        f"  <blockquote>\n    {message}\n  </blockquote>\n"
        "</div>\n"
        "</div></div>"
    )


def push_entry(
    content: str,
    published: datetime | None,
    repo: str = "dotfiles",
    guid: str = "tag:github.com,2008:PushEvent/1",
) -> SourceEntry:
    return SourceEntry(
        title=f"cdzombak pushed {repo}",
        content=content,
        link=f"https://github.com/cdzombak/{repo}/compare/b19a1b604e...8e9b024bed",
        guid=guid,
        published=published,
        updated=published,
    )


def make_feed(entries: list[SourceEntry], link: str = "https://github.com/cdzombak") -> SourceFeed:
    return SourceFeed(
        info=FeedInfo(title="cdzombak's Activity", link=link, feed_link=link + ".atom"),
        entries=entries,
    )


def atom_document(entries: list[dict[str, str]], title: str = "cdzombak's Activity") -> str:
    """Build a GitHub-style Atom document.

    Each entry dict carries id, title, link, published, updated and content
    (raw HTML, escaped here the way GitHub serves it).
    """
    parts = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<feed xmlns="http://www.w3.org/2005/Atom" xml:lang="en-US">',
        "  <id>tag:github.com,2008:/cdzombak</id>",
        '  <link type="text/html" rel="alternate" href="https://github.com/cdzombak"/>',
        '  <link type="application/atom+xml" rel="self" href="https://github.com/cdzombak.atom"/>',
        f"  <title>{escape(title)}</title>",
        "  <updated>2025-09-15T03:45:00Z</updated>",
    ]
    for entry in entries:
        parts.extend(
            [
                "  <entry>",
                f"    <id>{entry['id']}</id>",
                f"    <published>{entry['published']}</published>",
                f"    <updated>{entry['updated']}</updated>",
                f'    <link type="text/html" rel="alternate" href="{entry["link"]}"/>',
                f'    <title type="html">{escape(entry["title"])}</title>',
                "    <author>",
                "      <name>cdzombak</name>",
                "      <uri>https://github.com/cdzombak</uri>",
                "    </author>",
                f'    <content type="html">{escape(entry["content"])}</content>',
                "  </entry>",
            ]
        )
    parts.append("</feed>")
    return "\n".join(parts) + "\n"


SAMPLE_ATOM = atom_document(
    [
        {
            "id": "tag:github.com,2008:PushEvent/101",
            "title": "cdzombak pushed dotfiles",
            "link": "https://github.com/cdzombak/dotfiles/compare/b19a1b604e...8e9b024bed",
            "published": "2025-09-15T01:28:02Z",
            "updated": "2025-09-15T01:28:02Z",
            "content": PUSH_HTML,
        },
        {
            "id": "tag:github.com,2008:PullRequestEvent/102",
            "title": "cdzombak opened a pull request in gofeed",
            "link": "https://github.com/mmcdole/gofeed/pull/264",
            "published": "2025-09-14T22:58:34Z",
            "updated": "2025-09-14T22:58:34Z",
            "content": PULL_REQUEST_HTML,
        },
        {
            "id": "tag:github.com,2008:ForkEvent/103",
            "title": "cdzombak forked cdzombak/gofeed from mmcdole/gofeed",
            "link": "https://github.com/cdzombak/gofeed",
            "published": "2025-09-14T16:25:35Z",
            "updated": "2025-09-14T16:25:35Z",
            "content": FORK_HTML,
        },
    ]
)
