"""
Pipeline orchestration for the GitHub feed consolidator.

This module coordinates the whole run:
1. Fetch the source feed
2. Parse it into entries
3. Classify each entry and route pushes to the branch aggregator
4. Render aggregated pushes and rewritten non-commit entries
5. Sort entries by effective timestamp, newest first
6. Serialize the result

The transform itself (steps 3-5) is `consolidate_feed`, a pure function of
the parsed feed. Fetch and serialization failures are fatal and surface as
FeedFetchError / FeedRenderError.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
import logging

from .config import AppConfig
from .core.aggregate import BranchAggregator
from .core.classify import classify_activity, is_push_category
from .core.entries import render_non_commit, render_push
from .core.extract import DEFAULT_BASE_URL, DEFAULT_USERNAME, extract_username, host_from_base_url
from .core.types import ActivityKind, OutputEntry, OutputFeed, SourceEntry, SourceFeed
from .fetch.fetcher import fetch_feed
from .fetch.parser import parse_feed
from .logging_utils import log_event, setup_logging
from .output.renderer import render_feed

logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class FeedFetchError(RuntimeError):
    """The source feed could not be fetched or parsed."""


class FeedRenderError(RuntimeError):
    """The output feed could not be serialized."""


def consolidate_feed(
    feed: SourceFeed,
    custom_title: str | None = None,
    consolidate_pushes: bool = True,
    username: str | None = None,
    base_url: str = DEFAULT_BASE_URL,
    default_username: str = DEFAULT_USERNAME,
    run_logger: logging.Logger | None = None,
) -> OutputFeed:
    """Rewrite a parsed activity feed into its compact form.

    Push entries are aggregated per repository/branch (or kept one per push
    when ``consolidate_pushes`` is False); every other entry is classified
    and rewritten. A push entry whose repository cannot be extracted is
    classified like any other entry instead of being dropped.

    Args:
        feed: The parsed source feed
        custom_title: Replacement title for the output feed
        consolidate_pushes: Merge pushes sharing a repository/branch
        username: Feed owner handle; inferred from the feed when None
        base_url: Site base URL
        default_username: Handle used when inference finds nothing
        run_logger: Logger receiving structured pipeline events

    Returns:
        The output feed, entries sorted newest first
    """
    host = host_from_base_url(base_url)
    if not username:
        username = extract_username(feed, host, default_username)
        log_event(run_logger, "Username inferred", event="username_inferred", username=username)

    info = replace(feed.info)
    if custom_title:
        info.title = custom_title

    aggregator = BranchAggregator(username, consolidate=consolidate_pushes, base_url=base_url)
    non_commit: list[tuple[SourceEntry, ActivityKind]] = []

    for entry in feed.entries:
        if is_push_category(entry.title):
            if aggregator.add(entry) is not None:
                continue
            kind = classify_activity(entry.title, entry.content)
            log_event(
                run_logger,
                "Push entry without repository, rewriting as non-commit activity",
                level=logging.DEBUG,
                event="entry_reclassified",
                guid=entry.guid,
                link=entry.link,
                kind=kind.value,
            )
            non_commit.append((entry, kind))
        else:
            non_commit.append((entry, classify_activity(entry.title, entry.content)))

    entries: list[OutputEntry] = []
    for activity in aggregator.finalize():
        rendered = render_push(activity, username, consolidated=consolidate_pushes)
        if rendered is None:
            logger.debug("Skipping %s/%s: no commits found", activity.repo, activity.branch)
            continue
        entries.append(rendered)

    for entry, kind in non_commit:
        entries.append(render_non_commit(entry, username, kind, host))

    log_event(
        run_logger,
        "Feed consolidated",
        event="feed_consolidated",
        source_entries=len(feed.entries),
        output_entries=len(entries),
        consolidate_pushes=consolidate_pushes,
    )
    return OutputFeed(info=info, entries=sort_entries(entries))


def sort_entries(entries: list[OutputEntry]) -> list[OutputEntry]:
    """Sort by effective timestamp, newest first.

    Entries without any timestamp sort last; ties keep their input order.
    """
    return sorted(
        entries,
        key=lambda entry: (
            entry.effective_timestamp is not None,
            entry.effective_timestamp or _OLDEST,
        ),
        reverse=True,
    )


def run_pipeline(feed_url: str, cfg: AppConfig, run_logger: logging.Logger | None = None) -> str:
    """Fetch, consolidate and serialize a feed.

    Args:
        feed_url: URL of the source activity feed
        cfg: Application configuration
        run_logger: Logger for pipeline events; configured from cfg when None

    Returns:
        The serialized output feed

    Raises:
        FeedFetchError: If the feed cannot be fetched or parsed
        FeedRenderError: If the output cannot be serialized
    """
    if run_logger is None:
        run_logger = setup_logging(cfg.logging)

    log_event(run_logger, "Fetching feed", event="fetch_start", url=feed_url)
    result = fetch_feed(
        feed_url,
        timeout=cfg.fetch.timeout_seconds,
        retries=cfg.fetch.retries,
        user_agent=cfg.fetch.user_agent,
        trust_env=cfg.fetch.trust_env,
    )
    if not result.ok:
        log_event(
            run_logger,
            "Fetch failed",
            level=logging.ERROR,
            event="fetch_failed",
            url=feed_url,
            status_code=result.status_code,
            error=result.error,
        )
        raise FeedFetchError(f"Error fetching feed: {result.error}")

    try:
        source = parse_feed(result.text or "")
    except ValueError as exc:
        log_event(run_logger, "Parse failed", level=logging.ERROR, event="fetch_failed", url=feed_url, error=str(exc))
        raise FeedFetchError(f"Error parsing feed: {exc}") from exc
    log_event(run_logger, "Feed parsed", event="feed_parsed", url=feed_url, entries=len(source.entries))

    output = consolidate_feed(
        source,
        custom_title=cfg.output.title,
        consolidate_pushes=cfg.output.consolidate_pushes,
        username=cfg.forge.username,
        base_url=cfg.forge.base_url,
        default_username=cfg.forge.default_username,
        run_logger=run_logger,
    )

    try:
        text = render_feed(output, cfg.output.format)
    except Exception as exc:  # noqa: BLE001
        log_event(run_logger, "Render failed", level=logging.ERROR, event="render_failed", error=str(exc))
        raise FeedRenderError(f"Error rendering feed: {exc}") from exc

    log_event(
        run_logger,
        "Pipeline done",
        event="pipeline_done",
        output_format=cfg.output.format,
        entries=len(output.entries),
    )
    return text
