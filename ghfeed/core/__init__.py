"""
Core domain models and consolidation logic.

This package contains the data types and the pure transform logic
(extraction, classification, aggregation, rendering) that is independent
of how the feed is fetched or serialized.
"""

from .types import (
    ActivityKind,
    BranchActivity,
    BranchKey,
    Commit,
    FeedInfo,
    OutputEntry,
    OutputFeed,
    Person,
    SourceEntry,
    SourceFeed,
)
from .aggregate import BranchAggregator, extract_branch_activity, merge_activity
from .classify import classify, classify_activity, is_push_category
from .compare import synthesize_compare_link
from .entries import render_non_commit, render_push
from .extract import extract_commits, extract_username

__all__ = [
    "ActivityKind",
    "BranchActivity",
    "BranchKey",
    "Commit",
    "FeedInfo",
    "OutputEntry",
    "OutputFeed",
    "Person",
    "SourceEntry",
    "SourceFeed",
    "BranchAggregator",
    "extract_branch_activity",
    "merge_activity",
    "classify",
    "classify_activity",
    "is_push_category",
    "synthesize_compare_link",
    "render_non_commit",
    "render_push",
    "extract_commits",
    "extract_username",
]
