"""
Source feed fetching and parsing.

This package turns a feed URL into the core SourceFeed model.
"""

from .fetcher import FetchResult, fetch_feed
from .parser import parse_feed

__all__ = [
    "FetchResult",
    "fetch_feed",
    "parse_feed",
]
