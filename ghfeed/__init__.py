"""
ghfeed - GitHub activity feed consolidator.

This package reads a GitHub user's public activity feed and rewrites it
into a compact feed: pushes to the same repository/branch are merged into
one entry, and other activities become short summaries with clean links.

Main entry point is the CLI via the `ghfeed` command.

Example:
    $ ghfeed https://github.com/username.atom
"""

__all__ = ["__version__", "consolidate_feed", "extract_username", "parse_feed", "render_feed"]
__version__ = "0.1.0"

from .core.extract import extract_username
from .fetch.parser import parse_feed
from .output.renderer import render_feed
from .runner import consolidate_feed
