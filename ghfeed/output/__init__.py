"""
Output feed serialization.

This package renders the consolidated feed as Atom, RSS or JSON.
"""

from .renderer import FORMATS, render_atom, render_feed, render_json, render_rss

__all__ = ["FORMATS", "render_feed", "render_atom", "render_rss", "render_json"]
