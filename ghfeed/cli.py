"""
Command-line interface for the GitHub feed consolidator.

Uses Typer to expose the feed URL and the output options; flags override
values loaded from an optional YAML config file. The feed is written to
stdout (or --output), logs and errors go to stderr.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

import typer
from rich.console import Console

from . import __version__
from .config import load_config
from .runner import FeedFetchError, FeedRenderError, run_pipeline

app = typer.Typer(add_completion=False)
console = Console(stderr=True)

EPILOG = """
Examples:

  ghfeed https://github.com/username.atom

  ghfeed --retitle "My Custom Feed" https://github.com/username.atom

  ghfeed --format rss https://github.com/username.atom

  ghfeed --format json --no-consolidate-pushes https://github.com/username.atom
"""


class FeedFormat(str, Enum):
    atom = "atom"
    rss = "rss"
    json = "json"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"ghfeed version {__version__}")
        raise typer.Exit()


@app.command(epilog=EPILOG)
def run(
    feed_url: str = typer.Argument(..., help="Activity feed URL, e.g. https://github.com/<user>.atom"),
    retitle: str | None = typer.Option(None, "--retitle", help="Set a custom title for the output feed."),
    format: FeedFormat | None = typer.Option(
        None, "--format", "-f", case_sensitive=False, help="Output format (default: atom)."
    ),
    consolidate_pushes: bool | None = typer.Option(
        None,
        "--consolidate-pushes/--no-consolidate-pushes",
        help="Consolidate pushes to the same repository/branch into single entries (default: on).",
    ),
    username: str | None = typer.Option(
        None, "--username", help="Feed owner handle; inferred from the feed when omitted."
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the feed to a file instead of stdout."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, readable=True),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    version: bool = typer.Option(
        False, "--version", "-v", callback=_version_callback, is_eager=True, help="Show version and exit."
    ),
):
    """Transform a verbose GitHub activity feed into a clean, readable summary.

    Consolidates commits by repository/branch ("cdzombak pushed 15 commits to
    dotfiles/master") and simplifies other activities ("cdzombak opened PR
    #264 in mmcdole/gofeed") while keeping links, messages and ordering.

    Args:
        feed_url: Source feed URL
        retitle: Custom output feed title
        format: Output format (atom, rss, json)
        consolidate_pushes: Merge pushes per repository/branch
        username: Feed owner handle override
        output: Output file path
        config: Optional path to YAML config file
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        version: Print version and exit
    """
    # Load base configuration
    cfg = load_config(str(config) if config else None)

    # Override with CLI options
    if retitle:
        cfg.output.title = retitle
    if format is not None:
        cfg.output.format = format.value
    if consolidate_pushes is not None:
        cfg.output.consolidate_pushes = consolidate_pushes
    if username:
        cfg.forge.username = username
    if output is not None:
        cfg.output.path = str(output)
    if log_level:
        cfg.logging.level = log_level

    try:
        text = run_pipeline(feed_url, cfg)
    except (FeedFetchError, FeedRenderError) as exc:
        console.print(f"[red]Error:[/red] {exc}", markup=True, highlight=False)
        raise typer.Exit(code=1)

    if cfg.output.path:
        Path(cfg.output.path).write_text(text, encoding="utf-8")
        console.print(f"Feed written: {cfg.output.path}")
    else:
        typer.echo(text, nl=False)


if __name__ == "__main__":
    app()
