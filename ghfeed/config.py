"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- FetchConfig: HTTP fetching settings
- ForgeConfig: Forge base URL and feed owner settings
- OutputConfig: Output format and consolidation settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml


@dataclass
class FetchConfig:
    """Configuration for fetching the source feed.

    Attributes:
        timeout_seconds: HTTP request timeout
        retries: Number of retry attempts after the first failure
        trust_env: Whether to respect system proxy settings
        user_agent: HTTP User-Agent header string
    """

    timeout_seconds: float = 20.0
    retries: int = 0
    trust_env: bool = True
    user_agent: str = "ghfeed (+https://github.com/cdzombak/ghfeed)"


@dataclass
class ForgeConfig:
    """Configuration for the code forge the feed comes from.

    Attributes:
        base_url: Site base URL used to build absolute links
        username: Feed owner handle; inferred from the feed when None
        default_username: Handle used when inference finds nothing
    """

    base_url: str = "https://github.com"
    username: str | None = None
    default_username: str = "user"


@dataclass
class OutputConfig:
    """Configuration for output generation.

    Attributes:
        format: "atom", "rss" or "json"
        title: Custom title for the output feed (keeps the source title when None)
        consolidate_pushes: Merge pushes to the same repository/branch
        path: Output file; stdout when None
    """

    format: str = "atom"
    title: str | None = None
    consolidate_pushes: bool = True
    path: str | None = None


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to the console (stderr)
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
        directory: Directory for the log file; current directory when None
    """

    level: str = "WARNING"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "ghfeed.jsonl"
    directory: str | None = None


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    fetch: FetchConfig = field(default_factory=FetchConfig)
    forge: ForgeConfig = field(default_factory=ForgeConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "fetch": {
            "timeout_seconds": cfg.fetch.timeout_seconds,
            "retries": cfg.fetch.retries,
            "trust_env": cfg.fetch.trust_env,
            "user_agent": cfg.fetch.user_agent,
        },
        "forge": {
            "base_url": cfg.forge.base_url,
            "username": cfg.forge.username,
            "default_username": cfg.forge.default_username,
        },
        "output": {
            "format": cfg.output.format,
            "title": cfg.output.title,
            "consolidate_pushes": cfg.output.consolidate_pushes,
            "path": cfg.output.path,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
            "directory": cfg.logging.directory,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        fetch=FetchConfig(**data["fetch"]),
        forge=ForgeConfig(**data["forge"]),
        output=OutputConfig(**data["output"]),
        logging=LoggingConfig(**data["logging"]),
    )
