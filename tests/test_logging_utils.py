from __future__ import annotations

import json
import logging
from pathlib import Path

from ghfeed.config import LoggingConfig
from ghfeed.logging_utils import log_event, setup_logging


def test_file_logging_writes_jsonl_events(tmp_path: Path) -> None:
    cfg = LoggingConfig(level="INFO", console=False, file=True)
    logger = setup_logging(cfg, log_dir=tmp_path)

    log_event(logger, "Feed parsed", event="feed_parsed", url="https://github.com/cdzombak.atom", entries=3)
    log_event(logger, "Skipped", level=logging.DEBUG, event="entry_reclassified")
    for handler in logger.handlers:
        handler.flush()

    lines = (tmp_path / "ghfeed.jsonl").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    payload = json.loads(lines[0])
    assert payload["level"] == "INFO"
    assert payload["message"] == "Feed parsed"
    assert payload["event"] == "feed_parsed"
    assert payload["entries"] == 3

    for handler in logger.handlers:
        handler.close()


def test_setup_logging_replaces_handlers() -> None:
    cfg = LoggingConfig(console=True)

    first = setup_logging(cfg)
    second = setup_logging(cfg)

    assert first is second
    assert len(second.handlers) == 1
    assert second.level == logging.WARNING


def test_log_event_without_logger_is_noop() -> None:
    log_event(None, "ignored", event="fetch_start")
