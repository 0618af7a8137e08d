"""
Tests for explorerd.explorer_logging.
"""

from __future__ import annotations

import io
import json
import sys

from explorerd.explorer_logging import configure_structlog, get_logger


def test_logger_created_before_reconfigure_follows_it(monkeypatch):
    logger = get_logger("explorerd.tests.reconfigure")
    buf = io.StringIO()
    monkeypatch.setattr(sys, "stdout", buf)
    configure_structlog(level="WARNING", fmt="json")
    try:
        logger.info("below_threshold")
        logger.warning("peer_dropped", peer="10.0.0.1:9981")
    finally:
        monkeypatch.undo()
        configure_structlog()

    lines = buf.getvalue().strip().splitlines()
    assert len(lines) == 1
    record = json.loads(lines[0])
    assert record["event_type"] == "peer_dropped"
    assert record["level"] == "warning"
    assert record["logger"] == "explorerd.tests.reconfigure"
    assert record["peer"] == "10.0.0.1:9981"
    assert "timestamp" in record


def test_console_format_does_not_raise():
    configure_structlog(level="DEBUG", fmt="console")
    try:
        get_logger("explorerd.tests.console").debug("console_event", key="value")
    finally:
        configure_structlog()
