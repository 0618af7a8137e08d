"""
structlog setup for explorerd.

Every record carries event_type, level, timestamp and the name of the module
that logged it, so API, facade and backend events can be filtered per
component (logger="explorerd.facade.admission", event_type="txpool_broadcast").

The defaults come from LOG_LEVEL / LOG_FORMAT at import; main.py reconfigures
from Settings once the environment has been loaded. Loggers handed out by
get_logger() resolve the configuration on first use, so module-level loggers
created before that reconfiguration still follow it.

Imports nothing else from explorerd; config and facade modules import this.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()


def _add_timestamp(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
    return event_dict


def _event_type(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Move structlog's positional event name under event_type."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    return event_dict


def configure_structlog(level: str | None = None, fmt: str | None = None) -> None:
    """
    (Re)configure structlog output.

    level is a stdlib level name (DEBUG, INFO, ...); fmt is "json" for one
    JSON object per line or anything else for the console renderer.
    """
    level_value = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)
    output = (fmt or LOG_FORMAT).strip().lower()
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        _add_timestamp,
    ]
    if output == "json":
        processors += [_event_type, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> Any:
    """
    Logger for module name, bound lazily with logger=name.

        logger = get_logger(__name__)
        logger.info("syncer_peer_connected", peer="10.0.0.1:9981")
    """
    return structlog._config.BoundLoggerLazyProxy(
        None, initial_values={"logger": name}, logger_factory_args=(name,)
    )
