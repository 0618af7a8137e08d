"""
Structured logging for explorerd.

Use get_logger() in all modules for aggregation-friendly JSON output.
"""

from explorerd.explorer_logging.logger import configure_structlog, get_logger

__all__ = ["configure_structlog", "get_logger"]
