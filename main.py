"""
Main entrypoint: explorerd API over an in-memory node.

Env: EXPLORERD_API_PASSWORD (required), API_HOST, API_PORT,
EXPLORERD_BOOTSTRAP_PEERS, LOG_LEVEL, LOG_FORMAT. See explorerd/config/env.py.

Equivalent: uvicorn explorerd.api_server.app:create_default_app --factory --port 9980
"""

import sys

from explorerd.config import get_settings
from explorerd.core.exceptions import ConfigError
from explorerd.explorer_logging import configure_structlog, get_logger

logger = get_logger("main")


def main() -> None:
    """Build the API from settings and serve it with uvicorn in the main thread."""
    try:
        settings = get_settings()
        settings.require_password()
    except ConfigError as e:
        logger.error("main_config_error", message=str(e))
        sys.exit(1)

    configure_structlog(level=settings.log_level, fmt=settings.log_format)

    from explorerd.api_server.app import create_default_app
    import uvicorn

    app = create_default_app()
    logger.info("main_server_starting", host=settings.api_host, port=settings.api_port)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
