"""
Environment variable loading for explorerd.

- API_HOST / API_PORT: listen address of the HTTP API (default 0.0.0.0:9980)
- EXPLORERD_API_PASSWORD: shared password for HTTP Basic auth (required to serve)
- EXPLORERD_BOOTSTRAP_PEERS: comma-separated peer addresses (host:port)
- LOG_LEVEL / LOG_FORMAT: see explorer_logging
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is explorerd/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_API_HOST = "0.0.0.0"
DEFAULT_API_PORT = 9980


def load_explorerd_env() -> None:
    """Load .env from project root. Existing environment variables win."""
    load_dotenv(_ENV_PATH, override=False)


def get_env(name: str, default: str = "") -> str:
    load_explorerd_env()
    return (os.getenv(name) or default).strip()


def get_api_port() -> int:
    raw = get_env("API_PORT", str(DEFAULT_API_PORT)) or str(DEFAULT_API_PORT)
    try:
        port = int(raw)
    except ValueError:
        raise ValueError(f"API_PORT must be an integer, got {raw!r}") from None
    if not 0 < port < 65536:
        raise ValueError(f"API_PORT out of range: {port}")
    return port


def get_bootstrap_peers() -> list[str]:
    """Return EXPLORERD_BOOTSTRAP_PEERS split on commas, blanks dropped."""
    raw = get_env("EXPLORERD_BOOTSTRAP_PEERS")
    return [p.strip() for p in raw.split(",") if p.strip()]
