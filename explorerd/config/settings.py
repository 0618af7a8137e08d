"""
Application settings.

Typed, immutable view of the environment (see env.py) used by main.py and
the API server. get_settings() is cached; tests call get_settings.cache_clear()
after changing the environment.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass, field

from explorerd.config.env import (
    DEFAULT_API_HOST,
    DEFAULT_API_PORT,
    get_api_port,
    get_bootstrap_peers,
    get_env,
)
from explorerd.core.exceptions import ConfigError


@dataclass(frozen=True)
class Settings:
    api_host: str = DEFAULT_API_HOST
    api_port: int = DEFAULT_API_PORT
    api_password: str = ""
    log_level: str = "INFO"
    log_format: str = "json"
    peers: list[str] = field(default_factory=list)

    def require_password(self) -> str:
        """Return the API password; refuse to serve without one."""
        if not self.api_password:
            raise ConfigError("EXPLORERD_API_PASSWORD must be set to serve the API")
        return self.api_password


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the current application settings."""
    try:
        port = get_api_port()
    except ValueError as e:
        raise ConfigError(str(e)) from e
    return Settings(
        api_host=get_env("API_HOST", DEFAULT_API_HOST) or DEFAULT_API_HOST,
        api_port=port,
        api_password=get_env("EXPLORERD_API_PASSWORD"),
        log_level=(get_env("LOG_LEVEL", "INFO") or "INFO").upper(),
        log_format=(get_env("LOG_FORMAT", "json") or "json").lower(),
        peers=get_bootstrap_peers(),
    )
