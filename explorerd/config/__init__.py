"""
Configuration management for explorerd.

Loads settings from environment variables and an optional .env file and
exposes a single source of truth for service configuration.
"""

from explorerd.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
