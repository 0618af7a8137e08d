"""
ASGI application entrypoint for a standalone in-memory node.

Run with: uvicorn explorerd.api_server.app:create_default_app --factory --port 9980
"""

from __future__ import annotations

from fastapi import FastAPI

from explorerd.api_server.server import create_app
from explorerd.capabilities.memory import build_memory_node
from explorerd.config import get_settings
from explorerd.explorer_logging import get_logger

logger = get_logger(__name__)


def create_default_app() -> FastAPI:
    """Build the API over an in-memory node configured from the environment."""
    settings = get_settings()
    password = settings.require_password()
    node = build_memory_node(peers=settings.peers)
    logger.info("api_node_built", peers=len(node.syncer.peers()), syncer_addr=node.syncer.addr())
    return create_app(
        chain_manager=node.chain,
        syncer=node.syncer,
        txpool=node.txpool,
        explorer=node.explorer,
        password=password,
    )


__all__ = ["create_default_app"]
