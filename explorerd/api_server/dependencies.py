"""
FastAPI dependencies: the capabilities stored on app.state by create_app().
"""

from __future__ import annotations

from fastapi import Request

from explorerd.capabilities.interfaces import (
    ChainManager,
    Explorer,
    Syncer,
    TransactionPool,
)


def get_syncer(request: Request) -> Syncer:
    return request.app.state.syncer


def get_txpool(request: Request) -> TransactionPool:
    return request.app.state.txpool


def get_chain_manager(request: Request) -> ChainManager:
    return request.app.state.chain_manager


def get_explorer(request: Request) -> Explorer:
    return request.app.state.explorer
