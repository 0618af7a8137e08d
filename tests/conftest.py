"""
Pytest fixtures for explorerd tests: seeded in-memory node, call-recording
spies around each capability, and FastAPI TestClients with and without
Basic credentials.
"""

from __future__ import annotations

import pytest

from doubles import API_PASSWORD, Spy, basic_auth_header
from factories import reject_marked, seed_explorer


@pytest.fixture
def node():
    """In-memory node with the seeded chain; the pool rejects marked transactions."""
    from explorerd.capabilities.memory import (
        MemoryChainManager,
        MemoryExplorer,
        MemoryNode,
        MemorySyncer,
        MemoryTransactionPool,
    )

    explorer = MemoryExplorer()
    seed_explorer(explorer)
    return MemoryNode(
        syncer=MemorySyncer(peers=["10.0.0.1:9981"]),
        txpool=MemoryTransactionPool(validator=reject_marked),
        chain=MemoryChainManager(),
        explorer=explorer,
    )


@pytest.fixture
def spies(node):
    """Spies wrapping each capability of node, keyed by capability name."""
    return {
        "syncer": Spy(node.syncer),
        "txpool": Spy(node.txpool),
        "chain": Spy(node.chain),
        "explorer": Spy(node.explorer),
    }


@pytest.fixture
def app(spies):
    from explorerd.api_server.server import create_app

    return create_app(
        chain_manager=spies["chain"],
        syncer=spies["syncer"],
        txpool=spies["txpool"],
        explorer=spies["explorer"],
        password=API_PASSWORD,
    )


@pytest.fixture
def client(app):
    """TestClient sending the correct password (username is arbitrary)."""
    from fastapi.testclient import TestClient

    return TestClient(app, headers=basic_auth_header("anyone", API_PASSWORD))


@pytest.fixture
def anon_client(app):
    """TestClient without credentials."""
    from fastapi.testclient import TestClient

    return TestClient(app)

