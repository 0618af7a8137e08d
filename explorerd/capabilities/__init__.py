"""
Capability interfaces (Syncer, TransactionPool, ChainManager, Explorer) and
their in-memory implementations.
"""

from explorerd.capabilities.interfaces import (
    ChainManager,
    Explorer,
    Syncer,
    TransactionPool,
)
from explorerd.capabilities.memory import (
    MemoryChainManager,
    MemoryExplorer,
    MemoryNode,
    MemorySyncer,
    MemoryTransactionPool,
    build_memory_node,
)

__all__ = [
    "ChainManager",
    "Explorer",
    "Syncer",
    "TransactionPool",
    "MemoryChainManager",
    "MemoryExplorer",
    "MemoryNode",
    "MemorySyncer",
    "MemoryTransactionPool",
    "build_memory_node",
]
