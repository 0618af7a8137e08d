"""
In-memory capability implementations.

Used by main.py for a standalone development node and by the test suite as
test doubles. State is guarded by a lock per object since FastAPI runs sync
handlers on a threadpool. Nothing is persisted.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Callable

from explorerd.capabilities.interfaces import (
    ChainManager,
    Explorer,
    Syncer,
    TransactionPool,
)
from explorerd.core.exceptions import (
    NotFoundError,
    PeerConnectionError,
    TransactionRejectedError,
)
from explorerd.explorer_logging import get_logger
from explorerd.types import (
    ChainIndex,
    ChainStats,
    ConsensusState,
    FileContractElement,
    SiacoinElement,
    SiafundElement,
    Transaction,
)
from explorerd.types.encoding import parse_block_id

logger = get_logger(__name__)

DEFAULT_SYNCER_ADDR = "127.0.0.1:9981"
# Genesis block ID placeholder for a fresh development chain
GENESIS_BLOCK_ID = parse_block_id("0" * 64)


def _split_host_port(addr: str) -> tuple[str, int]:
    host, sep, port_str = addr.strip().rpartition(":")
    if not sep or not host or not port_str.isdigit():
        raise ValueError(f"invalid peer address {addr!r}: expected host:port")
    port = int(port_str)
    if not 0 < port < 65536:
        raise ValueError(f"invalid peer port {port}")
    return host, port


class MemorySyncer(Syncer):
    """Peer list in memory; broadcasts are recorded instead of relayed."""

    def __init__(self, addr: str = DEFAULT_SYNCER_ADDR, peers: list[str] | None = None):
        self._addr = addr
        self._lock = threading.Lock()
        self._peers: list[str] = []
        self.broadcasts: list[tuple[Transaction, list[Transaction]]] = []
        for peer in peers or []:
            self.connect(peer)

    def addr(self) -> str:
        return self._addr

    def peers(self) -> list[str]:
        with self._lock:
            return list(self._peers)

    def connect(self, addr: str) -> None:
        try:
            _split_host_port(addr)
        except ValueError as e:
            raise PeerConnectionError(str(e)) from e
        if addr == self._addr:
            raise PeerConnectionError("refusing to connect to self")
        with self._lock:
            if addr not in self._peers:
                self._peers.append(addr)
        logger.info("syncer_peer_connected", peer=addr)

    def broadcast_transaction(self, txn: Transaction, depends_on: list[Transaction]) -> None:
        with self._lock:
            self.broadcasts.append((txn, list(depends_on)))


class MemoryTransactionPool(TransactionPool):
    """
    Unconfirmed transactions keyed by ID, in admission order.

    validator, when given, is called before admission and rejects a
    transaction by raising TransactionRejectedError. Re-adding a transaction
    already in the pool is a no-op.
    """

    def __init__(self, validator: Callable[[Transaction], None] | None = None):
        self._validator = validator
        self._lock = threading.Lock()
        self._txns: dict[str, Transaction] = {}

    def transactions(self) -> list[Transaction]:
        with self._lock:
            return list(self._txns.values())

    def add_transaction(self, txn: Transaction) -> None:
        txid = txn.id
        with self._lock:
            if txid in self._txns:
                return
        if self._validator is not None:
            self._validator(txn)
        with self._lock:
            self._txns.setdefault(txid, txn)


class MemoryChainManager(ChainManager):
    def __init__(self, state: ConsensusState | None = None):
        self._state = state or ConsensusState(index=ChainIndex(height=0, id=GENESIS_BLOCK_ID))

    def tip_state(self) -> ConsensusState:
        return self._state

    def set_tip_state(self, state: ConsensusState) -> None:
        self._state = state


class MemoryExplorer(Explorer):
    """
    Element, transaction and chain-stats index held in dicts.

    Balances are recomputed from the unspent elements on every call.
    Address transaction lists are kept newest first.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._siacoin: dict[str, SiacoinElement] = {}
        self._siafund: dict[str, SiafundElement] = {}
        self._contracts: dict[str, FileContractElement] = {}
        self._spent: set[str] = set()
        self._txns: dict[str, Transaction] = {}
        self._address_txns: dict[str, list[str]] = {}
        self._stats: dict[str, ChainStats] = {}
        self._latest_stats: ChainStats | None = None
        self._states: dict[str, ConsensusState] = {}

    # -- population -----------------------------------------------------

    def add_siacoin_element(self, elem: SiacoinElement) -> None:
        with self._lock:
            self._siacoin[elem.id] = elem

    def add_siafund_element(self, elem: SiafundElement) -> None:
        with self._lock:
            self._siafund[elem.id] = elem

    def add_file_contract_element(self, elem: FileContractElement) -> None:
        with self._lock:
            self._contracts[elem.id] = elem

    def spend_element(self, id: str) -> None:
        with self._lock:
            self._spent.add(id)

    def add_transaction(self, txn: Transaction, addresses: list[str]) -> str:
        txid = txn.id
        with self._lock:
            self._txns[txid] = txn
            for address in addresses:
                self._address_txns.setdefault(address, []).insert(0, txid)
        return txid

    def add_chain_stats(self, stats: ChainStats) -> None:
        with self._lock:
            self._stats[str(stats.block)] = stats
            if self._latest_stats is None or stats.block.height >= self._latest_stats.block.height:
                self._latest_stats = stats

    def add_state(self, state: ConsensusState) -> None:
        with self._lock:
            self._states[str(state.index)] = state

    # -- Explorer -------------------------------------------------------

    def siacoin_element(self, id: str) -> SiacoinElement:
        with self._lock:
            elem = self._siacoin.get(id)
        if elem is None:
            raise NotFoundError(f"siacoin element {id} not found")
        return elem

    def siafund_element(self, id: str) -> SiafundElement:
        with self._lock:
            elem = self._siafund.get(id)
        if elem is None:
            raise NotFoundError(f"siafund element {id} not found")
        return elem

    def file_contract_element(self, id: str) -> FileContractElement:
        with self._lock:
            elem = self._contracts.get(id)
        if elem is None:
            raise NotFoundError(f"file contract element {id} not found")
        return elem

    def chain_stats(self, index: ChainIndex) -> ChainStats:
        with self._lock:
            stats = self._stats.get(str(index))
        if stats is None:
            raise NotFoundError(f"no chain stats at {index}")
        return stats

    def chain_stats_latest(self) -> ChainStats:
        with self._lock:
            stats = self._latest_stats
        if stats is None:
            raise NotFoundError("no chain stats recorded")
        return stats

    def siacoin_balance(self, address: str) -> int:
        return sum(
            self.siacoin_element(id).siacoin_output.value
            for id in self.unspent_siacoin_elements(address)
        )

    def siafund_balance(self, address: str) -> int:
        return sum(
            self.siafund_element(id).siafund_output.value
            for id in self.unspent_siafund_elements(address)
        )

    def transaction(self, id: str) -> Transaction:
        with self._lock:
            txn = self._txns.get(id)
        if txn is None:
            raise NotFoundError(f"transaction {id} not found")
        return txn

    def unspent_siacoin_elements(self, address: str) -> list[str]:
        with self._lock:
            return [
                id
                for id, elem in self._siacoin.items()
                if elem.siacoin_output.address == address and id not in self._spent
            ]

    def unspent_siafund_elements(self, address: str) -> list[str]:
        with self._lock:
            return [
                id
                for id, elem in self._siafund.items()
                if elem.siafund_output.address == address and id not in self._spent
            ]

    def transactions(self, address: str, amount: int, offset: int) -> list[str]:
        with self._lock:
            ids = self._address_txns.get(address, [])
            return ids[offset : offset + amount]

    def state(self, index: ChainIndex) -> ConsensusState:
        with self._lock:
            state = self._states.get(str(index))
        if state is None:
            raise NotFoundError(f"no consensus state at {index}")
        return state


@dataclass
class MemoryNode:
    """The four in-memory capabilities wired together."""

    syncer: MemorySyncer = field(default_factory=MemorySyncer)
    txpool: MemoryTransactionPool = field(default_factory=MemoryTransactionPool)
    chain: MemoryChainManager = field(default_factory=MemoryChainManager)
    explorer: MemoryExplorer = field(default_factory=MemoryExplorer)


def build_memory_node(peers: list[str] | None = None, syncer_addr: str = DEFAULT_SYNCER_ADDR) -> MemoryNode:
    """Build an in-memory node, connecting to the given bootstrap peers."""
    return MemoryNode(syncer=MemorySyncer(addr=syncer_addr, peers=peers))
