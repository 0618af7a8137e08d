"""
Capability boundaries consumed by the API facade.

Four narrow contracts: Syncer, TransactionPool, ChainManager, Explorer. The
node supplies one implementation of each; the facade only holds references
to them and never mutates their state directly. Lookups raise NotFoundError
when the entity does not exist and any other exception on failure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from explorerd.types import (
    ChainIndex,
    ChainStats,
    ConsensusState,
    FileContractElement,
    SiacoinElement,
    SiafundElement,
    Transaction,
)


class Syncer(ABC):
    """Connects to other peers and synchronizes the blockchain."""

    @abstractmethod
    def addr(self) -> str:
        """Return the address the syncer listens on."""
        ...

    @abstractmethod
    def peers(self) -> list[str]:
        """Return the net addresses of connected peers."""
        ...

    @abstractmethod
    def connect(self, addr: str) -> None:
        """Connect to a peer. Raises PeerConnectionError on failure."""
        ...

    @abstractmethod
    def broadcast_transaction(self, txn: Transaction, depends_on: list[Transaction]) -> None:
        """Relay a transaction and its unconfirmed parents to peers."""
        ...


class TransactionPool(ABC):
    """Validates and holds unconfirmed transactions."""

    @abstractmethod
    def transactions(self) -> list[Transaction]:
        ...

    @abstractmethod
    def add_transaction(self, txn: Transaction) -> None:
        """Admit a transaction. Raises TransactionRejectedError if invalid."""
        ...


class ChainManager(ABC):
    """Manages blockchain state."""

    @abstractmethod
    def tip_state(self) -> ConsensusState:
        ...


class Explorer(ABC):
    """Index of blocks, outputs, contracts and transactions."""

    @abstractmethod
    def siacoin_element(self, id: str) -> SiacoinElement:
        ...

    @abstractmethod
    def siafund_element(self, id: str) -> SiafundElement:
        ...

    @abstractmethod
    def file_contract_element(self, id: str) -> FileContractElement:
        ...

    @abstractmethod
    def chain_stats(self, index: ChainIndex) -> ChainStats:
        ...

    @abstractmethod
    def chain_stats_latest(self) -> ChainStats:
        ...

    @abstractmethod
    def siacoin_balance(self, address: str) -> int:
        """Return the confirmed siacoin balance of address, in hastings."""
        ...

    @abstractmethod
    def siafund_balance(self, address: str) -> int:
        ...

    @abstractmethod
    def transaction(self, id: str) -> Transaction:
        ...

    @abstractmethod
    def unspent_siacoin_elements(self, address: str) -> list[str]:
        """Return the IDs of unspent siacoin elements owned by address."""
        ...

    @abstractmethod
    def unspent_siafund_elements(self, address: str) -> list[str]:
        ...

    @abstractmethod
    def transactions(self, address: str, amount: int, offset: int) -> list[str]:
        """
        Return up to amount transaction IDs involving address, newest first,
        skipping the first offset.
        """
        ...

    @abstractmethod
    def state(self, index: ChainIndex) -> ConsensusState:
        """Return the validation state at index."""
        ...
