"""
Domain values of the explorer: identifiers, elements, transactions, chain stats.

The binary consensus encoding lives in the node; this package only knows the
JSON/text forms used at the API boundary.
"""

from explorerd.types.encoding import TIP_LITERAL
from explorerd.types.models import (
    Address,
    BalanceView,
    BlockID,
    ChainIndex,
    ChainStats,
    ConsensusState,
    Currency,
    ElementID,
    FileContract,
    FileContractElement,
    SiacoinElement,
    SiacoinInput,
    SiacoinOutput,
    SiafundElement,
    SiafundInput,
    SiafundOutput,
    StateElement,
    Transaction,
    TransactionID,
)

__all__ = [
    "TIP_LITERAL",
    "Address",
    "BalanceView",
    "BlockID",
    "ChainIndex",
    "ChainStats",
    "ConsensusState",
    "Currency",
    "ElementID",
    "FileContract",
    "FileContractElement",
    "SiacoinElement",
    "SiacoinInput",
    "SiacoinOutput",
    "SiafundElement",
    "SiafundInput",
    "SiafundOutput",
    "StateElement",
    "Transaction",
    "TransactionID",
]
