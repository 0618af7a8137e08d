"""
Request and response bodies of the explorerd API (shared with api_client).
"""

from __future__ import annotations

from pydantic import Field

from explorerd.facade.resolver import ElementKind, SearchResult
from explorerd.types import (
    Address,
    BalanceView,
    FileContractElement,
    SiacoinElement,
    SiafundElement,
    Transaction,
)
from explorerd.types.models import ExplorerModel

# Default number of transaction IDs returned per address
DEFAULT_TRANSACTIONS_AMOUNT = 100

ExplorerWalletBalanceResponse = BalanceView


class TxpoolBroadcastRequest(ExplorerModel):
    """POST /txpool/broadcast body: transaction plus its unconfirmed parents, parents first."""

    depends_on: list[Transaction] = Field(default_factory=list, description="Unconfirmed parents, admitted first in order")
    transaction: Transaction = Field(..., description="Transaction to admit and broadcast")


class SyncerPeerResponse(ExplorerModel):
    net_address: str = Field(..., description="Peer address as host:port")


class ExplorerTransactionsRequest(ExplorerModel):
    """One item of POST /explorer/batch/addresses/transactions."""

    address: Address = Field(..., description="Address whose transactions are listed")
    amount: int = Field(DEFAULT_TRANSACTIONS_AMOUNT, ge=0, description="Maximum number of transactions")
    offset: int = Field(0, ge=0, description="Number of newest transactions to skip")


class ExplorerSearchResponse(ExplorerModel):
    """
    GET /explorer/element/search/{id} response.

    type names the populated field; for type "none" no element is present.
    """

    type: ElementKind = Field(..., description="Kind of element found, or none")
    siacoin_element: SiacoinElement | None = None
    siafund_element: SiafundElement | None = None
    file_contract_element: FileContractElement | None = None

    @classmethod
    def from_result(cls, result: SearchResult) -> "ExplorerSearchResponse":
        if result.kind is ElementKind.SIACOIN:
            return cls(type=result.kind, siacoin_element=result.element)
        if result.kind is ElementKind.SIAFUND:
            return cls(type=result.kind, siafund_element=result.element)
        if result.kind is ElementKind.CONTRACT:
            return cls(type=result.kind, file_contract_element=result.element)
        return cls(type=ElementKind.NONE)

    def to_result(self) -> SearchResult:
        element = {
            ElementKind.SIACOIN: self.siacoin_element,
            ElementKind.SIAFUND: self.siafund_element,
            ElementKind.CONTRACT: self.file_contract_element,
        }.get(self.type)
        return SearchResult(kind=self.type, element=element)
