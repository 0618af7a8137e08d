"""
explorerd API client over httpx.

Usage:
    from explorerd.api_client import ExplorerClient
    client = ExplorerClient("http://localhost:9980", password="secret")
    tip = client.chain_stats("tip")

Responses are decoded into explorerd.types models. Any non-2xx response
raises ExplorerClientError carrying the server's detail message.
"""

from __future__ import annotations

from typing import Any, Sequence, TypeVar

import httpx
from pydantic import TypeAdapter

from explorerd.api_server.schemas import (
    DEFAULT_TRANSACTIONS_AMOUNT,
    ExplorerSearchResponse,
    ExplorerTransactionsRequest,
    SyncerPeerResponse,
    TxpoolBroadcastRequest,
)
from explorerd.types import (
    BalanceView,
    ChainIndex,
    ChainStats,
    ConsensusState,
    FileContractElement,
    SiacoinElement,
    SiafundElement,
    Transaction,
)

T = TypeVar("T")

DEFAULT_TIMEOUT_SEC = 30.0


class ExplorerClientError(Exception):
    """Raised when the API returns an error response."""

    def __init__(self, message: str, status_code: int | None = None, response: httpx.Response | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


def _index_str(index: ChainIndex | str) -> str:
    return index if isinstance(index, str) else str(index)


class ExplorerClient:
    """
    Client for the explorerd API.

    http may be any httpx.Client (including fastapi.testclient.TestClient);
    when omitted a client is created for base_url and owned by this object.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:9980",
        password: str = "",
        timeout: float = DEFAULT_TIMEOUT_SEC,
        http: httpx.Client | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._auth = httpx.BasicAuth("", password)
        self._owns_http = http is None
        self._http = http if http is not None else httpx.Client(timeout=timeout)

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "ExplorerClient":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        url = f"{self.base_url}{path}"
        resp = self._http.request(method, url, params=params, json=json, auth=self._auth)
        if resp.is_error:
            if resp.headers.get("content-type", "").startswith("application/json"):
                detail = resp.json().get("detail", resp.text)
            else:
                detail = resp.text
            raise ExplorerClientError(f"API error: {detail}", status_code=resp.status_code, response=resp)
        return resp

    def _get(self, path: str, model: Any, params: dict[str, Any] | None = None) -> Any:
        resp = self._request("GET", path, params=params)
        return TypeAdapter(model).validate_python(resp.json())

    def _post(self, path: str, body: Any, model: Any = None) -> Any:
        resp = self._request("POST", path, json=body)
        if model is None:
            return None
        return TypeAdapter(model).validate_python(resp.json())

    # -- txpool -------------------------------------------------------------

    def txpool_broadcast(self, txn: Transaction, depends_on: Sequence[Transaction] = ()) -> None:
        """Broadcast txn after its unconfirmed dependencies (parents first)."""
        body = TxpoolBroadcastRequest(depends_on=list(depends_on), transaction=txn)
        self._post("/txpool/broadcast", body.model_dump(mode="json", by_alias=True))

    def txpool_transactions(self) -> list[Transaction]:
        return self._get("/txpool/transactions", list[Transaction])

    # -- syncer -------------------------------------------------------------

    def syncer_peers(self) -> list[SyncerPeerResponse]:
        return self._get("/syncer/peers", list[SyncerPeerResponse])

    def syncer_address(self) -> str:
        return self._get("/syncer/address", str)

    def syncer_connect(self, addr: str) -> None:
        self._post("/syncer/connect", addr)

    # -- chain --------------------------------------------------------------

    def chain_stats(self, index: ChainIndex | str) -> ChainStats:
        """Stats at index; pass "tip" for the latest."""
        return self._get(f"/explorer/chain/{_index_str(index)}", ChainStats)

    def chain_state(self, index: ChainIndex | str) -> ConsensusState:
        return self._get(f"/explorer/chain/{_index_str(index)}/state", ConsensusState)

    # -- elements -----------------------------------------------------------

    def siacoin_element(self, id: str) -> SiacoinElement:
        return self._get(f"/explorer/element/siacoin/{id}", SiacoinElement)

    def siafund_element(self, id: str) -> SiafundElement:
        return self._get(f"/explorer/element/siafund/{id}", SiafundElement)

    def file_contract_element(self, id: str) -> FileContractElement:
        return self._get(f"/explorer/element/contract/{id}", FileContractElement)

    def element_search(self, id: str) -> ExplorerSearchResponse:
        return self._get(f"/explorer/element/search/{id}", ExplorerSearchResponse)

    # -- addresses and transactions ----------------------------------------

    def address_balance(self, address: str) -> BalanceView:
        return self._get(f"/explorer/address/{address}/balance", BalanceView)

    def siacoin_outputs(self, address: str) -> list[str]:
        """IDs of the unspent siacoin elements of address."""
        return self._get(f"/explorer/address/{address}/siacoins", list[str])

    def siafund_outputs(self, address: str) -> list[str]:
        return self._get(f"/explorer/address/{address}/siafunds", list[str])

    def transactions(self, address: str, amount: int = DEFAULT_TRANSACTIONS_AMOUNT, offset: int = 0) -> list[str]:
        """Latest transaction IDs the address was involved in."""
        return self._get(
            f"/explorer/address/{address}/transactions",
            list[str],
            params={"amount": amount, "offset": offset},
        )

    def transaction(self, id: str) -> Transaction:
        return self._get(f"/explorer/transaction/{id}", Transaction)

    # -- batch --------------------------------------------------------------

    def batch_balance(self, addresses: Sequence[str]) -> list[BalanceView]:
        return self._post("/explorer/batch/addresses/balance", list(addresses), list[BalanceView])

    def batch_siacoins(self, addresses: Sequence[str]) -> list[list[SiacoinElement]]:
        return self._post("/explorer/batch/addresses/siacoins", list(addresses), list[list[SiacoinElement]])

    def batch_siafunds(self, addresses: Sequence[str]) -> list[list[SiafundElement]]:
        return self._post("/explorer/batch/addresses/siafunds", list(addresses), list[list[SiafundElement]])

    def batch_transactions(self, requests: Sequence[ExplorerTransactionsRequest]) -> list[list[Transaction]]:
        body = [r.model_dump(mode="json", by_alias=True) for r in requests]
        return self._post("/explorer/batch/addresses/transactions", body, list[list[Transaction]])
