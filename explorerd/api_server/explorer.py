"""
FastAPI router: explorer queries under /explorer.

Single-entity lookups pass straight through to the Explorer capability;
search and batch endpoints go through explorerd.facade. Every path
parameter is re-validated here before any backend call.
"""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Query

from explorerd.api_server.dependencies import get_chain_manager, get_explorer
from explorerd.api_server.errors import check, decode_param
from explorerd.api_server.schemas import (
    DEFAULT_TRANSACTIONS_AMOUNT,
    ExplorerSearchResponse,
    ExplorerTransactionsRequest,
)
from explorerd.capabilities.interfaces import ChainManager, Explorer
from explorerd.facade.batch import (
    TransactionsQuery,
    batch_balances,
    batch_siacoin_elements,
    batch_siafund_elements,
    batch_transactions,
)
from explorerd.facade.resolver import resolve_element
from explorerd.types import (
    TIP_LITERAL,
    Address,
    BalanceView,
    ChainIndex,
    ChainStats,
    ConsensusState,
    FileContractElement,
    SiacoinElement,
    SiafundElement,
    Transaction,
)
from explorerd.types.encoding import (
    parse_address,
    parse_element_id,
    parse_transaction_id,
)

router = APIRouter(prefix="/explorer", tags=["explorer"])


# -----------------------------------------------------------------------------
# Elements
# -----------------------------------------------------------------------------


@router.get(
    "/element/search/{id}",
    response_model=ExplorerSearchResponse,
    response_model_exclude_none=True,
)
def element_search(id: str, explorer: Explorer = Depends(get_explorer)) -> ExplorerSearchResponse:
    """Resolve id to a siacoin, siafund or contract element; type "none" when unknown."""
    element_id = decode_param(parse_element_id, id, "id")
    return ExplorerSearchResponse.from_result(resolve_element(explorer, element_id))


@router.get("/element/siacoin/{id}", response_model=SiacoinElement)
def element_siacoin(id: str, explorer: Explorer = Depends(get_explorer)) -> SiacoinElement:
    element_id = decode_param(parse_element_id, id, "id")
    try:
        return explorer.siacoin_element(element_id)
    except Exception as e:
        raise check("failed to load siacoin element", e) from e


@router.get("/element/siafund/{id}", response_model=SiafundElement)
def element_siafund(id: str, explorer: Explorer = Depends(get_explorer)) -> SiafundElement:
    element_id = decode_param(parse_element_id, id, "id")
    try:
        return explorer.siafund_element(element_id)
    except Exception as e:
        raise check("failed to load siafund element", e) from e


@router.get("/element/contract/{id}", response_model=FileContractElement)
def element_contract(id: str, explorer: Explorer = Depends(get_explorer)) -> FileContractElement:
    element_id = decode_param(parse_element_id, id, "id")
    try:
        return explorer.file_contract_element(element_id)
    except Exception as e:
        raise check("failed to load file contract element", e) from e


# -----------------------------------------------------------------------------
# Chain
# -----------------------------------------------------------------------------


@router.get("/chain/{index}", response_model=ChainStats)
def chain_stats(index: str, explorer: Explorer = Depends(get_explorer)) -> ChainStats:
    """Chain stats at index; the literal "tip" selects the latest stats."""
    if index == TIP_LITERAL:
        try:
            return explorer.chain_stats_latest()
        except Exception as e:
            raise check("failed to load latest chain stats", e) from e

    chain_index = decode_param(ChainIndex.parse, index, "index")
    try:
        return explorer.chain_stats(chain_index)
    except Exception as e:
        raise check("failed to load chain stats", e) from e


@router.get("/chain/{index}/state", response_model=ConsensusState)
def chain_state(
    index: str,
    explorer: Explorer = Depends(get_explorer),
    cm: ChainManager = Depends(get_chain_manager),
) -> ConsensusState:
    """Validation state at index; "tip" returns the chain manager's current state."""
    if index == TIP_LITERAL:
        try:
            return cm.tip_state()
        except Exception as e:
            raise check("failed to load tip state", e) from e

    chain_index = decode_param(ChainIndex.parse, index, "index")
    try:
        return explorer.state(chain_index)
    except Exception as e:
        raise check("failed to load chain state", e) from e


# -----------------------------------------------------------------------------
# Transactions and addresses
# -----------------------------------------------------------------------------


@router.get("/transaction/{id}", response_model=Transaction)
def transaction(id: str, explorer: Explorer = Depends(get_explorer)) -> Transaction:
    txid = decode_param(parse_transaction_id, id, "id")
    try:
        return explorer.transaction(txid)
    except Exception as e:
        raise check("failed to load transaction", e) from e


@router.get("/address/{address}/balance", response_model=BalanceView)
def address_balance(address: str, explorer: Explorer = Depends(get_explorer)) -> BalanceView:
    addr = decode_param(parse_address, address, "address")
    try:
        siacoins = explorer.siacoin_balance(addr)
    except Exception as e:
        raise check("failed to get siacoin balance", e) from e
    try:
        siafunds = explorer.siafund_balance(addr)
    except Exception as e:
        raise check("failed to get siafund balance", e) from e
    return BalanceView(siacoins=siacoins, siafunds=siafunds)


@router.get("/address/{address}/siacoins", response_model=list[str])
def address_siacoins(address: str, explorer: Explorer = Depends(get_explorer)) -> list[str]:
    """IDs of the unspent siacoin elements owned by address."""
    addr = decode_param(parse_address, address, "address")
    try:
        return explorer.unspent_siacoin_elements(addr)
    except Exception as e:
        raise check("failed to get unspent siacoin elements", e) from e


@router.get("/address/{address}/siafunds", response_model=list[str])
def address_siafunds(address: str, explorer: Explorer = Depends(get_explorer)) -> list[str]:
    """IDs of the unspent siafund elements owned by address."""
    addr = decode_param(parse_address, address, "address")
    try:
        return explorer.unspent_siafund_elements(addr)
    except Exception as e:
        raise check("failed to get unspent siafund elements", e) from e


@router.get("/address/{address}/transactions", response_model=list[str])
def address_transactions(
    address: str,
    amount: int = Query(DEFAULT_TRANSACTIONS_AMOUNT, ge=0, description="Maximum number of transaction IDs"),
    offset: int = Query(0, ge=0, description="Number of newest transaction IDs to skip"),
    explorer: Explorer = Depends(get_explorer),
) -> list[str]:
    """IDs of the latest transactions involving address."""
    addr = decode_param(parse_address, address, "address")
    try:
        return explorer.transactions(addr, amount, offset)
    except Exception as e:
        raise check("failed to get address transactions", e) from e


# -----------------------------------------------------------------------------
# Batch
# -----------------------------------------------------------------------------


@router.post("/batch/addresses/balance", response_model=list[BalanceView])
def batch_addresses_balance(
    addresses: list[Address] = Body(...),
    explorer: Explorer = Depends(get_explorer),
) -> list[BalanceView]:
    try:
        return batch_balances(explorer, addresses)
    except Exception as e:
        raise check("failed to get balances", e) from e


@router.post("/batch/addresses/siacoins", response_model=list[list[SiacoinElement]])
def batch_addresses_siacoins(
    addresses: list[Address] = Body(...),
    explorer: Explorer = Depends(get_explorer),
) -> list[list[SiacoinElement]]:
    try:
        return batch_siacoin_elements(explorer, addresses)
    except Exception as e:
        raise check("failed to load siacoin elements", e) from e


@router.post("/batch/addresses/siafunds", response_model=list[list[SiafundElement]])
def batch_addresses_siafunds(
    addresses: list[Address] = Body(...),
    explorer: Explorer = Depends(get_explorer),
) -> list[list[SiafundElement]]:
    try:
        return batch_siafund_elements(explorer, addresses)
    except Exception as e:
        raise check("failed to load siafund elements", e) from e


@router.post("/batch/addresses/transactions", response_model=list[list[Transaction]])
def batch_addresses_transactions(
    requests: list[ExplorerTransactionsRequest] = Body(...),
    explorer: Explorer = Depends(get_explorer),
) -> list[list[Transaction]]:
    queries = [TransactionsQuery(r.address, r.amount, r.offset) for r in requests]
    try:
        return batch_transactions(explorer, queries)
    except Exception as e:
        raise check("failed to load transactions", e) from e
