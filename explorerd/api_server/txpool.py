"""
FastAPI router: transaction pool.

GET /txpool/transactions lists the pool; POST /txpool/broadcast admits a
transaction after its dependencies and relays it to peers.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from explorerd.api_server.dependencies import get_syncer, get_txpool
from explorerd.api_server.errors import check
from explorerd.api_server.schemas import TxpoolBroadcastRequest
from explorerd.capabilities.interfaces import Syncer, TransactionPool
from explorerd.facade.admission import admit_transaction
from explorerd.types import Transaction

router = APIRouter(prefix="/txpool", tags=["txpool"])


@router.get("/transactions", response_model=list[Transaction])
def txpool_transactions(pool: TransactionPool = Depends(get_txpool)) -> list[Transaction]:
    try:
        return pool.transactions()
    except Exception as e:
        raise check("failed to list pool transactions", e) from e


@router.post("/broadcast", status_code=204)
def txpool_broadcast(
    body: TxpoolBroadcastRequest,
    pool: TransactionPool = Depends(get_txpool),
    syncer: Syncer = Depends(get_syncer),
) -> None:
    """
    Add body.dependsOn (in order) and then body.transaction to the pool,
    then broadcast. A rejected transaction fails the request; anything
    admitted before it stays in the pool.
    """
    try:
        admit_transaction(pool, syncer, body.transaction, body.depends_on)
    except Exception as e:
        raise check("couldn't broadcast transaction", e) from e
