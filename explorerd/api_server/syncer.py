"""
FastAPI router: peer synchronization.
"""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends

from explorerd.api_server.dependencies import get_syncer
from explorerd.api_server.errors import check
from explorerd.api_server.schemas import SyncerPeerResponse
from explorerd.capabilities.interfaces import Syncer

router = APIRouter(prefix="/syncer", tags=["syncer"])


@router.get("/peers", response_model=list[SyncerPeerResponse])
def syncer_peers(syncer: Syncer = Depends(get_syncer)) -> list[SyncerPeerResponse]:
    return [SyncerPeerResponse(net_address=peer) for peer in syncer.peers()]


@router.get("/address", response_model=str)
def syncer_address(syncer: Syncer = Depends(get_syncer)) -> str:
    return syncer.addr()


@router.post("/connect", status_code=204)
def syncer_connect(addr: str = Body(..., min_length=1), syncer: Syncer = Depends(get_syncer)) -> None:
    """Body is a JSON string: the peer's host:port."""
    try:
        syncer.connect(addr.strip())
    except Exception as e:
        raise check("failed to connect to peer", e) from e
