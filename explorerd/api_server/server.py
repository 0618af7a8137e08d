"""
FastAPI server: the explorerd API over four node capabilities.

create_app() wires Syncer, TransactionPool, ChainManager and Explorer onto
app.state, installs the Basic-auth gate and request logging, and mounts the
txpool, syncer and explorer routers. The app itself keeps no mutable state.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from explorerd import __version__
from explorerd.api_server.explorer import router as explorer_router
from explorerd.api_server.middleware import BasicAuthMiddleware, RequestLoggingMiddleware
from explorerd.api_server.syncer import router as syncer_router
from explorerd.api_server.txpool import router as txpool_router
from explorerd.capabilities.interfaces import (
    ChainManager,
    Explorer,
    Syncer,
    TransactionPool,
)
from explorerd.explorer_logging import get_logger

logger = get_logger(__name__)


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts) or "invalid request"


def http_exception_handler(request: Any, exc: HTTPException) -> JSONResponse:
    """Consistent JSON error response for HTTPException."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def validation_exception_handler(request: Any, exc: RequestValidationError) -> JSONResponse:
    """Malformed body or query: client error, reported before any backend call."""
    detail = _format_validation_errors(exc)
    logger.info("api_decode_failed", path=str(getattr(request, "url", "")), detail=detail)
    return JSONResponse(status_code=400, content={"detail": f"failed to decode request: {detail}"})


def create_app(
    chain_manager: ChainManager,
    syncer: Syncer,
    txpool: TransactionPool,
    explorer: Explorer,
    password: str,
) -> FastAPI:
    """Build the API application. Every request must carry password via HTTP Basic auth."""
    app = FastAPI(
        title="explorerd API",
        description="Explorer, transaction pool and syncer API of an explorer node.",
        version=__version__,
    )
    app.state.chain_manager = chain_manager
    app.state.syncer = syncer
    app.state.txpool = txpool
    app.state.explorer = explorer

    app.include_router(txpool_router)
    app.include_router(syncer_router)
    app.include_router(explorer_router)

    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Last added runs first: requests are logged, then authenticated.
    app.add_middleware(BasicAuthMiddleware, password=password)
    app.add_middleware(RequestLoggingMiddleware)
    return app
