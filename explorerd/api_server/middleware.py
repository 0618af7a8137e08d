"""
HTTP middleware: Basic authentication gate and request logging.

The auth gate runs before routing, so a request without the right password
never reaches body decoding or a backend. Only the password is checked; the
username is ignored. Header parsing is FastAPI's HTTPBasic scheme, called
from the middleware rather than as a route dependency.
"""

from __future__ import annotations

import secrets
import time

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from fastapi.security import HTTPBasic
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from explorerd.explorer_logging import get_logger

logger = get_logger(__name__)

AUTH_REALM = "explorerd"

_basic = HTTPBasic(realm=AUTH_REALM, auto_error=False)


async def basic_auth_password(request: Request) -> str | None:
    """Return the password from the request's Basic credentials, or None if absent/malformed."""
    try:
        credentials = await _basic(request)
    except HTTPException:
        return None
    if credentials is None:
        return None
    return credentials.password


class BasicAuthMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, password: str):
        super().__init__(app)
        self._password = password.encode("utf-8")

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        password = await basic_auth_password(request)
        if password is None or not secrets.compare_digest(password.encode("utf-8"), self._password):
            logger.warning(
                "api_auth_rejected",
                method=request.method,
                path=request.url.path,
                reason="missing" if password is None else "mismatch",
            )
            return JSONResponse(
                status_code=401,
                content={"detail": "Unauthorized"},
                headers={"WWW-Authenticate": f'Basic realm="{AUTH_REALM}"'},
            )
        return await call_next(request)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "api_request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return response
