"""
Mapping of facade/backend failures and decode failures to HTTP errors.

Decode errors are 400 and happen before any backend call. Backend errors
keep their message behind a short context ("failed to load transaction: ...").
"""

from __future__ import annotations

from typing import Callable, TypeVar

from fastapi import HTTPException

from explorerd.core.exceptions import (
    AdmissionError,
    BatchQueryError,
    NotFoundError,
    PeerConnectionError,
    TransactionRejectedError,
)
from explorerd.explorer_logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def status_for(exc: Exception) -> int:
    cause = getattr(exc, "cause", None) or exc
    if isinstance(cause, NotFoundError):
        return 404
    if isinstance(cause, (TransactionRejectedError, PeerConnectionError, ValueError)):
        return 400
    return 500


def check(context: str, exc: Exception) -> HTTPException:
    """Build the HTTPException reported for exc; the caller raises it."""
    if isinstance(exc, (BatchQueryError, AdmissionError)):
        detail = str(exc)
    else:
        detail = f"{context}: {exc}"
    status = status_for(exc)
    if status >= 500:
        logger.error("api_backend_error", context=context, error=str(exc), exc_info=exc)
    else:
        logger.info("api_request_failed", context=context, status=status, error=str(exc))
    return HTTPException(status_code=status, detail=detail)


def decode_param(parse: Callable[[str], T], value: str, name: str) -> T:
    """Validate a path parameter; 400 when malformed."""
    try:
        return parse(value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"failed to decode param {name!r}: {e}") from e
