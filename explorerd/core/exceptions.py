"""
Application-level exceptions.

Capability backends raise NotFoundError / TransactionRejectedError /
PeerConnectionError; the facade wraps backend failures with the stage that
failed (BatchQueryError, AdmissionError). The API layer maps them to HTTP
status codes in api_server/errors.py.
"""

from __future__ import annotations


class ExplorerError(Exception):
    """Base class for explorerd errors."""


class ConfigError(ExplorerError):
    """Missing or invalid configuration."""


class NotFoundError(ExplorerError):
    """A lookup legitimately has no result."""


class TransactionRejectedError(ExplorerError):
    """The transaction pool refused a transaction."""


class PeerConnectionError(ExplorerError):
    """The syncer could not connect to a peer."""


class BatchQueryError(ExplorerError):
    """
    A backend call inside a batch failed; the whole batch is aborted.

    position is the index of the batch item being processed when the call
    failed.
    """

    def __init__(self, context: str, position: int, cause: Exception):
        super().__init__(f"{context}: {cause}")
        self.context = context
        self.position = position
        self.cause = cause


class AdmissionError(ExplorerError):
    """The pool rejected a dependency or the primary transaction."""

    def __init__(self, context: str, txid: str, cause: Exception):
        super().__init__(f"{context}: {cause}")
        self.context = context
        self.txid = txid
        self.cause = cause
