"""
Composite operations of the API: element search, batch queries, and
dependency-ordered transaction admission. Everything else in the API is a
direct pass-through to a capability.
"""

from explorerd.facade.admission import admit_transaction
from explorerd.facade.batch import (
    TransactionsQuery,
    batch_balances,
    batch_siacoin_elements,
    batch_siafund_elements,
    batch_transactions,
)
from explorerd.facade.resolver import ElementKind, SearchResult, resolve_element

__all__ = [
    "admit_transaction",
    "TransactionsQuery",
    "batch_balances",
    "batch_siacoin_elements",
    "batch_siafund_elements",
    "batch_transactions",
    "ElementKind",
    "SearchResult",
    "resolve_element",
]
