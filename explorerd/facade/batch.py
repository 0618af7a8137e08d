"""
Batch queries over lists of addresses.

Each batch returns exactly one result per input item, in input order. Two
shapes:

- flat fan-out (balances): two scalar lookups per address;
- two-level fan-out (unspent elements, transactions): list the IDs for the
  address, then fetch each ID.

The first failing backend call aborts the whole batch with BatchQueryError;
results already computed for earlier items are discarded. Items are processed
sequentially.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence, TypeVar

from explorerd.capabilities.interfaces import Explorer
from explorerd.core.exceptions import BatchQueryError
from explorerd.explorer_logging import get_logger
from explorerd.types import BalanceView, SiacoinElement, SiafundElement, Transaction

logger = get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class TransactionsQuery:
    """One item of a batch transactions request."""

    address: str
    amount: int
    offset: int = 0


def _call(context: str, position: int, fn: Callable[..., R], *args: object) -> R:
    try:
        return fn(*args)
    except Exception as e:
        logger.warning("batch_query_failed", context=context, position=position, error=str(e))
        raise BatchQueryError(context, position, e) from e


def _two_level(
    items: Sequence[T],
    list_ids: Callable[[T], list[str]],
    fetch: Callable[[str], R],
    list_context: str,
    fetch_context: str,
) -> list[list[R]]:
    results: list[list[R]] = []
    for position, item in enumerate(items):
        ids = _call(list_context, position, list_ids, item)
        results.append([_call(fetch_context, position, fetch, id) for id in ids])
    return results


def batch_balances(explorer: Explorer, addresses: Sequence[str]) -> list[BalanceView]:
    balances: list[BalanceView] = []
    for position, address in enumerate(addresses):
        siacoins = _call("failed to get siacoin balance", position, explorer.siacoin_balance, address)
        siafunds = _call("failed to get siafund balance", position, explorer.siafund_balance, address)
        balances.append(BalanceView(siacoins=siacoins, siafunds=siafunds))
    return balances


def batch_siacoin_elements(explorer: Explorer, addresses: Sequence[str]) -> list[list[SiacoinElement]]:
    return _two_level(
        addresses,
        explorer.unspent_siacoin_elements,
        explorer.siacoin_element,
        "failed to load unspent siacoin elements",
        "failed to load siacoin element",
    )


def batch_siafund_elements(explorer: Explorer, addresses: Sequence[str]) -> list[list[SiafundElement]]:
    return _two_level(
        addresses,
        explorer.unspent_siafund_elements,
        explorer.siafund_element,
        "failed to load unspent siafund elements",
        "failed to load siafund element",
    )


def batch_transactions(explorer: Explorer, queries: Sequence[TransactionsQuery]) -> list[list[Transaction]]:
    return _two_level(
        queries,
        lambda q: explorer.transactions(q.address, q.amount, q.offset),
        explorer.transaction,
        "failed to load transactions",
        "failed to load transaction",
    )
