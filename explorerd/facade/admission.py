"""
Dependency-ordered transaction admission and broadcast.

Dependencies are added to the pool one by one in the order given, then the
transaction itself; broadcast happens only once everything was admitted.
A rejection stops the sequence. Transactions admitted before the rejection
stay in the pool: there is no rollback.
"""

from __future__ import annotations

from typing import Sequence

from explorerd.capabilities.interfaces import Syncer, TransactionPool
from explorerd.core.exceptions import AdmissionError
from explorerd.explorer_logging import get_logger
from explorerd.types import Transaction

logger = get_logger(__name__)


def admit_transaction(
    pool: TransactionPool,
    syncer: Syncer,
    txn: Transaction,
    depends_on: Sequence[Transaction],
) -> None:
    """
    Add depends_on then txn to the pool and broadcast (txn, depends_on).

    Raises AdmissionError for the first rejected transaction; in that case
    nothing is broadcast.
    """
    txid = txn.id
    for position, dep in enumerate(depends_on):
        try:
            pool.add_transaction(dep)
        except Exception as e:
            logger.warning(
                "admission_dependency_rejected",
                txid=txid,
                dependency=dep.id,
                position=position,
                admitted=position,
                error=str(e),
            )
            raise AdmissionError("couldn't add transaction dependency", dep.id, e) from e

    try:
        pool.add_transaction(txn)
    except Exception as e:
        logger.warning("admission_transaction_rejected", txid=txid, admitted=len(depends_on), error=str(e))
        raise AdmissionError("couldn't add transaction", txid, e) from e

    syncer.broadcast_transaction(txn, list(depends_on))
    logger.info("txpool_broadcast", txid=txid, dependencies=len(depends_on))
