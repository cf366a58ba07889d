import logging
from datetime import timedelta

from django.conf import settings
from django.db import DatabaseError
from django.utils import timezone

from ledgers.domain.executor import TransactionExecutor

logger = logging.getLogger(__name__)


def sweep_pending_transactions(limit=100, now=None, *, execute=False, executor=None):
    """Surface transactions left PENDING past the staleness window.

    A PENDING record means the unit of work never committed, so no delta of
    it is applied. Re-execution is only done when ``execute`` is set.
    """
    now = now or timezone.now()
    summary = {
        "found": 0,
        "executed": 0,
        "succeeded": 0,
        "failed": 0,
        "errors": 0,
    }
    if limit <= 0:
        return summary

    txn_executor = executor or TransactionExecutor()
    stale_after_seconds = settings.LEDGER_PENDING_STALE_SECONDS
    stale_before = now - timedelta(seconds=stale_after_seconds)

    stale = txn_executor.records.list_stale_pending(stale_before, limit)
    summary["found"] = len(stale)

    for txn in stale:
        logger.warning(
            "event=txn_pending_stale worker_role=sweeper txn_id=%s created_at=%s stale_after_seconds=%s",
            txn.id,
            txn.created_at.isoformat(),
            stale_after_seconds,
        )
        if not execute:
            continue

        try:
            result = txn_executor.execute(txn)
        except DatabaseError as exc:
            summary["errors"] += 1
            logger.warning(
                "event=txn_sweep_execute_error worker_role=sweeper txn_id=%s error=%s",
                txn.id,
                exc.__class__.__name__,
            )
            continue

        summary["executed"] += 1
        if result.succeeded:
            summary["succeeded"] += 1
        else:
            summary["failed"] += 1

    logger.info(
        "event=sweeper_end worker_role=sweeper found=%s executed=%s succeeded=%s failed=%s errors=%s",
        summary["found"],
        summary["executed"],
        summary["succeeded"],
        summary["failed"],
        summary["errors"],
    )
    return summary
