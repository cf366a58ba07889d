import logging
from dataclasses import dataclass

from django.db import DatabaseError

from ledgers.domain.constants import ErrorReason, TxnStatus
from ledgers.domain.exceptions import (
    BalanceConstraintViolated,
    InvalidEntries,
    InvalidTransactionState,
    TransactionNotFound,
)
from ledgers.domain.unit_of_work import unit_of_work
from ledgers.models import Txn
from ledgers.stores.balances import BalanceStore
from ledgers.stores.records import TxnStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionResult:
    txn: Txn
    error_reason: ErrorReason | None = None

    @property
    def succeeded(self):
        return self.txn.status == TxnStatus.SUCCESS

    @property
    def failed(self):
        return self.txn.status == TxnStatus.FAILED

    @classmethod
    def success(cls, txn):
        return cls(txn=txn, error_reason=None)

    @classmethod
    def failure(cls, reason, txn):
        return cls(txn=txn, error_reason=ErrorReason(reason))

    @classmethod
    def from_terminal(cls, txn):
        if txn.status == TxnStatus.FAILED:
            return cls.failure(txn.error_reason, txn)
        return cls.success(txn)


class TransactionExecutor:
    """Applies a recorded PENDING transaction and resolves its terminal status.

    All balance deltas and the SUCCESS transition commit in one unit of work.
    On ACCOUNT_NOT_FOUND or INSUFFICIENT_BALANCE the unit of work is aborted
    and the FAILED transition is written after it, so the failure record
    survives the rollback. Database errors propagate and leave the record
    PENDING.
    """

    def __init__(self, *, balances=None, records=None, using=None):
        self.balances = balances or BalanceStore(using=using)
        self.records = records or TxnStore(using=using)
        self.using = using

    def execute(self, txn):
        txn_id = txn.pk
        logger.info("event=txn_execute_start txn_id=%s", txn_id)

        try:
            with unit_of_work(self.using) as uow:
                locked = self.records.lock(txn_id)
                if locked is None:
                    raise TransactionNotFound(f"txn={txn_id} does not exist")

                if locked.is_terminal:
                    logger.info(
                        "event=txn_execute_skipped txn_id=%s current_status=%s",
                        txn_id,
                        locked.status,
                    )
                    return ExecutionResult.from_terminal(locked)

                entries = locked.ordered_entries()
                if not entries:
                    raise InvalidEntries(f"txn={txn_id} has no entries")

                error_reason = self._apply_entries(txn_id, entries)
                if error_reason is None:
                    updated = self.records.update_status(txn_id, TxnStatus.SUCCESS)
                    uow.on_commit(
                        lambda: logger.info(
                            "event=txn_succeeded txn_id=%s entries=%s",
                            txn_id,
                            len(entries),
                        )
                    )
                    return ExecutionResult.success(updated)

                uow.abort()
        except DatabaseError as exc:
            logger.exception(
                "event=txn_execute_aborted txn_id=%s error=%s",
                txn_id,
                exc.__class__.__name__,
            )
            raise

        try:
            failed = self.records.update_status(
                txn_id, TxnStatus.FAILED, error_reason
            )
        except InvalidTransactionState:
            # Resolved by a concurrent execution after our rollback.
            current = self.records.get(txn_id)
            logger.info(
                "event=txn_execute_skipped txn_id=%s current_status=%s",
                txn_id,
                current.status,
            )
            return ExecutionResult.from_terminal(current)

        logger.warning(
            "event=txn_failed txn_id=%s reason=%s",
            txn_id,
            error_reason,
        )
        return ExecutionResult.failure(error_reason, failed)

    def _apply_entries(self, txn_id, entries):
        for entry in entries:
            try:
                matched = self.balances.conditional_increment(
                    entry.account_num, entry.amount
                )
            except BalanceConstraintViolated:
                logger.info(
                    "event=txn_entry_rejected txn_id=%s position=%s account_num=%s amount=%s",
                    txn_id,
                    entry.position,
                    entry.account_num,
                    entry.amount,
                )
                return ErrorReason.INSUFFICIENT_BALANCE

            if matched < 1:
                logger.info(
                    "event=txn_entry_account_missing txn_id=%s position=%s account_num=%s",
                    txn_id,
                    entry.position,
                    entry.account_num,
                )
                return ErrorReason.ACCOUNT_NOT_FOUND

        return None
