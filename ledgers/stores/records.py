import uuid

from django.db import DEFAULT_DB_ALIAS, IntegrityError, transaction
from django.utils import timezone

from ledgers.domain.constants import TERMINAL_STATUSES, TxnStatus
from ledgers.domain.entries import validate_entries
from ledgers.domain.exceptions import DuplicateTransaction, InvalidTransactionState
from ledgers.models import Txn, TxnEntry


def _validate_transition(status, error_reason):
    if status not in TERMINAL_STATUSES:
        raise InvalidTransactionState(
            f"status must be one of {sorted(TERMINAL_STATUSES)}, got={status}"
        )
    if status == TxnStatus.FAILED and error_reason is None:
        raise InvalidTransactionState("FAILED status requires an error reason")
    if status == TxnStatus.SUCCESS and error_reason is not None:
        raise InvalidTransactionState("SUCCESS status cannot carry an error reason")


class TxnStore:
    """Durable transaction records and their lifecycle status."""

    def __init__(self, *, using=None):
        self.using = using or DEFAULT_DB_ALIAS

    def _txns(self):
        return Txn.objects.using(self.using)

    def save(self, entries, txn_id=None):
        validated_entries = validate_entries(entries)
        txn_id = txn_id or uuid.uuid4()

        with transaction.atomic(using=self.using):
            try:
                with transaction.atomic(using=self.using):
                    txn = Txn(id=txn_id, status=Txn.Status.PENDING)
                    txn.save(force_insert=True, using=self.using)
            except IntegrityError as exc:
                raise DuplicateTransaction(f"txn={txn_id} already exists") from exc

            TxnEntry.objects.using(self.using).bulk_create(
                [
                    TxnEntry(
                        txn=txn,
                        position=position,
                        account_num=entry.account_num,
                        amount=entry.amount,
                    )
                    for position, entry in enumerate(validated_entries)
                ]
            )

        return txn

    def update_status(self, txn_id, status, error_reason=None):
        _validate_transition(status, error_reason)

        updated = (
            self._txns()
            .filter(pk=txn_id, status=Txn.Status.PENDING)
            .update(
                status=status,
                error_reason=error_reason,
                updated_at=timezone.now(),
            )
        )
        if updated == 0:
            current = self._txns().filter(pk=txn_id).first()
            if current is None:
                return None
            raise InvalidTransactionState(
                f"txn={txn_id} is already {current.status}, cannot move to {status}"
            )

        return self._txns().get(pk=txn_id)

    def get(self, txn_id):
        return self._txns().filter(pk=txn_id).first()

    def lock(self, txn_id):
        return self._txns().select_for_update().filter(pk=txn_id).first()

    def list_stale_pending(self, older_than, limit):
        return list(
            self._txns()
            .filter(status=Txn.Status.PENDING, created_at__lte=older_than)
            .order_by("created_at", "id")[:limit]
        )
