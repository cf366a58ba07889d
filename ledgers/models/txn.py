import uuid

from django.db import models
from django.db.models import Q

from ledgers.domain.constants import ACCOUNT_NUM_MAX_LENGTH, ErrorReason, TxnStatus


class Txn(models.Model):
    Status = TxnStatus
    ErrorReason = ErrorReason

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.PENDING,
    )
    error_reason = models.CharField(
        max_length=32,
        choices=ErrorReason.choices,
        null=True,
        blank=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=["status", "created_at"], name="txn_status_created_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(status="FAILED", error_reason__isnull=False)
                    | (~Q(status="FAILED") & Q(error_reason__isnull=True))
                ),
                name="txn_error_reason_only_when_failed",
            ),
        ]

    def __str__(self):
        return f"Txn<{self.pk}:{self.status}>"

    @property
    def is_terminal(self):
        return self.status != self.Status.PENDING

    def ordered_entries(self):
        return list(self.entries.order_by("position"))


class TxnEntry(models.Model):
    txn = models.ForeignKey(
        "ledgers.Txn",
        on_delete=models.PROTECT,
        related_name="entries",
    )
    position = models.PositiveIntegerField()
    # Not a foreign key: entries may name accounts that do not exist.
    account_num = models.CharField(max_length=ACCOUNT_NUM_MAX_LENGTH)
    amount = models.BigIntegerField()

    class Meta:
        ordering = ["txn", "position"]
        constraints = [
            models.UniqueConstraint(
                fields=["txn", "position"],
                name="txn_entry_unique_position",
            ),
            models.CheckConstraint(
                condition=~Q(amount=0),
                name="txn_entry_amount_non_zero",
            ),
            models.CheckConstraint(
                condition=~Q(account_num=""),
                name="txn_entry_account_num_not_empty",
            ),
        ]

    def __str__(self):
        return f"TxnEntry<{self.txn_id}:{self.position}:{self.account_num}:{self.amount}>"
