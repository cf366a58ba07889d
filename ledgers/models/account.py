from django.db import models
from django.db.models import Q

from ledgers.domain.constants import ACCOUNT_NUM_MAX_LENGTH, MAX_BALANCE


class Account(models.Model):
    account_num = models.CharField(max_length=ACCOUNT_NUM_MAX_LENGTH, unique=True)
    # Minor currency units.
    balance = models.BigIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.CheckConstraint(
                condition=Q(balance__gte=0),
                name="account_balance_non_negative",
            ),
            models.CheckConstraint(
                condition=Q(balance__lte=MAX_BALANCE),
                name="account_balance_within_max",
            ),
            models.CheckConstraint(
                condition=~Q(account_num=""),
                name="account_num_not_empty",
            ),
        ]

    def __str__(self):
        return f"Account<{self.account_num}>"
