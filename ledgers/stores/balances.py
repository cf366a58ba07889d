from django.db import DEFAULT_DB_ALIAS, IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from ledgers.domain.exceptions import BalanceConstraintViolated
from ledgers.models import Account


class BalanceStore:
    """Account balances, mutated only through ``conditional_increment``."""

    def __init__(self, *, using=None):
        self.using = using or DEFAULT_DB_ALIAS

    def _accounts(self):
        return Account.objects.using(self.using)

    def conditional_increment(self, account_num, delta):
        """Add ``delta`` to the account's balance in a single UPDATE.

        Returns the number of matched accounts (0 or 1). Raises
        ``BalanceConstraintViolated`` when the database rejects the new balance;
        the savepoint keeps an enclosing transaction usable in that case.
        """
        try:
            with transaction.atomic(using=self.using):
                return (
                    self._accounts()
                    .filter(account_num=account_num)
                    .update(balance=F("balance") + delta, updated_at=timezone.now())
                )
        except IntegrityError as exc:
            raise BalanceConstraintViolated(account_num, delta) from exc

    def get_balance(self, account_num):
        return (
            self._accounts()
            .filter(account_num=account_num)
            .values_list("balance", flat=True)
            .first()
        )
