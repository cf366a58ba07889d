import logging

from django.db import IntegrityError, transaction

from ledgers.domain import entries as entry_builders
from ledgers.domain.constants import MAX_BALANCE
from ledgers.domain.exceptions import AccountNotFound, DuplicateAccount, InvalidAmount
from ledgers.domain.executor import TransactionExecutor
from ledgers.domain.policies import validate_account_num
from ledgers.models import Account

logger = logging.getLogger(__name__)


class AccountService:
    @staticmethod
    def open_account(account_num, balance=0):
        validated_account_num = validate_account_num(account_num)
        if isinstance(balance, bool) or not isinstance(balance, int) or balance < 0:
            raise InvalidAmount("opening balance must be a non-negative integer")
        if balance > MAX_BALANCE:
            raise InvalidAmount(f"opening balance must be at most {MAX_BALANCE}")

        try:
            with transaction.atomic():
                account = Account.objects.create(
                    account_num=validated_account_num,
                    balance=balance,
                )
        except IntegrityError as exc:
            raise DuplicateAccount(
                f"account={validated_account_num} already exists"
            ) from exc

        logger.info(
            "event=account_opened account_num=%s balance=%s",
            account.account_num,
            account.balance,
        )
        return account

    @staticmethod
    def get_account(account_num):
        try:
            return Account.objects.get(account_num=account_num)
        except Account.DoesNotExist as exc:
            raise AccountNotFound(f"account={account_num} does not exist") from exc


class LedgerService:
    """Builds, records and executes transactions for the request layer."""

    @staticmethod
    def post_entries(entries, *, executor=None):
        entries = list(entries)
        txn_executor = executor or TransactionExecutor()
        txn = txn_executor.records.save(entries)
        logger.info(
            "event=txn_recorded txn_id=%s entries=%s credits=%s debits=%s",
            txn.id,
            len(entries),
            sum(1 for entry in entries if entry.is_credit),
            sum(1 for entry in entries if entry.is_debit),
        )
        return txn_executor.execute(txn)

    @staticmethod
    def debit(account_num, amount, *, executor=None):
        return LedgerService.post_entries(
            entry_builders.debit(account_num, amount),
            executor=executor,
        )

    @staticmethod
    def credit(account_num, amount, *, executor=None):
        return LedgerService.post_entries(
            entry_builders.credit(account_num, amount),
            executor=executor,
        )

    @staticmethod
    def transfer(source, target, amount, *, executor=None):
        return LedgerService.post_entries(
            entry_builders.transfer(source, target, amount),
            executor=executor,
        )
