from unittest.mock import Mock

from django.test import TestCase

from ledgers.domain.constants import MAX_BALANCE, ErrorReason, TxnStatus
from ledgers.domain.entries import Entry
from ledgers.domain.exceptions import (
    AccountNotFound,
    DuplicateAccount,
    InvalidAccountNumber,
    InvalidAmount,
)
from ledgers.domain.executor import ExecutionResult
from ledgers.domain.services import AccountService, LedgerService
from ledgers.models import Account, Txn
from ledgers.stores.records import TxnStore


class AccountServiceTests(TestCase):
    def test_open_account_creates_account(self):
        account = AccountService.open_account("A1", balance=100)

        self.assertEqual(account.account_num, "A1")
        self.assertEqual(account.balance, 100)

    def test_open_account_rejects_duplicate_number(self):
        AccountService.open_account("A1")

        with self.assertRaises(DuplicateAccount):
            AccountService.open_account("A1", balance=5)

        self.assertEqual(Account.objects.get(account_num="A1").balance, 0)

    def test_open_account_rejects_invalid_input(self):
        with self.assertRaises(InvalidAccountNumber):
            AccountService.open_account("")
        with self.assertRaises(InvalidAmount):
            AccountService.open_account("A1", balance=-1)
        with self.assertRaises(InvalidAmount):
            AccountService.open_account("A1", balance=MAX_BALANCE + 1)

        self.assertFalse(Account.objects.exists())

    def test_get_account_raises_when_missing(self):
        with self.assertRaises(AccountNotFound):
            AccountService.get_account("missing")


class LedgerServiceTests(TestCase):
    def setUp(self):
        Account.objects.create(account_num="A1", balance=100)
        Account.objects.create(account_num="A2", balance=50)

    def test_transfer_records_and_executes(self):
        result = LedgerService.transfer("A1", "A2", 30)

        self.assertTrue(result.succeeded)
        self.assertEqual(Account.objects.get(account_num="A1").balance, 70)
        self.assertEqual(Account.objects.get(account_num="A2").balance, 80)
        self.assertEqual(Txn.objects.get().status, TxnStatus.SUCCESS)

    def test_recorded_txn_log_counts_credits_and_debits(self):
        with self.assertLogs("ledgers.domain.services", level="INFO") as logs:
            LedgerService.post_entries(
                [Entry("A1", -10), Entry("A2", 4), Entry("A2", 6)]
            )

        recorded = [line for line in logs.output if "event=txn_recorded" in line]
        self.assertEqual(len(recorded), 1)
        self.assertIn("entries=3 credits=2 debits=1", recorded[0])

    def test_debit_decreases_balance(self):
        result = LedgerService.debit("A1", 20)

        self.assertTrue(result.succeeded)
        self.assertEqual(Account.objects.get(account_num="A1").balance, 80)
        self.assertEqual(
            [entry.amount for entry in result.txn.ordered_entries()],
            [-20],
        )

    def test_credit_increases_balance(self):
        result = LedgerService.credit("A2", 20)

        self.assertTrue(result.succeeded)
        self.assertEqual(Account.objects.get(account_num="A2").balance, 70)

    def test_debit_beyond_balance_is_recorded_as_failure(self):
        result = LedgerService.debit("A2", 51)

        self.assertEqual(result.error_reason, ErrorReason.INSUFFICIENT_BALANCE)
        self.assertEqual(Account.objects.get(account_num="A2").balance, 50)
        self.assertEqual(Txn.objects.get().status, TxnStatus.FAILED)

    def test_invalid_amount_fails_before_recording(self):
        with self.assertRaises(InvalidAmount):
            LedgerService.transfer("A1", "A2", 0)

        self.assertEqual(Txn.objects.count(), 0)

    def test_post_entries_uses_given_executor(self):
        executor = Mock()
        executor.records = TxnStore()
        executor.execute.side_effect = lambda txn: ExecutionResult.success(txn)

        result = LedgerService.post_entries(
            [Entry("A1", -5), Entry("A2", 5)],
            executor=executor,
        )

        executor.execute.assert_called_once()
        self.assertEqual(result.txn.pk, Txn.objects.get().pk)
