import uuid
from unittest.mock import patch

from django.db import OperationalError
from rest_framework.test import APITestCase

from ledgers.domain.services import LedgerService
from ledgers.models import Account, Txn


class AccountApiTests(APITestCase):
    def test_create_account(self):
        response = self.client.post(
            "/api/accounts/",
            {"account_num": "A1", "balance": "100.50"},
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["status"], 201)
        self.assertEqual(response.data["data"]["account"]["account_num"], "A1")
        self.assertEqual(response.data["data"]["account"]["balance"], 10_050)
        self.assertEqual(response.data["data"]["account"]["balance_display"], "100.50")
        self.assertEqual(Account.objects.get(account_num="A1").balance, 10_050)

    def test_create_account_defaults_to_zero_balance(self):
        response = self.client.post(
            "/api/accounts/", {"account_num": "A1"}, format="json"
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(Account.objects.get(account_num="A1").balance, 0)

    def test_create_duplicate_account_reports_duplicate(self):
        Account.objects.create(account_num="A1", balance=0)

        response = self.client.post(
            "/api/accounts/", {"account_num": "A1"}, format="json"
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["detail"], "DUPLICATE_ACCOUNT")

    def test_create_account_rejects_blank_number(self):
        response = self.client.post(
            "/api/accounts/", {"account_num": "   "}, format="json"
        )

        self.assertEqual(response.status_code, 400)
        self.assertFalse(Account.objects.exists())

    def test_get_account(self):
        Account.objects.create(account_num="A1", balance=7_000)

        response = self.client.get("/api/accounts/A1/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["data"]["account"]["balance"], 7_000)
        self.assertEqual(response.data["data"]["account"]["balance_display"], "70.00")

    def test_get_missing_account_uses_consistent_envelope(self):
        response = self.client.get("/api/accounts/missing/")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["status"], 404)
        self.assertEqual(response.data["detail"], "ACCOUNT_NOT_FOUND")
        self.assertIn("message", response.data)
        self.assertIn("data", response.data)


class LedgerApiTests(APITestCase):
    def setUp(self):
        Account.objects.create(account_num="A1", balance=10_000)
        Account.objects.create(account_num="A2", balance=5_000)

    def _balance(self, account_num):
        return Account.objects.get(account_num=account_num).balance

    def test_transfer_endpoint_success(self):
        response = self.client.post(
            "/api/accounts/A1/transfer/",
            {"to": "A2", "amount": 30},
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        txn = response.data["data"]["transaction"]
        self.assertEqual(txn["status"], "SUCCESS")
        self.assertIsNone(txn["error_reason"])
        self.assertEqual(
            [(e["account_num"], e["amount"]) for e in txn["entries"]],
            [("A1", -3_000), ("A2", 3_000)],
        )
        self.assertEqual(self._balance("A1"), 7_000)
        self.assertEqual(self._balance("A2"), 8_000)

    def test_transfer_to_missing_account_returns_failed_txn(self):
        response = self.client.post(
            "/api/accounts/A1/transfer/",
            {"to": "A9", "amount": "30"},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["detail"], "ACCOUNT_NOT_FOUND")
        txn = response.data["data"]["transaction"]
        self.assertEqual(txn["status"], "FAILED")
        self.assertEqual(txn["error_reason"], "ACCOUNT_NOT_FOUND")
        self.assertEqual(self._balance("A1"), 10_000)

    def test_debit_beyond_balance_returns_unprocessable(self):
        response = self.client.post(
            "/api/accounts/A2/debit/",
            {"amount": "50.01"},
            format="json",
        )

        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.data["detail"], "INSUFFICIENT_BALANCE")
        self.assertEqual(self._balance("A2"), 5_000)

    def test_debit_endpoint_decreases_balance(self):
        response = self.client.post(
            "/api/accounts/A1/debit/", {"amount": 12.34}, format="json"
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(self._balance("A1"), 8_766)

    def test_credit_endpoint_increases_balance(self):
        response = self.client.post(
            "/api/accounts/A2/credit/", {"amount": "0.50"}, format="json"
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(self._balance("A2"), 5_050)

    def test_credit_to_missing_account_fails(self):
        response = self.client.post(
            "/api/accounts/A9/credit/", {"amount": "1"}, format="json"
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.data["data"]["transaction"]["error_reason"], "ACCOUNT_NOT_FOUND"
        )

    def test_rejects_non_positive_and_malformed_amounts(self):
        for amount in (0, "-5", "1.001", "abc", True):
            with self.subTest(amount=amount):
                response = self.client.post(
                    "/api/accounts/A1/debit/", {"amount": amount}, format="json"
                )
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.data["status"], 400)

        self.assertEqual(Txn.objects.count(), 0)
        self.assertEqual(self._balance("A1"), 10_000)

    def test_rejects_amount_above_max_balance(self):
        for amount in ("1e30", 1e30, "10000000000000.01"):
            with self.subTest(amount=amount):
                response = self.client.post(
                    "/api/accounts/A1/credit/", {"amount": amount}, format="json"
                )
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.data["status"], 400)
                self.assertIn("amount", response.data["detail"])

        self.assertEqual(Txn.objects.count(), 0)
        self.assertEqual(self._balance("A1"), 10_000)

    def test_create_account_rejects_balance_above_max(self):
        response = self.client.post(
            "/api/accounts/",
            {"account_num": "BIG", "balance": "1e30"},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertFalse(Account.objects.filter(account_num="BIG").exists())

    def test_transfer_requires_target(self):
        response = self.client.post(
            "/api/accounts/A1/transfer/", {"amount": "1"}, format="json"
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("to", response.data["detail"])

    def test_transaction_detail(self):
        result = LedgerService.transfer("A1", "A2", 100)

        response = self.client.get(f"/api/transactions/{result.txn.pk}/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["data"]["transaction"]["id"], str(result.txn.pk))
        self.assertEqual(response.data["data"]["transaction"]["status"], "SUCCESS")

    def test_transaction_detail_not_found(self):
        response = self.client.get(f"/api/transactions/{uuid.uuid4()}/")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["status"], 404)

    def test_infrastructure_failure_maps_to_server_error(self):
        with patch(
            "ledgers.stores.balances.BalanceStore.conditional_increment",
            side_effect=OperationalError("connection lost"),
        ):
            response = self.client.post(
                "/api/accounts/A1/debit/", {"amount": "1"}, format="json"
            )

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data["status"], 500)
        self.assertEqual(Txn.objects.get().status, "PENDING")
        self.assertEqual(self._balance("A1"), 10_000)

    def test_parse_error_uses_consistent_envelope(self):
        response = self.client.post(
            "/api/accounts/A1/debit/",
            data='{"amount":',
            content_type="application/json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["status"], 400)
        self.assertIn("detail", response.data)
        self.assertIn("message", response.data)
        self.assertIn("data", response.data)

    def test_method_not_allowed_uses_consistent_envelope(self):
        response = self.client.get("/api/accounts/A1/debit/")

        self.assertEqual(response.status_code, 405)
        self.assertEqual(response.data["status"], 405)
        self.assertIn("detail", response.data)
