from io import StringIO

from django.core.management import call_command
from django.test import TestCase

from ledgers.models import Account


class SeedDemoAccountsCommandTests(TestCase):
    def test_seed_is_repeatable(self):
        stdout = StringIO()

        call_command("seed_demo_accounts", stdout=stdout)
        call_command("seed_demo_accounts", stdout=stdout)

        self.assertEqual(Account.objects.count(), 3)
        self.assertEqual(Account.objects.get(account_num="A1").balance, 10_000)
        self.assertIn("created=0 updated=3", stdout.getvalue())
