from django.core.management.base import BaseCommand
from django.db import transaction

from ledgers.models import Account

DEMO_ACCOUNTS = (
    ("A1", 10_000),
    ("A2", 5_000),
    ("A3", 0),
)


class Command(BaseCommand):
    help = "Seed demo accounts for local testing."

    def handle(self, *args, **options):
        created = 0
        updated = 0

        with transaction.atomic():
            for account_num, balance in DEMO_ACCOUNTS:
                _, was_created = Account.objects.update_or_create(
                    account_num=account_num,
                    defaults={"balance": balance},
                )
                if was_created:
                    created += 1
                else:
                    updated += 1

        self.stdout.write(self.style.SUCCESS("Demo seed completed."))
        self.stdout.write(f"Accounts created={created} updated={updated}")
        self.stdout.write(
            "Account numbers: "
            + ", ".join(account_num for account_num, _ in DEMO_ACCOUNTS)
        )
