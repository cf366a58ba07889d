from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from ledgers.tasks.sweep_pending import sweep_pending_transactions


class Command(BaseCommand):
    help = "Report transactions stuck in PENDING, optionally re-executing them."

    def add_arguments(self, parser):
        parser.add_argument(
            "--limit",
            type=int,
            default=100,
            help="Max stale PENDING transactions to inspect per run",
        )
        parser.add_argument(
            "--execute",
            action="store_true",
            help="Re-run the executor on each stale PENDING transaction",
        )

    def handle(self, *args, **options):
        limit = options["limit"]
        if limit <= 0:
            raise CommandError("--limit must be greater than zero")

        summary = sweep_pending_transactions(
            limit=limit,
            now=timezone.now(),
            execute=options["execute"],
        )
        self.stdout.write(
            self.style.SUCCESS(
                (
                    "pending sweep completed: "
                    f"found={summary['found']} executed={summary['executed']} "
                    f"succeeded={summary['succeeded']} failed={summary['failed']} "
                    f"errors={summary['errors']}"
                )
            )
        )
