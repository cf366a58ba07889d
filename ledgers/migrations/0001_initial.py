import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Account",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("account_num", models.CharField(max_length=64, unique=True)),
                ("balance", models.BigIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("balance__gte", 0)),
                        name="account_balance_non_negative",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("account_num", ""), _negated=True),
                        name="account_num_not_empty",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Txn",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDING", "Pending"),
                            ("SUCCESS", "Success"),
                            ("FAILED", "Failed"),
                        ],
                        default="PENDING",
                        max_length=16,
                    ),
                ),
                (
                    "error_reason",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("ACCOUNT_NOT_FOUND", "Account not found"),
                            ("INSUFFICIENT_BALANCE", "Insufficient balance"),
                            ("DUPLICATE_ACCOUNT", "Duplicate account"),
                        ],
                        max_length=32,
                        null=True,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "indexes": [
                    models.Index(
                        fields=["status", "created_at"],
                        name="txn_status_created_idx",
                    )
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(
                                ("status", "FAILED"),
                                ("error_reason__isnull", False),
                            ),
                            models.Q(
                                models.Q(("status", "FAILED"), _negated=True),
                                ("error_reason__isnull", True),
                            ),
                            _connector="OR",
                        ),
                        name="txn_error_reason_only_when_failed",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="TxnEntry",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("position", models.PositiveIntegerField()),
                ("account_num", models.CharField(max_length=64)),
                ("amount", models.BigIntegerField()),
                (
                    "txn",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="entries",
                        to="ledgers.txn",
                    ),
                ),
            ],
            options={
                "ordering": ["txn", "position"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("txn", "position"),
                        name="txn_entry_unique_position",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("amount", 0), _negated=True),
                        name="txn_entry_amount_non_zero",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("account_num", ""), _negated=True),
                        name="txn_entry_account_num_not_empty",
                    ),
                ],
            },
        ),
    ]
