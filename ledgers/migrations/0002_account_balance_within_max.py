from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("ledgers", "0001_initial"),
    ]

    operations = [
        migrations.AddConstraint(
            model_name="account",
            constraint=models.CheckConstraint(
                condition=models.Q(("balance__lte", 1000000000000000)),
                name="account_balance_within_max",
            ),
        ),
    ]
