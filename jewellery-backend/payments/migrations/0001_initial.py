import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("stores", "0001_initial"),
        ("custom_orders", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="AdvancePayment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("payment_reference", models.CharField(max_length=32, unique=True)),
                ("customer_name", models.CharField(max_length=160)),
                ("payment_date", models.DateTimeField(default=django.utils.timezone.now)),
                ("total_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("advance_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("balance_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("payment_status", models.CharField(max_length=20)),
                ("payment_method", models.CharField(default="Cash", max_length=32)),
                ("notes", models.TextField(blank=True, null=True)),
                ("created_by", models.PositiveIntegerField(blank=True, null=True)),
                ("is_custom_order", models.BooleanField(default=False)),
                ("order_id", models.PositiveIntegerField(blank=True, db_index=True, null=True)),
                (
                    "branch",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="advance_payments",
                        to="stores.branch",
                    ),
                ),
                (
                    "source_payment",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="ledger_entry",
                        to="custom_orders.customorderpayment",
                    ),
                ),
            ],
            options={
                "ordering": ["-payment_date", "-id"],
                "indexes": [
                    models.Index(fields=["order_id", "is_custom_order"], name="adv_payment_order_idx"),
                ],
            },
        ),
    ]
