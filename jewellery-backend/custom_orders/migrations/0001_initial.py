from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models

import custom_orders.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("catalog", "0001_initial"),
        ("stores", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="CustomOrder",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("order_reference", models.CharField(max_length=32, unique=True)),
                ("customer_name", models.CharField(max_length=160)),
                ("customer_phone", models.CharField(blank=True, max_length=32, null=True)),
                ("customer_email", models.EmailField(blank=True, max_length=254, null=True)),
                ("estimated_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("profit_percentage", models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ("quantity", models.PositiveIntegerField(default=1)),
                ("advance_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                (
                    "order_status",
                    models.CharField(
                        choices=[
                            ("Pending", "Pending"),
                            ("In Progress", "In Progress"),
                            ("Completed", "Completed"),
                            ("Picked Up", "Picked Up"),
                            ("Cancelled", "Cancelled"),
                        ],
                        default="Pending",
                        max_length=20,
                    ),
                ),
                (
                    "payment_status",
                    models.CharField(
                        choices=[
                            ("Not Paid", "Not Paid"),
                            ("Partially Paid", "Partially Paid"),
                            ("Fully Paid", "Fully Paid"),
                        ],
                        default="Not Paid",
                        max_length=20,
                    ),
                ),
                ("description", models.TextField(blank=True, default="")),
                ("special_requirements", models.TextField(blank=True, default="")),
                ("supplier_notes", models.TextField(blank=True, null=True)),
                ("pickup_notes", models.TextField(blank=True, null=True)),
                ("created_by", models.PositiveIntegerField(blank=True, null=True)),
                ("order_date", models.DateTimeField(default=django.utils.timezone.now)),
                ("estimated_completion_date", models.DateField(blank=True, null=True)),
                ("pickup_date", models.DateTimeField(blank=True, null=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "branch",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="custom_orders",
                        to="stores.branch",
                    ),
                ),
                (
                    "category",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="custom_orders",
                        to="catalog.category",
                    ),
                ),
                (
                    "supplier",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="custom_orders",
                        to="catalog.supplier",
                    ),
                ),
            ],
            options={
                "ordering": ["-order_date", "-id"],
                "indexes": [
                    models.Index(fields=["order_status"], name="custom_order_status_idx"),
                    models.Index(fields=["branch", "order_status"], name="custom_order_branch_status_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="CustomOrderPayment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("payment_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("payment_method", models.CharField(default="Cash", max_length=32)),
                ("payment_reference", models.CharField(blank=True, max_length=64, null=True)),
                ("notes", models.TextField(blank=True, null=True)),
                ("payment_date", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="payments",
                        to="custom_orders.customorder",
                    ),
                ),
            ],
            options={
                "ordering": ["-payment_date", "-id"],
            },
        ),
        migrations.CreateModel(
            name="CustomOrderMaterial",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("material_name", models.CharField(max_length=120)),
                ("quantity", models.DecimalField(decimal_places=3, max_digits=10)),
                ("unit", models.CharField(default="g", max_length=16)),
                ("cost_per_unit", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("total_cost", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="materials",
                        to="custom_orders.customorder",
                    ),
                ),
                (
                    "supplier",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="materials",
                        to="catalog.supplier",
                    ),
                ),
            ],
        ),
        migrations.CreateModel(
            name="CustomOrderImage",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("image", models.ImageField(upload_to=custom_orders.models.order_image_path)),
                ("uploaded_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="images",
                        to="custom_orders.customorder",
                    ),
                ),
            ],
        ),
    ]
