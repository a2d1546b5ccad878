# jewellery-backend/payments/models.py
from decimal import Decimal

from django.db import models
from django.utils import timezone

from stores.models import Branch


class AdvancePayment(models.Model):
    """
    Advance-payment ledger shared by every order type in the shop.

    Each row snapshots the order total, this payment and the balance left after
    it. `order_id` is a plain integer because the table is shared; rows that
    belong to a custom order carry `is_custom_order=True`. Rows written as the
    snapshot of a custom-order payment point back at it via `source_payment`.
    """

    payment_reference = models.CharField(max_length=32, unique=True)
    customer_name = models.CharField(max_length=160)
    payment_date = models.DateTimeField(default=timezone.now)

    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    advance_amount = models.DecimalField(max_digits=12, decimal_places=2)
    balance_amount = models.DecimalField(max_digits=12, decimal_places=2)
    payment_status = models.CharField(max_length=20)
    payment_method = models.CharField(max_length=32, default="Cash")
    notes = models.TextField(blank=True, null=True)

    created_by = models.PositiveIntegerField(blank=True, null=True)
    branch = models.ForeignKey(Branch, null=True, blank=True, on_delete=models.SET_NULL, related_name="advance_payments")

    is_custom_order = models.BooleanField(default=False)
    order_id = models.PositiveIntegerField(blank=True, null=True, db_index=True)
    source_payment = models.OneToOneField(
        "custom_orders.CustomOrderPayment",
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name="ledger_entry",
    )

    class Meta:
        ordering = ["-payment_date", "-id"]
        indexes = [
            models.Index(fields=["order_id", "is_custom_order"], name="adv_payment_order_idx"),
        ]

    def __str__(self):
        return f"{self.payment_reference} {self.advance_amount} (balance {self.balance_amount})"

    @property
    def is_settled(self) -> bool:
        return (self.balance_amount or Decimal("0")) <= 0
