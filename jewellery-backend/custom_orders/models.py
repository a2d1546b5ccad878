# jewellery-backend/custom_orders/models.py

from decimal import Decimal

from django.db import models
from django.utils import timezone

from catalog.models import Category, Supplier
from stores.models import Branch


class OrderStatus(models.TextChoices):
    PENDING = "Pending", "Pending"
    IN_PROGRESS = "In Progress", "In Progress"
    COMPLETED = "Completed", "Completed"
    PICKED_UP = "Picked Up", "Picked Up"
    CANCELLED = "Cancelled", "Cancelled"


class PaymentStatus(models.TextChoices):
    NOT_PAID = "Not Paid", "Not Paid"
    PARTIALLY_PAID = "Partially Paid", "Partially Paid"
    FULLY_PAID = "Fully Paid", "Fully Paid"


class CustomOrder(models.Model):
    """
    A made-to-order piece for a walk-in customer.

    `estimated_amount` is the per-unit supplier estimate; what the customer owes
    is derived from it (see custom_orders.pricing). `advance_amount` and
    `payment_status` are cached snapshots and may lag the payment tables until
    the order is reconciled.
    """

    order_reference = models.CharField(max_length=32, unique=True)

    customer_name = models.CharField(max_length=160)
    customer_phone = models.CharField(max_length=32, blank=True, null=True)
    customer_email = models.EmailField(blank=True, null=True)

    estimated_amount = models.DecimalField(max_digits=12, decimal_places=2)
    profit_percentage = models.DecimalField(max_digits=5, decimal_places=2, blank=True, null=True)
    quantity = models.PositiveIntegerField(default=1)
    advance_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    order_status = models.CharField(max_length=20, choices=OrderStatus.choices, default=OrderStatus.PENDING)
    payment_status = models.CharField(max_length=20, choices=PaymentStatus.choices, default=PaymentStatus.NOT_PAID)

    category = models.ForeignKey(Category, null=True, blank=True, on_delete=models.SET_NULL, related_name="custom_orders")
    supplier = models.ForeignKey(Supplier, null=True, blank=True, on_delete=models.SET_NULL, related_name="custom_orders")
    branch = models.ForeignKey(Branch, null=True, blank=True, on_delete=models.SET_NULL, related_name="custom_orders")

    description = models.TextField(blank=True, default="")
    special_requirements = models.TextField(blank=True, default="")
    supplier_notes = models.TextField(blank=True, null=True)
    pickup_notes = models.TextField(blank=True, null=True)
    created_by = models.PositiveIntegerField(blank=True, null=True)

    order_date = models.DateTimeField(default=timezone.now)
    estimated_completion_date = models.DateField(blank=True, null=True)
    pickup_date = models.DateTimeField(blank=True, null=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-order_date", "-id"]
        indexes = [
            models.Index(fields=["order_status"], name="custom_order_status_idx"),
            models.Index(fields=["branch", "order_status"], name="custom_order_branch_status_idx"),
        ]

    def __str__(self):
        return f"{self.order_reference} - {self.customer_name}"


class CustomOrderPayment(models.Model):
    order = models.ForeignKey(CustomOrder, on_delete=models.CASCADE, related_name="payments")
    payment_amount = models.DecimalField(max_digits=12, decimal_places=2)
    payment_method = models.CharField(max_length=32, default="Cash")
    payment_reference = models.CharField(max_length=64, blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    payment_date = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-payment_date", "-id"]

    def __str__(self):
        return f"{self.payment_method} {self.payment_amount} for {self.order_id}"


class CustomOrderMaterial(models.Model):
    order = models.ForeignKey(CustomOrder, on_delete=models.CASCADE, related_name="materials")
    material_name = models.CharField(max_length=120)
    quantity = models.DecimalField(max_digits=10, decimal_places=3)
    unit = models.CharField(max_length=16, default="g")
    cost_per_unit = models.DecimalField(max_digits=12, decimal_places=2, blank=True, null=True)
    total_cost = models.DecimalField(max_digits=12, decimal_places=2, blank=True, null=True)
    supplier = models.ForeignKey(Supplier, null=True, blank=True, on_delete=models.SET_NULL, related_name="materials")
    created_at = models.DateTimeField(default=timezone.now)

    def __str__(self):
        return f"{self.material_name} {self.quantity}{self.unit} (order {self.order_id})"


def order_image_path(instance, filename):
    return f"custom_orders/{filename}"


class CustomOrderImage(models.Model):
    order = models.ForeignKey(CustomOrder, on_delete=models.CASCADE, related_name="images")
    image = models.ImageField(upload_to=order_image_path)
    uploaded_at = models.DateTimeField(default=timezone.now)

    def __str__(self):
        return f"Image {self.image.name} (order {self.order_id})"
