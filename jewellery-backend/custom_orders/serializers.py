# jewellery-backend/custom_orders/serializers.py

from decimal import Decimal

from rest_framework import serializers

from catalog.models import Category, Supplier
from stores.models import Branch
from .models import (
    CustomOrder, CustomOrderPayment, CustomOrderMaterial, CustomOrderImage, OrderStatus,
)
from .pricing import PaymentPosition, compute_customer_price, to_decimal


class CustomOrderCreateSerializer(serializers.Serializer):
    customer_name = serializers.CharField(max_length=160)
    customer_phone = serializers.CharField(max_length=32, required=False, allow_blank=True, allow_null=True)
    customer_email = serializers.EmailField(required=False, allow_blank=True, allow_null=True)
    estimated_amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01"))
    # Values above the cap are clamped by the service, not rejected.
    profit_percentage = serializers.DecimalField(
        max_digits=7, decimal_places=2, min_value=Decimal("0"), required=False, allow_null=True,
    )
    quantity = serializers.IntegerField(required=False, allow_null=True)
    advance_amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0"), required=False, allow_null=True,
    )
    category_id = serializers.PrimaryKeyRelatedField(
        source="category", queryset=Category.objects.all(), required=False, allow_null=True,
    )
    supplier_id = serializers.PrimaryKeyRelatedField(
        source="supplier", queryset=Supplier.objects.all(), required=False, allow_null=True,
    )
    branch_id = serializers.PrimaryKeyRelatedField(
        source="branch", queryset=Branch.objects.all(), required=False, allow_null=True,
    )
    description = serializers.CharField(required=False, allow_blank=True, default="")
    special_requirements = serializers.CharField(required=False, allow_blank=True, default="")
    estimated_completion_date = serializers.DateField(required=False, allow_null=True)
    created_by = serializers.IntegerField(required=False, allow_null=True, min_value=0)


class OrderStatusUpdateSerializer(serializers.Serializer):
    order_status = serializers.ChoiceField(choices=OrderStatus.choices)
    supplier_notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class PaymentCreateSerializer(serializers.Serializer):
    # Sign is checked by the service so the error carries its own code.
    payment_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    payment_method = serializers.CharField(max_length=32, required=False, allow_blank=True, default="Cash")
    payment_reference = serializers.CharField(max_length=64, required=False, allow_blank=True, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class MaterialInputSerializer(serializers.Serializer):
    material_name = serializers.CharField(max_length=120)
    quantity = serializers.DecimalField(max_digits=10, decimal_places=3)
    unit = serializers.CharField(max_length=16, required=False, allow_blank=True, default="g")
    cost_per_unit = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)
    total_cost = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)
    supplier_id = serializers.PrimaryKeyRelatedField(
        source="supplier", queryset=Supplier.objects.all(), required=False, allow_null=True,
    )


class MaterialsCreateSerializer(serializers.Serializer):
    materials = MaterialInputSerializer(many=True, allow_empty=False)


class PickupSerializer(serializers.Serializer):
    pickup_notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class CompletionNotificationSerializer(serializers.Serializer):
    pickup_location = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ImageUploadSerializer(serializers.Serializer):
    image = serializers.FileField()


class CustomOrderPaymentSerializer(serializers.ModelSerializer):
    class Meta:
        model = CustomOrderPayment
        fields = ["id", "payment_amount", "payment_method", "payment_reference", "notes", "payment_date"]


class CustomOrderMaterialSerializer(serializers.ModelSerializer):
    supplier_name = serializers.CharField(source="supplier.supplier_name", read_only=True, default=None)

    class Meta:
        model = CustomOrderMaterial
        fields = [
            "id", "material_name", "quantity", "unit", "cost_per_unit", "total_cost",
            "supplier", "supplier_name", "created_at",
        ]


class CustomOrderImageSerializer(serializers.ModelSerializer):
    class Meta:
        model = CustomOrderImage
        fields = ["id", "image", "uploaded_at"]


class CustomOrderListSerializer(serializers.ModelSerializer):
    """
    Expects a queryset from `services.with_payment_totals`. All money figures
    are computed from the payment tables; the stored `payment_status` is shown
    as-is next to the computed one.
    """
    category_name = serializers.CharField(source="category.category_name", read_only=True, default=None)
    supplier_name = serializers.CharField(source="supplier.supplier_name", read_only=True, default=None)
    branch_name = serializers.CharField(source="branch.branch_name", read_only=True, default=None)
    # annotated, not model fields
    total_paid = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    payment_count = serializers.IntegerField(read_only=True)
    total_amount_with_profit = serializers.SerializerMethodField()
    balance_amount = serializers.SerializerMethodField()
    current_payment_status = serializers.SerializerMethodField()

    class Meta:
        model = CustomOrder
        fields = [
            "id", "order_reference", "customer_name", "customer_phone", "customer_email",
            "estimated_amount", "profit_percentage", "quantity",
            "advance_amount", "total_paid", "total_amount_with_profit", "balance_amount",
            "payment_status", "current_payment_status", "payment_count",
            "order_status", "category", "category_name", "supplier", "supplier_name",
            "branch", "branch_name", "order_date", "estimated_completion_date", "pickup_date",
        ]

    def _position(self, obj) -> PaymentPosition:
        cached = getattr(obj, "_position", None)
        if cached is None:
            ledger_min = getattr(obj, "ledger_min_balance", None)
            cached = PaymentPosition(
                price=compute_customer_price(obj.estimated_amount, obj.profit_percentage, obj.quantity),
                total_paid=to_decimal(getattr(obj, "total_paid", None)),
                simple_total=to_decimal(getattr(obj, "simple_total", None)),
                ledger_total=to_decimal(getattr(obj, "ledger_total", None)),
                ledger_min_balance=None if ledger_min is None else to_decimal(ledger_min),
            )
            obj._position = cached
        return cached

    def get_total_amount_with_profit(self, obj):
        return str(self._position(obj).price)

    def get_balance_amount(self, obj):
        return str(self._position(obj).balance)

    def get_current_payment_status(self, obj):
        return self._position(obj).reconciled_status


class CustomOrderDetailSerializer(CustomOrderListSerializer):
    payments = CustomOrderPaymentSerializer(many=True, read_only=True)
    materials = CustomOrderMaterialSerializer(many=True, read_only=True)
    images = CustomOrderImageSerializer(many=True, read_only=True)
    remaining_payments = serializers.SerializerMethodField()

    class Meta(CustomOrderListSerializer.Meta):
        fields = CustomOrderListSerializer.Meta.fields + [
            "description", "special_requirements", "supplier_notes", "pickup_notes", "created_by",
            "updated_at", "remaining_payments", "payments", "materials", "images",
        ]

    def get_remaining_payments(self, obj):
        limit = self.context.get("max_payments", 3)
        return max(0, limit - (getattr(obj, "payment_count", 0) or 0))
