# jewellery-backend/custom_orders/admin.py
from django.contrib import admin
from .models import CustomOrder, CustomOrderPayment, CustomOrderMaterial, CustomOrderImage


class CustomOrderPaymentInline(admin.TabularInline):
    model = CustomOrderPayment
    extra = 0
    readonly_fields = ("payment_amount", "payment_method", "payment_reference", "notes", "payment_date")


class CustomOrderMaterialInline(admin.TabularInline):
    model = CustomOrderMaterial
    extra = 0


class CustomOrderImageInline(admin.TabularInline):
    model = CustomOrderImage
    extra = 0


@admin.register(CustomOrder)
class CustomOrderAdmin(admin.ModelAdmin):
    list_display = (
        "order_reference", "customer_name", "branch", "estimated_amount", "profit_percentage",
        "quantity", "advance_amount", "payment_status", "order_status", "order_date",
    )
    list_filter = ("order_status", "payment_status", "branch", "category", "order_date")
    search_fields = ("order_reference", "customer_name", "customer_phone", "customer_email")
    date_hierarchy = "order_date"
    # Cached figures; change them through payments, not by hand.
    readonly_fields = ("order_reference", "advance_amount", "payment_status")
    inlines = [CustomOrderPaymentInline, CustomOrderMaterialInline, CustomOrderImageInline]


@admin.register(CustomOrderPayment)
class CustomOrderPaymentAdmin(admin.ModelAdmin):
    list_display = ("order", "payment_amount", "payment_method", "payment_reference", "payment_date")
    list_filter = ("payment_method", "payment_date")
    search_fields = ("order__order_reference", "payment_reference")


@admin.register(CustomOrderMaterial)
class CustomOrderMaterialAdmin(admin.ModelAdmin):
    list_display = ("order", "material_name", "quantity", "unit", "total_cost", "supplier")
    search_fields = ("order__order_reference", "material_name")
