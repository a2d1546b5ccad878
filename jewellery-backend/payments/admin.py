from django.contrib import admin
from .models import AdvancePayment


@admin.register(AdvancePayment)
class AdvancePaymentAdmin(admin.ModelAdmin):
    list_display = (
        "payment_reference", "customer_name", "order_id", "is_custom_order",
        "advance_amount", "balance_amount", "payment_status", "payment_date",
    )
    list_filter = ("is_custom_order", "payment_status", "payment_method", "payment_date")
    search_fields = ("payment_reference", "customer_name", "order_id")
    readonly_fields = ("total_amount", "advance_amount", "balance_amount", "payment_status", "source_payment")
