# catalog/admin.py
from django.contrib import admin
from .models import Category, Supplier


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("category_name", "created_at")
    search_fields = ("category_name",)


@admin.register(Supplier)
class SupplierAdmin(admin.ModelAdmin):
    list_display = ("supplier_name", "contact_number", "email", "is_active")
    list_filter = ("is_active",)
    search_fields = ("supplier_name", "email")
