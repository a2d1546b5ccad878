# stores/admin.py
from django.contrib import admin
from .models import Branch


@admin.register(Branch)
class BranchAdmin(admin.ModelAdmin):
    list_display = ("branch_name", "location", "contact_number", "is_active")
    list_filter = ("is_active",)
    search_fields = ("branch_name", "location")
