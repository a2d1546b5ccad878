# jewellery-backend/catalog/models.py

from django.db import models
from common.models import TimeStampedModel


class Category(TimeStampedModel):
    """Jewellery category a custom order is filed under (rings, chains, ...)."""
    category_name = models.CharField(max_length=120, unique=True)
    description = models.TextField(blank=True, default="")

    class Meta:
        ordering = ["category_name", "id"]
        verbose_name_plural = "Categories"

    def __str__(self):
        return self.category_name


class Supplier(TimeStampedModel):
    supplier_name = models.CharField(max_length=160)
    contact_number = models.CharField(max_length=32, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["supplier_name", "id"]

    def __str__(self):
        return self.supplier_name
