# jewellery-backend/stores/models.py
from django.db import models
from common.models import TimeStampedModel


class Branch(TimeStampedModel):
    branch_name = models.CharField(max_length=120)
    location = models.CharField(max_length=255, blank=True, default="")
    contact_number = models.CharField(max_length=32, blank=True, default="")
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["branch_name", "id"]
        verbose_name_plural = "Branches"

    def __str__(self):
        return self.branch_name
