from django.db import models
from django.utils import timezone


class EmailTemplate(models.Model):
    """
    Logical email templates, one per notification kind
    (e.g. 'payment_reminder', 'completion_notification').
    Subject and body are rendered with the Django template engine.
    """
    name = models.CharField(max_length=100, unique=True)
    subject = models.CharField(max_length=200)
    html_body = models.TextField()
    locale = models.CharField(max_length=8, default="en")
    version = models.IntegerField(default=1)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name", "-version"]

    def __str__(self):
        return f"{self.name} (v{self.version}, {self.locale})"


class EmailLog(models.Model):
    """
    Append-only audit of customer notifications that went out for an order.
    """
    STATUS_SENT = "sent"
    STATUS_MOCK_SENT = "mock_sent"

    order_id = models.PositiveIntegerField(db_index=True)
    email_type = models.CharField(max_length=50)
    recipient_email = models.EmailField()
    sent_at = models.DateTimeField(default=timezone.now)
    status = models.CharField(
        max_length=20,
        choices=[
            (STATUS_SENT, "Sent"),
            (STATUS_MOCK_SENT, "Mock sent"),
        ],
        default=STATUS_SENT,
    )
    message_id = models.CharField(max_length=255, blank=True, null=True)
    error_message = models.TextField(blank=True, null=True)

    class Meta:
        ordering = ["-sent_at", "-id"]
        indexes = [
            models.Index(fields=["order_id", "email_type"], name="email_log_order_type_idx"),
            models.Index(fields=["recipient_email"], name="email_log_recipient_idx"),
        ]

    def __str__(self):
        return f"{self.recipient_email} [{self.email_type}] ({self.status})"
