from django.contrib import admin
from .models import EmailTemplate, EmailLog


@admin.register(EmailTemplate)
class EmailTemplateAdmin(admin.ModelAdmin):
    list_display = ("name", "locale", "version", "is_active", "updated_at")
    search_fields = ("name", "subject", "locale")
    list_filter = ("locale", "is_active")


@admin.register(EmailLog)
class EmailLogAdmin(admin.ModelAdmin):
    list_display = ("order_id", "email_type", "recipient_email", "status", "sent_at")
    search_fields = ("recipient_email", "message_id", "order_id")
    list_filter = ("email_type", "status")
    readonly_fields = ("order_id", "email_type", "recipient_email", "sent_at", "status", "message_id", "error_message")
