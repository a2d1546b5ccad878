from django.apps import AppConfig
from django.db.models.signals import post_migrate


class EmailsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "emails"
    verbose_name = "Emails"

    def ready(self):
        def seed_templates(sender, **kwargs):
            from emails.models import EmailTemplate

            EmailTemplate.objects.update_or_create(
                name="payment_reminder",
                defaults={
                    "subject": "Payment reminder for your custom order {{ order.order_reference }}",
                    "html_body": """
                        <div style="font-family: Arial, sans-serif; color: #111; padding: 16px;">
                          <p>Dear {{ order.customer_name }},</p>
                          <p>This is a friendly reminder about your custom order
                             <strong>{{ order.order_reference }}</strong>.</p>
                          <table style="border-collapse: collapse;">
                            <tr><td>Order total</td><td><strong>{{ total_amount }}</strong></td></tr>
                            <tr><td>Paid so far</td><td>{{ total_paid }}</td></tr>
                            <tr><td>Balance due</td><td><strong>{{ balance }}</strong></td></tr>
                          </table>
                          {% if order.estimated_completion_date %}
                          <p>Estimated completion: {{ order.estimated_completion_date }}</p>
                          {% endif %}
                          <p>Please visit the store to settle the remaining balance.</p>
                        </div>
                    """,
                    "locale": "en",
                    "version": 1,
                    "is_active": True,
                },
            )

            EmailTemplate.objects.update_or_create(
                name="completion_notification",
                defaults={
                    "subject": "Your custom order {{ order.order_reference }} is ready",
                    "html_body": """
                        <div style="font-family: Arial, sans-serif; color: #111; padding: 16px;">
                          <p>Dear {{ order.customer_name }},</p>
                          <p>Good news: your custom order <strong>{{ order.order_reference }}</strong>
                             is complete and ready for pickup at <strong>{{ pickup_location }}</strong>.</p>
                          {% if branch_address %}<p>Address: {{ branch_address }}</p>{% endif %}
                          {% if branch_phone %}<p>Phone: {{ branch_phone }}</p>{% endif %}
                          {% if remaining_balance > 0 %}
                          <p>Remaining balance payable at pickup: <strong>{{ remaining_balance }}</strong></p>
                          {% else %}
                          <p>Your order is fully paid.</p>
                          {% endif %}
                        </div>
                    """,
                    "locale": "en",
                    "version": 1,
                    "is_active": True,
                },
            )

        post_migrate.connect(seed_templates, sender=self)
