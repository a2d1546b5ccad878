from decimal import Decimal

from django.core.management.base import BaseCommand, CommandError

from custom_orders.models import CustomOrder
from emails.services import send_order_email


class Command(BaseCommand):
    help = "Render and send a notification template for a sample order (default: payment_reminder)."

    def add_arguments(self, parser):
        parser.add_argument("--to", dest="to_address", required=True, help="Recipient email address")
        parser.add_argument(
            "--template",
            dest="template",
            default="payment_reminder",
            choices=["payment_reminder", "completion_notification"],
            help="Template name to send (default: payment_reminder)",
        )
        parser.add_argument("--locale", dest="locale", default="en")

    def handle(self, *args, **options):
        to_address = options["to_address"]
        template = options["template"]

        # Unsaved; only used to fill the template.
        order = CustomOrder(
            order_reference="CUST-TEST-0000",
            customer_name="Test Customer",
            customer_email=to_address,
            estimated_amount=Decimal("1000.00"),
            profit_percentage=Decimal("10.00"),
            quantity=1,
        )
        context = {
            "total_amount": Decimal("1100.00"),
            "total_paid": Decimal("500.00"),
            "balance": Decimal("600.00"),
            "remaining_balance": Decimal("600.00"),
            "pickup_location": "Main Store",
        }

        result = send_order_email(order, to_address, template, context=context, locale=options["locale"])
        if not result.success:
            raise CommandError(f"Sending failed: {result.error}")
        mode = "mock" if result.mock_email else "smtp"
        self.stdout.write(self.style.SUCCESS(f"Sent {template} to={to_address} ({mode}, id={result.message_id})"))
