"""
Bring cached payment_status / advance_amount on custom orders in line with the
payment tables.

Usage examples:
    python manage.py reconcile_payment_status --dry-run
    python manage.py reconcile_payment_status --order-id 42
    python manage.py reconcile_payment_status --status Pending --status "In Progress"
"""

from django.core.management.base import BaseCommand, CommandError

from custom_orders.models import CustomOrder, OrderStatus
from custom_orders.pricing import to_decimal
from custom_orders.services import payment_position, refresh_payment_status, with_payment_totals


class Command(BaseCommand):
    help = "Recompute and persist payment status for custom orders from both payment tables."

    def add_arguments(self, parser):
        parser.add_argument("--order-id", type=int, action="append", dest="order_ids",
                            help="Only reconcile this order (repeatable).")
        parser.add_argument("--status", action="append", dest="statuses",
                            help="Only reconcile orders in this order_status (repeatable).")
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Report what would change without writing.",
        )

    def handle(self, *args, **options):
        qs = CustomOrder.objects.all()
        if options.get("order_ids"):
            qs = qs.filter(pk__in=options["order_ids"])
        statuses = options.get("statuses") or []
        unknown = [s for s in statuses if s not in OrderStatus.values]
        if unknown:
            raise CommandError(f"Unknown order status: {', '.join(unknown)}")
        if statuses:
            qs = qs.filter(order_status__in=statuses)

        dry_run = options["dry_run"]
        checked = changed = 0
        for order in with_payment_totals(qs).order_by("id").iterator():
            checked += 1
            position = payment_position(order)
            target = position.reconciled_status
            stale = order.payment_status != target or to_decimal(order.advance_amount) != position.total_paid
            if not stale:
                continue
            changed += 1
            self.stdout.write(
                f"  {order.order_reference}: {order.payment_status} -> {target} (paid {position.total_paid})"
            )
            if not dry_run:
                refresh_payment_status(order)

        verb = "would change" if dry_run else "updated"
        self.stdout.write(self.style.SUCCESS(f"Checked {checked} orders, {verb} {changed}."))
