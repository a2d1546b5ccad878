"""
Reference number generation (`<PREFIX>-<year>-<seq>`).
"""
from decimal import Decimal
from unittest.mock import patch

from django.db import IntegrityError
from django.test import TestCase, override_settings

from common.references import next_reference, reference_prefix, save_with_reference
from custom_orders.models import CustomOrder


def order_with_reference(reference):
    return CustomOrder.objects.create(
        order_reference=reference,
        customer_name="Existing",
        estimated_amount=Decimal("100.00"),
    )


class NextReferenceTests(TestCase):
    def test_starts_at_one(self):
        self.assertEqual(
            next_reference(CustomOrder.objects.all(), "order_reference", "CUST", 2024),
            "CUST-2024-0001",
        )

    def test_uses_max_not_count(self):
        order_with_reference("CUST-2024-0001")
        order_with_reference("CUST-2024-0003")
        self.assertEqual(
            next_reference(CustomOrder.objects.all(), "order_reference", "CUST", 2024),
            "CUST-2024-0004",
        )

    def test_sequence_is_per_prefix_and_year(self):
        order_with_reference("CUST-2023-0042")
        order_with_reference("VIP-2024-0007")
        order_with_reference("CUST-2024-legacy")
        self.assertEqual(
            next_reference(CustomOrder.objects.all(), "order_reference", "CUST", 2024),
            "CUST-2024-0001",
        )

    def test_prefix_defaults_to_current_year(self):
        with patch("common.references.timezone.now") as now:
            now.return_value.year = 2031
            self.assertEqual(reference_prefix("adv"), "ADV-2031-")


class SaveWithReferenceTests(TestCase):
    def test_retries_after_collision(self):
        order_with_reference("CUST-2024-0001")
        order = CustomOrder(customer_name="New", estimated_amount=Decimal("50.00"))
        with patch(
            "common.references.next_reference",
            side_effect=["CUST-2024-0001", "CUST-2024-0002"],
        ):
            save_with_reference(order, "order_reference", "CUST", 2024)
        self.assertEqual(order.order_reference, "CUST-2024-0002")
        self.assertEqual(CustomOrder.objects.filter(order_reference__startswith="CUST-2024-").count(), 2)

    @override_settings(REFERENCE_RETRY_ATTEMPTS=2)
    def test_gives_up_after_configured_attempts(self):
        order_with_reference("CUST-2024-0001")
        order = CustomOrder(customer_name="New", estimated_amount=Decimal("50.00"))
        with patch("common.references.next_reference", return_value="CUST-2024-0001") as gen:
            with self.assertRaises(IntegrityError):
                save_with_reference(order, "order_reference", "CUST", 2024)
        self.assertEqual(gen.call_count, 2)
        self.assertEqual(CustomOrder.objects.count(), 1)
