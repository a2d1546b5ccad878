from decimal import Decimal

from django.test import TestCase

from payments.models import AdvancePayment
from payments.services import create_ledger_entry


class LedgerEntryTests(TestCase):
    def entry(self, amount, balance, **extra):
        return create_ledger_entry(
            order_id=7,
            customer_name="Walk-in",
            total_amount=Decimal("1000.00"),
            amount=Decimal(amount),
            balance_amount=Decimal(balance),
            payment_status="Partially Paid",
            **extra,
        )

    def test_references_are_sequenced_across_the_table(self):
        first = self.entry("100", "900")
        second = create_ledger_entry(
            order_id=8,
            customer_name="Other",
            total_amount=Decimal("50.00"),
            amount=Decimal("50"),
            balance_amount=Decimal("0"),
            payment_status="Fully Paid",
            is_custom_order=False,
        )
        self.assertRegex(first.payment_reference, r"^ADV-\d{4}-0001$")
        self.assertTrue(second.payment_reference.endswith("-0002"))
        self.assertFalse(second.is_custom_order)

    def test_defaults(self):
        entry = self.entry("400", "600", payment_method="")
        entry.refresh_from_db()
        self.assertEqual(entry.payment_method, "Cash")
        self.assertTrue(entry.is_custom_order)
        self.assertIsNone(entry.source_payment)
        self.assertFalse(entry.is_settled)
        self.assertTrue(AdvancePayment.objects.get(pk=self.entry("600", "0").pk).is_settled)
