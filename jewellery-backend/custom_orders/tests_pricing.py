"""
Pricing and payment-status rules for custom orders (no database).
"""
from decimal import Decimal

from django.test import SimpleTestCase, override_settings

from custom_orders.models import PaymentStatus
from custom_orders.pricing import (
    PaymentPosition, clamp_profit_percentage, compute_customer_price, derive_payment_status,
    effective_quantity, money, to_decimal,
)


class CustomerPriceTests(SimpleTestCase):
    def test_formula_holds_across_allowed_percentages_and_quantities(self):
        base = Decimal("1234.56")
        for pct in range(0, 16):
            for qty in range(1, 5):
                pct_d = Decimal(pct)
                if pct > 0:
                    expected = (base + base * pct_d / Decimal("100")) * qty
                else:
                    expected = base * qty
                self.assertEqual(
                    compute_customer_price(base, pct_d, qty),
                    money(expected),
                    msg=f"pct={pct} qty={qty}",
                )

    def test_example_order_price(self):
        self.assertEqual(compute_customer_price(Decimal("1000"), Decimal("10"), 2), Decimal("2200.00"))

    def test_absent_or_zero_percentage_means_no_markup(self):
        self.assertEqual(compute_customer_price(Decimal("500"), None, 3), Decimal("1500.00"))
        self.assertEqual(compute_customer_price(Decimal("500"), Decimal("0"), 3), Decimal("1500.00"))
        self.assertEqual(compute_customer_price(Decimal("500"), "", 1), Decimal("500.00"))

    def test_zero_or_missing_quantity_prices_one_piece(self):
        self.assertEqual(compute_customer_price(Decimal("800"), Decimal("5"), 0), Decimal("840.00"))
        self.assertEqual(compute_customer_price(Decimal("800"), Decimal("5"), None), Decimal("840.00"))
        self.assertEqual(effective_quantity(-2), 1)
        self.assertEqual(effective_quantity("3"), 3)

    def test_stored_percentage_above_cap_is_honoured_on_read(self):
        self.assertEqual(compute_customer_price(Decimal("100"), Decimal("20"), 1), Decimal("120.00"))

    def test_accepts_strings_and_floats(self):
        self.assertEqual(compute_customer_price("1000.00", "10", "2"), Decimal("2200.00"))
        self.assertEqual(to_decimal(12.5), Decimal("12.5"))
        self.assertEqual(to_decimal("not-a-number"), Decimal("0.00"))


class ProfitClampTests(SimpleTestCase):
    def test_clamps_to_fifteen(self):
        self.assertEqual(clamp_profit_percentage(Decimal("22.5")), Decimal("15"))
        self.assertEqual(clamp_profit_percentage("12"), Decimal("12"))

    def test_blank_stays_none(self):
        self.assertIsNone(clamp_profit_percentage(None))
        self.assertIsNone(clamp_profit_percentage(""))

    @override_settings(CUSTOM_ORDER_MAX_PROFIT_PERCENTAGE="10")
    def test_cap_is_configurable(self):
        self.assertEqual(clamp_profit_percentage(Decimal("12")), Decimal("10"))


class PaymentStatusTests(SimpleTestCase):
    def test_derivation(self):
        self.assertEqual(derive_payment_status(Decimal("0"), Decimal("100")), PaymentStatus.FULLY_PAID)
        self.assertEqual(derive_payment_status(Decimal("-5"), Decimal("105")), PaymentStatus.FULLY_PAID)
        self.assertEqual(derive_payment_status(Decimal("50"), Decimal("50")), PaymentStatus.PARTIALLY_PAID)
        self.assertEqual(derive_payment_status(Decimal("100"), Decimal("0")), PaymentStatus.NOT_PAID)

    def test_derivation_is_idempotent(self):
        first = derive_payment_status(Decimal("10"), Decimal("90"))
        second = derive_payment_status(Decimal("10"), Decimal("90"))
        self.assertEqual(first, second)

    def test_position_balance_and_status(self):
        position = PaymentPosition(price=Decimal("2200.00"), total_paid=Decimal("500.00"))
        self.assertEqual(position.balance, Decimal("1700.00"))
        self.assertEqual(position.status, PaymentStatus.PARTIALLY_PAID)

    def test_reconciled_status_accepts_any_fully_paid_signal(self):
        price = Decimal("1000.00")
        # ledger snapshot already reached zero
        p = PaymentPosition(price=price, total_paid=Decimal("600"), ledger_min_balance=Decimal("0"))
        self.assertEqual(p.reconciled_status, PaymentStatus.FULLY_PAID)
        p = PaymentPosition(price=price, total_paid=Decimal("600"), ledger_total=Decimal("1000"))
        self.assertEqual(p.reconciled_status, PaymentStatus.FULLY_PAID)
        p = PaymentPosition(price=price, total_paid=Decimal("600"), simple_total=Decimal("1200"))
        self.assertEqual(p.reconciled_status, PaymentStatus.FULLY_PAID)
        p = PaymentPosition(price=price, total_paid=Decimal("600"), ledger_min_balance=Decimal("400"))
        self.assertEqual(p.reconciled_status, PaymentStatus.PARTIALLY_PAID)
        p = PaymentPosition(price=price, total_paid=Decimal("0"))
        self.assertEqual(p.reconciled_status, PaymentStatus.NOT_PAID)
