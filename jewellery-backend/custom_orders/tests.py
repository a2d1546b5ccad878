"""
Custom order ledger tests: order intake, payments across both payment tables,
reconciliation, status workflow and the REST endpoints.
"""
from decimal import Decimal
from io import StringIO
from unittest.mock import patch

from django.core.management import call_command
from django.db import DatabaseError
from django.test import TestCase
from rest_framework.test import APIRequestFactory

from catalog.models import Category, Supplier
from custom_orders.exceptions import InvalidAmount, OrderNotFound, PaymentLimitReached, PickupNotAllowed
from custom_orders.models import CustomOrder, CustomOrderMaterial, CustomOrderPayment, OrderStatus, PaymentStatus
from custom_orders.services import (
    add_materials, aggregate_total_paid, category_supplier_summary, create_order, mark_picked_up,
    payment_history, record_payment, refresh_payment_status, update_order_status,
)
from custom_orders.views import (
    CategorySupplierSummaryView, CompletedOrdersView, CustomOrderCreateView, CustomOrderDetailView,
    CustomOrderListView, MarkPickedUpView, OrderMaterialsView, OrderPaymentsView, OrderStatusView,
    PaymentHistoryView, RefreshPaymentStatusView,
)
from payments.models import AdvancePayment
from stores.models import Branch


def make_order(**overrides):
    data = {
        "customer_name": "Asha Perera",
        "customer_email": "asha@example.com",
        "estimated_amount": Decimal("1000.00"),
        "profit_percentage": Decimal("10"),
        "quantity": 2,
    }
    data.update(overrides)
    return create_order(**data)


def ledger_row(order, amount, balance, reference, is_custom_order=True):
    """A ledger row entered outside record_payment (no source payment)."""
    return AdvancePayment.objects.create(
        payment_reference=reference,
        customer_name=order.customer_name,
        total_amount=Decimal("2200.00"),
        advance_amount=Decimal(amount),
        balance_amount=Decimal(balance),
        payment_status=PaymentStatus.PARTIALLY_PAID,
        is_custom_order=is_custom_order,
        order_id=order.pk,
    )


class CreateOrderTests(TestCase):
    def test_new_order_is_pending_with_reference(self):
        order = make_order()
        self.assertEqual(order.order_status, OrderStatus.PENDING)
        self.assertEqual(order.payment_status, PaymentStatus.NOT_PAID)
        self.assertRegex(order.order_reference, r"^CUST-\d{4}-0001$")
        self.assertEqual(make_order().order_reference[-4:], "0002")

    def test_profit_percentage_is_clamped_on_write(self):
        order = make_order(profit_percentage=Decimal("25"))
        order.refresh_from_db()
        self.assertEqual(order.profit_percentage, Decimal("15.00"))

    def test_zero_quantity_is_stored_as_one(self):
        order = make_order(quantity=0)
        self.assertEqual(order.quantity, 1)

    def test_initial_advance_is_booked_as_first_payment(self):
        order = make_order(advance_amount=Decimal("500"))
        payments = list(order.payments.all())
        self.assertEqual(len(payments), 1)
        self.assertEqual(payments[0].payment_amount, Decimal("500.00"))
        self.assertEqual(payments[0].notes, "Initial advance payment")
        self.assertEqual(order.payment_status, PaymentStatus.PARTIALLY_PAID)
        self.assertEqual(aggregate_total_paid(order.pk), Decimal("500.00"))

    def test_advance_covering_price_is_fully_paid(self):
        order = make_order(advance_amount=Decimal("2200"))
        self.assertEqual(order.payment_status, PaymentStatus.FULLY_PAID)


class AggregateTotalPaidTests(TestCase):
    def test_no_payments_is_zero(self):
        order = make_order()
        self.assertEqual(aggregate_total_paid(order.pk), Decimal("0.00"))

    def test_sums_both_tables(self):
        order = make_order()
        CustomOrderPayment.objects.create(order=order, payment_amount=Decimal("300.00"))
        ledger_row(order, "200.00", "1700.00", "ADV-2024-0100")
        # other order types sharing the ledger are ignored
        ledger_row(order, "999.00", "0.00", "ADV-2024-0101", is_custom_order=False)
        self.assertEqual(aggregate_total_paid(order.pk), Decimal("500.00"))

    def test_insertion_order_does_not_change_total(self):
        amounts = [Decimal("120.25"), Decimal("79.75"), Decimal("400.00")]
        first = make_order()
        second = make_order()
        for i, amount in enumerate(amounts):
            CustomOrderPayment.objects.create(order=first, payment_amount=amount)
            ledger_row(first, amount, "0", f"ADV-2024-1{i:03d}")
        for i, amount in enumerate(reversed(amounts)):
            ledger_row(second, amount, "0", f"ADV-2024-2{i:03d}")
            CustomOrderPayment.objects.create(order=second, payment_amount=amount)
        self.assertEqual(aggregate_total_paid(first.pk), Decimal("1200.00"))
        self.assertEqual(aggregate_total_paid(first.pk), aggregate_total_paid(second.pk))

    def test_mirror_rows_are_not_counted_twice(self):
        order = make_order()
        record_payment(order.pk, Decimal("500"))
        self.assertEqual(CustomOrderPayment.objects.filter(order=order).count(), 1)
        self.assertEqual(AdvancePayment.objects.filter(order_id=order.pk).count(), 1)
        self.assertEqual(aggregate_total_paid(order.pk), Decimal("500.00"))


class RecordPaymentTests(TestCase):
    def test_end_to_end_balance_and_limit(self):
        order = make_order()

        first = record_payment(order.pk, Decimal("500"))
        self.assertEqual(first.balance, Decimal("1700.00"))
        self.assertEqual(first.payment_status, PaymentStatus.PARTIALLY_PAID)
        self.assertEqual(first.remaining_payments, 2)

        second = record_payment(order.pk, Decimal("1700"))
        self.assertEqual(second.balance, Decimal("0.00"))
        self.assertEqual(second.payment_status, PaymentStatus.FULLY_PAID)
        self.assertEqual(second.total_paid, Decimal("2200.00"))
        self.assertEqual(second.payment_count, 2)

        # two prior payments: a third is still allowed
        third = record_payment(order.pk, Decimal("10"), method="Card")
        self.assertEqual(third.remaining_payments, 0)

        with self.assertRaises(PaymentLimitReached) as ctx:
            record_payment(order.pk, Decimal("10"))
        self.assertEqual(ctx.exception.payment_count, 3)

        order.refresh_from_db()
        self.assertEqual(order.advance_amount, Decimal("2210.00"))
        self.assertEqual(order.payment_status, PaymentStatus.FULLY_PAID)

    def test_ledger_mirror_carries_snapshot(self):
        order = make_order()
        outcome = record_payment(order.pk, Decimal("500"), method="Card", reference="TXN-1", notes="deposit")
        entry = AdvancePayment.objects.get(payment_reference=outcome.ledger_reference)
        self.assertRegex(entry.payment_reference, r"^ADV-\d{4}-0001$")
        self.assertTrue(entry.is_custom_order)
        self.assertEqual(entry.order_id, order.pk)
        self.assertEqual(entry.source_payment_id, outcome.payment_id)
        self.assertEqual(entry.total_amount, Decimal("2200.00"))
        self.assertEqual(entry.advance_amount, Decimal("500.00"))
        self.assertEqual(entry.balance_amount, Decimal("1700.00"))
        self.assertEqual(entry.payment_status, PaymentStatus.PARTIALLY_PAID)
        self.assertEqual(entry.payment_method, "Card")

    def test_fourth_payment_leaves_store_unchanged(self):
        order = make_order()
        for amount in ("100", "100", "100"):
            record_payment(order.pk, Decimal(amount))
        order.refresh_from_db()
        before = (order.advance_amount, order.payment_status)

        with self.assertRaises(PaymentLimitReached):
            record_payment(order.pk, Decimal("100"))

        order.refresh_from_db()
        self.assertEqual(CustomOrderPayment.objects.filter(order=order).count(), 3)
        self.assertEqual(AdvancePayment.objects.filter(order_id=order.pk).count(), 3)
        self.assertEqual((order.advance_amount, order.payment_status), before)

    def test_non_positive_amount_is_rejected_before_any_write(self):
        order = make_order()
        for amount in (Decimal("0"), Decimal("-5"), None):
            with self.assertRaises(InvalidAmount):
                record_payment(order.pk, amount)
        self.assertFalse(CustomOrderPayment.objects.exists())

    def test_non_finite_amount_is_rejected(self):
        order = make_order()
        for amount in ("NaN", "Infinity", Decimal("-Infinity")):
            with self.assertRaises(InvalidAmount):
                record_payment(order.pk, amount)
        self.assertFalse(CustomOrderPayment.objects.exists())

    def test_unknown_order(self):
        with self.assertRaises(OrderNotFound):
            record_payment(999999, Decimal("10"))

    def test_ledger_failure_rolls_back_simple_payment(self):
        order = make_order()
        with patch("custom_orders.services.create_ledger_entry", side_effect=DatabaseError("disk full")):
            with self.assertRaises(DatabaseError):
                record_payment(order.pk, Decimal("500"))

        order.refresh_from_db()
        self.assertEqual(CustomOrderPayment.objects.filter(order=order).count(), 0)
        self.assertEqual(AdvancePayment.objects.filter(order_id=order.pk).count(), 0)
        self.assertEqual(order.advance_amount, Decimal("0.00"))
        self.assertEqual(order.payment_status, PaymentStatus.NOT_PAID)


class RefreshPaymentStatusTests(TestCase):
    def test_heals_stale_status_and_is_idempotent(self):
        order = make_order()
        # payment entered directly, cached columns not touched
        CustomOrderPayment.objects.create(order=order, payment_amount=Decimal("2200.00"))

        self.assertEqual(refresh_payment_status(CustomOrder.objects.get(pk=order.pk)), PaymentStatus.FULLY_PAID)
        order.refresh_from_db()
        first_status, first_updated = order.payment_status, order.updated_at
        self.assertEqual(first_status, PaymentStatus.FULLY_PAID)
        self.assertEqual(order.advance_amount, Decimal("2200.00"))

        self.assertEqual(refresh_payment_status(CustomOrder.objects.get(pk=order.pk)), PaymentStatus.FULLY_PAID)
        order.refresh_from_db()
        self.assertEqual(order.payment_status, first_status)
        self.assertEqual(order.updated_at, first_updated)

    def test_ledger_signal_marks_fully_paid(self):
        order = make_order()
        ledger_row(order, "1000.00", "0.00", "ADV-2024-0500")
        self.assertEqual(refresh_payment_status(order), PaymentStatus.FULLY_PAID)

    def test_reconcile_command(self):
        stale = make_order()
        CustomOrderPayment.objects.create(order=stale, payment_amount=Decimal("100.00"))
        fresh = make_order()

        out = StringIO()
        call_command("reconcile_payment_status", "--dry-run", stdout=out)
        self.assertIn("would change 1", out.getvalue())
        stale.refresh_from_db()
        self.assertEqual(stale.payment_status, PaymentStatus.NOT_PAID)

        out = StringIO()
        call_command("reconcile_payment_status", stdout=out)
        self.assertIn("updated 1", out.getvalue())
        stale.refresh_from_db()
        fresh.refresh_from_db()
        self.assertEqual(stale.payment_status, PaymentStatus.PARTIALLY_PAID)
        self.assertEqual(fresh.payment_status, PaymentStatus.NOT_PAID)


class StatusWorkflowTests(TestCase):
    def test_pickup_requires_completed(self):
        order = make_order()
        with self.assertRaises(PickupNotAllowed) as ctx:
            mark_picked_up(order.pk)
        self.assertEqual(ctx.exception.current_status, OrderStatus.PENDING)
        order.refresh_from_db()
        self.assertIsNone(order.pickup_date)

        update_order_status(order.pk, OrderStatus.COMPLETED)
        picked = mark_picked_up(order.pk, "collected by sister")
        self.assertEqual(picked.order_status, OrderStatus.PICKED_UP)
        self.assertIsNotNone(picked.pickup_date)
        self.assertEqual(picked.pickup_notes, "collected by sister")

    def test_status_update_cannot_bypass_pickup_guard(self):
        order = make_order()
        with self.assertRaises(PickupNotAllowed):
            update_order_status(order.pk, OrderStatus.PICKED_UP)

    def test_any_other_status_may_overwrite(self):
        order = make_order()
        update_order_status(order.pk, OrderStatus.CANCELLED)
        updated = update_order_status(order.pk, OrderStatus.IN_PROGRESS, supplier_notes="resumed")
        self.assertEqual(updated.order_status, OrderStatus.IN_PROGRESS)
        self.assertEqual(updated.supplier_notes, "resumed")

    def test_unknown_order(self):
        with self.assertRaises(OrderNotFound):
            update_order_status(424242, OrderStatus.COMPLETED)

    def test_pickup_through_status_update_keeps_supplier_notes(self):
        order = make_order()
        update_order_status(order.pk, OrderStatus.COMPLETED)
        updated = update_order_status(order.pk, OrderStatus.PICKED_UP, supplier_notes="handed to courier")
        self.assertEqual(updated.order_status, OrderStatus.PICKED_UP)
        order.refresh_from_db()
        self.assertEqual(order.supplier_notes, "handed to courier")
        self.assertIsNotNone(order.pickup_date)


class MaterialsAndReportingTests(TestCase):
    def setUp(self):
        self.rings = Category.objects.create(category_name="Rings")
        Category.objects.create(category_name="Chains")
        self.supplier = Supplier.objects.create(supplier_name="Gold House")

    def test_add_materials_and_summary(self):
        order = make_order(category=self.rings)
        other = make_order(category=self.rings)
        count = add_materials(order.pk, [
            {"material_name": "22k gold", "quantity": Decimal("4.5"), "supplier": self.supplier},
            {"material_name": "Ruby", "quantity": Decimal("1"), "unit": "pc"},
        ])
        add_materials(other.pk, [{"material_name": "22k gold", "quantity": Decimal("2"), "supplier": self.supplier}])
        self.assertEqual(count, 2)
        self.assertEqual(CustomOrderMaterial.objects.filter(order=order).count(), 2)
        self.assertEqual(CustomOrderMaterial.objects.get(material_name="Ruby").unit, "pc")

        summary = {row["category_name"]: row for row in category_supplier_summary()}
        self.assertEqual(summary["Chains"]["suppliers"], [])
        self.assertEqual(summary["Rings"]["suppliers"], [
            {"supplier_id": self.supplier.pk, "supplier_name": "Gold House", "order_count": 2},
        ])

    def test_payment_history_lists_both_tables(self):
        order = make_order()
        outcome = record_payment(order.pk, Decimal("500"))
        ledger_row(order, "100.00", "1600.00", "ADV-2024-0900")

        history = payment_history(order.pk)
        sources = sorted(row["source"] for row in history["payments"])
        self.assertEqual(sources, ["advance_payments", "advance_payments", "custom_order_payments"])
        mirrors = [row for row in history["payments"] if row["mirrors_payment_id"] == outcome.payment_id]
        self.assertEqual(len(mirrors), 1)
        self.assertEqual(history["total_paid"], Decimal("600.00"))
        self.assertEqual(history["total_amount_with_profit"], Decimal("2200.00"))
        self.assertEqual(history["remaining_balance"], Decimal("1600.00"))


class CustomOrderApiTests(TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        self.branch = Branch.objects.create(branch_name="Colombo 03", location="Galle Road")

    def test_create_order(self):
        view = CustomOrderCreateView.as_view()
        req = self.factory.post(
            "/api/v1/custom-orders/create",
            {
                "customer_name": "Nimal",
                "estimated_amount": "1000.00",
                "profit_percentage": "40",
                "quantity": 2,
                "advance_amount": "500",
                "branch_id": self.branch.pk,
            },
            format="json",
        )
        resp = view(req)
        self.assertEqual(resp.status_code, 201)
        order = CustomOrder.objects.get(pk=resp.data["order_id"])
        self.assertEqual(order.order_reference, resp.data["order_reference"])
        self.assertEqual(order.profit_percentage, Decimal("15.00"))
        self.assertEqual(order.branch, self.branch)
        self.assertEqual(order.payments.count(), 1)

    def test_create_order_validation(self):
        view = CustomOrderCreateView.as_view()
        for body in (
            {"estimated_amount": "100"},
            {"customer_name": "Nimal", "estimated_amount": "0"},
            {"customer_name": "Nimal", "estimated_amount": "100", "profit_percentage": "-1"},
        ):
            resp = view(self.factory.post("/api/v1/custom-orders/create", body, format="json"))
            self.assertEqual(resp.status_code, 400, body)
        self.assertFalse(CustomOrder.objects.exists())

    def test_list_computes_without_writing(self):
        order = make_order(branch=self.branch)
        CustomOrderPayment.objects.create(order=order, payment_amount=Decimal("2200.00"))
        make_order()

        view = CustomOrderListView.as_view()
        resp = view(self.factory.get("/api/v1/custom-orders/", {"branch_id": self.branch.pk}))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.data), 1)
        row = resp.data[0]
        self.assertEqual(row["current_payment_status"], PaymentStatus.FULLY_PAID)
        self.assertEqual(row["payment_status"], PaymentStatus.NOT_PAID)
        self.assertEqual(row["total_amount_with_profit"], "2200.00")
        self.assertEqual(row["balance_amount"], "0.00")
        self.assertEqual(row["payment_count"], 1)

        order.refresh_from_db()
        self.assertEqual(order.payment_status, PaymentStatus.NOT_PAID)

    def test_list_filters_by_status(self):
        make_order()
        done = make_order()
        update_order_status(done.pk, OrderStatus.COMPLETED)
        resp = CustomOrderListView.as_view()(self.factory.get("/api/v1/custom-orders/", {"status": "Completed"}))
        self.assertEqual([row["id"] for row in resp.data], [done.pk])

    def test_completed_orders(self):
        done = make_order(branch=self.branch)
        picked = make_order(branch=self.branch)
        make_order(branch=self.branch)
        update_order_status(done.pk, OrderStatus.COMPLETED)
        update_order_status(picked.pk, OrderStatus.COMPLETED)
        mark_picked_up(picked.pk)

        view = CompletedOrdersView.as_view()
        resp = view(self.factory.get("/api/v1/custom-orders/completed-orders", {"branch_id": self.branch.pk}))
        self.assertEqual([row["id"] for row in resp.data], [done.pk])

        resp = view(self.factory.get("/api/v1/custom-orders/completed-orders", {"include_picked_up": "true"}))
        self.assertEqual({row["id"] for row in resp.data}, {done.pk, picked.pk})

    def test_detail(self):
        order = make_order()
        record_payment(order.pk, Decimal("500"))
        view = CustomOrderDetailView.as_view()
        resp = view(self.factory.get(f"/api/v1/custom-orders/{order.pk}"), pk=order.pk)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["order_reference"], order.order_reference)
        self.assertEqual(len(resp.data["payments"]), 1)
        self.assertEqual(resp.data["remaining_payments"], 2)
        self.assertEqual(resp.data["total_paid"], "500.00")

        resp = view(self.factory.get("/api/v1/custom-orders/999999"), pk=999999)
        self.assertEqual(resp.status_code, 404)

    def test_payment_endpoint_and_limit(self):
        order = make_order()
        view = OrderPaymentsView.as_view()
        url = f"/api/v1/custom-orders/{order.pk}/payments"

        resp = view(self.factory.post(url, {"payment_amount": "500"}, format="json"), pk=order.pk)
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.data["balance_amount"], Decimal("1700.00"))
        self.assertEqual(resp.data["payment_status"], PaymentStatus.PARTIALLY_PAID)
        self.assertEqual(resp.data["remaining_payments"], 2)

        resp = view(self.factory.post(url, {"payment_amount": "-1"}, format="json"), pk=order.pk)
        self.assertEqual(resp.status_code, 400)

        for _ in range(2):
            view(self.factory.post(url, {"payment_amount": "10"}, format="json"), pk=order.pk)
        resp = view(self.factory.post(url, {"payment_amount": "10"}, format="json"), pk=order.pk)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(int(resp.data["payment_count"]), 3)

        resp = view(self.factory.post("/x", {"payment_amount": "10"}, format="json"), pk=999999)
        self.assertEqual(resp.status_code, 404)

    def test_status_endpoint(self):
        order = make_order()
        view = OrderStatusView.as_view()
        url = f"/api/v1/custom-orders/{order.pk}/status"

        resp = view(self.factory.put(url, {"order_status": "Shipped"}, format="json"), pk=order.pk)
        self.assertEqual(resp.status_code, 400)

        resp = view(self.factory.put(url, {"order_status": "Picked Up"}, format="json"), pk=order.pk)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.data["current_status"], OrderStatus.PENDING)

        resp = view(
            self.factory.put(url, {"order_status": "Completed", "supplier_notes": "polished"}, format="json"),
            pk=order.pk,
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["order_status"], OrderStatus.COMPLETED)

    def test_mark_picked_up_endpoint(self):
        order = make_order()
        view = MarkPickedUpView.as_view()
        url = f"/api/v1/custom-orders/{order.pk}/mark-as-picked-up"

        resp = view(self.factory.put(url, {}, format="json"), pk=order.pk)
        self.assertEqual(resp.status_code, 400)

        update_order_status(order.pk, OrderStatus.COMPLETED)
        resp = view(self.factory.put(url, {"pickup_notes": "ok"}, format="json"), pk=order.pk)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["order_status"], OrderStatus.PICKED_UP)
        self.assertIsNotNone(resp.data["pickup_date"])

    def test_materials_endpoint(self):
        order = make_order()
        supplier = Supplier.objects.create(supplier_name="Gem Traders")
        view = OrderMaterialsView.as_view()
        url = f"/api/v1/custom-orders/{order.pk}/materials"

        resp = view(self.factory.post(url, {"materials": []}, format="json"), pk=order.pk)
        self.assertEqual(resp.status_code, 400)

        resp = view(self.factory.post(url, {"materials": [{"material_name": "Sapphire"}]}, format="json"),
                    pk=order.pk)
        self.assertEqual(resp.status_code, 400)

        body = {"materials": [
            {"material_name": "Sapphire", "quantity": "2", "unit": "pc", "supplier_id": supplier.pk},
            {"material_name": "Silver", "quantity": "12.5"},
        ]}
        resp = view(self.factory.post(url, body, format="json"), pk=order.pk)
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.data["count"], 2)
        self.assertEqual(order.materials.get(material_name="Sapphire").supplier, supplier)

    def test_refresh_endpoint(self):
        order = make_order()
        CustomOrderPayment.objects.create(order=order, payment_amount=Decimal("100.00"))
        view = RefreshPaymentStatusView.as_view()
        url = f"/api/v1/custom-orders/{order.pk}/refresh-payment-status"

        resp = view(self.factory.post(url), pk=order.pk)
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.data["updated"])
        self.assertEqual(resp.data["payment_status"], PaymentStatus.PARTIALLY_PAID)

        resp = view(self.factory.post(url), pk=order.pk)
        self.assertFalse(resp.data["updated"])

    def test_refresh_endpoint_reports_cached_amount_correction(self):
        order = make_order()
        CustomOrderPayment.objects.create(order=order, payment_amount=Decimal("100.00"))
        # status already right, cached amount stale
        CustomOrder.objects.filter(pk=order.pk).update(payment_status=PaymentStatus.PARTIALLY_PAID)
        view = RefreshPaymentStatusView.as_view()

        resp = view(self.factory.post(f"/api/v1/custom-orders/{order.pk}/refresh-payment-status"), pk=order.pk)
        self.assertTrue(resp.data["updated"])
        self.assertEqual(resp.data["payment_status"], PaymentStatus.PARTIALLY_PAID)
        order.refresh_from_db()
        self.assertEqual(order.advance_amount, Decimal("100.00"))

    def test_history_and_summary_endpoints(self):
        order = make_order()
        record_payment(order.pk, Decimal("200"))
        resp = PaymentHistoryView.as_view()(self.factory.get("/h"), pk=order.pk)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["total_paid"], Decimal("200.00"))
        self.assertEqual(len(resp.data["payments"]), 2)

        resp = PaymentHistoryView.as_view()(self.factory.get("/h"), pk=999999)
        self.assertEqual(resp.status_code, 404)

        Category.objects.create(category_name="Bangles")
        resp = CategorySupplierSummaryView.as_view()(self.factory.get("/api/v1/custom-orders/categories/suppliers"))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data[0]["category_name"], "Bangles")
