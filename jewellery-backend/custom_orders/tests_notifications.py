"""
Tests for payment reminders and completion notifications.

The test runner swaps in the locmem mail backend, so every successful send is
recorded as a mock send.
"""
from decimal import Decimal
from unittest.mock import patch

from django.core import mail
from django.db import DatabaseError
from django.test import TestCase
from rest_framework.test import APIRequestFactory

from custom_orders.exceptions import MissingCustomerEmail, NotificationError
from custom_orders.models import CustomOrderPayment
from custom_orders.notifications import send_completion_notification, send_payment_reminder
from custom_orders.services import create_order, record_payment
from custom_orders.views import SendCompletionNotificationView, SendReminderView
from emails.models import EmailLog
from emails.services import SendResult
from stores.models import Branch


class NotificationTestBase(TestCase):
    def setUp(self):
        self.branch = Branch.objects.create(branch_name="Kandy City Centre", location="Dalada Veediya")
        self.order = create_order(
            customer_name="Ruwani",
            customer_email="ruwani@example.com",
            estimated_amount=Decimal("1000.00"),
            profit_percentage=Decimal("10"),
            quantity=2,
            branch=self.branch,
        )


class PaymentReminderTests(NotificationTestBase):
    def test_reminder_uses_current_ledger_figures(self):
        record_payment(self.order.pk, Decimal("500"))
        # entered behind the service's back; the reminder must still see it
        CustomOrderPayment.objects.create(order=self.order, payment_amount=Decimal("200.00"))

        result = send_payment_reminder(self.order.pk)

        self.assertTrue(result["success"])
        self.assertTrue(result["isMockEmail"])
        self.assertEqual(result["balance"], Decimal("1500.00"))
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["ruwani@example.com"])
        self.assertIn(self.order.order_reference, mail.outbox[0].subject)
        self.assertIn("1500.00", mail.outbox[0].body)

        log = EmailLog.objects.get(order_id=self.order.pk)
        self.assertEqual(log.email_type, "payment_reminder")
        self.assertEqual(log.status, EmailLog.STATUS_MOCK_SENT)
        self.assertEqual(log.message_id, result["messageId"])

    def test_missing_email(self):
        self.order.customer_email = ""
        self.order.save()
        with self.assertRaises(MissingCustomerEmail):
            send_payment_reminder(self.order.pk)
        self.assertEqual(len(mail.outbox), 0)
        self.assertFalse(EmailLog.objects.exists())

    def test_send_failure_raises_and_keeps_order_state(self):
        record_payment(self.order.pk, Decimal("500"))
        failed = SendResult(False, error="SMTP connection refused")
        with patch("custom_orders.notifications.send_order_email", return_value=failed):
            with self.assertRaises(NotificationError) as ctx:
                send_payment_reminder(self.order.pk)
        self.assertEqual(ctx.exception.error, "SMTP connection refused")
        self.assertFalse(EmailLog.objects.exists())
        self.assertEqual(CustomOrderPayment.objects.filter(order=self.order).count(), 1)

    def test_audit_log_failure_is_swallowed(self):
        with patch("custom_orders.notifications.record_email_log", side_effect=DatabaseError("locked")):
            with self.assertLogs("custom_orders.notifications", level="ERROR"):
                result = send_payment_reminder(self.order.pk)
        self.assertTrue(result["success"])
        self.assertEqual(len(mail.outbox), 1)

    def test_reminder_endpoint(self):
        factory = APIRequestFactory()
        view = SendReminderView.as_view()
        resp = view(factory.post(f"/api/v1/custom-orders/{self.order.pk}/send-reminder"), pk=self.order.pk)
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.data["isMockEmail"])

        resp = view(factory.post("/api/v1/custom-orders/999999/send-reminder"), pk=999999)
        self.assertEqual(resp.status_code, 404)

        with patch("custom_orders.notifications.send_order_email", return_value=SendResult(False, error="down")):
            resp = view(factory.post("/x"), pk=self.order.pk)
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.data["error"], "down")


class CompletionNotificationTests(NotificationTestBase):
    def test_includes_remaining_balance_and_branch(self):
        record_payment(self.order.pk, Decimal("2000"))
        result = send_completion_notification(self.order.pk)

        self.assertTrue(result["success"])
        self.assertEqual(result["remaining_balance"], Decimal("200.00"))
        self.assertEqual(result["pickup_location"], "Kandy City Centre")
        body = mail.outbox[0].body
        self.assertIn("Kandy City Centre", body)
        self.assertIn("200.00", body)
        self.assertEqual(
            EmailLog.objects.get(order_id=self.order.pk).email_type, "completion_notification",
        )

    def test_explicit_location_and_fully_paid(self):
        record_payment(self.order.pk, Decimal("2200"))
        result = send_completion_notification(self.order.pk, pickup_location="Head Office")
        self.assertEqual(result["pickup_location"], "Head Office")
        self.assertEqual(result["remaining_balance"], Decimal("0.00"))
        self.assertIn("fully paid", mail.outbox[0].body)

    def test_location_falls_back_to_generic_label(self):
        self.order.branch = None
        self.order.save()
        result = send_completion_notification(self.order.pk)
        self.assertEqual(result["pickup_location"], "our store")

    def test_endpoint(self):
        factory = APIRequestFactory()
        view = SendCompletionNotificationView.as_view()
        req = factory.post("/x", {"pickup_location": "Galle Fort"}, format="json")
        resp = view(req, pk=self.order.pk)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["pickup_location"], "Galle Fort")
