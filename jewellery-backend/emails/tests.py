"""
Tests for the templated order email sender and its audit log.
"""
from decimal import Decimal
from io import StringIO
from unittest.mock import patch

from django.core import mail
from django.core.management import call_command
from django.test import TestCase, override_settings

from custom_orders.models import CustomOrder
from emails.models import EmailLog, EmailTemplate
from emails.services import SendResult, is_mock_backend, record_email_log, send_order_email


class SendOrderEmailTests(TestCase):
    def setUp(self):
        self.order = CustomOrder(
            pk=12,
            order_reference="CUST-2024-0012",
            customer_name="Tharindu",
            estimated_amount=Decimal("300.00"),
        )

    def test_templates_are_seeded(self):
        names = set(EmailTemplate.objects.filter(is_active=True).values_list("name", flat=True))
        self.assertTrue({"payment_reminder", "completion_notification"} <= names)

    def test_renders_and_sends(self):
        ctx = {"total_amount": Decimal("300.00"), "total_paid": Decimal("100.00"), "balance": Decimal("200.00")}
        result = send_order_email(self.order, "t@example.com", "payment_reminder", context=ctx)
        self.assertTrue(result.success)
        self.assertTrue(result.mock_email)
        self.assertTrue(result.message_id)
        msg = mail.outbox[0]
        self.assertIn("CUST-2024-0012", msg.subject)
        self.assertIn("Tharindu", msg.body)
        self.assertEqual(msg.extra_headers["Message-ID"], result.message_id)
        self.assertEqual(msg.alternatives[0][1], "text/html")

    def test_missing_template(self):
        EmailTemplate.objects.filter(name="payment_reminder").update(is_active=False)
        result = send_order_email(self.order, "t@example.com", "payment_reminder")
        self.assertFalse(result.success)
        self.assertIn("payment_reminder", result.error)
        self.assertEqual(len(mail.outbox), 0)

    def test_transport_error_is_reported_not_raised(self):
        with patch("emails.services.EmailMultiAlternatives.send", side_effect=OSError("connection refused")):
            result = send_order_email(self.order, "t@example.com", "payment_reminder")
        self.assertFalse(result.success)
        self.assertEqual(result.error, "connection refused")
        self.assertEqual(result.as_dict()["success"], False)

    @override_settings(EMAIL_BACKEND="django.core.mail.backends.smtp.EmailBackend")
    def test_smtp_backend_is_not_mock(self):
        self.assertFalse(is_mock_backend())

    def test_send_result_fields(self):
        result = SendResult(False, error="timeout")
        self.assertEqual(result, SendResult(success=False, message_id=None, mock_email=False, error="timeout"))
        self.assertEqual(
            result.as_dict(), {"success": False, "messageId": None, "mockEmail": False, "error": "timeout"},
        )


class EmailLogTests(TestCase):
    def test_status_follows_mock_flag(self):
        mock = record_email_log(1, "payment_reminder", "a@example.com", SendResult(True, "<id1>", mock_email=True))
        real = record_email_log(1, "payment_reminder", "a@example.com", SendResult(True, "<id2>"))
        self.assertEqual(mock.status, EmailLog.STATUS_MOCK_SENT)
        self.assertIsNotNone(mock.error_message)
        self.assertEqual(real.status, EmailLog.STATUS_SENT)
        self.assertIsNone(real.error_message)


class SendTestEmailCommandTests(TestCase):
    def test_sends_sample_reminder(self):
        out = StringIO()
        call_command("send_test_email", "--to", "ops@example.com", stdout=out)
        self.assertIn("payment_reminder", out.getvalue())
        self.assertEqual(mail.outbox[0].to, ["ops@example.com"])
        self.assertFalse(CustomOrder.objects.exists())
