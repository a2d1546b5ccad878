# custom_orders/notifications.py
"""
Customer emails for custom orders.

Both triggers read the payment position fresh from the payment tables, so the
figures in the email match the ledger at send time, not the cached columns on
the order. Sending never changes order or payment state.
"""
import logging

from emails.services import send_order_email, record_email_log
from .exceptions import MissingCustomerEmail, NotificationError
from .services import get_order, payment_position

logger = logging.getLogger(__name__)

PAYMENT_REMINDER = "payment_reminder"
COMPLETION_NOTIFICATION = "completion_notification"
DEFAULT_PICKUP_LOCATION = "our store"


def _recipient(order) -> str:
    email = (order.customer_email or "").strip()
    if not email:
        raise MissingCustomerEmail()
    return email


def _audit(order, kind: str, recipient: str, result) -> None:
    try:
        record_email_log(order.pk, kind, recipient, result)
    except Exception:
        logger.exception("Could not write email log for order %s (%s)", order.pk, kind)


def _deliver(order, recipient: str, kind: str, context: dict, failure_message: str) -> dict:
    result = send_order_email(order, recipient, kind, context=context)
    if not result.success:
        logger.error("%s for order %s failed: %s", kind, order.pk, result.error)
        raise NotificationError(failure_message, result.error)

    _audit(order, kind, recipient, result)
    return {
        "success": True,
        "messageId": result.message_id,
        "isMockEmail": result.mock_email,
    }


def send_payment_reminder(order_id) -> dict:
    order = get_order(order_id)
    recipient = _recipient(order)
    position = payment_position(order)

    context = {
        "total_amount": position.price,
        "total_paid": position.total_paid,
        "balance": position.balance,
    }
    payload = _deliver(order, recipient, PAYMENT_REMINDER, context, "Failed to send payment reminder")
    payload["message"] = f"Payment reminder sent to {recipient}"
    payload["balance"] = position.balance
    return payload


def send_completion_notification(order_id, pickup_location=None) -> dict:
    """
    Tell the customer the piece is ready. The pickup location falls back to
    the order's branch name, then to a generic label.
    """
    order = get_order(order_id)
    recipient = _recipient(order)
    position = payment_position(order)

    branch = order.branch
    location = (pickup_location or "").strip() or (branch.branch_name if branch else "") or DEFAULT_PICKUP_LOCATION
    context = {
        "total_amount": position.price,
        "total_paid": position.total_paid,
        "remaining_balance": position.balance,
        "pickup_location": location,
        "branch_address": branch.location if branch else "",
        "branch_phone": branch.contact_number if branch else "",
    }
    payload = _deliver(
        order, recipient, COMPLETION_NOTIFICATION, context, "Failed to send completion notification",
    )
    payload["message"] = f"Completion notification sent to {recipient}"
    payload["remaining_balance"] = position.balance
    payload["pickup_location"] = location
    return payload
