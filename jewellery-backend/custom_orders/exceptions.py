# custom_orders/exceptions.py
from rest_framework import status
from rest_framework.exceptions import APIException, NotFound, ValidationError


class OrderNotFound(NotFound):
    default_detail = "Custom order not found"
    default_code = "order_not_found"


class InvalidAmount(ValidationError):
    default_detail = "Invalid payment amount"
    default_code = "invalid_amount"


class PaymentLimitReached(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "payment_limit_reached"

    def __init__(self, payment_count: int, limit: int):
        self.payment_count = payment_count
        self.limit = limit
        super().__init__({
            "detail": f"Payment limit reached. Custom orders can only have a maximum of {limit} payments.",
            "payment_count": payment_count,
        })


class PickupNotAllowed(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "pickup_not_allowed"

    def __init__(self, current_status: str):
        self.current_status = current_status
        super().__init__({
            "detail": "Order must be in 'Completed' status to be marked as picked up",
            "current_status": current_status,
        })


class MissingCustomerEmail(ValidationError):
    default_detail = "Customer email not available for this order"
    default_code = "missing_customer_email"


class UnsupportedFileType(ValidationError):
    default_detail = "Only image files are allowed!"
    default_code = "unsupported_file_type"


class FileTooLarge(ValidationError):
    default_code = "file_too_large"


class NotificationError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code = "notification_failed"

    def __init__(self, message: str, error: str = None):
        self.error = error
        super().__init__({"detail": message, "error": error})
