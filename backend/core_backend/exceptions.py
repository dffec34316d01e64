"""
Error taxonomy for the order lifecycle and pricing services.

Services raise these exceptions; the DRF exception handler below turns them
into `{"error": ..., "code": ...}` responses with the matching status code.
"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class OrderingError(Exception):
    """Base exception for all domain errors."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "error"
    default_message = "Request could not be processed."

    def __init__(self, message=None, code=None):
        self.message = message or self.default_message
        self.code = code or self.default_code
        super().__init__(self.message)


class ValidationError(OrderingError):
    """Raised when input is missing or malformed. Nothing has been written."""

    default_code = "validation_error"
    default_message = "Invalid input."


class NotFound(OrderingError):
    status_code = status.HTTP_404_NOT_FOUND
    default_code = "not_found"
    default_message = "Not found."


class ServiceNotFound(NotFound):
    default_code = "service_not_found"

    def __init__(self, service_id, message=None):
        self.service_id = service_id
        super().__init__(message or f"Service not found: {service_id}")


class ServiceNotInOrder(NotFound):
    default_code = "service_not_in_order"

    def __init__(self, order_id, service_id):
        self.order_id = order_id
        self.service_id = service_id
        super().__init__(f"Service {service_id} not found in order {order_id}")


class OrderNotFound(NotFound):
    default_code = "order_not_found"
    default_message = "Order not found"


class VoucherNotFound(NotFound):
    default_code = "voucher_not_found"
    default_message = "Voucher not found"


class UserNotFound(NotFound):
    default_code = "user_not_found"
    default_message = "User not found"


class CartItemNotFound(NotFound):
    default_code = "cart_item_not_found"
    default_message = "Service not found in cart"


class NotificationNotFound(NotFound):
    default_code = "notification_not_found"
    default_message = "Notification not found"


class BusinessRuleViolation(OrderingError):
    default_code = "business_rule_violation"
    default_message = "Request violates a business rule."


class OutsideOperatingHours(BusinessRuleViolation):
    default_code = "outside_operating_hours"


class VoucherNotApplicable(BusinessRuleViolation):
    default_code = "voucher_not_applicable"
    default_message = "Voucher is not applicable for the selected services"


class VoucherExhausted(BusinessRuleViolation):
    default_code = "voucher_exhausted"
    default_message = "Voucher usage limit has been reached"


class EmptyCart(BusinessRuleViolation):
    default_code = "empty_cart"
    default_message = "Cart is empty"


class InvalidStatusTransition(BusinessRuleViolation):
    default_code = "invalid_status_transition"

    def __init__(self, track, current, requested, message=None):
        self.track = track
        self.current = current
        self.requested = requested
        super().__init__(
            message or f"Cannot transition {track} from '{current}' to '{requested}'."
        )


class AuthorizationError(OrderingError):
    status_code = status.HTTP_403_FORBIDDEN
    default_code = "not_authorized"
    default_message = "You are not authorized to perform this action."


def laundry_exception_handler(exc, context):
    """
    Render domain errors as structured responses; defer everything else to DRF.
    """
    if isinstance(exc, OrderingError):
        request = context.get("request")
        logger.warning(
            f"{exc.__class__.__name__} on {getattr(request, 'method', '?')} "
            f"{getattr(request, 'path', '?')}: {exc.message}"
        )
        return Response(
            {"error": exc.message, "code": exc.code}, status=exc.status_code
        )

    return exception_handler(exc, context)
