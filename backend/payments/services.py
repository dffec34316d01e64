"""
Payment-gateway callback handling.

The gateway creates and settles transactions on its own; this service only
verifies its status notifications and hands the mapped status to the
order's payment track.
"""

import hashlib
import hmac
import logging
from typing import Dict, Optional

from django.conf import settings

from core_backend.exceptions import AuthorizationError, ValidationError
from orders.models import Order
from orders.services import OrderService, OrderStatusService

logger = logging.getLogger(__name__)


class PaymentGatewayService:
    # Gateway transaction_status -> Order.PaymentStatus
    STATUS_MAP = {
        "settlement": Order.PaymentStatus.SETTLEMENT,
        "capture": Order.PaymentStatus.SETTLEMENT,
        "pending": Order.PaymentStatus.PENDING,
        "expire": Order.PaymentStatus.EXPIRED,
        "cancel": Order.PaymentStatus.FAILED,
        "deny": Order.PaymentStatus.FAILED,
        "failure": Order.PaymentStatus.FAILED,
    }

    @staticmethod
    def compute_signature(order_id: str, status_code: str, gross_amount: str, server_key: str) -> str:
        payload = f"{order_id}{status_code}{gross_amount}{server_key}"
        return hashlib.sha512(payload.encode("utf-8")).hexdigest()

    @staticmethod
    def verify_signature(payload: Dict, server_key: Optional[str] = None) -> bool:
        """
        sha512(order_id + status_code + gross_amount + server_key).

        With no server key configured, verification is skipped under DEBUG
        and every notification is rejected otherwise.
        """
        server_key = server_key if server_key is not None else settings.PAYMENT_GATEWAY_SERVER_KEY
        if not server_key:
            if settings.DEBUG:
                logger.warning("PAYMENT_GATEWAY_SERVER_KEY is not set; skipping signature check")
                return True
            logger.error("PAYMENT_GATEWAY_SERVER_KEY is not set; rejecting gateway notification")
            return False

        expected = PaymentGatewayService.compute_signature(
            payload.get("order_id", ""),
            payload.get("status_code", ""),
            payload.get("gross_amount", ""),
            server_key,
        )
        return hmac.compare_digest(expected, payload.get("signature_key") or "")

    @staticmethod
    def map_status(transaction_status: str) -> str:
        try:
            return PaymentGatewayService.STATUS_MAP[(transaction_status or "").lower()]
        except KeyError:
            raise ValidationError(f"Unsupported transaction status: {transaction_status}")

    @staticmethod
    def handle_notification(payload: Dict) -> Order:
        if not PaymentGatewayService.verify_signature(payload):
            logger.error(f"Rejected gateway notification for order {payload.get('order_id')}: bad signature")
            raise AuthorizationError("Invalid signature")

        payment_status = PaymentGatewayService.map_status(payload.get("transaction_status"))
        order = OrderService.get_order(payload.get("order_id"))
        return OrderStatusService.apply_gateway_payment_status(order, payment_status)
