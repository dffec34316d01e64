"""
Status transitions for the three independent order tracks.

Each track has its own transition table; a request is accepted only if the
requested status is listed for the current one. Every accepted transition
stamps the track's timestamp field and notifies the order's owner.

    payment   pending <-> settlement (admin, COD orders only)
              pending -> settlement | failed | expired (payment gateway)
    order     pending -> confirmed -> received -> queue -> processing -> finished,
              cancelled from any unfinished state
    delivery  pending -> pickup_scheduled -> picked_up -> ready_for_delivery
              -> out_for_delivery -> delivered, delivery_failed once pickup is scheduled
"""

import logging
from datetime import datetime
from typing import Dict, Optional, Set

from django.db import transaction
from django.utils import timezone

from core_backend.exceptions import (
    BusinessRuleViolation,
    InvalidStatusTransition,
    ValidationError,
)
from notifications.models import Notification
from notifications.services import NotificationService
from orders.models import Order

logger = logging.getLogger(__name__)

PaymentStatus = Order.PaymentStatus
OrderStatus = Order.OrderStatus
DeliveryStatus = Order.DeliveryStatus


class OrderStatusService:
    ORDER_TRANSITIONS: Dict[str, Set[str]] = {
        OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
        OrderStatus.CONFIRMED: {OrderStatus.RECEIVED, OrderStatus.CANCELLED},
        OrderStatus.RECEIVED: {OrderStatus.QUEUE, OrderStatus.CANCELLED},
        OrderStatus.QUEUE: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
        OrderStatus.PROCESSING: {OrderStatus.FINISHED, OrderStatus.CANCELLED},
        OrderStatus.FINISHED: set(),
        OrderStatus.CANCELLED: set(),
    }

    DELIVERY_TRANSITIONS: Dict[str, Set[str]] = {
        DeliveryStatus.PENDING: {DeliveryStatus.PICKUP_SCHEDULED},
        DeliveryStatus.PICKUP_SCHEDULED: {
            DeliveryStatus.PICKED_UP,
            DeliveryStatus.DELIVERY_FAILED,
        },
        DeliveryStatus.PICKED_UP: {
            DeliveryStatus.READY_FOR_DELIVERY,
            DeliveryStatus.DELIVERY_FAILED,
        },
        DeliveryStatus.READY_FOR_DELIVERY: {
            DeliveryStatus.OUT_FOR_DELIVERY,
            DeliveryStatus.DELIVERY_FAILED,
        },
        DeliveryStatus.OUT_FOR_DELIVERY: {
            DeliveryStatus.DELIVERED,
            DeliveryStatus.DELIVERY_FAILED,
        },
        DeliveryStatus.DELIVERED: set(),
        DeliveryStatus.DELIVERY_FAILED: set(),
    }

    COD_PAYMENT_TRANSITIONS: Dict[str, Set[str]] = {
        PaymentStatus.PENDING: {PaymentStatus.SETTLEMENT},
        PaymentStatus.SETTLEMENT: {PaymentStatus.PENDING},
    }

    GATEWAY_PAYMENT_TRANSITIONS: Dict[str, Set[str]] = {
        PaymentStatus.PENDING: {
            PaymentStatus.SETTLEMENT,
            PaymentStatus.FAILED,
            PaymentStatus.EXPIRED,
        },
        PaymentStatus.SETTLEMENT: set(),
        PaymentStatus.FAILED: set(),
        PaymentStatus.EXPIRED: set(),
    }

    ORDER_TIMESTAMP_FIELDS = {
        OrderStatus.CONFIRMED: "confirmed_at",
        OrderStatus.RECEIVED: "received_at",
        OrderStatus.QUEUE: "queue_at",
        OrderStatus.PROCESSING: "processing_at",
        OrderStatus.FINISHED: "finished_at",
        OrderStatus.CANCELLED: "cancelled_at",
    }

    DELIVERY_TIMESTAMP_FIELDS = {
        DeliveryStatus.PICKUP_SCHEDULED: "pickup_scheduled_at",
        DeliveryStatus.PICKED_UP: "picked_up_at",
        DeliveryStatus.READY_FOR_DELIVERY: "ready_for_delivery_at",
        DeliveryStatus.OUT_FOR_DELIVERY: "out_for_delivery_at",
        DeliveryStatus.DELIVERED: "delivered_at",
        DeliveryStatus.DELIVERY_FAILED: "delivery_failed_at",
    }

    @staticmethod
    def _lock(order: Order) -> Order:
        return Order.objects.select_for_update().select_related("user").get(pk=order.pk)

    @staticmethod
    def _check_transition(track: str, table: Dict[str, Set[str]], current: str, requested: str):
        if requested not in table.get(current, set()):
            logger.warning(f"Rejected {track} transition {current} -> {requested}")
            raise InvalidStatusTransition(track, current, requested)

    @staticmethod
    def _confirm_on_settlement(order: Order, now: datetime, update_fields: list) -> None:
        """A settled payment confirms a pending order; later states are left alone."""
        if order.order_status == OrderStatus.PENDING:
            order.order_status = OrderStatus.CONFIRMED
            order.confirmed_at = now
            update_fields += ["order_status", "confirmed_at"]

    # --- Fulfilment track ---

    @staticmethod
    @transaction.atomic
    def update_order_status(order: Order, new_status: str, now: Optional[datetime] = None) -> Order:
        if new_status not in OrderStatus.values:
            raise ValidationError(f"'{new_status}' is not a valid order status.")

        order = OrderStatusService._lock(order)
        OrderStatusService._check_transition(
            "order status",
            OrderStatusService.ORDER_TRANSITIONS,
            order.order_status,
            new_status,
        )

        now = now or timezone.now()
        timestamp_field = OrderStatusService.ORDER_TIMESTAMP_FIELDS[new_status]
        order.order_status = new_status
        setattr(order, timestamp_field, now)
        order.save(update_fields=["order_status", timestamp_field, "updated_at"])

        logger.info(f"Order {order.order_id} status -> {new_status}")
        NotificationService.notify_user(
            order.user,
            Notification.Type.ORDER_STATUS,
            f"Your order {order.order_id} status has been updated to {new_status}",
            related_order=order,
        )
        return order

    # --- Delivery track ---

    @staticmethod
    @transaction.atomic
    def update_delivery_status(order: Order, new_status: str, now: Optional[datetime] = None) -> Order:
        if new_status not in DeliveryStatus.values:
            raise ValidationError(f"'{new_status}' is not a valid delivery status.")

        order = OrderStatusService._lock(order)
        OrderStatusService._check_transition(
            "delivery status",
            OrderStatusService.DELIVERY_TRANSITIONS,
            order.delivery_status,
            new_status,
        )

        now = now or timezone.now()
        timestamp_field = OrderStatusService.DELIVERY_TIMESTAMP_FIELDS[new_status]
        order.delivery_status = new_status
        setattr(order, timestamp_field, now)
        order.save(update_fields=["delivery_status", timestamp_field, "updated_at"])

        logger.info(f"Order {order.order_id} delivery status -> {new_status}")
        NotificationService.notify_user(
            order.user,
            Notification.Type.DELIVERY_STATUS,
            f"Delivery status for your order {order.order_id} has been updated to {new_status}",
            related_order=order,
        )
        return order

    # --- Payment track ---

    @staticmethod
    @transaction.atomic
    def update_cod_payment_status(order: Order, new_status: str, now: Optional[datetime] = None) -> Order:
        """
        Admin-driven payment change, only for cash-on-delivery orders.
        Settlement also confirms a pending order.
        """
        order = OrderStatusService._lock(order)
        if not order.is_cod:
            raise BusinessRuleViolation("Payment status can only be updated for COD orders")
        if new_status not in OrderStatusService.COD_PAYMENT_TRANSITIONS:
            raise ValidationError("Invalid payment status")

        OrderStatusService._check_transition(
            "payment status",
            OrderStatusService.COD_PAYMENT_TRANSITIONS,
            order.payment_status,
            new_status,
        )

        now = now or timezone.now()
        update_fields = ["payment_status", "payment_status_updated_at", "updated_at"]
        order.payment_status = new_status
        order.payment_status_updated_at = now
        if new_status == PaymentStatus.SETTLEMENT:
            OrderStatusService._confirm_on_settlement(order, now, update_fields)
        order.save(update_fields=update_fields)

        logger.info(f"COD order {order.order_id} payment status -> {new_status}")
        NotificationService.notify_user(
            order.user,
            Notification.Type.PAYMENT_STATUS_UPDATE,
            f"Payment status for your COD order {order.order_id} has been updated to {new_status}",
            related_order=order,
        )
        return order

    @staticmethod
    @transaction.atomic
    def apply_gateway_payment_status(order: Order, new_status: str, now: Optional[datetime] = None) -> Order:
        """
        Apply a payment status reported by the payment gateway.

        Gateways repeat their callbacks, so re-reporting the current status
        is accepted and changes nothing.
        """
        if new_status not in PaymentStatus.values:
            raise ValidationError(f"'{new_status}' is not a valid payment status.")

        order = OrderStatusService._lock(order)
        if order.payment_status == new_status:
            logger.info(f"Order {order.order_id} already has payment status {new_status}")
            return order

        OrderStatusService._check_transition(
            "payment status",
            OrderStatusService.GATEWAY_PAYMENT_TRANSITIONS,
            order.payment_status,
            new_status,
        )

        now = now or timezone.now()
        update_fields = ["payment_status", "payment_status_updated_at", "updated_at"]
        order.payment_status = new_status
        order.payment_status_updated_at = now
        if new_status == PaymentStatus.SETTLEMENT:
            OrderStatusService._confirm_on_settlement(order, now, update_fields)
        order.save(update_fields=update_fields)

        logger.info(f"Order {order.order_id} payment status -> {new_status} (gateway)")
        NotificationService.notify_user(
            order.user,
            Notification.Type.PAYMENT_STATUS_UPDATE,
            f"Payment status for your order {order.order_id} has been updated to {new_status}",
            related_order=order,
        )
        return order
