import logging
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from django.db import IntegrityError, transaction
from django.utils import timezone

from business_hours.services import BusinessHoursService
from cart.services import CartService
from catalog.models import Service
from core_backend.exceptions import (
    AuthorizationError,
    OrderNotFound,
    ServiceNotInOrder,
    ValidationError,
)
from notifications.models import Notification
from notifications.services import NotificationService
from orders.calculators import DurationAggregator, PricingCalculator
from orders.models import Order, OrderItem
from users.models import User
from users.services import UserDirectory
from vouchers.services import VoucherService

logger = logging.getLogger(__name__)


class OrderService:
    """
    Core service for order lifecycle management: creation, queries,
    image attachment and deletion. Status changes live in OrderStatusService.
    """

    MAX_ORDER_ID_RETRIES = 5

    IMAGE_FIELDS = {
        "before": "before_service_images",
        "after": "after_service_images",
    }

    # --- Creation ---

    @staticmethod
    @transaction.atomic
    def create_order(user: User, data: Dict, now: Optional[datetime] = None) -> Order:
        """
        Create an order from explicit line items.

        `data` carries "services" ([{"service_id", "qty"}]), "phone",
        "payment_method", "delivery_option" and optionally "address",
        "shipping_cost", "voucher_code" and "order_id".
        """
        now = now or timezone.now()
        BusinessHoursService.ensure_open(now)

        resolved = PricingCalculator.resolve_line_items(data.get("services"))
        return OrderService._place_order(user, resolved, data, now)

    @staticmethod
    @transaction.atomic
    def create_order_from_cart(user: User, data: Dict, now: Optional[datetime] = None) -> Order:
        """
        Create an order from the selected lines of the user's cart.

        `data["selected_services"]` lists service ids. Only the selected
        lines are removed from the cart, and only once the order exists.
        """
        now = now or timezone.now()
        BusinessHoursService.ensure_open(now)

        cart_items = CartService.select_items(user, data.get("selected_services"))
        resolved = [(item.service, item.qty) for item in cart_items]

        order = OrderService._place_order(user, resolved, data, now)
        CartService.consume_items(cart_items)
        return order

    @staticmethod
    def _place_order(
        user: User,
        resolved: List[Tuple[Service, int]],
        data: Dict,
        now: datetime,
    ) -> Order:
        """Must be called inside transaction.atomic()."""
        delivery_option = data.get("delivery_option")
        address = (data.get("address") or "").strip()
        shipping_cost = data.get("shipping_cost")

        if delivery_option not in Order.DeliveryOption.values:
            raise ValidationError(f"Invalid delivery option: {delivery_option}")
        if data.get("payment_method") not in Order.PaymentMethod.values:
            raise ValidationError(f"Invalid payment method: {data.get('payment_method')}")

        if delivery_option == Order.DeliveryOption.PICKUP_BY_LAUNDRY:
            if not address:
                raise ValidationError("Address is required for pickup by laundry")
            if shipping_cost is None:
                raise ValidationError("Shipping cost is required for pickup by laundry")
        shipping_cost = Decimal(shipping_cost or 0)
        if shipping_cost < 0:
            raise ValidationError("Shipping cost cannot be negative")

        subtotal = PricingCalculator.subtotal_for(resolved)
        discount = Decimal("0.00")
        voucher = None

        voucher_code = data.get("voucher_code")
        if voucher_code:
            voucher = VoucherService.get_by_code(voucher_code)
            VoucherService.redeem(
                voucher, user, [service.pk for service, _ in resolved], now
            )
            discount = PricingCalculator.apply_discount(voucher, subtotal)

        order = OrderService._insert_order(
            data.get("order_id"),
            user=user,
            phone=data.get("phone") or user.phone or "",
            address=address,
            delivery_option=delivery_option,
            payment_method=data.get("payment_method"),
            subtotal=subtotal,
            discount=discount,
            shipping_cost=shipping_cost,
            total=PricingCalculator.compute_total(subtotal, discount, shipping_cost),
            voucher_applied=voucher,
            estimated_finish_time=DurationAggregator.estimated_finish_time(
                now, [service for service, _ in resolved]
            ),
            created_at=now,
        )

        OrderItem.objects.bulk_create(
            [
                OrderItem(order=order, service=service, qty=qty, price_at_order=service.price)
                for service, qty in resolved
            ]
        )

        logger.info(
            f"Order {order.order_id} created for user {user.pk}: "
            f"subtotal={subtotal} discount={discount} total={order.total}"
        )

        NotificationService.notify(
            Notification.Type.NEW_ORDER,
            f"New order received: {order.order_id}",
            UserDirectory.find_admins(),
            related_order=order,
            for_role=User.Role.ADMIN,
        )
        return order

    @staticmethod
    def _insert_order(order_id: Optional[str], **fields) -> Order:
        """
        Persist the order row. A supplied order_id must be unused; a
        generated one is retried on collision.
        """
        if order_id:
            order_id = str(order_id).strip()
            if Order.objects.filter(order_id=order_id).exists():
                raise ValidationError(f"Order ID {order_id} already exists")
            return Order.objects.create(order_id=order_id, **fields)

        for _ in range(OrderService.MAX_ORDER_ID_RETRIES):
            try:
                with transaction.atomic():
                    return Order.objects.create(
                        order_id=Order.generate_order_id(fields.get("created_at")),
                        **fields,
                    )
            except IntegrityError:
                logger.warning("Generated order ID collided, retrying")
        raise ValidationError("Failed to generate a unique order ID")

    # --- Queries ---

    @staticmethod
    def base_queryset():
        return Order.objects.select_related("user", "voucher_applied").prefetch_related(
            "items__service"
        )

    @staticmethod
    def get_order(order_id: str) -> Order:
        try:
            return OrderService.base_queryset().get(order_id=order_id)
        except Order.DoesNotExist:
            raise OrderNotFound()

    @staticmethod
    def get_order_for_user(order_id: str, user: User) -> Order:
        order = OrderService.get_order(order_id)
        if not user.is_admin_role and order.user_id != user.pk:
            raise AuthorizationError("Not authorized to view this order")
        return order

    @staticmethod
    def list_orders():
        return OrderService.base_queryset().order_by("-created_at", "-id")

    @staticmethod
    def list_orders_for_user(user: User):
        return OrderService.list_orders().filter(user=user)

    # --- Images ---

    @staticmethod
    def normalize_images(images) -> List[Dict]:
        """Accept links as plain strings or {"link": ...} objects."""
        normalized = []
        for image in images or []:
            if isinstance(image, str):
                normalized.append({"link": image})
            elif isinstance(image, dict) and image.get("link"):
                normalized.append({"link": image["link"]})
            else:
                raise ValidationError(f"Invalid image: {image!r}")
        return normalized

    @staticmethod
    @transaction.atomic
    def attach_images(order: Order, service_id, images, stage: str) -> OrderItem:
        """Replace the before/after images of the line for `service_id`."""
        field = OrderService.IMAGE_FIELDS.get(stage)
        if field is None:
            raise ValidationError(f"Unknown image stage: {stage}")

        try:
            item = order.items.select_for_update().get(service_id=int(service_id))
        except (OrderItem.DoesNotExist, TypeError, ValueError):
            raise ServiceNotInOrder(order.order_id, service_id)

        setattr(item, field, OrderService.normalize_images(images))
        item.save(update_fields=[field])
        logger.info(
            f"Attached {len(getattr(item, field))} {stage}-service image(s) "
            f"to service {item.service_id} of order {order.order_id}"
        )
        return item

    # --- Deletion ---

    @staticmethod
    @transaction.atomic
    def delete_order(order: Order) -> None:
        """
        Delete the order and tell its owner. Voucher usage is not given back.
        """
        order_id = order.order_id
        owner = order.user
        order.delete()

        logger.info(f"Order {order_id} deleted")
        NotificationService.notify_user(
            owner,
            Notification.Type.ORDER_DELETED,
            f"Your order {order_id} has been deleted by the admin",
        )
