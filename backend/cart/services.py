"""
Cart service layer.

This service handles:
- Cart retrieval and creation for the authenticated user
- Adding/updating/removing lines
- Selecting and consuming lines when an order is created from the cart

Every mutation runs in a transaction that first locks the user's cart row,
so concurrent requests for the same user are applied one after another.
"""

import logging
from typing import Iterable, List, Optional

from django.db import transaction

from catalog.services import CatalogService
from core_backend.exceptions import CartItemNotFound, EmptyCart, ValidationError
from .models import Cart, CartItem

logger = logging.getLogger(__name__)


class CartService:
    """Service for managing cart operations."""

    @staticmethod
    def get_cart(user) -> Optional[Cart]:
        return Cart.objects.filter(user=user).first()

    @staticmethod
    def get_or_create_cart(user) -> Cart:
        cart, created = Cart.objects.get_or_create(user=user)
        if created:
            logger.info(f"Created new cart {cart.id} for user {user.pk}")
        return cart

    @staticmethod
    def _lock_cart(user) -> Cart:
        """Must be called inside transaction.atomic()."""
        cart, created = Cart.objects.select_for_update().get_or_create(user=user)
        if created:
            logger.info(f"Created new cart {cart.id} for user {user.pk}")
        return cart

    @staticmethod
    def _validate_qty(qty) -> int:
        try:
            qty = int(qty)
        except (TypeError, ValueError):
            raise ValidationError("Quantity must be a whole number")
        if qty <= 0:
            raise ValidationError("Quantity must be greater than 0")
        return qty

    @staticmethod
    @transaction.atomic
    def add_item(user, service_id, qty: int = 1) -> Cart:
        """
        Add a service to the user's cart, merging with an existing line.
        """
        qty = CartService._validate_qty(qty)
        service = CatalogService.find_service(service_id)
        cart = CartService._lock_cart(user)

        item = CartItem.objects.filter(cart=cart, service=service).first()
        if item:
            item.qty += qty
            item.save(update_fields=["qty", "updated_at"])
        else:
            CartItem.objects.create(cart=cart, service=service, qty=qty)

        cart.touch()
        logger.info(f"Added {qty} x service {service.pk} to cart {cart.id}")
        return cart

    @staticmethod
    @transaction.atomic
    def update_item_quantity(user, service_id, qty: int) -> Cart:
        qty = CartService._validate_qty(qty)
        cart = CartService._lock_cart(user)

        updated = CartItem.objects.filter(cart=cart, service_id=service_id).update(qty=qty)
        if not updated:
            raise CartItemNotFound()

        cart.touch()
        return cart

    @staticmethod
    @transaction.atomic
    def remove_item(user, service_id) -> Cart:
        """Remove a line. Removing a service that is not in the cart is a no-op."""
        cart = CartService._lock_cart(user)
        deleted, _ = CartItem.objects.filter(cart=cart, service_id=service_id).delete()
        if deleted:
            cart.touch()
        return cart

    @staticmethod
    @transaction.atomic
    def clear_cart(user) -> Cart:
        cart = CartService._lock_cart(user)
        cart.items.all().delete()
        cart.touch()
        return cart

    @staticmethod
    def select_items(user, service_ids: Iterable) -> List[CartItem]:
        """
        Lock the cart and return the lines matching `service_ids`.

        Must be called inside transaction.atomic(); the lock is held until
        the caller's order is persisted and the lines are consumed.
        """
        service_ids = list(service_ids or [])
        if not service_ids:
            raise ValidationError("No services selected for order")

        cart = Cart.objects.select_for_update().filter(user=user).first()
        if cart is None or not cart.items.exists():
            raise EmptyCart()

        wanted = set()
        for service_id in service_ids:
            try:
                wanted.add(int(service_id))
            except (TypeError, ValueError):
                raise ValidationError(f"Invalid service id: {service_id!r}")

        selected = list(
            cart.items.select_related("service").filter(service_id__in=wanted)
        )
        if not selected:
            raise ValidationError("No valid services selected from cart")
        return selected

    @staticmethod
    def consume_items(items: Iterable[CartItem]) -> int:
        """Delete the given lines from their cart. Returns the number removed."""
        ids = [item.pk for item in items]
        deleted, _ = CartItem.objects.filter(pk__in=ids).delete()
        logger.info(f"Consumed {deleted} cart line(s)")
        return deleted
