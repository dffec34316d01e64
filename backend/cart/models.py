from decimal import Decimal

from django.conf import settings
from django.db import models


class Cart(models.Model):
    """
    Per-user mapping of service to quantity.

    Lifecycle:
    1. Created on first "Add to Cart"
    2. Modified as the user adds/updates/removes lines
    3. Partially consumed when an order is created from selected lines
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="cart"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Cart"
        verbose_name_plural = "Carts"

    def __str__(self):
        return f"Cart for {self.user}"

    @property
    def item_count(self):
        return self.items.count()

    def calculate_subtotal(self) -> Decimal:
        """Current catalog prices; the cart stores no totals."""
        return sum(
            (item.get_total_price() for item in self.items.select_related("service")),
            Decimal("0.00"),
        )

    def touch(self):
        self.save(update_fields=["updated_at"])


class CartItem(models.Model):
    cart = models.ForeignKey(Cart, on_delete=models.CASCADE, related_name="items")
    service = models.ForeignKey(
        "catalog.Service", on_delete=models.CASCADE, related_name="cart_items"
    )
    qty = models.PositiveIntegerField(default=1)
    added_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["added_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["cart", "service"], name="unique_service_per_cart"
            ),
        ]

    def __str__(self):
        return f"{self.qty} x {self.service}"

    def get_total_price(self) -> Decimal:
        return self.service.price * self.qty
