import random
import string
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class Order(models.Model):
    """
    A customer's laundry order.

    Payment, fulfilment and delivery progress are three independent status
    tracks; each has its own field, its own transition table (see
    orders.services.status_service) and its own timestamps.
    """

    # --- Status Fields ---
    class PaymentStatus(models.TextChoices):
        PENDING = "pending", _("Pending")
        SETTLEMENT = "settlement", _("Settlement")
        FAILED = "failed", _("Failed")
        EXPIRED = "expired", _("Expired")

    class OrderStatus(models.TextChoices):
        PENDING = "pending", _("Pending")
        CONFIRMED = "confirmed", _("Confirmed")
        RECEIVED = "received", _("Received")
        QUEUE = "queue", _("Queue")
        PROCESSING = "processing", _("Processing")
        FINISHED = "finished", _("Finished")
        CANCELLED = "cancelled", _("Cancelled")

    class DeliveryStatus(models.TextChoices):
        PENDING = "pending", _("Pending")
        PICKUP_SCHEDULED = "pickup_scheduled", _("Pickup Scheduled")
        PICKED_UP = "picked_up", _("Picked Up")
        READY_FOR_DELIVERY = "ready_for_delivery", _("Ready for Delivery")
        OUT_FOR_DELIVERY = "out_for_delivery", _("Out for Delivery")
        DELIVERED = "delivered", _("Delivered")
        DELIVERY_FAILED = "delivery_failed", _("Delivery Failed")

    class PaymentMethod(models.TextChoices):
        COD = "cod", _("Cash on Delivery")
        CREDIT_CARD = "credit_card", _("Credit Card")
        MANDIRI_CLICKPAY = "mandiri_clickpay", _("Mandiri Clickpay")
        CIMB_CLICKS = "cimb_clicks", _("CIMB Clicks")
        BCA_KLIKBCA = "bca_klikbca", _("BCA KlikBCA")
        BCA_KLIKPAY = "bca_klikpay", _("BCA KlikPay")
        BRI_EPAY = "bri_epay", _("BRI ePay")
        ECHANNEL = "echannel", _("Mandiri Bill")
        INDOSAT_DOMPETKU = "indosat_dompetku", _("Indosat Dompetku")
        GOPAY = "gopay", _("GoPay")
        SHOPEEPAY = "shopeepay", _("ShopeePay")
        INDOMARET = "indomaret", _("Indomaret")
        ALFAMART = "alfamart", _("Alfamart")
        AKULAKU = "akulaku", _("Akulaku")
        BANK_TRANSFER = "bank_transfer", _("Bank Transfer")
        OTHER = "other", _("Other")

    class DeliveryOption(models.TextChoices):
        PICKUP_BY_LAUNDRY = "pickup_by_laundry", _("Pickup by Laundry")
        SELF_SERVICE = "self_service", _("Self Service")

    order_id = models.CharField(
        max_length=64,
        unique=True,
        help_text=_("External order identifier, also used with the payment gateway."),
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="orders"
    )

    # --- Contact / Delivery ---
    phone = models.CharField(max_length=20)
    address = models.TextField(blank=True)
    delivery_option = models.CharField(max_length=20, choices=DeliveryOption.choices)
    payment_method = models.CharField(max_length=20, choices=PaymentMethod.choices)

    # --- Financial Fields ---
    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    discount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    shipping_cost = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    total = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("subtotal - discount + shipping_cost, fixed at creation."),
    )
    voucher_applied = models.ForeignKey(
        "vouchers.Voucher",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )

    # --- Payment track ---
    payment_status = models.CharField(
        max_length=20, choices=PaymentStatus.choices, default=PaymentStatus.PENDING
    )
    payment_status_updated_at = models.DateTimeField(null=True, blank=True)

    # --- Fulfilment track ---
    order_status = models.CharField(
        max_length=20, choices=OrderStatus.choices, default=OrderStatus.PENDING
    )
    confirmed_at = models.DateTimeField(null=True, blank=True)
    received_at = models.DateTimeField(null=True, blank=True)
    queue_at = models.DateTimeField(null=True, blank=True)
    processing_at = models.DateTimeField(null=True, blank=True)
    finished_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)

    # --- Delivery track ---
    delivery_status = models.CharField(
        max_length=20, choices=DeliveryStatus.choices, default=DeliveryStatus.PENDING
    )
    pickup_scheduled_at = models.DateTimeField(null=True, blank=True)
    picked_up_at = models.DateTimeField(null=True, blank=True)
    ready_for_delivery_at = models.DateTimeField(null=True, blank=True)
    out_for_delivery_at = models.DateTimeField(null=True, blank=True)
    delivered_at = models.DateTimeField(null=True, blank=True)
    delivery_failed_at = models.DateTimeField(null=True, blank=True)

    estimated_finish_time = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["user", "created_at"], name="order_user_created_idx"),
            models.Index(fields=["order_status"], name="order_status_idx"),
            models.Index(fields=["payment_status"], name="order_payment_status_idx"),
            models.Index(fields=["delivery_status"], name="order_delivery_status_idx"),
        ]

    def __str__(self):
        return f"Order {self.order_id} ({self.order_status})"

    @property
    def is_cod(self):
        return self.payment_method == self.PaymentMethod.COD

    @staticmethod
    def generate_order_id(now=None):
        """
        LND-<yyyymmddHHMMSS>-<6 random chars>. Uniqueness is enforced by
        the database; callers retry on collision.
        """
        now = now or timezone.now()
        suffix = "".join(random.choices(string.ascii_uppercase + string.digits, k=6))
        return f"LND-{now:%Y%m%d%H%M%S}-{suffix}"


class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    service = models.ForeignKey(
        "catalog.Service", on_delete=models.PROTECT, related_name="order_items"
    )
    qty = models.PositiveIntegerField(default=1)

    # Price snapshot
    price_at_order = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text=_("Service price at the time the order was placed."),
    )

    before_service_images = models.JSONField(default=list, blank=True)
    after_service_images = models.JSONField(default=list, blank=True)

    class Meta:
        verbose_name = _("Order Item")
        verbose_name_plural = _("Order Items")
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(
                fields=["order", "service"], name="unique_service_per_order"
            ),
        ]

    def __str__(self):
        return f"{self.qty} x {self.service} in Order {self.order.order_id}"

    @property
    def total_price(self):
        return self.qty * self.price_at_order
