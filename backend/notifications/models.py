from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class Notification(models.Model):
    """
    A single message shared by one or more recipients.

    Per-recipient read/delete state lives on NotificationRecipient so the
    message body is written once per triggering event.
    """

    class Type(models.TextChoices):
        NEW_ORDER = "new_order", _("New Order")
        ORDER_STATUS = "order_status", _("Order Status")
        PAYMENT_STATUS_UPDATE = "payment_status_update", _("Payment Status Update")
        DELIVERY_STATUS = "delivery_status", _("Delivery Status")
        ORDER_DELETED = "order_deleted", _("Order Deleted")
        NEW_VOUCHER = "new_voucher", _("New Voucher")
        VOUCHER_UPDATED = "voucher_updated", _("Voucher Updated")
        VOUCHER_DELETED = "voucher_deleted", _("Voucher Deleted")

    type = models.CharField(max_length=40, choices=Type.choices, db_index=True)
    message = models.TextField()
    for_role = models.CharField(max_length=20, blank=True)
    related_order = models.ForeignKey(
        "orders.Order",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="notifications",
    )
    related_voucher = models.ForeignKey(
        "vouchers.Voucher",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="notifications",
    )
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.type}: {self.message}"


class NotificationRecipient(models.Model):
    notification = models.ForeignKey(
        Notification, on_delete=models.CASCADE, related_name="recipients"
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notification_receipts",
    )
    is_read = models.BooleanField(default=False)
    is_deleted = models.BooleanField(default=False)

    class Meta:
        ordering = ["-notification__created_at", "-notification_id"]
        constraints = [
            models.UniqueConstraint(
                fields=["notification", "user"],
                name="unique_notification_recipient",
            ),
        ]
        indexes = [
            models.Index(fields=["user", "is_deleted"], name="notif_recipient_user_idx"),
        ]

    def __str__(self):
        return f"{self.user} <- {self.notification_id}"
