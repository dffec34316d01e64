from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone


class Voucher(models.Model):
    class DiscountType(models.TextChoices):
        PERCENTAGE = "percentage", "Percentage"
        FIXED = "fixed", "Fixed"

    code = models.CharField(
        max_length=50, unique=True, help_text="Stored upper-cased and trimmed."
    )
    description = models.TextField(blank=True)
    discount_type = models.CharField(max_length=20, choices=DiscountType.choices)
    discount_value = models.DecimalField(max_digits=12, decimal_places=2)
    max_discount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Cap on the discount. Empty or zero caps at the discount value itself.",
    )
    min_purchase = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )

    start_date = models.DateTimeField()
    end_date = models.DateTimeField()

    usage_limit = models.PositiveIntegerField(null=True, blank=True)
    usage_count = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)

    # Empty allow-list means every service; empty deny-list means none.
    applicable_services = models.ManyToManyField(
        "catalog.Service", blank=True, related_name="applicable_vouchers"
    )
    excluded_services = models.ManyToManyField(
        "catalog.Service", blank=True, related_name="excluded_vouchers"
    )
    # Empty means every user is eligible.
    users = models.ManyToManyField(
        settings.AUTH_USER_MODEL, blank=True, related_name="vouchers"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["is_active", "start_date", "end_date"], name="voucher_active_window_idx"),
        ]

    def __str__(self):
        return self.code

    def clean(self):
        super().clean()

        if self.start_date and self.end_date and self.end_date <= self.start_date:
            raise ValidationError({"end_date": "End date must be after start date"})

        if self.discount_value is not None and self.discount_value <= 0:
            raise ValidationError(
                {"discount_value": "Discount value must be greater than zero."}
            )

        if (
            self.discount_type == self.DiscountType.PERCENTAGE
            and self.discount_value is not None
            and self.discount_value > 100
        ):
            raise ValidationError(
                {"discount_value": "Percentage discount cannot exceed 100%."}
            )

    def save(self, *args, **kwargs):
        if self.code:
            self.code = self.code.strip().upper()

        # An expired voucher is forced inactive on every save.
        if self.end_date and self.end_date < timezone.now():
            self.is_active = False
            update_fields = kwargs.get("update_fields")
            if update_fields is not None and "is_active" not in update_fields:
                kwargs["update_fields"] = list(update_fields) + ["is_active"]

        super().save(*args, **kwargs)
