import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from django.db import transaction
from django.db.models import F, Q
from django.utils import timezone

from core_backend.exceptions import (
    ValidationError,
    VoucherExhausted,
    VoucherNotApplicable,
    VoucherNotFound,
)
from notifications.models import Notification
from notifications.services import NotificationService
from orders.calculators import PricingCalculator
from .models import Voucher

logger = logging.getLogger(__name__)


def _normalize_ids(service_ids: Iterable) -> set:
    normalized = set()
    for service_id in service_ids:
        try:
            normalized.add(int(getattr(service_id, "pk", service_id)))
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid service id: {service_id!r}")
    return normalized


class VoucherValidator:
    """
    Predicates deciding whether a voucher may be redeemed, and the
    discount rule. None of these write.
    """

    @staticmethod
    def is_applicable_to_user(voucher: Voucher, user) -> bool:
        if user is None:
            return False
        user_id = getattr(user, "pk", user)
        eligible = set(voucher.users.values_list("pk", flat=True))
        return not eligible or user_id in eligible

    @staticmethod
    def has_remaining_uses(voucher: Voucher) -> bool:
        return voucher.usage_limit is None or voucher.usage_count < voucher.usage_limit

    @staticmethod
    def is_within_window(voucher: Voucher, now: Optional[datetime] = None) -> bool:
        now = now or timezone.now()
        return voucher.start_date <= now <= voucher.end_date

    @staticmethod
    def is_valid(voucher: Voucher, user, now: Optional[datetime] = None) -> bool:
        return (
            voucher.is_active
            and VoucherValidator.is_within_window(voucher, now)
            and VoucherValidator.has_remaining_uses(voucher)
            and VoucherValidator.is_applicable_to_user(voucher, user)
        )

    @staticmethod
    def is_applicable_to_services(voucher: Voucher, service_ids: Iterable) -> bool:
        allowed = set(voucher.applicable_services.values_list("pk", flat=True))
        if not allowed:
            return True
        return bool(allowed & _normalize_ids(service_ids))

    @staticmethod
    def is_excluded_from_services(voucher: Voucher, service_ids: Iterable) -> bool:
        excluded = set(voucher.excluded_services.values_list("pk", flat=True))
        if not excluded:
            return False
        return bool(excluded & _normalize_ids(service_ids))

    @staticmethod
    def apply_discount(voucher: Voucher, subtotal) -> Decimal:
        return PricingCalculator.apply_discount(voucher, subtotal)

    @staticmethod
    def check_valid_for_user(voucher: Voucher, user, now: Optional[datetime] = None) -> None:
        if not VoucherValidator.has_remaining_uses(voucher):
            raise VoucherExhausted()
        if not (voucher.is_active and VoucherValidator.is_within_window(voucher, now)):
            raise VoucherNotApplicable("Voucher is not valid or has expired")
        if not VoucherValidator.is_applicable_to_user(voucher, user):
            raise VoucherNotApplicable("Voucher is not applicable for this user")

    @staticmethod
    def check_services(voucher: Voucher, service_ids: Iterable) -> None:
        if not VoucherValidator.is_applicable_to_services(voucher, service_ids):
            raise VoucherNotApplicable(
                "Voucher is not applicable for any of the selected services"
            )
        if VoucherValidator.is_excluded_from_services(voucher, service_ids):
            raise VoucherNotApplicable(
                "Voucher is not applicable for one or more of the selected services"
            )


class VoucherService:
    @staticmethod
    def get_by_code(code: str) -> Voucher:
        if not code or not str(code).strip():
            raise ValidationError("Voucher code is required")
        try:
            return Voucher.objects.get(code__iexact=str(code).strip())
        except Voucher.DoesNotExist:
            raise VoucherNotFound()

    @staticmethod
    def get_by_id(voucher_id) -> Voucher:
        try:
            return Voucher.objects.get(pk=voucher_id)
        except (Voucher.DoesNotExist, ValueError, TypeError):
            raise VoucherNotFound()

    @staticmethod
    def redeem(voucher: Voucher, user, service_ids: Iterable, now: Optional[datetime] = None) -> Voucher:
        """
        Check every redemption predicate, then consume one use.

        The increment is a conditional UPDATE guarded by the usage limit,
        so concurrent redemptions can never push usage_count past it.
        """
        service_ids = list(service_ids)
        if not VoucherValidator.has_remaining_uses(voucher):
            raise VoucherExhausted()
        if not VoucherValidator.is_valid(voucher, user, now):
            raise VoucherNotApplicable("Invalid voucher")
        if not VoucherValidator.is_applicable_to_services(
            voucher, service_ids
        ) or VoucherValidator.is_excluded_from_services(voucher, service_ids):
            raise VoucherNotApplicable()

        updated = (
            Voucher.objects.filter(pk=voucher.pk, is_active=True)
            .filter(Q(usage_limit__isnull=True) | Q(usage_count__lt=F("usage_limit")))
            .update(usage_count=F("usage_count") + 1, updated_at=timezone.now())
        )
        if not updated:
            logger.warning(f"Voucher {voucher.code} exhausted during redemption")
            raise VoucherExhausted()

        voucher.refresh_from_db(fields=["usage_count", "updated_at"])
        logger.info(
            f"Voucher {voucher.code} redeemed by user {getattr(user, 'pk', user)} "
            f"({voucher.usage_count}/{voucher.usage_limit or 'unlimited'})"
        )
        return voucher

    @staticmethod
    def preview(code: str, user, line_items, now: Optional[datetime] = None) -> dict:
        """
        Price `line_items` with the voucher without redeeming it.

        `line_items` is a list of {"service_id", "qty"} dicts.
        """
        voucher = VoucherService.get_by_code(code)
        VoucherValidator.check_valid_for_user(voucher, user, now)

        subtotal = PricingCalculator.compute_subtotal(line_items)
        if subtotal < voucher.min_purchase:
            raise VoucherNotApplicable(
                f"Minimum purchase of {voucher.min_purchase} required"
            )

        VoucherValidator.check_services(
            voucher, [item["service_id"] for item in line_items]
        )

        discount = VoucherValidator.apply_discount(voucher, subtotal)
        return {
            "voucher_id": voucher.pk,
            "code": voucher.code,
            "subtotal": subtotal,
            "discount": discount,
            "total": subtotal - discount,
        }

    @staticmethod
    def _notify_eligible_users(voucher: Voucher, type: str, message: str, users=None):
        users = list(users if users is not None else voucher.users.all())
        if not users:
            return None
        return NotificationService.notify(
            type,
            message,
            users,
            related_voucher=voucher if voucher.pk else None,
            for_role="user",
        )

    @staticmethod
    @transaction.atomic
    def create_voucher(validated_data: dict) -> Voucher:
        applicable = validated_data.pop("applicable_services", [])
        excluded = validated_data.pop("excluded_services", [])
        users = validated_data.pop("users", [])

        voucher = Voucher.objects.create(**validated_data)
        voucher.applicable_services.set(applicable)
        voucher.excluded_services.set(excluded)
        voucher.users.set(users)

        logger.info(f"Voucher {voucher.code} created")
        VoucherService._notify_eligible_users(
            voucher,
            Notification.Type.NEW_VOUCHER,
            f"New voucher available: {voucher.code}",
        )
        return voucher

    @staticmethod
    @transaction.atomic
    def update_voucher(voucher: Voucher, validated_data: dict) -> Voucher:
        m2m = {
            field: validated_data.pop(field)
            for field in ("applicable_services", "excluded_services", "users")
            if field in validated_data
        }

        for field, value in validated_data.items():
            setattr(voucher, field, value)
        voucher.save()

        for field, value in m2m.items():
            getattr(voucher, field).set(value)

        logger.info(f"Voucher {voucher.code} updated")
        VoucherService._notify_eligible_users(
            voucher,
            Notification.Type.VOUCHER_UPDATED,
            f"Voucher {voucher.code} has been updated",
        )
        return voucher

    @staticmethod
    @transaction.atomic
    def delete_voucher(voucher: Voucher) -> None:
        code = voucher.code
        users = list(voucher.users.all())
        voucher.delete()

        logger.info(f"Voucher {code} deleted")
        if users:
            NotificationService.notify(
                Notification.Type.VOUCHER_DELETED,
                f"Voucher {code} is no longer available",
                users,
                for_role="user",
            )
