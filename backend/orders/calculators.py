"""
Order pricing and duration calculators.

- PricingCalculator: subtotal from line items, and the voucher discount rule
- DurationAggregator: worst-case processing time across an order's services

Both are pure functions of current catalog/voucher state and never write.

Usage:
    from orders.calculators import PricingCalculator, DurationAggregator

    subtotal = PricingCalculator.compute_subtotal(
        [{"service_id": 1, "qty": 2}, {"service_id": 3, "qty": 1}]
    )
    finish = DurationAggregator.estimated_finish_time(order.created_at, services)
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Dict, Iterable, List, Tuple

from catalog.models import Service
from catalog.services import CatalogService
from core_backend.exceptions import ValidationError
from vouchers.models import Voucher

CENT = Decimal("0.01")


class PricingCalculator:
    """
    Line items are dicts with "service_id" and "qty" keys, as accepted by
    the order and voucher-preview APIs.
    """

    @staticmethod
    def resolve_line_items(line_items: Iterable[Dict]) -> List[Tuple[Service, int]]:
        """
        Resolve each line item to (service, qty).

        Duplicate services are merged by summing their quantities, keeping
        the position of the first occurrence. Any unknown service fails the
        whole call with ServiceNotFound.
        """
        line_items = list(line_items or [])
        if not line_items:
            raise ValidationError("At least one service is required")

        merged: Dict[int, int] = {}
        for item in line_items:
            service_id = item.get("service_id")
            qty = item.get("qty", 1)
            if service_id is None:
                raise ValidationError("Each service requires a service_id")
            try:
                service_id = int(service_id)
                qty = int(qty)
            except (TypeError, ValueError):
                raise ValidationError(f"Invalid line item: {item!r}")
            if qty <= 0:
                raise ValidationError("Quantity must be greater than 0")
            merged[service_id] = merged.get(service_id, 0) + qty

        services = CatalogService.find_services_by_ids(merged.keys())
        return [(services[service_id], qty) for service_id, qty in merged.items()]

    @staticmethod
    def subtotal_for(resolved: Iterable[Tuple[Service, int]]) -> Decimal:
        return sum((service.price * qty for service, qty in resolved), Decimal("0.00"))

    @staticmethod
    def compute_subtotal(line_items: Iterable[Dict]) -> Decimal:
        """Σ(price × qty) over current catalog prices."""
        return PricingCalculator.subtotal_for(
            PricingCalculator.resolve_line_items(line_items)
        )

    @staticmethod
    def apply_discount(voucher: Voucher, subtotal) -> Decimal:
        """
        Discount for `subtotal`, never more than the subtotal itself.

        Below min_purchase the discount is zero. An unset max_discount
        (null or zero) caps the discount at discount_value, so a 10%
        voucher without a max discounts at most 10.
        """
        subtotal = Decimal(subtotal)
        if subtotal < voucher.min_purchase:
            return Decimal("0.00")

        if voucher.discount_type == Voucher.DiscountType.PERCENTAGE:
            discount = subtotal * voucher.discount_value / Decimal("100")
        else:
            discount = Decimal(voucher.discount_value)

        if not voucher.max_discount:
            discount = min(discount, voucher.discount_value)
        else:
            discount = min(discount, voucher.max_discount)

        return min(discount, subtotal).quantize(CENT)

    @staticmethod
    def compute_total(subtotal, discount, shipping_cost) -> Decimal:
        return Decimal(subtotal) - Decimal(discount) + Decimal(shipping_cost or 0)


class DurationAggregator:
    """
    Reduces service durations to a single worst case.

    Durations compare as (days, hours) pairs: more days always wins, hours
    only break ties between equal days. Hours are never summed across
    services.
    """

    @staticmethod
    def worst_case(services: Iterable[Service]) -> Tuple[int, int]:
        worst = (0, 0)
        for service in services:
            candidate = (service.estimated_duration_days, service.estimated_duration_hours)
            if candidate > worst:
                worst = candidate
        return worst

    @staticmethod
    def worst_case_duration(services: Iterable[Service]) -> timedelta:
        days, hours = DurationAggregator.worst_case(services)
        return timedelta(days=days, hours=hours)

    @staticmethod
    def estimated_finish_time(created_at: datetime, services: Iterable[Service]) -> datetime:
        return created_at + DurationAggregator.worst_case_duration(services)
