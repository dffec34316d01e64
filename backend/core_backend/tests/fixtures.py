"""
Shared test fixtures for all backend tests.

This module provides reusable pytest fixtures for common test objects
like users, catalog services, vouchers and orders.
"""
import pytest
from datetime import datetime, timedelta
from decimal import Decimal
from unittest.mock import patch

import pytz

from catalog.models import Service, ServiceMaterial
from orders.models import Order
from users.models import User
from vouchers.models import Voucher


# ============================================================================
# TIME FIXTURES
# ============================================================================

@pytest.fixture
def open_time():
    """Wednesday 2025-01-15 10:00 at UTC+7 (03:00 UTC), inside the admission window."""
    return pytz.utc.localize(datetime(2025, 1, 15, 3, 0))


@pytest.fixture
def closed_time():
    """Wednesday 2025-01-15 18:00 at UTC+7 (11:00 UTC), after closing."""
    return pytz.utc.localize(datetime(2025, 1, 15, 11, 0))


@pytest.fixture
def during_business_hours(open_time):
    """
    Freeze django.utils.timezone.now at `open_time` for API tests that
    cannot pass `now=` to the services.
    """
    with patch("django.utils.timezone.now", return_value=open_time):
        yield open_time


@pytest.fixture
def after_business_hours(closed_time):
    with patch("django.utils.timezone.now", return_value=closed_time):
        yield closed_time


# ============================================================================
# USER FIXTURES
# ============================================================================

@pytest.fixture
def admin_user(db):
    """Create admin user"""
    return User.objects.create_user(
        email='admin@laundry.test',
        password='password123',
        name='Admin One',
        role=User.Role.ADMIN,
    )


@pytest.fixture
def second_admin(db):
    return User.objects.create_user(
        email='admin2@laundry.test',
        password='password123',
        name='Admin Two',
        role=User.Role.ADMIN,
    )


@pytest.fixture
def customer(db):
    """Create customer with a phone number on file"""
    return User.objects.create_user(
        email='customer@laundry.test',
        password='password123',
        name='Customer One',
        phone='081234567890',
    )


@pytest.fixture
def other_customer(db):
    return User.objects.create_user(
        email='other@laundry.test',
        password='password123',
        name='Customer Two',
        phone='089876543210',
    )


# ============================================================================
# CATALOG FIXTURES
# ============================================================================

@pytest.fixture
def wash_service(db):
    """Regular wash: 10,000 per unit, 1 day"""
    service = Service.objects.create(
        name='Regular Wash',
        category='wash',
        price=Decimal('10000.00'),
        estimated_duration_days=1,
        estimated_duration_hours=0,
        labor_cost=Decimal('2000.00'),
    )
    ServiceMaterial.objects.create(service=service, name='Detergent', cost=Decimal('1500.00'))
    return service


@pytest.fixture
def express_service(db):
    """Express wash: 25,000 per unit, 12 hours"""
    return Service.objects.create(
        name='Express Wash',
        category='wash',
        price=Decimal('25000.00'),
        estimated_duration_days=0,
        estimated_duration_hours=12,
        labor_cost=Decimal('5000.00'),
    )


@pytest.fixture
def iron_service(db):
    """Ironing: 5,000 per unit, 2 days 6 hours"""
    return Service.objects.create(
        name='Ironing',
        category='iron',
        price=Decimal('5000.00'),
        estimated_duration_days=2,
        estimated_duration_hours=6,
        labor_cost=Decimal('1000.00'),
    )


# ============================================================================
# VOUCHER FIXTURES
# ============================================================================

@pytest.fixture
def voucher_factory(db, open_time):
    """
    Factory for vouchers valid around `open_time`.

    Usage:
        voucher = voucher_factory(code='SAVE10', discount_value=Decimal('10'))
    """

    def _create(**overrides):
        applicable = overrides.pop('applicable_services', [])
        excluded = overrides.pop('excluded_services', [])
        users = overrides.pop('users', [])

        fields = {
            'code': 'SAVE10',
            'discount_type': Voucher.DiscountType.PERCENTAGE,
            'discount_value': Decimal('10'),
            'max_discount': Decimal('5000'),
            'min_purchase': Decimal('0'),
            'start_date': open_time - timedelta(days=30),
            'end_date': open_time + timedelta(days=3650),
            'usage_limit': None,
            'is_active': True,
        }
        fields.update(overrides)

        voucher = Voucher.objects.create(**fields)
        voucher.applicable_services.set(applicable)
        voucher.excluded_services.set(excluded)
        voucher.users.set(users)
        return voucher

    return _create


@pytest.fixture
def voucher(voucher_factory):
    """10% off, capped at 5,000"""
    return voucher_factory()


# ============================================================================
# ORDER FIXTURES
# ============================================================================

@pytest.fixture
def order_data(wash_service, express_service):
    """Request payload for a pickup order of 2 x wash + 1 x express."""
    return {
        'services': [
            {'service_id': wash_service.pk, 'qty': 2},
            {'service_id': express_service.pk, 'qty': 1},
        ],
        'phone': '081234567890',
        'address': 'Jl. Merdeka No. 1',
        'payment_method': Order.PaymentMethod.COD,
        'delivery_option': Order.DeliveryOption.PICKUP_BY_LAUNDRY,
        'shipping_cost': Decimal('8000'),
    }


@pytest.fixture
def order_factory(customer, order_data, open_time):
    """
    Factory creating orders through OrderService inside business hours.

    Usage:
        order = order_factory()
        gateway_order = order_factory(payment_method=Order.PaymentMethod.GOPAY)
    """
    from orders.services import OrderService

    def _create(user=None, **overrides):
        data = dict(order_data)
        data.update(overrides)
        return OrderService.create_order(user or customer, data, now=open_time)

    return _create


@pytest.fixture
def cod_order(order_factory):
    return order_factory(order_id='LND-COD-0001')


@pytest.fixture
def gateway_order(order_factory):
    return order_factory(order_id='LND-GW-0001', payment_method=Order.PaymentMethod.GOPAY)


# ============================================================================
# API CLIENT FIXTURES (for API Integration Tests)
# ============================================================================

@pytest.fixture
def api_client_factory():
    """
    Factory fixture for creating authenticated API clients.

    The access token is set in the auth cookie, matching how the login
    endpoint authenticates browsers.

    Usage:
        def test_list_orders(api_client_factory, admin_user):
            client = api_client_factory(admin_user)
            response = client.get('/api/orders/')
    """
    from django.conf import settings
    from rest_framework.test import APIClient
    from users.services import UserService

    def _create_client(user=None):
        client = APIClient()
        if user:
            tokens = UserService.generate_tokens_for_user(user)
            client.cookies[settings.SIMPLE_JWT['AUTH_COOKIE']] = tokens['access']
        return client

    return _create_client


@pytest.fixture
def admin_client(api_client_factory, admin_user):
    return api_client_factory(admin_user)


@pytest.fixture
def customer_client(api_client_factory, customer):
    return api_client_factory(customer)
