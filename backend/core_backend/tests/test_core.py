"""
Core Backend Tests

Error rendering and the fixed-offset local time helpers.
"""
import pytest
from datetime import datetime

import pytz
from django.test import override_settings
from rest_framework import status
from rest_framework.exceptions import NotAuthenticated

from core_backend.exceptions import (
    InvalidStatusTransition,
    OrderNotFound,
    ServiceNotFound,
    VoucherNotApplicable,
    laundry_exception_handler,
)
from core_backend.utils.localtime import get_business_timezone, localize, to_local


class TestExceptionHandler:
    def test_domain_error_rendered_with_code(self):
        response = laundry_exception_handler(VoucherNotApplicable(), {})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {
            'error': 'Voucher is not applicable for the selected services',
            'code': 'voucher_not_applicable',
        }

    def test_not_found_family_is_404(self):
        assert laundry_exception_handler(OrderNotFound(), {}).status_code == 404
        assert laundry_exception_handler(ServiceNotFound(5), {}).status_code == 404

    def test_transition_error_message(self):
        exc = InvalidStatusTransition('order status', 'pending', 'finished')
        assert exc.message == "Cannot transition order status from 'pending' to 'finished'."

    def test_framework_errors_fall_through(self):
        response = laundry_exception_handler(NotAuthenticated(), {})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert 'detail' in response.data

    def test_unhandled_errors_return_none(self):
        assert laundry_exception_handler(RuntimeError('boom'), {}) is None


class TestLocalTime:
    def test_to_local_applies_offset(self):
        utc_dt = pytz.utc.localize(datetime(2025, 1, 15, 20, 30))
        local_dt = to_local(utc_dt)

        assert (local_dt.day, local_dt.hour, local_dt.minute) == (16, 3, 30)
        assert local_dt == utc_dt

    def test_naive_input_is_treated_as_utc(self):
        local_dt = to_local(datetime(2025, 1, 15, 2, 0))
        assert local_dt.hour == 9

    def test_localize_reads_wall_clock_time(self):
        dt = localize(datetime(2025, 1, 15, 9, 0))
        assert dt.astimezone(pytz.utc).hour == 2

    def test_localize_keeps_aware_values(self):
        utc_dt = pytz.utc.localize(datetime(2025, 1, 15, 2, 0))
        assert localize(utc_dt) is utc_dt

    @override_settings(LAUNDRY_UTC_OFFSET_HOURS=-3)
    def test_negative_offset(self):
        assert get_business_timezone().utcoffset(None).total_seconds() == -3 * 3600


@pytest.mark.django_db
def test_health_check(api_client):
    response = api_client.get('/api/health/')
    assert response.status_code == 200
    assert response.json()['status'] == 'ok'
