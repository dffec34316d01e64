"""
Business Hours Tests

Tests for the fixed order admission window: rest day, opening and
closing boundaries, and the configured UTC offset.
"""

import pytest
from datetime import datetime
import pytz
from django.test import override_settings

from business_hours.services import BusinessHoursService
from core_backend.exceptions import OutsideOperatingHours


def local(year, month, day, hour, minute=0, offset_hours=7):
    """Build an aware datetime at the given wall-clock time in the business offset."""
    return pytz.FixedOffset(offset_hours * 60).localize(
        datetime(year, month, day, hour, minute)
    )


class TestBusinessHoursService:
    """Test BusinessHoursService functionality"""

    def test_is_open_during_business_hours(self):
        # Monday 2 PM local
        assert BusinessHoursService.is_open(local(2024, 1, 15, 14, 0)) is True

    def test_opening_minute_is_open(self):
        assert BusinessHoursService.is_open(local(2024, 1, 15, 9, 0)) is True

    def test_before_opening_is_closed(self):
        assert BusinessHoursService.is_open(local(2024, 1, 15, 8, 59)) is False

    def test_closing_minute_is_still_open(self):
        assert BusinessHoursService.is_open(local(2024, 1, 15, 17, 0)) is True

    def test_after_closing_minute_is_closed(self):
        assert BusinessHoursService.is_open(local(2024, 1, 15, 17, 1)) is False

    def test_evening_is_closed(self):
        assert BusinessHoursService.is_open(local(2024, 1, 15, 18, 0)) is False

    def test_saturday_is_open(self):
        assert BusinessHoursService.is_open(local(2024, 1, 20, 10, 0)) is True

    def test_sunday_is_closed_all_day(self):
        assert BusinessHoursService.is_open(local(2024, 1, 21, 10, 0)) is False

    def test_utc_input_is_converted_to_local_offset(self):
        # 02:00 UTC is 09:00 at UTC+7
        utc_dt = pytz.utc.localize(datetime(2024, 1, 15, 2, 0))
        assert BusinessHoursService.is_open(utc_dt) is True

        # 11:00 UTC is 18:00 at UTC+7
        utc_dt = pytz.utc.localize(datetime(2024, 1, 15, 11, 0))
        assert BusinessHoursService.is_open(utc_dt) is False

    def test_saturday_evening_utc_is_sunday_locally(self):
        # Saturday 20:00 UTC is Sunday 03:00 local
        utc_dt = pytz.utc.localize(datetime(2024, 1, 20, 20, 0))
        assert BusinessHoursService.is_open(utc_dt) is False

    @override_settings(LAUNDRY_UTC_OFFSET_HOURS=0)
    def test_offset_is_configurable(self):
        utc_dt = pytz.utc.localize(datetime(2024, 1, 15, 11, 0))
        assert BusinessHoursService.is_open(utc_dt) is True

    def test_ensure_open_raises_with_hours_message(self):
        with pytest.raises(OutsideOperatingHours) as exc_info:
            BusinessHoursService.ensure_open(local(2024, 1, 15, 18, 0))

        assert exc_info.value.message == "Orders can only be placed between 9:00 AM and 5:00 PM"
        assert exc_info.value.code == "outside_operating_hours"

    def test_ensure_open_raises_with_rest_day_message(self):
        with pytest.raises(OutsideOperatingHours) as exc_info:
            BusinessHoursService.ensure_open(local(2024, 1, 21, 12, 0))

        assert exc_info.value.message == "Orders cannot be placed on Sundays"

    def test_ensure_open_passes_inside_window(self):
        BusinessHoursService.ensure_open(local(2024, 1, 15, 12, 0))

    def test_get_next_opening_time_skips_rest_day(self):
        # Saturday evening -> Monday 09:00
        next_open = BusinessHoursService.get_next_opening_time(local(2024, 1, 20, 18, 0))

        assert next_open.weekday() == 0
        assert (next_open.day, next_open.hour, next_open.minute) == (22, 9, 0)

    def test_get_next_opening_time_same_day_before_opening(self):
        next_open = BusinessHoursService.get_next_opening_time(local(2024, 1, 15, 7, 30))

        assert (next_open.day, next_open.hour) == (15, 9)

    def test_get_status_summary_when_closed(self):
        summary = BusinessHoursService.get_status_summary(local(2024, 1, 15, 18, 0))

        assert summary['is_open'] is False
        assert summary['reason'] == BusinessHoursService.OUTSIDE_HOURS_MESSAGE
        assert summary['next_opening'].hour == 9
        assert summary['utc_offset_hours'] == 7

    def test_get_status_summary_when_open(self):
        summary = BusinessHoursService.get_status_summary(local(2024, 1, 15, 10, 0))

        assert summary['is_open'] is True
        assert summary['next_closing'].hour == 17
        assert 'next_opening' not in summary


@pytest.mark.django_db
class TestBusinessHoursStatusEndpoint:

    def test_status_endpoint_public_access(self, api_client):
        response = api_client.get('/api/business-hours/status/')

        assert response.status_code == 200
        assert 'is_open' in response.data
        assert response.data['opening_time'] == '09:00'
        assert response.data['closing_time'] == '17:00'
