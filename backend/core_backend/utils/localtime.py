"""
Fixed-offset local time helpers.

Everything is stored as aware UTC datetimes. The business operates on a
fixed UTC offset (LAUNDRY_UTC_OFFSET_HOURS, UTC+7 by default) with no DST,
so conversions go through a pytz FixedOffset rather than a named zone.
"""
from datetime import datetime
from typing import Optional

import pytz
from django.conf import settings
from django.utils import timezone


def get_business_timezone():
    """Return the tzinfo for the configured business offset."""
    offset_hours = getattr(settings, "LAUNDRY_UTC_OFFSET_HOURS", 7)
    return pytz.FixedOffset(int(offset_hours * 60))


def to_local(dt: datetime) -> datetime:
    """Convert an aware datetime to business local time. Naive values are assumed UTC."""
    if timezone.is_naive(dt):
        dt = timezone.make_aware(dt, pytz.utc)
    return dt.astimezone(get_business_timezone())


def local_now(now: Optional[datetime] = None) -> datetime:
    """Current time (or `now`) expressed in business local time."""
    return to_local(now if now is not None else timezone.now())


def localize(dt: datetime) -> datetime:
    """
    Interpret a naive datetime as business local time.

    Aware datetimes are returned unchanged.
    """
    if timezone.is_aware(dt):
        return dt
    return timezone.make_aware(dt, get_business_timezone())
