import logging
from datetime import datetime, time, timedelta
from typing import Dict, Optional

from django.conf import settings

from core_backend.exceptions import OutsideOperatingHours
from core_backend.utils.localtime import local_now

logger = logging.getLogger(__name__)


class BusinessHoursService:
    """
    Fixed admission window for new orders.

    Orders are accepted every day except the weekly rest day, from opening
    time up to and including the closing minute, in the business's local
    UTC offset.
    """

    REST_DAY = 6  # Sunday (datetime.weekday)
    OPENING_TIME = time(9, 0)
    CLOSING_TIME = time(17, 0)

    REST_DAY_MESSAGE = "Orders cannot be placed on Sundays"
    OUTSIDE_HOURS_MESSAGE = "Orders can only be placed between 9:00 AM and 5:00 PM"

    @classmethod
    def _closed_reason(cls, local_dt: datetime) -> Optional[str]:
        if local_dt.weekday() == cls.REST_DAY:
            return cls.REST_DAY_MESSAGE

        # Minute resolution: 17:00 is still open, 17:01 is not.
        minute_of_day = local_dt.hour * 60 + local_dt.minute
        opening = cls.OPENING_TIME.hour * 60 + cls.OPENING_TIME.minute
        closing = cls.CLOSING_TIME.hour * 60 + cls.CLOSING_TIME.minute
        if minute_of_day < opening or minute_of_day > closing:
            return cls.OUTSIDE_HOURS_MESSAGE

        return None

    @classmethod
    def is_open(cls, dt: Optional[datetime] = None) -> bool:
        """
        Check if orders are accepted at a specific datetime

        Args:
            dt: Datetime to check. If None, uses current time.
        """
        return cls._closed_reason(local_now(dt)) is None

    @classmethod
    def ensure_open(cls, dt: Optional[datetime] = None) -> None:
        """Raise OutsideOperatingHours when the window is closed at `dt`."""
        local_dt = local_now(dt)
        reason = cls._closed_reason(local_dt)
        if reason:
            logger.warning(f"Order admission rejected at {local_dt.isoformat()}: {reason}")
            raise OutsideOperatingHours(reason)

    @classmethod
    def get_next_opening_time(cls, from_dt: Optional[datetime] = None) -> datetime:
        local_dt = local_now(from_dt)
        candidate = local_dt.replace(
            hour=cls.OPENING_TIME.hour,
            minute=cls.OPENING_TIME.minute,
            second=0,
            microsecond=0,
        )
        if candidate <= local_dt:
            candidate += timedelta(days=1)
        while candidate.weekday() == cls.REST_DAY:
            candidate += timedelta(days=1)
        return candidate

    @classmethod
    def get_next_closing_time(cls, from_dt: Optional[datetime] = None) -> datetime:
        local_dt = local_now(from_dt)
        candidate = local_dt.replace(
            hour=cls.CLOSING_TIME.hour,
            minute=cls.CLOSING_TIME.minute,
            second=0,
            microsecond=0,
        )
        if not cls.is_open(local_dt):
            candidate = cls.get_next_opening_time(local_dt).replace(
                hour=cls.CLOSING_TIME.hour, minute=cls.CLOSING_TIME.minute
            )
        return candidate

    @classmethod
    def get_status_summary(cls, dt: Optional[datetime] = None) -> Dict:
        local_dt = local_now(dt)
        is_open = cls.is_open(local_dt)

        summary = {
            "is_open": is_open,
            "current_time": local_dt,
            "utc_offset_hours": settings.LAUNDRY_UTC_OFFSET_HOURS,
            "opening_time": cls.OPENING_TIME,
            "closing_time": cls.CLOSING_TIME,
        }
        if is_open:
            summary["next_closing"] = cls.get_next_closing_time(local_dt)
        else:
            summary["next_opening"] = cls.get_next_opening_time(local_dt)
            summary["reason"] = cls._closed_reason(local_dt)
        return summary
