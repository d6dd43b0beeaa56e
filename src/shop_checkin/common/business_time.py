"""Business clock for the shop.

All attendance rules run on a fixed UTC offset (no daylight saving), so a
plain ``timezone(timedelta(hours=...))`` is enough; no tz database is needed.
"""
from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

from ..core.constants import BUSINESS_UTC_OFFSET_HOURS, WEEK_ANCHOR_OFFSET
from .datetime_utils import as_utc


def days_since_week_anchor(local_day: date) -> int:
    """Days between ``local_day`` and the start of its attendance week.

    The anchor day is set by ``WEEK_ANCHOR_OFFSET`` in ``core.constants``.
    """
    sunday_based = local_day.isoweekday() % 7
    return (sunday_based + WEEK_ANCHOR_OFFSET) % 7


class BusinessCalendar:
    def __init__(self, utc_offset_hours: int = BUSINESS_UTC_OFFSET_HOURS):
        self._tz = timezone(timedelta(hours=int(utc_offset_hours)))

    @property
    def tz(self) -> timezone:
        return self._tz

    def to_local(self, instant: datetime) -> datetime:
        return as_utc(instant).astimezone(self._tz)

    def local_date(self, instant: datetime) -> date:
        return self.to_local(instant).date()

    def minutes_of_day(self, instant: datetime) -> int:
        local = self.to_local(instant)
        return local.hour * 60 + local.minute

    def local_midnight(self, local_day: date) -> datetime:
        """Start of ``local_day`` as an aware UTC instant."""
        return datetime.combine(local_day, time.min, tzinfo=self._tz).astimezone(timezone.utc)

    def day_bounds(self, instant: datetime) -> tuple[datetime, datetime]:
        """Half-open ``[start, end)`` of the local day containing ``instant``."""
        start = self.local_midnight(self.local_date(instant))
        return start, start + timedelta(days=1)

    def date_range_bounds(self, start_day: date, end_day: date) -> tuple[datetime, datetime]:
        """Half-open UTC bounds covering local days ``start_day``..``end_day`` inclusive."""
        return self.local_midnight(start_day), self.local_midnight(end_day + timedelta(days=1))

    def week_start(self, instant: datetime) -> datetime:
        today = self.local_date(instant)
        return self.local_midnight(today - timedelta(days=days_since_week_anchor(today)))
