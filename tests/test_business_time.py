from datetime import date, datetime, timezone

import pytest

from shop_checkin.common.business_time import BusinessCalendar, days_since_week_anchor


@pytest.mark.parametrize(
    "day, expected",
    [
        (date(2026, 10, 14), 0),  # Wednesday
        (date(2026, 10, 15), 1),
        (date(2026, 10, 16), 2),
        (date(2026, 10, 17), 3),
        (date(2026, 10, 18), 4),  # Sunday
        (date(2026, 10, 19), 5),
        (date(2026, 10, 20), 6),  # Tuesday
    ],
)
def test_week_is_anchored_on_wednesday(day, expected):
    assert days_since_week_anchor(day) == expected


def test_local_conversion_uses_fixed_offset():
    cal = BusinessCalendar(7)
    instant = datetime(2026, 10, 15, 0, 55, tzinfo=timezone.utc)

    assert cal.to_local(instant).hour == 7
    assert cal.minutes_of_day(instant) == 7 * 60 + 55


def test_naive_values_are_treated_as_utc():
    cal = BusinessCalendar(7)

    assert cal.minutes_of_day(datetime(2026, 10, 15, 1, 15)) == 8 * 60 + 15


def test_day_bounds_follow_local_midnight_across_utc_date(at_local):
    cal = BusinessCalendar(7)
    # 06:00 local on the 15th is still the 14th in UTC.
    instant = at_local(2026, 10, 15, 6, 0)

    start, end = cal.day_bounds(instant)

    assert cal.local_date(instant) == date(2026, 10, 15)
    assert start == datetime(2026, 10, 14, 17, 0, tzinfo=timezone.utc)
    assert end == datetime(2026, 10, 15, 17, 0, tzinfo=timezone.utc)


def test_week_start_is_local_midnight_of_anchor_day(at_local):
    cal = BusinessCalendar(7)

    assert cal.week_start(at_local(2026, 10, 19, 8, 15)) == datetime(2026, 10, 13, 17, 0, tzinfo=timezone.utc)
    assert cal.week_start(at_local(2026, 10, 21, 8, 15)) == datetime(2026, 10, 20, 17, 0, tzinfo=timezone.utc)


def test_date_range_bounds_cover_whole_end_day():
    cal = BusinessCalendar(7)

    start, end = cal.date_range_bounds(date(2026, 10, 1), date(2026, 10, 31))

    assert start == datetime(2026, 9, 30, 17, 0, tzinfo=timezone.utc)
    assert end == datetime(2026, 10, 31, 17, 0, tzinfo=timezone.utc)
