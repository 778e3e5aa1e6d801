"""
Day type classification and the static holiday calendar.
"""
from datetime import date

from labour_cost.services.day_types import DayType, classify_day
from labour_cost.services.holidays import (
    Holiday,
    HolidayType,
    StaticHolidayCalendar,
    default_calendar,
    school_holiday_weekdays,
)


def test_weekday_saturday_sunday(calendar):
    assert classify_day(date(2025, 12, 17), calendar) == DayType.WEEKDAY    # Wednesday
    assert classify_day(date(2025, 12, 20), calendar) == DayType.SATURDAY
    assert classify_day(date(2025, 12, 21), calendar) == DayType.SUNDAY


def test_public_holiday(calendar):
    """Christmas Day 2025 is a Thursday"""
    assert classify_day(date(2025, 12, 25), calendar) == DayType.PUBLIC_HOLIDAY


def test_public_holiday_beats_weekend():
    """Easter Saturday is a public holiday, not a Saturday"""
    cal = StaticHolidayCalendar([
        Holiday(date=date(2026, 4, 4), name="Easter Saturday", type=HolidayType.PUBLIC_HOLIDAY),
    ])
    assert classify_day(date(2026, 4, 4), cal) == DayType.PUBLIC_HOLIDAY


def test_school_holiday_is_not_a_public_holiday(calendar):
    d = date(2025, 12, 29)
    assert calendar.is_school_holiday(d)
    assert not calendar.is_public_holiday(d)
    assert classify_day(d, calendar) == DayType.WEEKDAY


def test_holidays_in_range_inclusive(calendar):
    names = [h.name for h in calendar.get_holidays_in_range(date(2025, 12, 25), date(2025, 12, 29))]
    assert names == ["Christmas Day", "Summer Holidays"]
    assert calendar.get_holidays_in_range(date(2025, 12, 26), date(2025, 12, 28)) == []


def test_school_holiday_weekdays_skips_weekends():
    """Sat 27 Jun to Sun 5 Jul 2026: five weekdays"""
    days = school_holiday_weekdays(date(2026, 6, 27), date(2026, 7, 5), "Winter Holidays")
    assert len(days) == 5
    assert all(h.date.weekday() < 5 for h in days)
    assert all(h.type == HolidayType.SCHOOL_HOLIDAY for h in days)


def test_default_calendar():
    cal = default_calendar()
    assert cal.is_public_holiday(date(2026, 1, 26))           # Australia Day
    assert cal.is_school_holiday(date(2026, 1, 5))
    assert not cal.is_public_holiday(date(2026, 1, 27))
