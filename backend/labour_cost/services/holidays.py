"""
Public and school holiday calendar.

The core only depends on the HolidayCalendar protocol; StaticHolidayCalendar
is the in-memory implementation used by the API and tests.
"""
from datetime import date, timedelta
from enum import Enum
from typing import Iterable, Optional, Protocol

from pydantic import BaseModel, ConfigDict


class HolidayType(str, Enum):
    PUBLIC_HOLIDAY = "public_holiday"
    SCHOOL_HOLIDAY = "school_holiday"


class Holiday(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: date
    name: str
    type: HolidayType
    state: Optional[str] = None


class HolidayCalendar(Protocol):
    def is_public_holiday(self, d: date) -> bool: ...

    def is_school_holiday(self, d: date) -> bool: ...

    def get_holidays_in_range(self, start: date, end: date) -> list[Holiday]: ...


class StaticHolidayCalendar:
    """Holiday calendar over a fixed list of holidays."""

    def __init__(self, holidays: Iterable[Holiday] = ()):
        self._holidays = tuple(sorted(holidays, key=lambda h: h.date))
        self._public = frozenset(h.date for h in self._holidays if h.type == HolidayType.PUBLIC_HOLIDAY)
        self._school = frozenset(h.date for h in self._holidays if h.type == HolidayType.SCHOOL_HOLIDAY)

    def is_public_holiday(self, d: date) -> bool:
        return d in self._public

    def is_school_holiday(self, d: date) -> bool:
        return d in self._school

    def get_holidays_in_range(self, start: date, end: date) -> list[Holiday]:
        return [h for h in self._holidays if start <= h.date <= end]


def school_holiday_weekdays(start: date, end: date, name: str) -> list[Holiday]:
    """School holiday markers for each weekday in [start, end]."""
    out = []
    d = start
    while d <= end:
        if d.weekday() < 5:
            out.append(Holiday(date=d, name=name, type=HolidayType.SCHOOL_HOLIDAY))
        d += timedelta(days=1)
    return out


def _ph(iso: str, name: str, state: Optional[str] = None) -> Holiday:
    return Holiday(date=date.fromisoformat(iso), name=name, type=HolidayType.PUBLIC_HOLIDAY, state=state)


AUSTRALIAN_HOLIDAYS: tuple[Holiday, ...] = (
    _ph("2025-01-01", "New Year's Day"),
    _ph("2025-01-27", "Australia Day"),
    _ph("2025-04-18", "Good Friday"),
    _ph("2025-04-19", "Easter Saturday"),
    _ph("2025-04-21", "Easter Monday"),
    _ph("2025-04-25", "Anzac Day"),
    _ph("2025-06-09", "King's Birthday", "VIC"),
    _ph("2025-11-04", "Melbourne Cup Day", "VIC"),
    _ph("2025-12-25", "Christmas Day"),
    _ph("2025-12-26", "Boxing Day"),
    _ph("2026-01-01", "New Year's Day"),
    _ph("2026-01-26", "Australia Day"),
    _ph("2026-03-09", "Labour Day", "VIC"),
    _ph("2026-04-03", "Good Friday"),
    _ph("2026-04-04", "Easter Saturday"),
    _ph("2026-04-06", "Easter Monday"),
    _ph("2026-04-25", "Anzac Day"),
    _ph("2026-06-08", "King's Birthday", "VIC"),
    _ph("2026-09-25", "AFL Grand Final Friday", "VIC"),
    _ph("2026-11-03", "Melbourne Cup Day", "VIC"),
    _ph("2026-12-25", "Christmas Day"),
    _ph("2026-12-26", "Boxing Day"),
    _ph("2026-12-28", "Boxing Day (observed)"),
    # VIC school holidays, 2026
    *school_holiday_weekdays(date(2026, 1, 1), date(2026, 1, 27), "Summer Holidays"),
    *school_holiday_weekdays(date(2026, 3, 28), date(2026, 4, 12), "Autumn Holidays"),
    *school_holiday_weekdays(date(2026, 6, 27), date(2026, 7, 12), "Winter Holidays"),
    *school_holiday_weekdays(date(2026, 9, 19), date(2026, 10, 4), "Spring Holidays"),
    *school_holiday_weekdays(date(2026, 12, 19), date(2026, 12, 31), "Summer Holidays"),
)


def default_calendar() -> StaticHolidayCalendar:
    return StaticHolidayCalendar(AUSTRALIAN_HOLIDAYS)
