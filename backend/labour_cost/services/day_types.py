from datetime import date
from enum import Enum

from labour_cost.services.holidays import HolidayCalendar


class DayType(str, Enum):
    WEEKDAY = "weekday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"
    PUBLIC_HOLIDAY = "public_holiday"


def classify_day(d: date, calendar: HolidayCalendar) -> DayType:
    """Day type for penalty purposes; a public holiday beats the weekend."""
    if calendar.is_public_holiday(d):
        return DayType.PUBLIC_HOLIDAY
    w = d.weekday()  # 0=Mon .. 6=Sun
    if w == 6:
        return DayType.SUNDAY
    if w == 5:
        return DayType.SATURDAY
    return DayType.WEEKDAY
