# Add backend to path so "from labour_cost...." works when running pytest from project root
import sys
from datetime import date
from pathlib import Path

import pytest

_backend = Path(__file__).resolve().parent.parent / "backend"
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

from labour_cost.models.roster import EmploymentType, StaffMember  # noqa: E402
from labour_cost.services.award_catalog import CHILDREN_SERVICES  # noqa: E402
from labour_cost.services.holidays import Holiday, HolidayType, StaticHolidayCalendar  # noqa: E402


@pytest.fixture
def award():
    """Children's Services: evening 110%, night 115%, Sat 150%, Sun 200%, PH 250%."""
    return CHILDREN_SERVICES


@pytest.fixture
def calendar():
    return StaticHolidayCalendar([
        Holiday(date=date(2025, 12, 25), name="Christmas Day", type=HolidayType.PUBLIC_HOLIDAY),
        Holiday(date=date(2025, 12, 29), name="Summer Holidays", type=HolidayType.SCHOOL_HOLIDAY),
    ])


@pytest.fixture
def full_timer():
    return StaffMember(
        id="s1", name="Alex Full", employment_type=EmploymentType.FULL_TIME, hourly_rate=30,
    )


@pytest.fixture
def casual():
    return StaffMember(id="s2", name="Sam Casual", employment_type=EmploymentType.CASUAL, hourly_rate=25)
