"""
Built-in Modern Award reference data (Fair Work Commission, rates from 2024-07-01)
and the catalog that serves it.
"""
from bisect import bisect_right
from datetime import date
from typing import Iterable, Optional

from labour_cost.models.awards import (
    AllowanceDefinition,
    AllowanceKind,
    AllowanceUnit,
    AwardDefinition,
    Classification,
    RateScheduleEntry,
)
from labour_cost.services.award_rules import STANDARD_WEEKLY_HOURS


class AwardCatalog:
    """Read-only lookup over a fixed set of award definitions."""

    def __init__(self, awards: Iterable[AwardDefinition]):
        self._awards = {a.id: a for a in awards}

    def get_award_by_id(self, award_id: str) -> Optional[AwardDefinition]:
        return self._awards.get(award_id)

    def list_awards(self) -> list[AwardDefinition]:
        return list(self._awards.values())

    def industries(self) -> list[str]:
        return sorted({a.industry for a in self._awards.values() if a.industry})


def _entry_hourly_rate(entry: RateScheduleEntry) -> float:
    if entry.hourly_rate is not None:
        return entry.hourly_rate
    return entry.weekly_rate / STANDARD_WEEKLY_HOURS


def resolve_hourly_rate(classification: Classification, on: date) -> float:
    """
    Hourly rate in force on a date: the schedule entry with the latest
    effective_from on or before the date, else the classification's base rate.
    """
    schedule = sorted(classification.rate_schedule, key=lambda e: e.effective_from)
    idx = bisect_right([e.effective_from for e in schedule], on)
    if idx == 0:
        return classification.base_hourly_rate
    return _entry_hourly_rate(schedule[idx - 1])


def _cls(cid: str, level: str, description: str, rate: float, **kw) -> Classification:
    return Classification(id=cid, level=level, description=description, base_hourly_rate=rate, **kw)


def _allow(aid: str, name: str, kind: AllowanceKind, unit: AllowanceUnit, amount: float, description: str = ""):
    return AllowanceDefinition(id=aid, name=name, kind=kind, unit=unit, amount=amount, description=description)


def _annual_review(rate_2024: float) -> tuple[RateScheduleEntry, ...]:
    # 2025 Annual Wage Review: 3.5% from the first full pay period on or after 1 July 2025
    return (
        RateScheduleEntry(effective_from=date(2024, 7, 1), hourly_rate=rate_2024),
        RateScheduleEntry(effective_from=date(2025, 7, 1), hourly_rate=round(rate_2024 * 1.035, 2)),
    )


CHILDREN_SERVICES = AwardDefinition(
    id="children-services-2020",
    code="MA000120",
    name="Children's Services Award 2020",
    short_name="Children's Services",
    industry="Childcare",
    effective_date=date(2024, 7, 1),
    casual_loading=25,
    saturday_penalty=150,
    sunday_penalty=200,
    public_holiday_penalty=250,
    evening_penalty=110,
    night_penalty=115,
    classifications=(
        _cls("cs-1-1", "Level 1.1", "Support Worker - Entry", 22.46, qualification_required="None"),
        _cls("cs-1-2", "Level 1.2", "Support Worker - 1 year experience", 23.12),
        _cls("cs-1-3", "Level 1.3", "Support Worker - 2+ years experience", 23.78),
        _cls("cs-2-1", "Level 2.1", "Children's Services Employee - Entry", 24.44,
             qualification_required="Cert III or studying"),
        _cls("cs-2-2", "Level 2.2", "Children's Services Employee - 1 year", 25.10),
        _cls("cs-2-3", "Level 2.3", "Children's Services Employee - 2+ years", 25.76),
        _cls("cs-3-1", "Level 3.1", "Qualified Employee - Cert III", 26.98,
             qualification_required="Certificate III", rate_schedule=_annual_review(26.98)),
        _cls("cs-3-2", "Level 3.2", "Qualified Employee - 1 year", 27.64, rate_schedule=_annual_review(27.64)),
        _cls("cs-3-3", "Level 3.3", "Qualified Employee - 2+ years", 28.30, rate_schedule=_annual_review(28.30)),
        _cls("cs-3-4", "Level 3.4", "Qualified Employee - Senior", 28.96),
        _cls("cs-4-1", "Level 4.1", "Diploma Qualified - Entry", 30.28, qualification_required="Diploma",
             rate_schedule=_annual_review(30.28)),
        _cls("cs-4-2", "Level 4.2", "Diploma Qualified - 1 year", 31.50),
        _cls("cs-4-3", "Level 4.3", "Diploma Qualified - 2+ years", 32.72),
        _cls("cs-5-1", "Level 5.1", "Bachelor/ECT - Entry", 34.60, qualification_required="Bachelor Degree"),
        _cls("cs-5-2", "Level 5.2", "Bachelor/ECT - 1 year", 35.82),
        _cls("cs-5-3", "Level 5.3", "Bachelor/ECT - 2+ years", 37.04),
        _cls("cs-5-4", "Level 5.4", "Bachelor/ECT - Senior", 38.26),
        _cls("cs-6-1", "Level 6.1", "Director - Small Service", 40.14, qualification_required="Diploma + Experience"),
        _cls("cs-6-2", "Level 6.2", "Director - Medium Service", 42.02),
        _cls("cs-6-3", "Level 6.3", "Director - Large Service", 43.90),
    ),
    allowances=(
        _allow("cs-fa", "First Aid Allowance", AllowanceKind.FIRST_AID, AllowanceUnit.PER_WEEK, 18.93,
               "Holder of current first aid certificate required to perform duties"),
        _allow("cs-ed", "Educational Leader Allowance", AllowanceKind.LEADERSHIP, AllowanceUnit.PER_HOUR, 2.34,
               "Appointed educational program leader"),
        _allow("cs-resp", "Responsible Person Allowance", AllowanceKind.OTHER, AllowanceUnit.PER_HOUR, 1.50,
               "Nominated responsible person in charge"),
        _allow("cs-vehicle", "Vehicle Allowance", AllowanceKind.VEHICLE, AllowanceUnit.PER_KM, 0.96,
               "Use of personal vehicle for work duties"),
        _allow("cs-laundry", "Laundry Allowance", AllowanceKind.LAUNDRY, AllowanceUnit.PER_WEEK, 6.30,
               "Required to launder uniform"),
    ),
    default_classification_id="cs-3-1",
)

EDUCATIONAL_SERVICES = AwardDefinition(
    id="educational-services-2020",
    code="MA000076",
    name="Educational Services (Teachers) Award 2020",
    short_name="Educational Services",
    industry="Education",
    effective_date=date(2024, 7, 1),
    classifications=(
        _cls("et-1", "Level 1", "Graduate Teacher - Year 1", 42.50),
        _cls("et-2", "Level 2", "Graduate Teacher - Year 2", 44.20),
        _cls("et-3", "Level 3", "Graduate Teacher - Year 3", 45.90),
        _cls("et-4", "Level 4", "Proficient Teacher", 48.30),
        _cls("et-5", "Level 5", "Highly Accomplished Teacher", 52.40),
        _cls("et-6", "Level 6", "Lead Teacher", 56.80),
    ),
    allowances=(
        _allow("et-spec", "Special Education Allowance", AllowanceKind.OTHER, AllowanceUnit.PER_WEEK, 45.00,
               "Teaching students with special needs"),
        _allow("et-coord", "Coordinator Allowance", AllowanceKind.OTHER, AllowanceUnit.PER_WEEK, 120.00,
               "Curriculum or year level coordinator"),
    ),
    default_classification_id="et-1",
)

HOSPITALITY = AwardDefinition(
    id="hospitality-2020",
    code="MA000009",
    name="Hospitality Industry (General) Award 2020",
    short_name="Hospitality",
    industry="Hospitality",
    effective_date=date(2024, 7, 1),
    saturday_penalty=125,
    sunday_penalty=150,
    evening_penalty=115,
    night_penalty=130,
    classifications=(
        _cls("hosp-1", "Level 1", "Introductory", 21.38),
        _cls("hosp-2", "Level 2", "Food & Beverage Attendant Grade 1", 22.46),
        _cls("hosp-3", "Level 3", "Food & Beverage Attendant Grade 2", 23.34),
        _cls("hosp-4", "Level 4", "Food & Beverage Attendant Grade 3", 24.44),
        _cls("hosp-5", "Level 5", "Cook Grade 1", 25.10),
        _cls("hosp-6", "Level 6", "Cook Grade 2 / Supervisor", 26.42),
    ),
    allowances=(
        _allow("hosp-meal", "Meal Allowance", AllowanceKind.MEAL, AllowanceUnit.PER_SHIFT, 16.89,
               "When required to work overtime"),
        _allow("hosp-split", "Split Shift Allowance", AllowanceKind.BROKEN_SHIFT, AllowanceUnit.PER_SHIFT, 5.23,
               "Working a split shift"),
    ),
    default_classification_id="hosp-2",
)

RETAIL = AwardDefinition(
    id="retail-2020",
    code="MA000004",
    name="General Retail Industry Award 2020",
    short_name="Retail",
    industry="Retail",
    effective_date=date(2024, 7, 1),
    saturday_penalty=125,
    sunday_penalty=200,
    evening_penalty=125,
    classifications=(
        _cls("ret-1", "Level 1", "Retail Employee - Entry", 24.73),
        _cls("ret-2", "Level 2", "Retail Employee - Experienced", 25.28),
        _cls("ret-3", "Level 3", "Retail Employee - Senior", 25.68),
        _cls("ret-4", "Level 4", "Supervisor / Specialist", 26.35),
        _cls("ret-5", "Level 5", "Manager - Small Store", 27.29),
        _cls("ret-6", "Level 6", "Manager - Large Store", 28.59),
    ),
    allowances=(
        _allow("ret-fa", "First Aid Allowance", AllowanceKind.FIRST_AID, AllowanceUnit.PER_WEEK, 15.70,
               "Appointed first aid officer"),
        _allow("ret-cold", "Cold Work Allowance", AllowanceKind.OTHER, AllowanceUnit.PER_HOUR, 0.62,
               "Work in cold storage below 0°C"),
    ),
    default_classification_id="ret-1",
)

FAST_FOOD = AwardDefinition(
    id="fast-food-2020",
    code="MA000003",
    name="Fast Food Industry Award 2020",
    short_name="Fast Food",
    industry="Food Service",
    effective_date=date(2024, 7, 1),
    saturday_penalty=125,
    sunday_penalty=150,
    night_penalty=115,
    classifications=(
        _cls("ff-1", "Level 1", "Team Member - Entry", 23.23),
        _cls("ff-2", "Level 2", "Team Member - Experienced", 24.02),
        _cls("ff-3", "Level 3", "Shift Supervisor", 25.01),
        _cls("ff-4", "Level 4", "Assistant Manager", 26.18),
        _cls("ff-5", "Level 5", "Restaurant Manager", 28.35),
    ),
    allowances=(
        _allow("ff-meal", "Meal Allowance", AllowanceKind.MEAL, AllowanceUnit.PER_SHIFT, 14.29,
               "When required to work overtime"),
    ),
    default_classification_id="ff-1",
)

CLERKS = AwardDefinition(
    id="clerks-2020",
    code="MA000002",
    name="Clerks—Private Sector Award 2020",
    short_name="Clerks",
    industry="Administration",
    effective_date=date(2024, 7, 1),
    classifications=(
        _cls("cl-1", "Level 1", "Clerk - Entry", 24.73),
        _cls("cl-2", "Level 2", "Clerk - Experienced", 25.77),
        _cls("cl-3", "Level 3", "Senior Clerk", 26.73),
        _cls("cl-4", "Level 4", "Administrative Officer", 28.09),
        _cls("cl-5", "Level 5", "Senior Administrative Officer", 29.22),
    ),
    allowances=(
        _allow("cl-meal", "Meal Allowance", AllowanceKind.MEAL, AllowanceUnit.PER_SHIFT, 18.33,
               "When required to work overtime"),
    ),
    default_classification_id="cl-1",
)

SCHADS = AwardDefinition(
    id="social-2020",
    code="MA000100",
    name="Social, Community, Home Care and Disability Services Industry Award 2010",
    short_name="SCHADS",
    industry="Community Services",
    effective_date=date(2024, 7, 1),
    evening_penalty=112.5,
    night_penalty=115,
    classifications=(
        _cls("sc-1-1", "Level 1.1", "Home Care Employee", 24.55),
        _cls("sc-1-2", "Level 1.2", "Home Care Employee - 1 year", 25.21),
        _cls("sc-2-1", "Level 2.1", "Social & Community Services Employee", 27.07),
        _cls("sc-2-2", "Level 2.2", "Social & Community Services - 1 year", 27.73),
        _cls("sc-2-3", "Level 2.3", "Social & Community Services - 2+ years", 28.39),
        _cls("sc-3-1", "Level 3.1", "Qualified Worker - Entry", 29.71, rate_schedule=_annual_review(29.71)),
        _cls("sc-3-2", "Level 3.2", "Qualified Worker - 1 year", 30.37),
        _cls("sc-4-1", "Level 4.1", "Senior Worker", 32.35),
        _cls("sc-4-2", "Level 4.2", "Senior Worker - Experienced", 33.01),
    ),
    allowances=(
        _allow("sc-fa", "First Aid Allowance", AllowanceKind.FIRST_AID, AllowanceUnit.PER_WEEK, 18.93,
               "Appointed first aid officer"),
        _allow("sc-vehicle", "Vehicle Allowance", AllowanceKind.VEHICLE, AllowanceUnit.PER_KM, 0.96,
               "Use of personal vehicle"),
        _allow("sc-broken", "Broken Shift Allowance", AllowanceKind.BROKEN_SHIFT, AllowanceUnit.PER_SHIFT, 18.12,
               "Working a broken shift"),
        _allow("sc-sleep", "Sleepover Allowance", AllowanceKind.SLEEPOVER, AllowanceUnit.ONE_OFF, 65.56,
               "Required to sleep over at work"),
    ),
    default_classification_id="sc-3-1",
)

BUILTIN_AWARDS: tuple[AwardDefinition, ...] = (
    CHILDREN_SERVICES,
    EDUCATIONAL_SERVICES,
    HOSPITALITY,
    RETAIL,
    FAST_FOOD,
    CLERKS,
    SCHADS,
)


def default_catalog() -> AwardCatalog:
    return AwardCatalog(BUILTIN_AWARDS)
