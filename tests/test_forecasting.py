"""
Labour cost forecasting from the current week's roster.
Baseline week is Mon 15 - Sun 21 Dec 2025 with one 8h Thursday shift at $30/hr;
Christmas Day falls on the Thursday of the first forecast week.
"""
from datetime import date

import pytest

from labour_cost.models.roster import EmploymentType, RegularShift, StaffMember
from labour_cost.models.schemas import RiskSeverity
from labour_cost.services.day_types import DayType
from labour_cost.services.forecasting import (
    average_hourly_rate,
    format_currency,
    generate_forecast,
    project_shift_cost,
    week_start_for,
)
from labour_cost.services.holidays import Holiday, HolidayType, StaticHolidayCalendar, school_holiday_weekdays

REFERENCE = date(2025, 12, 15)


def _baseline_shifts():
    return [
        RegularShift(
            id="t1", staff_id="s1", shift_date=date(2025, 12, 18),
            start_time="09:00", end_time="17:30", break_minutes=30,
        ),
        # outside the baseline week; ignored
        RegularShift(
            id="t0", staff_id="s1", shift_date=date(2025, 12, 11),
            start_time="09:00", end_time="17:30", break_minutes=30,
        ),
    ]


@pytest.fixture
def forecast(award, calendar, full_timer):
    return generate_forecast(
        _baseline_shifts(), [full_timer], award, calendar,
        forecast_weeks=2, reference_date=REFERENCE,
    )


def test_helpers():
    assert week_start_for(date(2025, 12, 18)) == date(2025, 12, 15)
    assert week_start_for(date(2025, 12, 15)) == date(2025, 12, 15)
    assert format_currency(1234.5) == "$1,234.50"
    assert format_currency(-62.89) == "-$62.89"


def test_average_hourly_rate_falls_back_to_award(award, full_timer):
    """($30.00 + Level 3.1 $27.92) / 2"""
    other = StaffMember(id="s9", name="Kim", employment_type=EmploymentType.PART_TIME)
    assert average_hourly_rate([full_timer, other], award, REFERENCE) == pytest.approx(28.96)
    assert average_hourly_rate([], award, REFERENCE) == 27.92


def test_forecast_period(forecast):
    assert forecast.period_start == date(2025, 12, 22)
    assert forecast.period_end == date(2026, 1, 4)
    assert forecast.weeks_count == 2
    assert [w.week_number for w in forecast.weeks] == [1, 2]
    assert all(len(w.days) == 7 for w in forecast.weeks)


def test_public_holiday_demand_and_penalty(forecast):
    """Christmas: 8h × 0.3 = 2.4h; $72 ordinary + 150% loading = $180; +2% allowances +11.5% super"""
    christmas = forecast.weeks[0].days[3]
    assert christmas.date == date(2025, 12, 25)
    assert christmas.day_type == DayType.PUBLIC_HOLIDAY
    assert christmas.projected_hours == pytest.approx(2.4)
    assert christmas.ordinary_cost == 72.00
    assert christmas.penalty_cost == 108.00
    assert christmas.projected_cost == 180.00
    assert christmas.allowances_cost == 3.60
    assert christmas.projected_superannuation == 21.11
    assert christmas.total_projected_cost == 204.71
    assert christmas.confidence == 0.7


def test_ordinary_week(forecast):
    """New Year's Day is not a holiday in this calendar: 8h × $30 = $240 + $4.80 + $28.15"""
    week = forecast.weeks[1]
    thursday = week.days[3]
    assert thursday.date == date(2026, 1, 1)
    assert thursday.projected_cost == 240.00
    assert thursday.total_projected_cost == 272.95
    assert thursday.confidence == 0.85
    assert week.total_cost == 272.95
    assert week.peak_day == "Thursday"
    assert week.days[0].is_school_holiday


def test_week_over_week_comparison(forecast):
    """Week 1 compares against the baseline roster ($267.60), week 2 against week 1"""
    assert forecast.baseline_cost == 267.60
    assert forecast.weeks[0].total_cost == 204.71
    assert forecast.weeks[0].vs_last_week.cost_difference == -62.89
    assert forecast.weeks[1].vs_last_week.cost_difference == 68.24


def test_totals_and_budget(forecast):
    assert forecast.total_projected_cost == 477.66
    assert forecast.total_projected_hours == pytest.approx(10.4)
    assert forecast.period_budget == 16000.0
    assert not forecast.is_over_budget
    assert not forecast.weeks[0].vs_budget.is_over_budget
    assert forecast.by_day_type.public_holiday.cost == 204.71


def test_public_holiday_risk(forecast):
    assert len(forecast.risk_factors) == 1
    risk = forecast.risk_factors[0]
    assert risk.type == "public_holiday"
    assert risk.estimated_impact == 500.0
    assert risk.severity == RiskSeverity.MEDIUM
    assert forecast.recommendations == ["Plan public holiday staffing carefully - 250% penalty rates apply"]


def test_over_budget(award, calendar, full_timer):
    result = generate_forecast(
        _baseline_shifts(), [full_timer], award, calendar,
        forecast_weeks=2, weekly_budget=100.0, reference_date=REFERENCE,
    )
    assert result.is_over_budget
    assert all(w.vs_budget.is_over_budget for w in result.weeks)
    budget_risk = [r for r in result.risk_factors if r.type == "budget_overrun"][0]
    assert budget_risk.description == "2 week(s) projected over budget"
    assert "Review overtime patterns - weekly overtime adds significant cost" in result.recommendations


def test_forecast_weeks_must_be_positive(award, calendar, full_timer):
    with pytest.raises(ValueError):
        generate_forecast([], [full_timer], award, calendar, forecast_weeks=0, reference_date=REFERENCE)


def test_empty_roster_forecasts_zero(award, calendar, full_timer):
    result = generate_forecast([], [full_timer], award, calendar, forecast_weeks=1, reference_date=REFERENCE)
    assert result.total_projected_cost == 0
    assert result.avg_hourly_cost == 0
    assert result.weeks[0].vs_last_week.percent_change == 0


def test_project_shift_cost_sunday(calendar, award, full_timer):
    """Sunday 4h × $30 = $120 base, 200% so $120 penalties, super $27.60"""
    shift = RegularShift(
        id="p1", staff_id="s1", shift_date=date(2025, 12, 21), start_time="09:00", end_time="13:00",
    )
    projection = project_shift_cost(shift, full_timer, award, calendar)
    assert projection.base_pay == 120.00
    assert projection.penalties == 120.00
    assert projection.superannuation == 27.60
    assert projection.estimated_cost == 267.60
    assert projection.warnings == []


def test_project_shift_cost_public_holiday(calendar, award, full_timer):
    shift = RegularShift(
        id="p1", staff_id="s1", shift_date=date(2025, 12, 25), start_time="07:00", end_time="17:00",
    )
    projection = project_shift_cost(shift, full_timer, award, calendar)
    assert projection.base_pay == 300.00
    assert projection.penalties == 450.00
    assert projection.warnings == ["Public holiday rates apply (250%)", "Daily overtime may apply"]


def _shift_on(d, start="09:00", end="17:30", break_minutes=30):
    return RegularShift(
        id=f"t{d.isoformat()}", staff_id="s1", shift_date=d,
        start_time=start, end_time=end, break_minutes=break_minutes,
    )


def test_school_holiday_demand(award, calendar, full_timer):
    """Mon 29 Dec is a school holiday: 8h × 1.2 = 9.6h × $30 = $288 + $5.76 + $33.78"""
    result = generate_forecast(
        [_shift_on(date(2025, 12, 15))], [full_timer], award, calendar,
        forecast_weeks=2, reference_date=REFERENCE,
    )
    monday = result.weeks[1].days[0]
    assert monday.date == date(2025, 12, 29)
    assert monday.is_school_holiday
    assert monday.projected_hours == pytest.approx(9.6)
    assert monday.projected_cost == 288.00
    assert monday.penalty_cost == 0
    assert monday.total_projected_cost == 327.54
    assert monday.confidence == 0.7
    assert result.weeks[0].days[0].projected_hours == pytest.approx(8.0)


def test_weekend_penalty_loading(award, calendar, full_timer):
    """4h × $30 = $120 ordinary; Saturday adds 50%, Sunday adds 100%"""
    shifts = [
        _shift_on(date(2025, 12, 20), "09:00", "13:00", 0),
        _shift_on(date(2025, 12, 21), "09:00", "13:00", 0),
    ]
    result = generate_forecast(shifts, [full_timer], award, calendar, forecast_weeks=1, reference_date=REFERENCE)
    saturday, sunday = result.weeks[0].days[5], result.weeks[0].days[6]
    assert saturday.day_type == DayType.SATURDAY
    assert saturday.ordinary_cost == 120.00
    assert saturday.penalty_cost == 60.00
    assert saturday.total_projected_cost == 204.71
    assert sunday.day_type == DayType.SUNDAY
    assert sunday.penalty_cost == 120.00
    assert sunday.total_projected_cost == 272.95
    assert result.weeks[0].peak_day == "Sunday"


def test_long_school_holidays_recommend_casuals(award, full_timer):
    """Ten school holiday weekdays across the two forecast weeks"""
    cal = StaticHolidayCalendar(school_holiday_weekdays(date(2025, 12, 22), date(2026, 1, 4), "Summer Holidays"))
    result = generate_forecast([], [full_timer], award, cal, forecast_weeks=2, reference_date=REFERENCE)
    assert sum(1 for w in result.weeks for d in w.days if d.is_school_holiday) == 10
    assert result.recommendations == [
        "School holidays may increase demand - consider casual staff for flexibility"
    ]


def test_many_public_holidays_are_high_severity(award, full_timer):
    cal = StaticHolidayCalendar([
        Holiday(date=date(2025, 12, 25), name="Christmas Day", type=HolidayType.PUBLIC_HOLIDAY),
        Holiday(date=date(2025, 12, 26), name="Boxing Day", type=HolidayType.PUBLIC_HOLIDAY),
        Holiday(date=date(2026, 1, 1), name="New Year's Day", type=HolidayType.PUBLIC_HOLIDAY),
    ])
    result = generate_forecast([], [full_timer], award, cal, forecast_weeks=2, reference_date=REFERENCE)
    risk = result.risk_factors[0]
    assert risk.description == "3 public holiday(s) in forecast period"
    assert risk.estimated_impact == 1500.0
    assert risk.severity == RiskSeverity.HIGH


def test_many_weeks_over_budget_are_high_severity(award, calendar, full_timer):
    result = generate_forecast(
        [_shift_on(date(2025, 12, 17))], [full_timer], award, calendar,
        forecast_weeks=3, weekly_budget=1.0, reference_date=REFERENCE,
    )
    budget_risk = [r for r in result.risk_factors if r.type == "budget_overrun"][0]
    assert budget_risk.description == "3 week(s) projected over budget"
    assert budget_risk.severity == RiskSeverity.HIGH
