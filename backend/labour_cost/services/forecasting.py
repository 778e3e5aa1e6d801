"""
Labour cost forecasting.

Projects the next few weeks from the current week's roster: every future day
copies the shifts rostered on the same weekday of the current (baseline) week,
scaled for public and school holidays, and is costed at the staff's average
hourly rate plus a day-type penalty loading.
"""
import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable, Optional

from labour_cost.models.awards import AwardDefinition
from labour_cost.models.roster import Shift, StaffMember
from labour_cost.models.schemas import (
    BudgetComparison,
    CostComparison,
    DailyForecast,
    ForecastSummary,
    RiskFactor,
    RiskSeverity,
    ShiftProjection,
    WeeklyForecast,
)
from labour_cost.services.aggregation import day_type_breakdown, calculate_roster_cost
from labour_cost.services.award_catalog import resolve_hourly_rate
from labour_cost.services.award_rules import DAILY_OVERTIME_THRESHOLD_HOURS, SUPERANNUATION_RATE
from labour_cost.services.calculator import round_half_up
from labour_cost.services.day_types import DayType, classify_day
from labour_cost.services.holidays import HolidayCalendar, HolidayType
from labour_cost.services.time_windows import span_minutes

logger = logging.getLogger(__name__)

DEFAULT_FORECAST_WEEKS = 4
DEFAULT_WEEKLY_BUDGET = 8000.0

# Fewer shifts are rostered on public holidays, more in school holidays
PUBLIC_HOLIDAY_DEMAND = 0.3
SCHOOL_HOLIDAY_DEMAND = 1.2

# Extra cost on top of ordinary cost, as a fraction of it
PENALTY_LOADING = {
    DayType.PUBLIC_HOLIDAY: 1.5,
    DayType.SUNDAY: 1.0,
    DayType.SATURDAY: 0.5,
    DayType.WEEKDAY: 0.0,
}

ALLOWANCE_ESTIMATE_RATE = 0.02
TYPICAL_DAY_CONFIDENCE = 0.85
HOLIDAY_CONFIDENCE = 0.7
PUBLIC_HOLIDAY_IMPACT = 500.0            # rough extra cost per public holiday
HIGH_SEVERITY_THRESHOLD = 2

# Quick single-shift projection multipliers
PROJECTION_MULTIPLIERS = {
    DayType.PUBLIC_HOLIDAY: 2.5,
    DayType.SUNDAY: 2.0,
    DayType.SATURDAY: 1.5,
    DayType.WEEKDAY: 1.0,
}


def format_currency(amount: float) -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def week_start_for(d: date) -> date:
    """Monday of the week containing d."""
    return d - timedelta(days=d.weekday())


def _net_hours(shift: Shift) -> float:
    return max(span_minutes(shift.start_time, shift.end_time) - shift.break_minutes, 0) / 60


def average_hourly_rate(staff: list[StaffMember], award: AwardDefinition, on: date) -> float:
    """Mean of the staff's hourly rates; staff without an override use the award default."""
    default_rate = resolve_hourly_rate(award.default_classification, on)
    if not staff:
        return default_rate
    return sum(s.hourly_rate or default_rate for s in staff) / len(staff)


def _demand_multiplier(is_public_holiday: bool, is_school_holiday: bool) -> float:
    if is_public_holiday:
        return PUBLIC_HOLIDAY_DEMAND
    if is_school_holiday:
        return SCHOOL_HOLIDAY_DEMAND
    return 1.0


def _forecast_day(
    d: date,
    pattern_shifts: list[Shift],
    avg_rate: float,
    calendar: HolidayCalendar,
) -> DailyForecast:
    day_type = classify_day(d, calendar)
    is_ph = day_type == DayType.PUBLIC_HOLIDAY
    is_sh = calendar.is_school_holiday(d)
    demand = _demand_multiplier(is_ph, is_sh)

    projected_shifts = int(round_half_up(len(pattern_shifts) * demand, 0))
    projected_hours = sum(_net_hours(s) for s in pattern_shifts) * demand

    ordinary_cost = projected_hours * avg_rate
    penalty_cost = ordinary_cost * PENALTY_LOADING[day_type]
    projected_cost = ordinary_cost + penalty_cost
    allowances_cost = projected_cost * ALLOWANCE_ESTIMATE_RATE
    superannuation = (projected_cost + allowances_cost) * SUPERANNUATION_RATE

    return DailyForecast(
        date=d,
        day_of_week=d.strftime("%A"),
        day_type=day_type,
        is_public_holiday=is_ph,
        is_school_holiday=is_sh,
        projected_shifts=projected_shifts,
        projected_hours=projected_hours,
        projected_cost=round_half_up(projected_cost, 2),
        projected_superannuation=round_half_up(superannuation, 2),
        total_projected_cost=round_half_up(projected_cost + allowances_cost + superannuation, 2),
        ordinary_cost=round_half_up(ordinary_cost, 2),
        penalty_cost=round_half_up(penalty_cost, 2),
        overtime_cost=0,
        allowances_cost=round_half_up(allowances_cost, 2),
        confidence=HOLIDAY_CONFIDENCE if (is_ph or is_sh) else TYPICAL_DAY_CONFIDENCE,
    )


def _percent(part: float, whole: float) -> float:
    return round_half_up(part / whole * 100, 2) if whole > 0 else 0


def _severity(count: int) -> RiskSeverity:
    return RiskSeverity.HIGH if count > HIGH_SEVERITY_THRESHOLD else RiskSeverity.MEDIUM


def generate_forecast(
    current_shifts: Iterable[Shift],
    staff: Iterable[StaffMember],
    award: AwardDefinition,
    calendar: HolidayCalendar,
    forecast_weeks: int = DEFAULT_FORECAST_WEEKS,
    weekly_budget: float = DEFAULT_WEEKLY_BUDGET,
    reference_date: Optional[date] = None,
) -> ForecastSummary:
    """
    Forecast labour cost for the forecast_weeks following the week that
    contains reference_date (today by default).
    """
    if forecast_weeks < 1:
        raise ValueError("forecast_weeks must be at least 1")

    staff = list(staff)
    reference_date = reference_date or date.today()
    current_week_start = week_start_for(reference_date)
    current_week_end = current_week_start + timedelta(days=6)

    baseline_shifts = [
        s for s in current_shifts if current_week_start <= s.shift_date <= current_week_end
    ]
    baseline = calculate_roster_cost(
        baseline_shifts, staff, current_week_start, current_week_end, award, calendar,
    )
    pattern: dict[int, list[Shift]] = defaultdict(list)
    for s in baseline_shifts:
        pattern[s.shift_date.weekday()].append(s)

    avg_rate = average_hourly_rate(staff, award, reference_date)
    logger.debug(
        "Forecasting %d weeks from %s: %d baseline shifts, avg rate %.2f",
        forecast_weeks, current_week_start, len(baseline_shifts), avg_rate,
    )

    weeks: list[WeeklyForecast] = []
    previous_week_cost = baseline.total_cost

    for w in range(1, forecast_weeks + 1):
        week_start = current_week_start + timedelta(weeks=w)
        days = [
            _forecast_day(d, pattern[d.weekday()], avg_rate, calendar)
            for d in (week_start + timedelta(days=i) for i in range(7))
        ]

        total_cost = round_half_up(sum(d.total_projected_cost for d in days), 2)
        peak = max(days, key=lambda d: d.total_projected_cost)
        change = total_cost - previous_week_cost
        variance = total_cost - weekly_budget

        weeks.append(WeeklyForecast(
            week_start=week_start,
            week_end=week_start + timedelta(days=6),
            week_number=w,
            days=days,
            total_shifts=sum(d.projected_shifts for d in days),
            total_hours=sum(d.projected_hours for d in days),
            total_cost=total_cost,
            vs_last_week=CostComparison(
                cost_difference=round_half_up(change, 2),
                percent_change=_percent(change, previous_week_cost),
            ),
            vs_budget=BudgetComparison(
                budget_amount=weekly_budget,
                variance=round_half_up(variance, 2),
                percent_variance=_percent(variance, weekly_budget),
                is_over_budget=total_cost > weekly_budget,
            ),
            avg_daily_cost=round_half_up(total_cost / 7, 2),
            peak_day=peak.day_of_week,
            peak_day_cost=peak.total_projected_cost,
            confidence=sum(d.confidence for d in days) / len(days),
        ))
        previous_week_cost = total_cost

    period_start = weeks[0].week_start
    period_end = weeks[-1].week_end
    total_projected_cost = round_half_up(sum(w.total_cost for w in weeks), 2)
    total_projected_hours = sum(w.total_hours for w in weeks)
    period_budget = weekly_budget * forecast_weeks

    all_days = [d for w in weeks for d in w.days]
    hours: dict[DayType, float] = defaultdict(float)
    cost: dict[DayType, float] = defaultdict(float)
    for d in all_days:
        hours[d.day_type] += d.projected_hours
        cost[d.day_type] += d.total_projected_cost
    by_day_type = day_type_breakdown(hours, cost)

    public_holidays = [
        h for h in calendar.get_holidays_in_range(period_start, period_end)
        if h.type == HolidayType.PUBLIC_HOLIDAY
    ]
    over_budget_weeks = [w for w in weeks if w.vs_budget.is_over_budget]

    risk_factors: list[RiskFactor] = []
    if public_holidays:
        risk_factors.append(RiskFactor(
            type="public_holiday",
            description=f"{len(public_holidays)} public holiday(s) in forecast period",
            estimated_impact=len(public_holidays) * PUBLIC_HOLIDAY_IMPACT,
            severity=_severity(len(public_holidays)),
        ))
    if over_budget_weeks:
        risk_factors.append(RiskFactor(
            type="budget_overrun",
            description=f"{len(over_budget_weeks)} week(s) projected over budget",
            estimated_impact=round_half_up(sum(w.vs_budget.variance for w in over_budget_weeks), 2),
            severity=_severity(len(over_budget_weeks)),
        ))

    recommendations: list[str] = []
    if total_projected_cost > period_budget:
        recommendations.append(
            f"Consider reducing weekend shifts to save ~{format_currency(by_day_type.sunday.cost * 0.2)}"
        )
        recommendations.append("Review overtime patterns - weekly overtime adds significant cost")
    if public_holidays:
        recommendations.append("Plan public holiday staffing carefully - 250% penalty rates apply")
    if sum(1 for d in all_days if d.is_school_holiday) > 5:
        recommendations.append("School holidays may increase demand - consider casual staff for flexibility")

    variance = total_projected_cost - period_budget
    return ForecastSummary(
        period_start=period_start,
        period_end=period_end,
        weeks_count=forecast_weeks,
        baseline_cost=baseline.total_cost,
        total_projected_cost=total_projected_cost,
        total_projected_hours=total_projected_hours,
        avg_weekly_cost=round_half_up(total_projected_cost / forecast_weeks, 2),
        avg_hourly_cost=round_half_up(total_projected_cost / total_projected_hours, 2) if total_projected_hours > 0 else 0,
        period_budget=period_budget,
        projected_variance=round_half_up(variance, 2),
        percent_variance=_percent(variance, period_budget),
        is_over_budget=total_projected_cost > period_budget,
        by_day_type=by_day_type,
        risk_factors=risk_factors,
        recommendations=recommendations,
        weeks=weeks,
    )


def project_shift_cost(
    shift: Shift,
    staff: StaffMember,
    award: AwardDefinition,
    calendar: HolidayCalendar,
) -> ShiftProjection:
    """Rough cost of a single shift, for quick estimates while rostering."""
    net_hours = _net_hours(shift)
    day_type = classify_day(shift.shift_date, calendar)
    rate = staff.hourly_rate or resolve_hourly_rate(award.default_classification, shift.shift_date)

    base_pay = net_hours * rate
    penalties = base_pay * (PROJECTION_MULTIPLIERS[day_type] - 1)
    superannuation = (base_pay + penalties) * SUPERANNUATION_RATE

    warnings = []
    if day_type == DayType.PUBLIC_HOLIDAY:
        warnings.append("Public holiday rates apply (250%)")
    if net_hours > DAILY_OVERTIME_THRESHOLD_HOURS:
        warnings.append("Daily overtime may apply")

    return ShiftProjection(
        estimated_cost=round_half_up(base_pay + penalties + superannuation, 2),
        base_pay=round_half_up(base_pay, 2),
        penalties=round_half_up(penalties, 2),
        superannuation=round_half_up(superannuation, 2),
        warnings=warnings,
    )
