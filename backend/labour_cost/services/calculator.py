"""
Shift cost calculation engine.

One shift in, one ShiftCostBreakdown out: base rate and casual loading,
weekday time periods or weekend/public holiday penalties, daily overtime,
allowances and superannuation. Data problems never raise; they are reported
in the breakdown's warnings and errors.
"""
import logging
import math
from datetime import date
from typing import Optional

from labour_cost.models.awards import AllowanceKind, AllowanceUnit, AwardDefinition, Classification
from labour_cost.models.roster import (
    EmploymentType,
    OnCallShift,
    RecallShift,
    Shift,
    SleepoverShift,
    StaffMember,
)
from labour_cost.models.schemas import AppliedAllowance, ConditionKind, ShiftConditions, ShiftCostBreakdown
from labour_cost.services.award_catalog import resolve_hourly_rate
from labour_cost.services.award_rules import (
    DAILY_OVERTIME_THRESHOLD_HOURS,
    DEFAULT_BROKEN_SHIFT_ALLOWANCE,
    DEFAULT_HIGHER_DUTIES_RATE,
    DEFAULT_ON_CALL_ALLOWANCE,
    DEFAULT_SLEEPOVER_ALLOWANCE,
    DEFAULT_VEHICLE_RATE_PER_KM,
    DISTURBANCE_MINIMUM_HOURS,
    DISTURBANCE_RATE_MULTIPLIER,
    LEADERSHIP_ROLES,
    OVERTIME_FIRST_TIER_HOURS,
    RECALL_MINIMUM_HOURS,
    RECALL_RATE_MULTIPLIER,
    SUPERANNUATION_RATE,
    WORKING_DAYS_PER_WEEK,
)
from labour_cost.services.day_types import DayType, classify_day
from labour_cost.services.holidays import HolidayCalendar
from labour_cost.services.shift_detection import (
    broken_shift_gap_minutes,
    detect_conditions,
    has_valid_first_aid,
    travel_allowance_amount,
    validate_shift,
)
from labour_cost.services.time_windows import span_minutes, split_weekday_hours

logger = logging.getLogger(__name__)


def round_half_up(value: float, decimals: int = 2) -> float:
    """Round to decimals; 0.5 rounds up (so 49.785 -> 49.79)."""
    if decimals <= 0:
        return math.floor(value + 0.5)
    exp = 10 ** decimals
    return math.floor(value * exp + 0.5) / exp


def resolve_classification(award: AwardDefinition, classification: Optional[Classification] = None) -> Classification:
    if classification is not None:
        return classification
    logger.debug("No classification given, using %s default %s", award.id, award.default_classification_id)
    return award.default_classification


def get_effective_hourly_rate(
    award: AwardDefinition,
    classification: Classification,
    staff: StaffMember,
    shift: Shift,
) -> tuple[float, float]:
    """(base, effective) hourly rate; casual loading is added for casuals only."""
    base = staff.hourly_rate or resolve_hourly_rate(classification, shift.shift_date)
    loading = award.casual_loading / 100 if staff.is_casual else 0
    return base, base * (1 + loading)


def _allowance_amount(award: AwardDefinition, kind: AllowanceKind, default: float) -> float:
    definition = award.find_allowance(kind)
    if definition is None:
        logger.debug("Award %s has no %s allowance, using default %.2f", award.id, kind.value, default)
        return default
    return definition.amount


def _on_call_hours(shift: Shift, net_hours: float) -> float:
    if isinstance(shift, (OnCallShift, RecallShift)) and shift.on_call:
        return span_minutes(shift.on_call.start_time, shift.on_call.end_time) / 60
    return net_hours


def _calculate_allowances(
    shift: Shift,
    staff: StaffMember,
    award: AwardDefinition,
    conditions: ShiftConditions,
    effective_rate: float,
    net_minutes: int,
    warnings: list[str],
) -> list[AppliedAllowance]:
    net_hours = net_minutes / 60
    allowances: list[AppliedAllowance] = []

    def add(aid: str, name: str, amount: float, description: str) -> None:
        allowances.append(AppliedAllowance(
            id=aid, name=name, amount=round_half_up(amount, 2), description=description,
        ))

    # First aid: weekly allowance spread over the working week
    first_aid = award.find_allowance(AllowanceKind.FIRST_AID)
    if first_aid and first_aid.unit == AllowanceUnit.PER_WEEK and has_valid_first_aid(staff):
        add(first_aid.id, first_aid.name, first_aid.amount / WORKING_DAYS_PER_WEEK,
            "Prorated from weekly allowance")

    leadership = award.find_allowance(AllowanceKind.LEADERSHIP)
    if leadership and leadership.unit == AllowanceUnit.PER_HOUR and staff.role in LEADERSHIP_ROLES:
        add(leadership.id, leadership.name, leadership.amount * net_hours,
            f"{net_hours:.1f}h × ${leadership.amount:.2f}")

    if conditions.has(ConditionKind.ON_CALL):
        rate = _allowance_amount(award, AllowanceKind.ON_CALL, DEFAULT_ON_CALL_ALLOWANCE)
        add("on-call-allowance", "On-Call Allowance", rate,
            f"On-call for {_on_call_hours(shift, net_hours):.1f} hours")

        if conditions.has(ConditionKind.RECALL):
            recall_minutes = shift.on_call.recall_duration if shift.on_call else None
            if recall_minutes:
                recall_hours = recall_minutes / 60
                paid_hours = max(RECALL_MINIMUM_HOURS, recall_hours)
                add("recall-payment", "Recall During On-Call",
                    paid_hours * effective_rate * RECALL_RATE_MULTIPLIER,
                    f"{recall_hours:.1f}h actual (min {RECALL_MINIMUM_HOURS}h) @ 150% rate")
                warnings.append(f"Recalled during on-call: {recall_minutes} mins worked")
            else:
                warnings.append("Recalled during on-call but recall duration not recorded; no recall payment applied")

    if conditions.has(ConditionKind.SLEEPOVER):
        rate = _allowance_amount(award, AllowanceKind.SLEEPOVER, DEFAULT_SLEEPOVER_ALLOWANCE)
        add("sleepover-allowance", "Sleepover Allowance", rate, "Overnight stay at facility")

        if conditions.has(ConditionKind.SLEEPOVER_DISTURBED) and isinstance(shift, SleepoverShift):
            disturbance_minutes = shift.sleepover.disturbance_minutes
            if disturbance_minutes:
                paid_hours = max(DISTURBANCE_MINIMUM_HOURS, disturbance_minutes / 60)
                add("sleepover-disturbance", "Sleepover Disturbance",
                    paid_hours * effective_rate * DISTURBANCE_RATE_MULTIPLIER,
                    f"Disturbed for {disturbance_minutes} mins (min {DISTURBANCE_MINIMUM_HOURS}h @ 150%)")
                warnings.append(f"Sleepover disturbed: {disturbance_minutes} mins")

    if conditions.has(ConditionKind.BROKEN_SHIFT):
        rate = _allowance_amount(award, AllowanceKind.BROKEN_SHIFT, DEFAULT_BROKEN_SHIFT_ALLOWANCE)
        add("broken-shift-allowance", "Broken Shift Allowance", rate, "Shift with unpaid break > 1 hour")
        gap = broken_shift_gap_minutes(shift)
        if gap:
            warnings.append(f"Broken shift: {gap} mins unpaid gap")

    if conditions.has(ConditionKind.HIGHER_DUTIES):
        hourly = _allowance_amount(award, AllowanceKind.HIGHER_DUTIES, DEFAULT_HIGHER_DUTIES_RATE)
        duties = shift.higher_duties
        hd_minutes = duties.duration_minutes if duties.duration_minutes is not None else net_minutes
        hd_hours = hd_minutes / 60
        add("higher-duties-allowance", "Higher Duties Allowance", hd_hours * hourly,
            f"{hd_hours:.1f}h at {duties.classification}")

    if conditions.has(ConditionKind.TRAVEL):
        per_km = _allowance_amount(award, AllowanceKind.VEHICLE, DEFAULT_VEHICLE_RATE_PER_KM)
        add("vehicle-allowance", "Vehicle Allowance", travel_allowance_amount(shift, per_km),
            f"{shift.travel_kilometres:g} km @ ${per_km:.2f}/km")

    return allowances


def calculate_shift_cost(
    shift: Shift,
    staff: StaffMember,
    award: AwardDefinition,
    calendar: HolidayCalendar,
    classification: Optional[Classification] = None,
) -> ShiftCostBreakdown:
    """
    Calculate the full cost of one shift. Returns a ShiftCostBreakdown; pay
    amounts are rounded to cents, hours are kept at full precision.
    """
    warnings: list[str] = []
    validation = validate_shift(shift)
    errors = list(validation.errors)

    gross_minutes = span_minutes(shift.start_time, shift.end_time)
    net_minutes = gross_minutes - shift.break_minutes
    if net_minutes < 0:
        logger.warning("Shift %s has a break longer than the shift; costing it as zero hours", shift.id)
    paid_minutes = max(net_minutes, 0)
    net_hours = paid_minutes / 60

    classification = resolve_classification(award, classification)
    base_rate, rate = get_effective_hourly_rate(award, classification, staff, shift)

    day_type = classify_day(shift.shift_date, calendar)
    evening_penalty = award.evening_penalty or 100

    ordinary_hours = ordinary_pay = night_hours = 0.0
    evening_hours = evening_pay = 0.0
    saturday_hours = saturday_pay = 0.0
    sunday_hours = sunday_pay = 0.0
    ph_hours = ph_pay = 0.0

    if day_type == DayType.PUBLIC_HOLIDAY:
        ph_hours = net_hours
        ph_pay = net_hours * rate * award.public_holiday_penalty / 100
    elif day_type == DayType.SUNDAY:
        sunday_hours = net_hours
        sunday_pay = net_hours * rate * award.sunday_penalty / 100
    elif day_type == DayType.SATURDAY:
        saturday_hours = net_hours
        saturday_pay = net_hours * rate * award.saturday_penalty / 100
    else:
        ordinary_period, evening_period, night_period = split_weekday_hours(shift.start_time, shift.end_time)
        # Spread the break evenly so the periods add up to net hours
        period_total = ordinary_period + evening_period + night_period
        proration = net_hours / period_total if period_total > 0 else 0

        night_hours = night_period * proration
        night_penalty = award.night_penalty or 100
        ordinary_hours = ordinary_period * proration + night_hours
        ordinary_pay = (
            ordinary_period * proration * rate
            + night_hours * rate * night_penalty / 100
        )
        evening_hours = evening_period * proration
        evening_pay = evening_hours * rate * evening_penalty / 100

    overtime_hours = overtime_pay = 0.0
    if not staff.is_casual and net_hours > DAILY_OVERTIME_THRESHOLD_HOURS:
        overtime_hours = net_hours - DAILY_OVERTIME_THRESHOLD_HOURS
        if day_type == DayType.SUNDAY:
            overtime_pay = overtime_hours * rate * award.overtime_rates.sunday / 100
        else:
            first_tier = min(overtime_hours, OVERTIME_FIRST_TIER_HOURS)
            second_tier = max(0.0, overtime_hours - OVERTIME_FIRST_TIER_HOURS)
            overtime_pay = (
                first_tier * rate * award.overtime_rates.first_2_hours / 100
                + second_tier * rate * award.overtime_rates.after_2_hours / 100
            )
        carved = min(overtime_hours, ordinary_hours)
        if carved > 0:
            remaining = ordinary_hours - carved
            ordinary_pay = ordinary_pay * remaining / ordinary_hours
            night_hours = night_hours * remaining / ordinary_hours
            ordinary_hours = remaining
        warnings.append(f"Overtime: {overtime_hours:.1f}h (daily limit exceeded)")

    conditions = detect_conditions(shift)
    allowances = _calculate_allowances(shift, staff, award, conditions, rate, paid_minutes, warnings)
    warnings.extend(w for w in validation.warnings if w not in warnings)
    total_allowances = round_half_up(sum(a.amount for a in allowances), 2)

    ordinary_pay = round_half_up(ordinary_pay, 2)
    evening_pay = round_half_up(evening_pay, 2)
    saturday_pay = round_half_up(saturday_pay, 2)
    sunday_pay = round_half_up(sunday_pay, 2)
    ph_pay = round_half_up(ph_pay, 2)
    overtime_pay = round_half_up(overtime_pay, 2)

    gross_pay = round_half_up(
        ordinary_pay + evening_pay + saturday_pay + sunday_pay + ph_pay + overtime_pay + total_allowances,
        2,
    )
    superannuation = round_half_up(gross_pay * SUPERANNUATION_RATE, 2)

    return ShiftCostBreakdown(
        shift_id=shift.id,
        staff_id=staff.id,
        staff_name=staff.name,
        shift_date=shift.shift_date,
        day_of_week=shift.shift_date.strftime("%A"),
        day_type=day_type,
        start_time=shift.start_time,
        end_time=shift.end_time,
        gross_minutes=gross_minutes,
        break_minutes=shift.break_minutes,
        net_minutes=net_minutes,
        net_hours=net_hours,
        base_hourly_rate=base_rate,
        effective_hourly_rate=rate,
        classification=classification.level,
        employment_type=staff.employment_type.value,
        ordinary_hours=ordinary_hours,
        ordinary_pay=ordinary_pay,
        night_hours=night_hours,
        evening_hours=evening_hours,
        evening_pay=evening_pay,
        evening_penalty_rate=evening_penalty,
        saturday_hours=saturday_hours,
        saturday_pay=saturday_pay,
        saturday_penalty_rate=award.saturday_penalty,
        sunday_hours=sunday_hours,
        sunday_pay=sunday_pay,
        sunday_penalty_rate=award.sunday_penalty,
        public_holiday_hours=ph_hours,
        public_holiday_pay=ph_pay,
        public_holiday_penalty_rate=award.public_holiday_penalty,
        overtime_hours=overtime_hours,
        overtime_pay=overtime_pay,
        allowances=allowances,
        total_allowances=total_allowances,
        gross_pay=gross_pay,
        superannuation=superannuation,
        total_cost=round_half_up(gross_pay + superannuation, 2),
        is_public_holiday=day_type == DayType.PUBLIC_HOLIDAY,
        is_school_holiday=calendar.is_school_holiday(shift.shift_date),
        is_casual=staff.is_casual,
        has_overtime=overtime_hours > 0,
        conditions=conditions.conditions,
        warnings=warnings,
        errors=errors,
    )


def error_breakdown(shift: Shift, staff: StaffMember, message: str) -> ShiftCostBreakdown:
    """Zero-cost placeholder for a shift that could not be costed at all."""
    return ShiftCostBreakdown(
        shift_id=shift.id,
        staff_id=staff.id,
        staff_name=staff.name,
        shift_date=shift.shift_date,
        day_of_week=shift.shift_date.strftime("%A"),
        day_type=DayType.WEEKDAY,
        start_time=shift.start_time,
        end_time=shift.end_time,
        gross_minutes=0,
        break_minutes=shift.break_minutes,
        net_minutes=0,
        net_hours=0,
        base_hourly_rate=0,
        effective_hourly_rate=0,
        classification="",
        employment_type=staff.employment_type.value,
        is_casual=staff.is_casual,
        errors=[message],
    )


def calculate_rates(
    award: AwardDefinition,
    classification: Classification,
    employment_type: EmploymentType,
    on: date,
) -> dict:
    """Hourly rate for each penalty category, as published in a pay guide."""
    base = resolve_hourly_rate(classification, on)
    loading = award.casual_loading / 100 if employment_type == EmploymentType.CASUAL else 0
    rate = base * (1 + loading)

    def at(percent: Optional[float]) -> Optional[float]:
        return round_half_up(rate * percent / 100, 2) if percent else None

    return {
        "award_id": award.id,
        "classification_id": classification.id,
        "classification": classification.level,
        "employment_type": employment_type.value,
        "effective_date": on,
        "base_rate": round_half_up(base, 2),
        "effective_rate": round_half_up(rate, 2),
        "saturday_rate": at(award.saturday_penalty),
        "sunday_rate": at(award.sunday_penalty),
        "public_holiday_rate": at(award.public_holiday_penalty),
        "evening_rate": at(award.evening_penalty),
        "night_rate": at(award.night_penalty),
        "overtime_first_2_hours": at(award.overtime_rates.first_2_hours),
        "overtime_after_2_hours": at(award.overtime_rates.after_2_hours),
    }
