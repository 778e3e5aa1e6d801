"""
Weekly and roster-wide roll-ups of shift cost breakdowns.
"""
import logging
from collections import defaultdict
from datetime import date
from typing import Iterable, Optional

from labour_cost.models.awards import AwardDefinition, Classification
from labour_cost.models.roster import Shift, StaffMember
from labour_cost.models.schemas import (
    DayTypeBreakdown,
    DayTypeTotals,
    RosterCostAggregate,
    ShiftCostBreakdown,
    WeeklyCostSummary,
)
from labour_cost.services.calculator import round_half_up, calculate_shift_cost, error_breakdown
from labour_cost.services.day_types import DayType
from labour_cost.services.holidays import HolidayCalendar

logger = logging.getLogger(__name__)


def _cost_one(
    shift: Shift,
    staff: StaffMember,
    award: AwardDefinition,
    calendar: HolidayCalendar,
    classification: Optional[Classification],
) -> ShiftCostBreakdown:
    # One bad shift must not sink the whole batch.
    try:
        return calculate_shift_cost(shift, staff, award, calendar, classification)
    except ValueError as exc:
        logger.warning("Could not cost shift %s for %s: %s", shift.id, staff.id, exc)
        return error_breakdown(shift, staff, f"Shift could not be costed: {exc}")


def calculate_weekly_cost(
    shifts: Iterable[Shift],
    staff: StaffMember,
    week_start: date,
    week_end: date,
    award: AwardDefinition,
    calendar: HolidayCalendar,
    classification: Optional[Classification] = None,
) -> WeeklyCostSummary:
    """Cost summary for one staff member's shifts between week_start and week_end inclusive."""
    breakdowns = [
        _cost_one(s, staff, award, calendar, classification)
        for s in shifts
        if s.staff_id == staff.id and week_start <= s.shift_date <= week_end
    ]

    total_hours = sum(b.net_hours for b in breakdowns)
    return WeeklyCostSummary(
        staff_id=staff.id,
        staff_name=staff.name,
        week_start=week_start,
        week_end=week_end,
        total_hours=total_hours,
        ordinary_hours=sum(b.ordinary_hours for b in breakdowns),
        overtime_hours=sum(b.overtime_hours for b in breakdowns),
        penalty_hours=sum(b.penalty_hours for b in breakdowns),
        ordinary_pay=round_half_up(sum(b.ordinary_pay for b in breakdowns), 2),
        overtime_pay=round_half_up(sum(b.overtime_pay for b in breakdowns), 2),
        penalty_pay=round_half_up(sum(b.penalty_pay for b in breakdowns), 2),
        allowances=round_half_up(sum(b.total_allowances for b in breakdowns), 2),
        gross_pay=round_half_up(sum(b.gross_pay for b in breakdowns), 2),
        superannuation=round_half_up(sum(b.superannuation for b in breakdowns), 2),
        total_cost=round_half_up(sum(b.total_cost for b in breakdowns), 2),
        max_hours_exceeded=total_hours > staff.max_hours_per_week,
        shifts=breakdowns,
    )


def breakdown_by_day_type(breakdowns: Iterable[ShiftCostBreakdown]) -> DayTypeBreakdown:
    """Hours and total cost per day type, with each type's share of the cost."""
    hours: dict[DayType, float] = defaultdict(float)
    cost: dict[DayType, float] = defaultdict(float)
    for b in breakdowns:
        hours[b.day_type] += b.net_hours
        cost[b.day_type] += b.total_cost
    return day_type_breakdown(hours, cost)


def day_type_breakdown(hours: dict[DayType, float], cost: dict[DayType, float]) -> DayTypeBreakdown:
    total = sum(cost.values())

    def totals(day_type: DayType) -> DayTypeTotals:
        c = cost.get(day_type, 0.0)
        return DayTypeTotals(
            hours=hours.get(day_type, 0.0),
            cost=round_half_up(c, 2),
            percent=round_half_up(c / total * 100, 2) if total > 0 else 0,
        )

    return DayTypeBreakdown(
        weekday=totals(DayType.WEEKDAY),
        saturday=totals(DayType.SATURDAY),
        sunday=totals(DayType.SUNDAY),
        public_holiday=totals(DayType.PUBLIC_HOLIDAY),
    )


def calculate_roster_cost(
    shifts: Iterable[Shift],
    staff: Iterable[StaffMember],
    start_date: date,
    end_date: date,
    award: AwardDefinition,
    calendar: HolidayCalendar,
) -> RosterCostAggregate:
    """Total labour cost for every staff member's shifts in the date range."""
    shifts = list(shifts)
    staff_costs = [
        calculate_weekly_cost(shifts, member, start_date, end_date, award, calendar)
        for member in staff
    ]
    all_breakdowns = [b for summary in staff_costs for b in summary.shifts]

    return RosterCostAggregate(
        start_date=start_date,
        end_date=end_date,
        total_gross_pay=round_half_up(sum(s.gross_pay for s in staff_costs), 2),
        total_superannuation=round_half_up(sum(s.superannuation for s in staff_costs), 2),
        total_cost=round_half_up(sum(s.total_cost for s in staff_costs), 2),
        total_hours=sum(s.total_hours for s in staff_costs),
        staff_costs=staff_costs,
        by_day_type=breakdown_by_day_type(all_breakdowns),
    )
