import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, status

from labour_cost.dependencies import CalendarDep, CatalogDep, resolve_award
from labour_cost.models.awards import AwardDefinition, Classification
from labour_cost.models.schemas import (
    RosterCostAggregate,
    RosterCostRequest,
    ShiftCheckRequest,
    ShiftCheckResponse,
    ShiftConditions,
    ShiftCostBreakdown,
    ShiftCostRequest,
    WeeklyCostRequest,
    WeeklyCostSummary,
)
from labour_cost.services.aggregation import calculate_roster_cost, calculate_weekly_cost
from labour_cost.services.award_catalog import AwardCatalog
from labour_cost.services.calculator import calculate_shift_cost
from labour_cost.services.holidays import HolidayCalendar
from labour_cost.services.shift_detection import (
    detect_allowance_eligibility,
    detect_conditions,
    enrich_shift,
    validate_shift,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _classification(award: AwardDefinition, classification_id: Optional[str]) -> Optional[Classification]:
    if not classification_id:
        return None
    classification = award.get_classification(classification_id)
    if classification is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown classification for {award.id}: {classification_id}",
        )
    return classification


def _check_range(start, end) -> None:
    if end < start:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="End date must not be before start date",
        )


@router.post("/api/v1/calculate/shift", response_model=ShiftCostBreakdown)
async def calculate_shift(
    req: ShiftCostRequest,
    catalog: AwardCatalog = CatalogDep,
    calendar: HolidayCalendar = CalendarDep,
):
    award = resolve_award(catalog, req.award_id)
    classification = _classification(award, req.classification_id)
    return calculate_shift_cost(req.shift, req.staff, award, calendar, classification)


@router.post("/api/v1/calculate/weekly", response_model=WeeklyCostSummary)
async def calculate_weekly(
    req: WeeklyCostRequest,
    catalog: AwardCatalog = CatalogDep,
    calendar: HolidayCalendar = CalendarDep,
):
    _check_range(req.week_start, req.week_end)
    award = resolve_award(catalog, req.award_id)
    return calculate_weekly_cost(req.shifts, req.staff, req.week_start, req.week_end, award, calendar)


@router.post("/api/v1/calculate/roster", response_model=RosterCostAggregate)
async def calculate_roster(
    req: RosterCostRequest,
    catalog: AwardCatalog = CatalogDep,
    calendar: HolidayCalendar = CalendarDep,
):
    _check_range(req.start_date, req.end_date)
    award = resolve_award(catalog, req.award_id)
    result = calculate_roster_cost(req.shifts, req.staff, req.start_date, req.end_date, award, calendar)
    logger.info(
        "Costed roster %s to %s: %d staff, total %.2f",
        req.start_date, req.end_date, len(req.staff), result.total_cost,
    )
    return result


@router.post("/api/v1/shifts/validate", response_model=ShiftCheckResponse)
async def check_shift(req: ShiftCheckRequest):
    eligibility = detect_allowance_eligibility(req.shift, req.staff) if req.staff else []
    return ShiftCheckResponse(
        validation=validate_shift(req.shift),
        conditions=detect_conditions(req.shift),
        enriched_shift=enrich_shift(req.shift),
        eligibility=eligibility,
    )


@router.post("/api/v1/shifts/conditions", response_model=ShiftConditions)
async def shift_conditions(req: ShiftCheckRequest):
    return detect_conditions(req.shift)
