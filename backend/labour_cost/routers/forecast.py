from fastapi import APIRouter, HTTPException, status

from labour_cost.config import settings
from labour_cost.dependencies import CalendarDep, CatalogDep, resolve_award
from labour_cost.models.schemas import ForecastRequest, ForecastSummary, ShiftCostRequest, ShiftProjection
from labour_cost.services.award_catalog import AwardCatalog
from labour_cost.services.forecasting import generate_forecast, project_shift_cost
from labour_cost.services.holidays import HolidayCalendar

router = APIRouter()


@router.post("/api/v1/forecast", response_model=ForecastSummary)
async def forecast(
    req: ForecastRequest,
    catalog: AwardCatalog = CatalogDep,
    calendar: HolidayCalendar = CalendarDep,
):
    award = resolve_award(catalog, req.award_id)
    weeks = req.forecast_weeks or settings.default_forecast_weeks
    budget = req.weekly_budget if req.weekly_budget is not None else settings.default_weekly_budget
    try:
        return generate_forecast(
            req.current_shifts,
            req.staff,
            award,
            calendar,
            forecast_weeks=weeks,
            weekly_budget=budget,
            reference_date=req.reference_date,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))


@router.post("/api/v1/forecast/shift", response_model=ShiftProjection)
async def forecast_shift(
    req: ShiftCostRequest,
    catalog: AwardCatalog = CatalogDep,
    calendar: HolidayCalendar = CalendarDep,
):
    award = resolve_award(catalog, req.award_id)
    return project_shift_cost(req.shift, req.staff, award, calendar)
