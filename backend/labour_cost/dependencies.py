from functools import lru_cache
from typing import Optional

from fastapi import Depends, HTTPException, status

from labour_cost.config import settings
from labour_cost.models.awards import AwardDefinition
from labour_cost.services.award_catalog import AwardCatalog, default_catalog
from labour_cost.services.holidays import StaticHolidayCalendar, default_calendar


@lru_cache
def get_catalog() -> AwardCatalog:
    return default_catalog()


@lru_cache
def get_calendar() -> StaticHolidayCalendar:
    return default_calendar()


def resolve_award(catalog: AwardCatalog, award_id: Optional[str]) -> AwardDefinition:
    """Award for the request, falling back to the configured default award."""
    award_id = award_id or settings.default_award_id
    award = catalog.get_award_by_id(award_id)
    if award is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown award: {award_id}",
        )
    return award


CatalogDep = Depends(get_catalog)
CalendarDep = Depends(get_calendar)
