from datetime import date
from typing import Optional

from fastapi import APIRouter, HTTPException, status

from labour_cost.dependencies import CatalogDep, resolve_award
from labour_cost.models.awards import AwardDefinition
from labour_cost.models.roster import EmploymentType
from labour_cost.models.schemas import RatesResponse
from labour_cost.services.award_catalog import AwardCatalog
from labour_cost.services.calculator import calculate_rates, resolve_classification

router = APIRouter()


@router.get("/api/v1/awards", response_model=list[AwardDefinition])
async def list_awards(catalog: AwardCatalog = CatalogDep):
    return catalog.list_awards()


@router.get("/api/v1/awards/{award_id}", response_model=AwardDefinition)
async def get_award(award_id: str, catalog: AwardCatalog = CatalogDep):
    return resolve_award(catalog, award_id)


@router.get("/api/v1/awards/{award_id}/rates", response_model=RatesResponse)
async def get_rates(
    award_id: str,
    classification_id: Optional[str] = None,
    employment_type: EmploymentType = EmploymentType.CASUAL,
    on: Optional[date] = None,
    catalog: AwardCatalog = CatalogDep,
):
    award = resolve_award(catalog, award_id)
    classification = None
    if classification_id:
        classification = award.get_classification(classification_id)
        if classification is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Unknown classification for {award.id}: {classification_id}",
            )
    classification = resolve_classification(award, classification)
    return calculate_rates(award, classification, employment_type, on or date.today())
