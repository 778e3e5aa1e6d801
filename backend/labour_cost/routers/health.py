from fastapi import APIRouter

from labour_cost.config import settings
from labour_cost.dependencies import CatalogDep
from labour_cost.models.schemas import HealthResponse
from labour_cost.services.award_catalog import AwardCatalog

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(catalog: AwardCatalog = CatalogDep):
    return {
        "status": "healthy",
        "environment": settings.environment,
        "awards_loaded": len(catalog.list_awards()),
    }
