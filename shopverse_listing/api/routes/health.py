from fastapi import APIRouter, Depends

from shopverse_listing.api.dependencies import get_catalog
from shopverse_listing.api.schemas.listing_schemas import HealthResponse
from shopverse_listing.infrastructure.memory.in_memory_catalog import InMemoryCatalog

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(catalog: InMemoryCatalog = Depends(get_catalog)) -> HealthResponse:
    """Liveness check with the size of the served catalog."""
    return HealthResponse(status="healthy", products=catalog.size)
