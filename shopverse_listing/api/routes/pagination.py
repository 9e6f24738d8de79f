from fastapi import APIRouter, Query

from shopverse_listing.api.schemas.listing_schemas import PageWindowResponse
from shopverse_listing.config import settings
from shopverse_listing.domain.pagination.page_window import (
    calculate_page_window,
    should_paginate,
)

router = APIRouter(prefix="/api/listing", tags=["pagination"])


@router.get("/page-window", response_model=PageWindowResponse)
async def page_window(
    page_number: int = Query(default=1, alias="pageNumber", ge=1),
    total_item: int = Query(default=0, alias="totalItem", ge=0),
    par_page: int = Query(default=settings.default_par_page, alias="parPage", ge=1),
    show_item: int = Query(default=settings.default_show_item, alias="showItem", ge=1),
) -> PageWindowResponse:
    """Page buttons to render for the given position."""
    window = calculate_page_window(page_number, total_item, par_page, show_item)
    return PageWindowResponse(
        pages=list(window.pages),
        show_previous=window.show_previous,
        show_next=window.show_next,
        total_page=window.total_page,
        paginated=should_paginate(total_item, par_page),
    )
