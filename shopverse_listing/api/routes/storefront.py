from fastapi import APIRouter, Depends, Query

from shopverse_listing.api.dependencies import get_catalog, get_query_builder
from shopverse_listing.api.schemas.listing_schemas import (
    ErrorResponse,
    PriceRangeResponse,
    PriceRangeSchema,
    ProductQueryResponse,
)
from shopverse_listing.application.query_builder import QueryBuilder
from shopverse_listing.config import settings
from shopverse_listing.domain.entities.filter_descriptor import FilterDescriptor
from shopverse_listing.infrastructure.memory.in_memory_catalog import InMemoryCatalog

router = APIRouter(prefix="/api/home", tags=["storefront"])


@router.get(
    "/query-products",
    response_model=ProductQueryResponse,
    responses={422: {"model": ErrorResponse}},
)
async def query_products(
    category: str = Query(default=""),
    rating: str = Query(default=""),
    low_price: str = Query(default="", alias="lowPrice"),
    high_price: str = Query(default="", alias="highPrice"),
    sort_price: str = Query(default="", alias="sortPrice"),
    page_number: str = Query(default="", alias="pageNumber"),
    search_value: str = Query(default="", alias="searchValue"),
    par_page: int = Query(default=settings.storefront_par_page, alias="parPage", ge=1),
    catalog: InMemoryCatalog = Depends(get_catalog),
    query_builder: QueryBuilder = Depends(get_query_builder),
) -> ProductQueryResponse:
    """Filtered, sorted, paginated products. Blank parameters mean "no filter"."""
    filters = FilterDescriptor(
        search_value=search_value,
        category=category,
        rating=rating,
        price_low=low_price,
        price_high=high_price,
        sort_price=sort_price,
        page_number=page_number or 1,  # type: ignore[arg-type]
    )
    # ValidationError is turned into a 422 by the app-level handler
    params = query_builder.build(filters, par_page)
    result = catalog.query(params)
    return ProductQueryResponse(
        products=result["products"],
        total_product=result["totalProduct"],
        par_page=result["parPage"],
    )


@router.get("/price-range-latest-product", response_model=PriceRangeResponse)
async def price_range_latest_product(
    catalog: InMemoryCatalog = Depends(get_catalog),
) -> PriceRangeResponse:
    price_range = catalog.price_range()
    return PriceRangeResponse(
        price_range=PriceRangeSchema(low=price_range.low, high=price_range.high),
        latest_product=catalog.latest(settings.latest_product_count),
    )
