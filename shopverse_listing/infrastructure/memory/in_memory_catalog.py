import json
from pathlib import Path

import structlog

from shopverse_listing.application.catalog_query import CatalogQuery, price_of
from shopverse_listing.application.interfaces.listing_source import ListingSource
from shopverse_listing.application.listing_response import normalize_listing_response
from shopverse_listing.application.query_builder import RequestParams
from shopverse_listing.domain.entities.filter_descriptor import PriceRange
from shopverse_listing.domain.entities.listing_endpoint import ListingEndpoint
from shopverse_listing.domain.entities.listing_result import Item, ListingResult
from shopverse_listing.domain.errors import ListingFetchError

logger = structlog.get_logger(__name__)

# Slider bounds used before any product exists
EMPTY_PRICE_RANGE = PriceRange(low=0, high=100)


class InMemoryCatalog(ListingSource):
    """
    Product catalog held in memory.

    Answers product listings the way the backend does: filter, count, then
    slice one page. The response is built in wire shape and normalised, so it
    goes through the same mapping as a real HTTP response.
    """

    def __init__(self, products: list[Item] | None = None) -> None:
        self._products: list[Item] = list(products or [])

    @classmethod
    def from_json_file(cls, path: str | Path) -> "InMemoryCatalog":
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        products = data.get("products", []) if isinstance(data, dict) else data
        logger.info("catalog_loaded", path=str(path), products=len(products))
        return cls(products)

    @property
    def size(self) -> int:
        return len(self._products)

    def query(self, params: RequestParams) -> dict:  # type: ignore[type-arg]
        """Storefront query → {"products": [...], "totalProduct": n, "parPage": n}"""
        query = (
            CatalogQuery(self._products, params)
            .search()
            .category()
            .rating()
            .price()
            .sort_by_price()
        )
        total = query.count()
        products = query.paginate(params.page, params.par_page).products()
        return {"products": products, "totalProduct": total, "parPage": params.par_page}

    async def fetch(self, endpoint: ListingEndpoint, params: RequestParams) -> ListingResult:
        if endpoint.items_key != "products":
            raise ListingFetchError(
                f"{endpoint.name} is not served by the in-memory catalog",
                payload={"error": "unsupported listing"},
                status_code=404,
            )
        try:
            payload = self.query(params)
        except (AttributeError, TypeError, ValueError) as exc:
            logger.error("catalog_query_failed", endpoint=endpoint.name, error=str(exc))
            raise ListingFetchError(
                f"{endpoint.name} query failed",
                payload={"error": "Internal Server Error"},
                status_code=500,
            ) from exc
        return normalize_listing_response(endpoint, payload, params.par_page)

    def price_range(self) -> PriceRange:
        prices = [price_of(p) for p in self._products if isinstance(p, dict) and "price" in p]
        if not prices:
            return EMPTY_PRICE_RANGE
        return PriceRange(low=min(prices), high=max(prices))

    def latest(self, count: int) -> list[Item]:
        """Most recently added products first."""
        return list(reversed(self._products[-count:])) if count > 0 else []

    async def get_price_range(self) -> PriceRange:
        return self.price_range()
