from dataclasses import dataclass

from shopverse_listing.domain.errors import UnknownEndpointError

# Canonical filter fields a request can carry beyond page/parPage.
SEARCH = "search_value"
CATEGORY = "category"
RATING = "rating"
LOW = "low"
HIGH = "high"
SORT_PRICE = "sort_price"


@dataclass(frozen=True)
class ListingEndpoint:
    """
    One collection endpoint of the backend.

    All listings share the same pagination/filter shape but the backend names
    the page parameter, the price bounds and the response keys differently per
    collection. This record maps the canonical names onto the wire names.
    """

    name: str
    path: str
    items_key: str
    total_key: str
    page_param: str = "page"
    low_param: str = "low"
    high_param: str = "high"
    filters: frozenset[str] = frozenset({SEARCH})

    def accepts(self, field: str) -> bool:
        return field in self.filters


_STOREFRONT_FILTERS = frozenset({SEARCH, CATEGORY, RATING, LOW, HIGH, SORT_PRICE})

ENDPOINTS: dict[str, ListingEndpoint] = {
    "query_products": ListingEndpoint(
        name="query_products",
        path="/home/query-products",
        items_key="products",
        total_key="totalProduct",
        page_param="pageNumber",
        low_param="lowPrice",
        high_param="highPrice",
        filters=_STOREFRONT_FILTERS,
    ),
    "seller_products": ListingEndpoint(
        name="seller_products",
        path="/products-get",
        items_key="products",
        total_key="totalProduct",
    ),
    "admin_orders": ListingEndpoint(
        name="admin_orders",
        path="/admin/orders",
        items_key="orders",
        total_key="totalOrder",
    ),
    "categories": ListingEndpoint(
        name="categories",
        path="/category-get",
        items_key="categorys",
        total_key="totalCategory",
    ),
    "seller_requests": ListingEndpoint(
        name="seller_requests",
        path="/request-seller-get",
        items_key="sellers",
        total_key="totalSeller",
    ),
}


def get_endpoint(name: str) -> ListingEndpoint:
    try:
        return ENDPOINTS[name]
    except KeyError:
        raise UnknownEndpointError(name) from None
