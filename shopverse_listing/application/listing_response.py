from typing import Any

from shopverse_listing.domain.entities.filter_descriptor import PriceRange
from shopverse_listing.domain.entities.listing_endpoint import ListingEndpoint
from shopverse_listing.domain.entities.listing_result import ListingResult
from shopverse_listing.domain.errors import ListingFetchError


def normalize_listing_response(
    endpoint: ListingEndpoint,
    payload: Any,
    requested_par_page: int,
) -> ListingResult:
    """
    Map a collection response onto ListingResult.

    Each collection names its item list and its count differently
    (products/totalProduct, orders/totalOrder, ...); the endpoint record says
    which. parPage is optional in responses and falls back to the page size
    that was requested.
    """
    if not isinstance(payload, dict):
        raise ListingFetchError(
            f"Malformed {endpoint.name} response: expected an object", payload=payload
        )

    items = payload.get(endpoint.items_key)
    if not isinstance(items, list):
        raise ListingFetchError(
            f"Malformed {endpoint.name} response: missing '{endpoint.items_key}' list",
            payload=payload,
        )

    total = payload.get(endpoint.total_key)
    if isinstance(total, bool) or not isinstance(total, int) or total < 0:
        raise ListingFetchError(
            f"Malformed {endpoint.name} response: missing '{endpoint.total_key}' count",
            payload=payload,
        )

    par_page = payload.get("parPage")
    if isinstance(par_page, bool) or not isinstance(par_page, int) or par_page < 1:
        par_page = requested_par_page

    return ListingResult(items=tuple(items), total_item=total, par_page=par_page)


def parse_price_range(payload: Any) -> PriceRange:
    try:
        price_range = payload["priceRange"]
        return PriceRange(low=price_range["low"], high=price_range["high"])
    except (KeyError, TypeError) as exc:
        raise ListingFetchError(
            "Malformed price range response: missing 'priceRange'", payload=payload
        ) from exc
