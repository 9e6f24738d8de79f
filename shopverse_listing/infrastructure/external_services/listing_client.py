"""HTTP client for the ShopVerse listing endpoints."""

from typing import Any

import httpx
import structlog

from shopverse_listing.application.interfaces.listing_source import ListingSource
from shopverse_listing.application.listing_response import (
    normalize_listing_response,
    parse_price_range,
)
from shopverse_listing.application.query_builder import RequestParams
from shopverse_listing.config import settings
from shopverse_listing.domain.entities.filter_descriptor import PriceRange
from shopverse_listing.domain.entities.listing_endpoint import ListingEndpoint
from shopverse_listing.domain.entities.listing_result import ListingResult
from shopverse_listing.domain.errors import ListingFetchError

logger = structlog.get_logger(__name__)

NETWORK_FAILURE = "Network error: could not reach the listing service"


def _error_payload(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


class ListingClient(ListingSource):
    """Thin HTTP wrapper around the backend collection endpoints. No caching, no retries."""

    def __init__(
        self,
        base_url: str = settings.api_base_url,
        timeout: float = settings.request_timeout,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._headers = {"Accept": "application/json", **(headers or {})}
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def _get(self, path: str, query: dict[str, Any] | None, *, label: str) -> Any:
        url = f"{self._base_url}{path}"
        async with self._client() as client:
            try:
                response = await client.get(url, params=query, headers=self._headers)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                payload = _error_payload(exc.response)
                logger.error(
                    "listing_request_failed",
                    endpoint=label,
                    status_code=exc.response.status_code,
                    response=exc.response.text,
                )
                raise ListingFetchError(
                    f"{label} returned {exc.response.status_code}",
                    payload=payload,
                    status_code=exc.response.status_code,
                ) from exc
            except httpx.RequestError as exc:
                logger.error("listing_connection_failed", endpoint=label, error=str(exc))
                raise ListingFetchError(NETWORK_FAILURE) from exc

        try:
            return response.json()
        except ValueError as exc:
            logger.error("listing_response_not_json", endpoint=label)
            raise ListingFetchError(
                f"{label} returned a non-JSON body", payload=response.text
            ) from exc

    async def fetch(self, endpoint: ListingEndpoint, params: RequestParams) -> ListingResult:
        """
        GET {base_url}{endpoint.path}?<params> → ListingResult

        The query-string shape is fixed: every field the endpoint accepts is
        sent, blank ones as empty strings.
        """
        query = params.to_query(endpoint)
        logger.debug("listing_fetch_started", endpoint=endpoint.name, query=query)
        payload = await self._get(endpoint.path, query, label=endpoint.name)
        result = normalize_listing_response(endpoint, payload, params.par_page)
        logger.info(
            "listing_fetched",
            endpoint=endpoint.name,
            page=params.page,
            items=len(result.items),
            total_item=result.total_item,
        )
        return result

    async def get_price_range(self) -> PriceRange:
        """GET /home/price-range-latest-product → {"priceRange": {"low", "high"}, ...}"""
        payload = await self._get(
            "/home/price-range-latest-product", None, label="price_range"
        )
        return parse_price_range(payload)
