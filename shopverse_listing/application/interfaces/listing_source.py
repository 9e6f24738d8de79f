from abc import ABC, abstractmethod

from shopverse_listing.application.query_builder import RequestParams
from shopverse_listing.domain.entities.filter_descriptor import PriceRange
from shopverse_listing.domain.entities.listing_endpoint import ListingEndpoint
from shopverse_listing.domain.entities.listing_result import ListingResult


class ListingSource(ABC):
    """Port for fetching one page of a listing collection."""

    @abstractmethod
    async def fetch(self, endpoint: ListingEndpoint, params: RequestParams) -> ListingResult:
        """Raise ListingFetchError on transport or server failure."""
        ...

    @abstractmethod
    async def get_price_range(self) -> PriceRange:
        """Full price span of the catalog, used to seed filter resets."""
        ...
