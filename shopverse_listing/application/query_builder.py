"""
Translate filter snapshots into the request parameters sent to listing endpoints.

Every backend collection takes the same query shape, with absent filters sent
as empty strings rather than omitted. QueryBuilder is the single place where
user input is validated and coerced into that shape.
"""
import math
from dataclasses import dataclass
from typing import Any

from shopverse_listing.domain.entities.filter_descriptor import (
    FilterDescriptor,
    Number,
    PriceRange,
)
from shopverse_listing.domain.entities.listing_endpoint import (
    CATEGORY,
    HIGH,
    LOW,
    RATING,
    SEARCH,
    SORT_PRICE,
    ListingEndpoint,
)
from shopverse_listing.domain.enums.sort_price import SortPrice
from shopverse_listing.domain.errors import ValidationError

MAX_RATING = 5


@dataclass(frozen=True)
class RequestParams:
    page: int
    par_page: int
    search_value: str = ""
    category: str = ""
    rating: int | str = ""
    low: Number | str = ""
    high: Number | str = ""
    sort_price: str = ""

    def to_query(self, endpoint: ListingEndpoint) -> dict[str, Any]:
        """Render under the endpoint's wire names, keeping only what it accepts."""
        query: dict[str, Any] = {
            endpoint.page_param: self.page,
            "parPage": self.par_page,
        }
        optional = (
            (CATEGORY, "category", self.category),
            (RATING, "rating", self.rating),
            (LOW, endpoint.low_param, self.low),
            (HIGH, endpoint.high_param, self.high),
            (SORT_PRICE, "sortPrice", self.sort_price),
            (SEARCH, "searchValue", self.search_value),
        )
        for field, wire_name, value in optional:
            if endpoint.accepts(field):
                query[wire_name] = value
        return query


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def _coerce_int(field: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError(field, "must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValidationError(field, f"must be an integer, got {value!r}")


def _coerce_price(field: str, value: Any) -> Number | str:
    if _is_blank(value):
        return ""
    if isinstance(value, bool):
        raise ValidationError(field, "must be numeric")
    number: float
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise ValidationError(field, f"must be numeric, got {value!r}") from None
    else:
        raise ValidationError(field, f"must be numeric, got {value!r}")

    if not math.isfinite(number):
        raise ValidationError(field, "must be finite")
    if number < 0:
        raise ValidationError(field, "must not be negative")
    return int(number) if number.is_integer() else number


def _coerce_rating(value: Any) -> int | str:
    if _is_blank(value):
        return ""
    rating = _coerce_int("rating", value)
    if not 0 <= rating <= MAX_RATING:
        raise ValidationError("rating", f"must be between 0 and {MAX_RATING}")
    return rating


def _coerce_sort(value: Any) -> str:
    if value is None:
        return SortPrice.NONE.value
    try:
        return SortPrice(value).value
    except ValueError:
        allowed = [s.value for s in SortPrice]
        raise ValidationError("sort_price", f"must be one of {allowed}") from None


def _coerce_text(field: str, value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(field, "must be a string")
    return value


class QueryBuilder:
    """Pure mapping from FilterDescriptor to RequestParams; performs no I/O."""

    def build(self, filters: FilterDescriptor, par_page: int) -> RequestParams:
        page = _coerce_int("page_number", filters.page_number)
        if page < 1:
            raise ValidationError("page_number", "must be >= 1")
        par_page = _coerce_int("par_page", par_page)
        if par_page < 1:
            raise ValidationError("par_page", "must be >= 1")

        low = _coerce_price("price_low", filters.price_low)
        high = _coerce_price("price_high", filters.price_high)
        # A zero upper bound means "no upper bound" to the catalog query
        if low != "" and high not in ("", 0) and low > high:  # type: ignore[operator]
            raise ValidationError("price_low", "must not exceed price_high")

        return RequestParams(
            page=page,
            par_page=par_page,
            search_value=_coerce_text("search_value", filters.search_value),
            category=_coerce_text("category", filters.category),
            rating=_coerce_rating(filters.rating),
            low=low,
            high=high,
            sort_price=_coerce_sort(filters.sort_price),
        )

    def reset(self, price_range: PriceRange) -> FilterDescriptor:
        """Default filters spanning the full price range, back on page 1."""
        return FilterDescriptor(
            search_value="",
            category="",
            rating="",
            price_low=price_range.low,
            price_high=price_range.high,
            sort_price=SortPrice.NONE,
            page_number=1,
        )
