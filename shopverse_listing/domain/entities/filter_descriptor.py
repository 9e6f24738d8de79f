from dataclasses import asdict, dataclass, fields, replace
from typing import Any

from shopverse_listing.domain.enums.sort_price import SortPrice
from shopverse_listing.domain.errors import ValidationError

# Filters coming from form inputs may be blank strings; "" means "not set".
Number = int | float
OptionalNumber = Number | str


@dataclass(frozen=True)
class PriceRange:
    low: Number = 0
    high: Number = 100


@dataclass(frozen=True)
class FilterDescriptor:
    """
    User-chosen constraints for one listing.

    Immutable: every edit produces a new snapshot via with_changes(), so a
    request built from a snapshot can always be traced back to it.
    """

    search_value: str = ""
    category: str = ""
    rating: int | str = ""
    price_low: OptionalNumber = ""
    price_high: OptionalNumber = ""
    sort_price: SortPrice | str = SortPrice.NONE
    page_number: int = 1

    def with_changes(self, **changes: Any) -> "FilterDescriptor":
        known = {f.name for f in fields(self)}
        for name in changes:
            if name not in known:
                raise ValidationError(name, "unknown filter")
        return replace(self, **changes)

    def as_dict(self) -> dict[str, Any]:
        """Camel-cased view matching the field names used by the frontends."""
        data = asdict(self)
        sort_price = data["sort_price"]
        return {
            "searchValue": data["search_value"],
            "category": data["category"],
            "rating": data["rating"],
            "priceLow": data["price_low"],
            "priceHigh": data["price_high"],
            "sortPrice": sort_price.value if isinstance(sort_price, SortPrice) else sort_price,
            "pageNumber": data["page_number"],
        }
