from dataclasses import dataclass, field
from typing import Any

# Items are opaque records (product, order, seller, category); the listing
# core only passes them through.
Item = dict[str, Any]


@dataclass(frozen=True)
class ListingResult:
    items: tuple[Item, ...] = field(default_factory=tuple)
    total_item: int = 0
    par_page: int = 1
