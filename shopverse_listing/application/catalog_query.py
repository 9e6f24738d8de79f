"""
Server-side product filtering for the storefront query endpoint.

Chainable: each step narrows or reorders the working list and returns the
query, so a request reads top to bottom::

    query = CatalogQuery(products, params).category().rating().price().sort_by_price()
    total = query.count()
    page = query.paginate(params.page, params.par_page).products()
"""
import math
from typing import Any

from shopverse_listing.application.query_builder import RequestParams
from shopverse_listing.domain.entities.filter_descriptor import Number
from shopverse_listing.domain.entities.listing_result import Item
from shopverse_listing.domain.enums.sort_price import SortPrice


def _number(item: Item, key: str) -> float:
    value: Any = item.get(key, 0)
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def price_of(item: Item) -> Number:
    """Product price as a number; whole prices stay ints."""
    price = _number(item, "price")
    return int(price) if price.is_integer() else price


class CatalogQuery:
    def __init__(self, products: list[Item], params: RequestParams) -> None:
        self._products = list(products)
        self._params = params

    def category(self) -> "CatalogQuery":
        if self._params.category:
            self._products = [
                p for p in self._products if p.get("category") == self._params.category
            ]
        return self

    def rating(self) -> "CatalogQuery":
        """Keep the star bracket [rating, rating + 1)."""
        if self._params.rating != "":
            low = int(self._params.rating)
            self._products = [
                p for p in self._products if low <= _number(p, "rating") < low + 1
            ]
        return self

    def price(self) -> "CatalogQuery":
        low = float(self._params.low) if self._params.low != "" else 0.0
        # A zero or blank upper bound means no upper bound
        high = (float(self._params.high) if self._params.high != "" else 0.0) or math.inf
        self._products = [p for p in self._products if low <= price_of(p) <= high]
        return self

    def search(self) -> "CatalogQuery":
        needle = self._params.search_value.strip().lower()
        if needle:
            self._products = [
                p for p in self._products if needle in str(p.get("name", "")).lower()
            ]
        return self

    def sort_by_price(self) -> "CatalogQuery":
        sort_price = self._params.sort_price
        if sort_price:
            self._products.sort(
                key=lambda p: price_of(p),
                reverse=sort_price != SortPrice.LOW_TO_HIGH.value,
            )
        return self

    def paginate(self, page: int, par_page: int) -> "CatalogQuery":
        start = (page - 1) * par_page
        self._products = self._products[start : start + par_page]
        return self

    def count(self) -> int:
        return len(self._products)

    def products(self) -> list[Item]:
        return list(self._products)
