"""Domain service: catalog filtering, sorting and pagination.

All functions are pure. A filter that matches nothing yields an empty
list, never an error.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from meraki.domain.exceptions import ValidationError
from meraki.domain.model.product import Product

ALL = "All"


class SortKey(Enum):
    NONE = "none"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    TITLE = "title"


@dataclass(frozen=True)
class CatalogFilter:
    category: str = ALL
    subcategory: str = ALL
    search_term: str = ""
    sort_key: SortKey = SortKey.NONE

    def matches(self, product: Product) -> bool:
        if self.category != ALL and product.category != self.category:
            return False
        if self.subcategory != ALL and product.subcategory != self.subcategory:
            return False
        if self.search_term and not product.matches_search(self.search_term):
            return False
        return True


def _price_key(product: Product) -> int:
    return product.price or 0


def apply_filter(products: list[Product], catalog_filter: CatalogFilter) -> list[Product]:
    """Filter then sort *products*.

    ``sorted`` is stable, so ties keep their catalog order. For
    price-descending we sort with ``reverse=True``, which Python also
    keeps stable.
    """
    result = [p for p in products if catalog_filter.matches(p)]

    if catalog_filter.sort_key == SortKey.PRICE_ASC:
        result = sorted(result, key=_price_key)
    elif catalog_filter.sort_key == SortKey.PRICE_DESC:
        result = sorted(result, key=_price_key, reverse=True)
    elif catalog_filter.sort_key == SortKey.TITLE:
        result = sorted(result, key=lambda p: p.title.casefold())
    return result


def category_options(products: list[Product]) -> list[str]:
    return [ALL, *sorted({p.category for p in products})]


def subcategory_options(products: list[Product], category: str) -> list[str]:
    return [
        ALL,
        *sorted({
            p.subcategory
            for p in products
            if p.subcategory and (category == ALL or p.category == category)
        }),
    ]


@dataclass(frozen=True)
class Page:
    items: list[Product]
    total: int
    pages: int
    page: int


def paginate(products: list[Product], page: int = 1, limit: int = 100) -> Page:
    """Slice *products* into the requested 1-based page."""
    if page < 1:
        raise ValidationError("Page must be at least 1")
    if limit < 1:
        raise ValidationError("Limit must be at least 1")

    start = (page - 1) * limit
    return Page(
        items=products[start:start + limit],
        total=len(products),
        pages=math.ceil(len(products) / limit),
        page=page,
    )
