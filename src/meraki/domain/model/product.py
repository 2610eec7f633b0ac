"""Product and Category aggregates.

Products live independently of carts. The admin surface edits them,
but a cart only ever holds a frozen snapshot, so catalog changes never
alter what a shopper already added.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from meraki.domain.exceptions import ValidationError

_NON_SLUG = re.compile(r"[^a-z0-9]+")


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def slugify(title: str) -> str:
    """Derive a URL-safe handle from a product title."""
    return _NON_SLUG.sub("-", title.lower()).strip("-")


@dataclass(frozen=True)
class Product:
    """A product in the catalog.

    ``price`` is in whole rupees. It may be ``None`` for records imported
    without a price; the order composer substitutes a default unit price.
    """

    id: int
    handle: str
    title: str
    description: str
    image: str
    price: int | None
    category: str
    subcategory: str = ""
    highlights: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    brand: str = ""
    condition: str = ""
    inventory: int = 0
    seo_title: str | None = None
    seo_description: str | None = None

    def __post_init__(self) -> None:
        if not self.handle:
            raise ValidationError("Product handle is required")
        if self.price is not None and not _is_int(self.price):
            raise ValidationError(
                f"Product price must be a whole number, got {type(self.price).__name__}"
            )
        if not _is_int(self.inventory):
            raise ValidationError(
                f"Product inventory must be a whole number, got {type(self.inventory).__name__}"
            )
        if self.price is not None and self.price < 0:
            raise ValidationError(
                f"Product price cannot be negative, got {self.price}"
            )
        if self.inventory < 0:
            raise ValidationError("Product inventory cannot be negative")
        # Lists coming from JSON or the ORM are frozen into tuples.
        object.__setattr__(self, "highlights", tuple(self.highlights))
        object.__setattr__(self, "tags", tuple(self.tags))

    def matches_search(self, term: str) -> bool:
        """Case-insensitive substring match on title, description or tags."""
        needle = term.lower()
        return (
            needle in self.title.lower()
            or needle in self.description.lower()
            or any(needle in tag.lower() for tag in self.tags)
        )


@dataclass(frozen=True)
class Category:
    id: int | None
    name: str
    description: str | None = None
    product_count: int = field(default=0, compare=False)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Category name is required")
