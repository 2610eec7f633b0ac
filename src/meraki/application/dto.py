"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ProductSpec:
    """Input: the admin product form."""

    title: str
    description: str
    image: str
    price: int
    category: str
    brand: str
    condition: str
    subcategory: str = ""
    highlights: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    inventory: int = 0
    seo_title: str | None = None
    seo_description: str | None = None


@dataclass(frozen=True)
class ProductSummaryDTO:
    id: int
    handle: str
    title: str
    price: str  # formatted, e.g. "₹1,249"
    category: str
    subcategory: str
    brand: str
    inventory: int


@dataclass(frozen=True)
class ProductPageDTO:
    products: list[ProductSummaryDTO]
    total: int
    pages: int
    page: int


@dataclass(frozen=True)
class CategoryDTO:
    id: int
    name: str
    description: str | None
    product_count: int


@dataclass(frozen=True)
class CartLineDTO:
    product_id: int
    handle: str
    title: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    items: list[CartLineDTO]
    item_count: int
    subtotal: str
    tax: str
    shipping: str
    total: str


@dataclass(frozen=True)
class PurchaseDTO:
    id: str
    item_count: int
    total: str
    created_at: str
    whatsapp_sent: bool


@dataclass(frozen=True)
class CheckoutDTO:
    purchase_id: str
    subtotal: str
    tax: str
    shipping: str
    total: str
    message: str
    whatsapp_url: str
    tracked: bool


@dataclass(frozen=True)
class LoginResultDTO:
    token: str
    admin_id: int
    email: str
    name: str | None


@dataclass(frozen=True)
class DashboardStatsDTO:
    total_products: int
    total_categories: int
    total_purchases: int
    total_inventory: int
    recent_purchases: list[PurchaseDTO]


@dataclass(frozen=True)
class SkippedRecordDTO:
    label: str  # handle, title, or position in the file
    reason: str


@dataclass(frozen=True)
class ImportResultDTO:
    created: int
    updated: int
    skipped: list[SkippedRecordDTO]
