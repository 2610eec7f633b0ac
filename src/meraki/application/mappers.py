"""Domain -> DTO mapping shared by several use cases."""

from __future__ import annotations

from datetime import datetime, timezone

from meraki.application.dto import (
    CartDTO,
    CartLineDTO,
    ProductSummaryDTO,
    PurchaseDTO,
)
from meraki.domain.model.cart import CartItem, Purchase
from meraki.domain.model.product import Product
from meraki.domain.model.value_objects import Money
from meraki.domain.service.order_composer import (
    PricingPolicy,
    compute_totals,
    line_total,
)


def format_timestamp(timestamp_ms: int) -> str:
    moment = datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)
    return moment.strftime("%Y-%m-%d %H:%M UTC")


def to_product_summary(product: Product) -> ProductSummaryDTO:
    price = str(Money.of(product.price)) if product.price else "-"
    return ProductSummaryDTO(
        id=product.id,
        handle=product.handle,
        title=product.title,
        price=price,
        category=product.category,
        subcategory=product.subcategory,
        brand=product.brand,
        inventory=product.inventory,
    )


def to_purchase_dto(purchase: Purchase) -> PurchaseDTO:
    return PurchaseDTO(
        id=purchase.id,
        item_count=purchase.item_count,
        total=str(purchase.total),
        created_at=format_timestamp(purchase.timestamp),
        whatsapp_sent=purchase.whatsapp_sent,
    )


def to_cart_dto(items: tuple[CartItem, ...], policy: PricingPolicy) -> CartDTO:
    totals = compute_totals(items, policy)
    return CartDTO(
        items=[
            CartLineDTO(
                product_id=item.product_id,
                handle=item.product.handle,
                title=item.product.title,
                quantity=item.quantity.value,
                unit_price=str(policy.unit_price(item)),
                line_total=str(line_total(item, policy)),
            )
            for item in items
        ],
        item_count=sum(item.quantity.value for item in items),
        subtotal=str(totals.subtotal),
        tax=str(totals.tax),
        shipping=str(totals.shipping),
        total=str(totals.total),
    )
