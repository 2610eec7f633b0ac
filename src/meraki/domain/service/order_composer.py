"""Domain service: order totals and the WhatsApp hand-off message.

The storefront never takes payment. Checkout ends with a pre-filled
chat message to the supplier, so this module only computes money and
formats text.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from urllib.parse import quote

from meraki.domain.model.cart import CartItem
from meraki.domain.model.value_objects import Money

DEFAULT_UNIT_PRICE = 1249


@dataclass(frozen=True)
class PricingPolicy:
    tax_rate: Decimal = Decimal("0.18")
    shipping_fee: Money = Money(Decimal("499"))
    free_shipping_threshold: Money = Money(Decimal("4000"))
    default_unit_price: int = DEFAULT_UNIT_PRICE

    def unit_price(self, item: CartItem) -> Money:
        """Product price, or the default when the price is missing or zero."""
        price = item.product.price
        if not price or price < 0:
            price = self.default_unit_price
        return Money(Decimal(price))


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Money
    tax: Money
    shipping: Money
    total: Money


def line_total(item: CartItem, policy: PricingPolicy) -> Money:
    return policy.unit_price(item) * item.quantity.value


def compute_totals(items: tuple[CartItem, ...] | list[CartItem], policy: PricingPolicy) -> OrderTotals:
    """Subtotal, tax, shipping and grand total for *items*.

    Shipping is free above the threshold and for an empty cart.
    """
    subtotal = Money.zero()
    for item in items:
        subtotal = subtotal + line_total(item, policy)

    tax = subtotal.scale(policy.tax_rate)
    if not items or subtotal > policy.free_shipping_threshold:
        shipping = Money.zero()
    else:
        shipping = policy.shipping_fee

    return OrderTotals(
        subtotal=subtotal,
        tax=tax,
        shipping=shipping,
        total=subtotal + tax + shipping,
    )


def compose_order_message(items: tuple[CartItem, ...] | list[CartItem], total: Money) -> str:
    order_items = ", ".join(
        f"{item.product.title} (Qty: {item.quantity.value})" for item in items
    )
    return f"Hi, I am interested in {order_items} with the cost {total}."


def whatsapp_link(phone_number: str, message: str) -> str:
    """Deep link that opens a chat with *phone_number* and *message* pre-filled."""
    digits = "".join(ch for ch in phone_number if ch.isdigit())
    return f"https://wa.me/{digits}?text={quote(message, safe='')}"
