"""Cart aggregate — the cart contents plus the purchase history.

``CartState`` is an immutable value. Every transition returns a new
state, so a reader holding the previous value can never observe a
half-applied change (e.g. an emptied cart whose purchase has not been
archived yet).
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, replace

from meraki.domain.exceptions import ValidationError
from meraki.domain.model.product import Product
from meraki.domain.model.value_objects import Money, Quantity


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def new_purchase_id(timestamp: int) -> str:
    return f"purchase-{timestamp}-{uuid.uuid4().hex[:9]}"


@dataclass(frozen=True)
class CartItem:
    """A product snapshot and the quantity wanted.

    ``added_at`` is fixed when the product first enters the cart and
    survives later quantity changes.
    """

    product: Product
    quantity: Quantity
    added_at: int

    @property
    def product_id(self) -> int:
        return self.product.id

    def with_quantity(self, quantity: Quantity) -> CartItem:
        return replace(self, quantity=quantity)


@dataclass(frozen=True)
class Purchase:
    """A completed checkout. Never mutated once created."""

    id: str
    items: tuple[CartItem, ...]
    total: Money
    timestamp: int
    whatsapp_sent: bool = True

    @property
    def item_count(self) -> int:
        return sum(item.quantity.value for item in self.items)


@dataclass(frozen=True)
class CartState:
    """Aggregate root for the shopper's session.

    Invariants:
    - at most one CartItem per product id
    - every CartItem quantity is >= 1
    - ``purchases`` only grows, or is cleared as a whole
    """

    items: tuple[CartItem, ...] = ()
    purchases: tuple[Purchase, ...] = ()
    loaded: bool = False

    # --- Transitions ----------------------------------------------------------

    def restored(
        self,
        items: tuple[CartItem, ...] | list[CartItem],
        purchases: tuple[Purchase, ...] | list[Purchase],
    ) -> CartState:
        """Replace contents with persisted data and mark the state loaded."""
        return CartState(items=tuple(items), purchases=tuple(purchases), loaded=True)

    def add_item(
        self,
        product: Product,
        quantity: int = 1,
        now: int | None = None,
    ) -> CartState:
        """Add *quantity* units of *product*.

        Adding a product that is already in the cart accumulates the
        quantity and keeps the original ``added_at``.
        """
        if quantity < 1:
            raise ValidationError(f"Quantity to add must be at least 1, got {quantity}")
        added = Quantity(quantity)

        if self.find_item(product.id) is not None:
            items = tuple(
                item.with_quantity(item.quantity + added)
                if item.product_id == product.id
                else item
                for item in self.items
            )
        else:
            added_at = now if now is not None else now_ms()
            items = self.items + (CartItem(product, added, added_at),)
        return replace(self, items=items)

    def remove_item(self, product_id: int) -> CartState:
        """Drop the item for *product_id*; a no-op when absent."""
        items = tuple(item for item in self.items if item.product_id != product_id)
        if len(items) == len(self.items):
            return self
        return replace(self, items=items)

    def update_quantity(self, product_id: int, quantity: int) -> CartState:
        """Overwrite the quantity; anything below 1 removes the item."""
        if quantity < 1:
            return self.remove_item(product_id)
        if self.find_item(product_id) is None:
            return self
        items = tuple(
            item.with_quantity(Quantity(quantity))
            if item.product_id == product_id
            else item
            for item in self.items
        )
        return replace(self, items=items)

    def clear_cart(self) -> CartState:
        return replace(self, items=())

    def complete_purchase(
        self,
        total: Money,
        now: int | None = None,
        purchase_id: str | None = None,
    ) -> CartState:
        """Archive the current items as a Purchase and empty the cart.

        An empty cart is accepted and produces a Purchase with no items.
        """
        timestamp = now if now is not None else now_ms()
        purchase = Purchase(
            id=purchase_id or new_purchase_id(timestamp),
            items=self.items,
            total=total,
            timestamp=timestamp,
            whatsapp_sent=True,
        )
        return replace(self, items=(), purchases=self.purchases + (purchase,))

    def clear_purchases(self) -> CartState:
        return replace(self, purchases=())

    # --- Queries --------------------------------------------------------------

    def find_item(self, product_id: int) -> CartItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    @property
    def item_count(self) -> int:
        return sum(item.quantity.value for item in self.items)

    @property
    def last_purchase(self) -> Purchase | None:
        return self.purchases[-1] if self.purchases else None
