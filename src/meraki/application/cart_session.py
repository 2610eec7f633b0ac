"""Application service: the shopper's cart session.

Holds the current CartState, applies transitions and asks the storage
to persist the parts that changed. Nothing is written until ``load()``
has run once, so an empty initial state can never overwrite data that
was saved by an earlier session.
"""

from __future__ import annotations

import logging

from meraki.domain.model.cart import CartState, Purchase
from meraki.domain.model.product import Product
from meraki.domain.model.value_objects import Money
from meraki.domain.repository.cart_storage import CartStorage

logger = logging.getLogger(__name__)


class CartSession:

    def __init__(self, storage: CartStorage) -> None:
        self._storage = storage
        self._state = CartState()

    @property
    def state(self) -> CartState:
        return self._state

    # --- Lifecycle ------------------------------------------------------------

    def load(self) -> CartState:
        """Restore persisted state. Later calls are no-ops."""
        if self._state.loaded:
            return self._state
        stored = self._storage.load()
        if stored is None:
            self._state = self._state.restored((), ())
        else:
            self._state = self._state.restored(stored.items, stored.purchases)
        return self._state

    # --- Commands -------------------------------------------------------------

    def add_item(self, product: Product, quantity: int = 1) -> CartState:
        return self._apply(self._state.add_item(product, quantity))

    def remove_item(self, product_id: int) -> CartState:
        return self._apply(self._state.remove_item(product_id))

    def update_quantity(self, product_id: int, quantity: int) -> CartState:
        return self._apply(self._state.update_quantity(product_id, quantity))

    def clear_cart(self) -> CartState:
        return self._apply(self._state.clear_cart())

    def complete_purchase(
        self,
        total: Money,
        purchase_id: str | None = None,
        now: int | None = None,
    ) -> Purchase:
        state = self._apply(
            self._state.complete_purchase(total, now=now, purchase_id=purchase_id)
        )
        purchase = state.purchases[-1]
        logger.info("Purchase %s completed, total %s", purchase.id, purchase.total)
        return purchase

    def clear_purchases(self) -> CartState:
        return self._apply(self._state.clear_purchases())

    # --- Internal helpers -----------------------------------------------------

    def _apply(self, new_state: CartState) -> CartState:
        previous, self._state = self._state, new_state
        if not new_state.loaded:
            return new_state
        items_changed = new_state.items != previous.items
        purchases_changed = new_state.purchases != previous.purchases
        if items_changed and purchases_changed:
            self._storage.save_snapshot(new_state.items, new_state.purchases)
        elif items_changed:
            self._storage.save(new_state.items)
        elif purchases_changed:
            self._storage.save_purchases(new_state.purchases)
        return new_state

