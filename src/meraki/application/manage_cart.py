"""Application services: cart use cases.

Shoppers address products by handle. Adding resolves the handle in the
catalog; removing and updating resolve it against the cart snapshot so
items stay manageable even after the catalog entry changes.
"""

from __future__ import annotations

from meraki.application.cart_session import CartSession
from meraki.application.dto import CartDTO
from meraki.application.mappers import to_cart_dto
from meraki.domain.exceptions import EntityNotFoundError
from meraki.domain.model.cart import CartItem
from meraki.domain.repository.product_repository import ProductRepository
from meraki.domain.service.order_composer import PricingPolicy


def _find_in_cart(session: CartSession, handle: str) -> CartItem:
    for item in session.state.items:
        if item.product.handle == handle:
            return item
    raise EntityNotFoundError(f"'{handle}' is not in the cart")


class AddToCartHandler:

    def __init__(self, session: CartSession, product_repo: ProductRepository) -> None:
        self._session = session
        self._product_repo = product_repo

    def handle(self, handle: str, quantity: int = 1) -> CartItem:
        product = self._product_repo.get_by_handle(handle)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{handle}'")

        state = self._session.add_item(product, quantity)
        return state.find_item(product.id)  # type: ignore[return-value]


class RemoveFromCartHandler:

    def __init__(self, session: CartSession) -> None:
        self._session = session

    def handle(self, handle: str) -> None:
        item = _find_in_cart(self._session, handle)
        self._session.remove_item(item.product_id)


class UpdateCartQuantityHandler:

    def __init__(self, session: CartSession) -> None:
        self._session = session

    def handle(self, handle: str, quantity: int) -> CartItem | None:
        """Set the quantity exactly. Returns None when the item was removed."""
        item = _find_in_cart(self._session, handle)
        state = self._session.update_quantity(item.product_id, quantity)
        return state.find_item(item.product_id)


class ShowCartHandler:

    def __init__(self, session: CartSession, policy: PricingPolicy) -> None:
        self._session = session
        self._policy = policy

    def handle(self) -> CartDTO:
        return to_cart_dto(self._session.state.items, self._policy)


class ClearCartHandler:

    def __init__(self, session: CartSession) -> None:
        self._session = session

    def handle(self) -> int:
        """Empty the cart and return how many units were dropped."""
        dropped = self._session.state.item_count
        self._session.clear_cart()
        return dropped
