"""Application services: purchase history queries and reset."""

from __future__ import annotations

from meraki.application.cart_session import CartSession
from meraki.application.dto import PurchaseDTO
from meraki.application.mappers import to_purchase_dto


class ListPurchasesHandler:

    def __init__(self, session: CartSession) -> None:
        self._session = session

    def handle(self) -> list[PurchaseDTO]:
        """Most recent purchase first."""
        return [to_purchase_dto(p) for p in reversed(self._session.state.purchases)]


class ClearPurchasesHandler:

    def __init__(self, session: CartSession) -> None:
        self._session = session

    def handle(self) -> int:
        cleared = len(self._session.state.purchases)
        self._session.clear_purchases()
        return cleared
