"""Abstract persistence adapter for the cart session.

The storage never owns cart state. It serializes snapshots on demand
and hands back whatever it can recover on load.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from meraki.domain.model.cart import CartItem, Purchase


@dataclass(frozen=True)
class StoredCart:
    items: tuple[CartItem, ...] = ()
    purchases: tuple[Purchase, ...] = ()


class CartStorage(ABC):

    @abstractmethod
    def load(self) -> StoredCart | None:
        """Return persisted cart data, or None when nothing was stored."""

    @abstractmethod
    def save(self, items: tuple[CartItem, ...]) -> None:
        """Persist the current cart items."""

    @abstractmethod
    def save_purchases(self, purchases: tuple[Purchase, ...]) -> None:
        """Persist the purchase history."""

    @abstractmethod
    def save_snapshot(
        self, items: tuple[CartItem, ...], purchases: tuple[Purchase, ...]
    ) -> None:
        """Persist items and purchases together in a single write.

        A reader must never observe one key updated without the other.
        """
