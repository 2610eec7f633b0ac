"""Abstract sink for recording completed purchases remotely."""

from __future__ import annotations

from abc import ABC, abstractmethod

from meraki.domain.model.cart import Purchase


class PurchaseTracker(ABC):

    @abstractmethod
    def track(self, purchase: Purchase) -> bool:
        """Record *purchase*; return False on failure instead of raising."""
