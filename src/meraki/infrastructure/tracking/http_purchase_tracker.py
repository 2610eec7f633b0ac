"""Purchase tracking over HTTP.

Posting a purchase is best-effort. The shopper's checkout already
succeeded locally, so any failure is logged and reported as ``False``,
never raised. There is no retry.
"""

from __future__ import annotations

import logging

import requests
from requests import RequestException

from meraki.domain.model.cart import Purchase
from meraki.domain.repository.purchase_tracker import PurchaseTracker
from meraki.infrastructure.persistence.json_cart_storage import purchase_to_raw

logger = logging.getLogger(__name__)


class HttpPurchaseTracker(PurchaseTracker):

    def __init__(self, base_url: str, timeout: float = 2) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def track(self, purchase: Purchase) -> bool:
        url = f"{self.base_url}/track-purchase"
        logger.info("PurchaseTracker POST %s (%s)", url, purchase.id)

        try:
            resp = requests.post(url, json=self.payload(purchase), timeout=self.timeout)
            resp.raise_for_status()
        except RequestException as exc:
            logger.warning("Failed to track purchase %s: %s", purchase.id, exc)
            return False
        return True

    @staticmethod
    def payload(purchase: Purchase) -> dict:
        raw = purchase_to_raw(purchase)
        raw["items"] = [
            {
                "product": {
                    "id": item.product.id,
                    "title": item.product.title,
                    "price": item.product.price,
                },
                "quantity": item.quantity.value,
            }
            for item in purchase.items
        ]
        return raw


class NullPurchaseTracker(PurchaseTracker):
    """Used when no tracking endpoint is configured."""

    def track(self, purchase: Purchase) -> bool:
        logger.debug("Purchase tracking disabled, skipping %s", purchase.id)
        return False
