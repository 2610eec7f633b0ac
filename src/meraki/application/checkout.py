"""Application service: Checkout use case.

Turns the current cart into a Purchase and a WhatsApp hand-off:

1. Compute totals with the configured pricing policy.
2. Report the purchase to the tracker. This is best-effort; a failure
   is logged by the tracker and never blocks the checkout.
3. Archive the purchase and empty the cart in one transition.
4. Return the order message and the deep link that carries it.
"""

from __future__ import annotations

from meraki.application.cart_session import CartSession
from meraki.application.dto import CheckoutDTO
from meraki.domain.exceptions import ValidationError
from meraki.domain.model.cart import Purchase, new_purchase_id, now_ms
from meraki.domain.repository.purchase_tracker import PurchaseTracker
from meraki.domain.service.order_composer import (
    PricingPolicy,
    compose_order_message,
    compute_totals,
    whatsapp_link,
)


class CheckoutHandler:

    def __init__(
        self,
        session: CartSession,
        tracker: PurchaseTracker,
        policy: PricingPolicy,
        whatsapp_number: str,
    ) -> None:
        self._session = session
        self._tracker = tracker
        self._policy = policy
        self._whatsapp_number = whatsapp_number

    def handle(self) -> CheckoutDTO:
        items = self._session.state.items
        if not items:
            raise ValidationError("Cart is empty, add items before checking out")

        totals = compute_totals(items, self._policy)
        message = compose_order_message(items, totals.total)

        timestamp = now_ms()
        pending = Purchase(
            id=new_purchase_id(timestamp),
            items=items,
            total=totals.total,
            timestamp=timestamp,
        )
        tracked = self._tracker.track(pending)

        purchase = self._session.complete_purchase(
            totals.total, purchase_id=pending.id, now=pending.timestamp
        )

        return CheckoutDTO(
            purchase_id=purchase.id,
            subtotal=str(totals.subtotal),
            tax=str(totals.tax),
            shipping=str(totals.shipping),
            total=str(totals.total),
            message=message,
            whatsapp_url=whatsapp_link(self._whatsapp_number, message),
            tracked=tracked,
        )
