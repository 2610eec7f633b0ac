"""Unit tests for order totals, the order message and the WhatsApp link."""

from decimal import Decimal

from meraki.domain.model.cart import CartState
from meraki.domain.model.value_objects import Money
from meraki.domain.service.order_composer import (
    DEFAULT_UNIT_PRICE,
    PricingPolicy,
    compose_order_message,
    compute_totals,
    line_total,
    whatsapp_link,
)
from tests.fakes import make_product

WALLET = make_product(id=1, title="Wallet", price=1000)
PERFUME = make_product(id=2, title="Perfume", price=500, category="Fragrances")


def _items(*pairs):
    state = CartState()
    for product, qty in pairs:
        state = state.add_item(product, qty)
    return state.items


class TestComputeTotals:

    def test_free_shipping_above_threshold(self):
        policy = PricingPolicy(free_shipping_threshold=Money.of(2000))
        totals = compute_totals(_items((WALLET, 2), (PERFUME, 1)), policy)

        assert totals.subtotal == Money.of(2500)
        assert totals.tax == Money.of(450)
        assert totals.shipping == Money.zero()
        assert totals.total == Money.of(2950)

    def test_flat_shipping_at_or_below_threshold(self):
        totals = compute_totals(_items((WALLET, 2), (PERFUME, 1)), PricingPolicy())

        assert totals.shipping == Money.of(499)
        assert totals.total == Money.of(2500 + 450 + 499)

    def test_threshold_is_exclusive(self):
        policy = PricingPolicy(free_shipping_threshold=Money.of(2500))
        totals = compute_totals(_items((WALLET, 2), (PERFUME, 1)), policy)
        assert totals.shipping == Money.of(499)

    def test_total_is_sum_of_parts(self):
        totals = compute_totals(_items((WALLET, 3), (PERFUME, 4)), PricingPolicy())
        assert totals.total == totals.subtotal + totals.tax + totals.shipping

    def test_empty_cart_totals_are_zero(self):
        totals = compute_totals((), PricingPolicy())
        assert totals.subtotal == Money.zero()
        assert totals.shipping == Money.zero()
        assert totals.total == Money.zero()

    def test_tax_rounds_half_up_to_paise(self):
        odd = make_product(id=3, title="Odd", price=3)
        policy = PricingPolicy(tax_rate=Decimal("0.125"))
        totals = compute_totals(_items((odd, 1)), policy)
        assert totals.tax.amount == Decimal("0.38")


class TestFallbackPrice:

    def test_missing_price_uses_default(self):
        unpriced = make_product(id=9, title="Unpriced", price=None)
        item = _items((unpriced, 2))[0]
        assert line_total(item, PricingPolicy()) == Money.of(DEFAULT_UNIT_PRICE * 2)

    def test_zero_price_uses_default(self):
        free = make_product(id=9, title="Free", price=0)
        item = _items((free, 1))[0]
        assert line_total(item, PricingPolicy()) == Money.of(1249)

    def test_default_is_configurable(self):
        unpriced = make_product(id=9, title="Unpriced", price=None)
        item = _items((unpriced, 1))[0]
        assert line_total(item, PricingPolicy(default_unit_price=10)) == Money.of(10)


class TestOrderMessage:

    def test_lists_items_in_cart_order(self):
        message = compose_order_message(
            _items((WALLET, 2), (PERFUME, 1)), Money.of(2950)
        )
        assert message == (
            "Hi, I am interested in Wallet (Qty: 2), Perfume (Qty: 1) "
            "with the cost ₹2,950."
        )

    def test_indian_grouping_in_total(self):
        message = compose_order_message(_items((WALLET, 1)), Money.of(1234567))
        assert message.endswith("with the cost ₹12,34,567.")


class TestWhatsappLink:

    def test_strips_non_digits_from_number(self):
        url = whatsapp_link("+91 97899-09362", "Hi")
        assert url == "https://wa.me/919789909362?text=Hi"

    def test_message_is_percent_encoded(self):
        url = whatsapp_link("+919789909362", "Wallet (Qty: 2), ₹2,950.")
        assert url == (
            "https://wa.me/919789909362?text="
            "Wallet%20%28Qty%3A%202%29%2C%20%E2%82%B92%2C950."
        )
