"""Tests for CartSession persistence and the cart use cases."""

import pytest

from meraki.application.cart_session import CartSession
from meraki.application.manage_cart import (
    AddToCartHandler,
    ClearCartHandler,
    RemoveFromCartHandler,
    ShowCartHandler,
    UpdateCartQuantityHandler,
)
from meraki.application.purchase_history import ClearPurchasesHandler, ListPurchasesHandler
from meraki.domain.exceptions import EntityNotFoundError, ValidationError
from meraki.domain.model.cart import CartState
from meraki.domain.model.value_objects import Money
from meraki.domain.repository.cart_storage import StoredCart
from meraki.domain.service.order_composer import PricingPolicy
from tests.fakes import FakeProductRepository, InMemoryCartStorage, make_product

WALLET = make_product(id=1, title="Wallet", price=1000)
PERFUME = make_product(id=2, title="Perfume", price=500, category="Fragrances")


@pytest.fixture
def storage():
    return InMemoryCartStorage()


@pytest.fixture
def session(storage):
    s = CartSession(storage)
    s.load()
    return s


@pytest.fixture
def product_repo():
    return FakeProductRepository([WALLET, PERFUME])


class TestLoad:

    def test_nothing_is_written_before_load(self, storage):
        session = CartSession(storage)
        session.add_item(WALLET)
        assert storage.saved_items == []
        assert storage.saved_purchases == []

    def test_restores_stored_cart(self):
        stored_state = CartState().add_item(WALLET, 2).complete_purchase(Money.of(2000))
        stored_state = stored_state.add_item(PERFUME)
        storage = InMemoryCartStorage(
            StoredCart(items=stored_state.items, purchases=stored_state.purchases)
        )

        state = CartSession(storage).load()

        assert state.loaded is True
        assert state.items == stored_state.items
        assert state.purchases == stored_state.purchases

    def test_missing_storage_starts_empty(self, storage):
        state = CartSession(storage).load()
        assert state.loaded is True
        assert state.items == ()

    def test_load_runs_once(self, storage, session):
        session.add_item(WALLET)
        storage.stored = StoredCart()
        session.load()
        assert session.state.item_count == 1


class TestPersistence:

    def test_cart_change_saves_items_only(self, storage, session):
        session.add_item(WALLET)
        assert len(storage.saved_items) == 1
        assert storage.saved_purchases == []

    def test_noop_transition_saves_nothing(self, storage, session):
        session.remove_item(42)
        assert storage.saved_items == []

    def test_complete_purchase_saves_both_keys_in_one_write(self, storage, session):
        session.add_item(WALLET)
        item_writes = len(storage.saved_items)

        purchase = session.complete_purchase(Money.of(1000))

        assert storage.saved_snapshots == [((), (purchase,))]
        assert len(storage.saved_items) == item_writes
        assert storage.saved_purchases == []

    def test_clear_purchases_leaves_cart_alone(self, storage, session):
        session.add_item(WALLET)
        session.complete_purchase(Money.of(1000))
        session.add_item(PERFUME)
        writes_before = len(storage.saved_items)

        session.clear_purchases()

        assert storage.saved_purchases[-1] == ()
        assert len(storage.saved_items) == writes_before


class TestCartHandlers:

    def test_add_by_handle(self, session, product_repo):
        item = AddToCartHandler(session, product_repo).handle("wallet", 2)
        assert item.product == WALLET
        assert item.quantity.value == 2

    def test_add_unknown_handle(self, session, product_repo):
        with pytest.raises(EntityNotFoundError, match="Product not found"):
            AddToCartHandler(session, product_repo).handle("nope")

    def test_add_zero_rejected(self, session, product_repo):
        with pytest.raises(ValidationError):
            AddToCartHandler(session, product_repo).handle("wallet", 0)
        assert session.state.items == ()

    def test_update_sets_exact_quantity(self, session, product_repo):
        AddToCartHandler(session, product_repo).handle("wallet", 3)
        item = UpdateCartQuantityHandler(session).handle("wallet", 1)
        assert item.quantity.value == 1

    def test_update_to_zero_removes(self, session, product_repo):
        AddToCartHandler(session, product_repo).handle("wallet")
        assert UpdateCartQuantityHandler(session).handle("wallet", 0) is None
        assert session.state.items == ()

    def test_remove_item_not_in_cart(self, session):
        with pytest.raises(EntityNotFoundError, match="not in the cart"):
            RemoveFromCartHandler(session).handle("wallet")

    def test_remove_item(self, session, product_repo):
        AddToCartHandler(session, product_repo).handle("wallet")
        AddToCartHandler(session, product_repo).handle("perfume")
        RemoveFromCartHandler(session).handle("wallet")
        assert [i.product_id for i in session.state.items] == [2]

    def test_clear_reports_dropped_units(self, session, product_repo):
        AddToCartHandler(session, product_repo).handle("wallet", 2)
        AddToCartHandler(session, product_repo).handle("perfume", 3)
        assert ClearCartHandler(session).handle() == 5
        assert session.state.items == ()

    def test_show_cart_totals(self, session, product_repo):
        AddToCartHandler(session, product_repo).handle("wallet", 2)
        AddToCartHandler(session, product_repo).handle("perfume", 1)

        cart = ShowCartHandler(session, PricingPolicy()).handle()

        assert cart.item_count == 3
        assert [line.line_total for line in cart.items] == ["₹2,000", "₹500"]
        assert cart.subtotal == "₹2,500"
        assert cart.tax == "₹450"
        assert cart.shipping == "₹499"
        assert cart.total == "₹3,449"


class TestPurchaseHistory:

    def test_lists_most_recent_first(self, session):
        session.add_item(WALLET)
        session.complete_purchase(Money.of(1), purchase_id="first", now=1000)
        session.add_item(PERFUME)
        session.complete_purchase(Money.of(2), purchase_id="second", now=2000)

        history = ListPurchasesHandler(session).handle()

        assert [p.id for p in history] == ["second", "first"]
        assert history[0].total == "₹2"
        assert history[0].created_at == "1970-01-01 00:00 UTC"

    def test_clear_returns_count(self, session):
        session.complete_purchase(Money.zero())
        session.complete_purchase(Money.zero())
        assert ClearPurchasesHandler(session).handle() == 2
        assert session.state.purchases == ()
