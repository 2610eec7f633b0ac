"""Tests for the JSON-file cart storage."""

import json
import logging
from decimal import Decimal

import pytest

from meraki.application.cart_session import CartSession
from meraki.domain.model.cart import CartState
from meraki.domain.model.value_objects import Money
from meraki.infrastructure.persistence import json_cart_storage
from meraki.infrastructure.persistence.json_cart_storage import (
    CART_KEY,
    PURCHASES_KEY,
    JsonCartStorage,
)
from tests.fakes import make_product

WALLET = make_product(id=1, title="Wallet", price=1000, tags=("gift",))
PERFUME = make_product(id=2, title="Perfume", price=None, category="Fragrances")


@pytest.fixture
def path(tmp_path):
    return tmp_path / "state" / "cart.json"


@pytest.fixture
def storage(path):
    return JsonCartStorage(path)


def _store(path):
    return json.loads(path.read_text(encoding="utf-8"))


class TestSave:

    def test_values_are_json_strings_under_both_keys(self, storage, path):
        state = CartState().add_item(WALLET, 2, now=100)
        storage.save(state.items)

        raw = _store(path)
        assert set(raw) == {CART_KEY}
        items = json.loads(raw[CART_KEY])
        assert items[0]["quantity"] == 2
        assert items[0]["addedAt"] == 100
        assert items[0]["product"]["handle"] == "wallet"

    def test_saving_one_key_preserves_the_other(self, storage, path):
        state = CartState().add_item(WALLET).complete_purchase(
            Money.of(1000), purchase_id="p1", now=5
        )
        storage.save_purchases(state.purchases)
        storage.save(CartState().add_item(PERFUME).items)

        raw = _store(path)
        assert json.loads(raw[PURCHASES_KEY])[0]["id"] == "p1"
        assert json.loads(raw[CART_KEY])[0]["product"]["title"] == "Perfume"

    def test_purchase_total_is_a_number(self, storage, path):
        state = CartState().add_item(WALLET).complete_purchase(Money.of("1180.50"))
        storage.save_purchases(state.purchases)

        purchase = json.loads(_store(path)[PURCHASES_KEY])[0]
        assert purchase["total"] == 1180.5
        assert purchase["whatsappSent"] is True


class TestLoad:

    def test_missing_file_returns_none(self, storage):
        assert storage.load() is None

    def test_restores_saved_state(self, storage):
        state = CartState().add_item(WALLET, 2, now=100).complete_purchase(
            Money.of(2000), purchase_id="p1", now=200
        )
        state = state.add_item(PERFUME, 1, now=300)
        storage.save(state.items)
        storage.save_purchases(state.purchases)

        stored = storage.load()

        assert stored.items == state.items
        assert stored.purchases == state.purchases
        assert stored.purchases[0].total.amount == Decimal("2000")
        assert stored.items[0].product.price is None

    def test_corrupt_file_starts_empty(self, storage, path, caplog):
        path.parent.mkdir(parents=True)
        path.write_text("{not json", encoding="utf-8")

        with caplog.at_level(logging.WARNING):
            assert storage.load() is None
        assert "corrupt" in caplog.text

    def test_unreadable_key_does_not_affect_the_other(self, storage, path):
        state = CartState().add_item(WALLET).complete_purchase(Money.of(1000), purchase_id="p1")
        storage.save_purchases(state.purchases)
        raw = _store(path)
        raw[CART_KEY] = "[{\"product\": {}}]"
        path.write_text(json.dumps(raw), encoding="utf-8")

        stored = storage.load()

        assert stored.items == ()
        assert [p.id for p in stored.purchases] == ["p1"]

    def test_non_list_value_is_discarded(self, storage, path):
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps({CART_KEY: "{\"a\": 1}"}), encoding="utf-8")

        assert storage.load().items == ()

    def test_invalid_quantity_is_discarded(self, storage, path):
        state = CartState().add_item(WALLET)
        storage.save(state.items)
        raw = _store(path)
        items = json.loads(raw[CART_KEY])
        items[0]["quantity"] = 0
        raw[CART_KEY] = json.dumps(items)
        path.write_text(json.dumps(raw), encoding="utf-8")

        assert storage.load().items == ()

    def test_corrupt_file_is_replaced_on_next_save(self, storage, path):
        path.parent.mkdir(parents=True)
        path.write_text("[]", encoding="utf-8")

        storage.save(CartState().add_item(WALLET).items)

        assert len(storage.load().items) == 1


class _RecordingStorage(JsonCartStorage):
    """Captures what a reader of the file would see after every write."""

    def __init__(self, file_path):
        super().__init__(file_path)
        self.disk_states = []

    def _write_store(self, store):
        super()._write_store(store)
        stored = self.load()
        self.disk_states.append((len(stored.items), len(stored.purchases)))


class TestAtomicWrites:

    def test_checkout_never_exposes_emptied_cart_without_purchase(self, path):
        storage = _RecordingStorage(path)
        session = CartSession(storage)
        session.load()

        session.add_item(WALLET)
        session.complete_purchase(Money.of(1000))

        assert storage.disk_states == [(1, 0), (0, 1)]

    def test_save_snapshot_writes_both_keys(self, storage, path):
        state = CartState().add_item(WALLET).complete_purchase(Money.of(1000), purchase_id="p1")
        state = state.add_item(PERFUME)

        storage.save_snapshot(state.items, state.purchases)

        raw = _store(path)
        assert json.loads(raw[CART_KEY])[0]["product"]["title"] == "Perfume"
        assert json.loads(raw[PURCHASES_KEY])[0]["id"] == "p1"

    def test_failed_write_keeps_previous_file(self, storage, path, monkeypatch):
        storage.save(CartState().add_item(WALLET).items)
        before = path.read_text(encoding="utf-8")

        def fail(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(json_cart_storage.os, "replace", fail)
        with pytest.raises(OSError):
            storage.save(CartState().add_item(PERFUME).items)

        assert path.read_text(encoding="utf-8") == before
        assert [p.name for p in path.parent.iterdir()] == [path.name]
