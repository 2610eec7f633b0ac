"""Tests for the SQLAlchemy repositories against a throwaway SQLite file."""

import dataclasses

import pytest

from meraki.domain.exceptions import EntityNotFoundError, ValidationError
from meraki.domain.model.admin import AdminAccount
from meraki.domain.model.product import Category
from meraki.infrastructure.persistence.database import DEFAULT_CATEGORIES, Database
from meraki.infrastructure.persistence.sql_admin_repository import SqlAdminRepository
from meraki.infrastructure.persistence.sql_category_repository import SqlCategoryRepository
from meraki.infrastructure.persistence.sql_product_repository import SqlProductRepository
from tests.fakes import make_product


@pytest.fixture
def database(tmp_path):
    with Database(f"sqlite:///{tmp_path / 'db' / 'meraki.db'}") as db:
        yield db


@pytest.fixture
def products(database):
    return SqlProductRepository(database)


@pytest.fixture
def categories(database):
    return SqlCategoryRepository(database)


class TestDatabase:

    def test_seeds_default_categories(self, categories):
        names = {c.name for c in categories.list_all()}
        assert names == {name for name, _ in DEFAULT_CATEGORIES}

    def test_initialize_is_idempotent(self, database, categories):
        database.initialize()
        assert len(categories.list_all()) == len(DEFAULT_CATEGORIES)


class TestSqlProductRepository:

    def test_add_assigns_id_and_round_trips(self, products):
        product = make_product(
            id=0, title="Weekender Bag", price=18999, tags=("travel", "leather")
        )
        product = dataclasses.replace(product, highlights=("Full-grain leather",))

        stored = products.add(product)

        assert stored.id > 0
        assert stored == dataclasses.replace(product, id=stored.id)
        assert products.get_by_handle("weekender-bag") == stored

    def test_missing_price_is_kept(self, products):
        stored = products.add(make_product(id=0, title="Mystery", price=None))
        assert stored.price is None

    def test_duplicate_handle_rejected(self, products):
        products.add(make_product(id=0, title="Wallet"))
        with pytest.raises(ValidationError, match="already exists"):
            products.add(make_product(id=0, title="Wallet"))

    def test_unknown_category_rejected(self, products):
        with pytest.raises(EntityNotFoundError):
            products.add(make_product(id=0, title="Watch", category="Watches"))

    def test_list_in_id_order(self, products):
        first = products.add(make_product(id=0, title="B"))
        second = products.add(make_product(id=0, title="A"))
        assert [p.id for p in products.list_all()] == [first.id, second.id]

    def test_update(self, products):
        stored = products.add(make_product(id=0, title="Wallet"))
        products.update(dataclasses.replace(stored, price=999, category="Fragrances"))

        updated = products.get_by_id(stored.id)
        assert updated.price == 999
        assert updated.category == "Fragrances"

    def test_update_missing(self, products):
        with pytest.raises(EntityNotFoundError):
            products.update(make_product(id=404))

    def test_delete(self, products):
        stored = products.add(make_product(id=0, title="Wallet"))
        products.delete(stored.id)
        assert products.get_by_id(stored.id) is None


class TestSqlCategoryRepository:

    def test_list_includes_product_counts(self, categories, products):
        products.add(make_product(id=0, title="Wallet"))
        products.add(make_product(id=0, title="Bag"))

        counts = {c.name: c.product_count for c in categories.list_all()}
        assert counts["Leather Goods"] == 2
        assert counts["Electronics"] == 0

    def test_list_sorted_by_name(self, categories):
        names = [c.name for c in categories.list_all()]
        assert names == sorted(names)

    def test_add_and_delete(self, categories):
        added = categories.add(Category(id=None, name="Watches", description="Timepieces"))
        assert categories.get_by_name("Watches") == added

        categories.delete(added.id)
        assert categories.get_by_id(added.id) is None

    def test_duplicate_name_rejected(self, categories):
        with pytest.raises(ValidationError, match="already exists"):
            categories.add(Category(id=None, name="Fragrances"))


class TestSqlAdminRepository:

    def test_add_and_lookup(self, database):
        admins = SqlAdminRepository(database)
        assert admins.count() == 0

        added = admins.add(AdminAccount(id=None, email="admin@meraki.com", password_hash="x"))

        assert admins.count() == 1
        assert admins.get_by_email("admin@meraki.com") == added
        assert admins.get_by_email("other@meraki.com") is None
