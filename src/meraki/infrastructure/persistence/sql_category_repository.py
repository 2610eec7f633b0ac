"""SQLAlchemy-backed implementation of CategoryRepository."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from meraki.domain.exceptions import ValidationError
from meraki.domain.model.product import Category
from meraki.domain.repository.category_repository import CategoryRepository
from meraki.infrastructure.persistence.database import Database
from meraki.infrastructure.persistence.sql_models import CategoryModel, ProductModel


class SqlCategoryRepository(CategoryRepository):

    def __init__(self, database: Database) -> None:
        self._db = database

    def get_by_id(self, category_id: int) -> Category | None:
        with self._db.session() as session:
            row = session.get(CategoryModel, category_id)
            return self._to_domain(row) if row is not None else None

    def get_by_name(self, name: str) -> Category | None:
        with self._db.session() as session:
            row = session.scalar(select(CategoryModel).where(CategoryModel.name == name))
            return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Category]:
        query = (
            select(CategoryModel, func.count(ProductModel.id))
            .outerjoin(ProductModel, ProductModel.category_id == CategoryModel.id)
            .group_by(CategoryModel.id)
            .order_by(CategoryModel.name)
        )
        with self._db.session() as session:
            return [self._to_domain(row, count) for row, count in session.execute(query)]

    def add(self, category: Category) -> Category:
        try:
            with self._db.session() as session:
                row = CategoryModel(name=category.name, description=category.description)
                session.add(row)
                session.flush()
                return self._to_domain(row)
        except IntegrityError as exc:
            raise ValidationError(f"Category '{category.name}' already exists") from exc

    def delete(self, category_id: int) -> None:
        with self._db.session() as session:
            row = session.get(CategoryModel, category_id)
            if row is not None:
                session.delete(row)

    @staticmethod
    def _to_domain(row: CategoryModel, product_count: int = 0) -> Category:
        return Category(
            id=row.id,
            name=row.name,
            description=row.description,
            product_count=product_count,
        )
