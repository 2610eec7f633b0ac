"""SQLAlchemy-backed implementation of ProductRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from meraki.domain.exceptions import EntityNotFoundError, ValidationError
from meraki.domain.model.product import Product
from meraki.domain.repository.product_repository import ProductRepository
from meraki.infrastructure.persistence.database import Database
from meraki.infrastructure.persistence.sql_models import CategoryModel, ProductModel


class SqlProductRepository(ProductRepository):

    def __init__(self, database: Database) -> None:
        self._db = database

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        with self._db.session() as session:
            row = session.scalar(
                self._query().where(ProductModel.id == product_id)
            )
            return self._to_domain(row) if row is not None else None

    def get_by_handle(self, handle: str) -> Product | None:
        with self._db.session() as session:
            row = session.scalar(
                self._query().where(ProductModel.handle == handle)
            )
            return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Product]:
        with self._db.session() as session:
            rows = session.scalars(self._query().order_by(ProductModel.id))
            return [self._to_domain(row) for row in rows]

    def add(self, product: Product) -> Product:
        try:
            with self._db.session() as session:
                row = ProductModel(handle=product.handle)
                self._apply(session, row, product)
                session.add(row)
                session.flush()
                new_id = row.id
        except IntegrityError as exc:
            raise ValidationError(
                f"Product with handle '{product.handle}' already exists"
            ) from exc
        return self.get_by_id(new_id)  # type: ignore[return-value]

    def update(self, product: Product) -> None:
        with self._db.session() as session:
            row = session.get(ProductModel, product.id)
            if row is None:
                raise EntityNotFoundError(f"Product with ID '{product.id}' not found")
            self._apply(session, row, product)

    def delete(self, product_id: int) -> None:
        with self._db.session() as session:
            row = session.get(ProductModel, product_id)
            if row is not None:
                session.delete(row)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _query():
        return select(ProductModel).options(joinedload(ProductModel.category))

    @staticmethod
    def _apply(session: Session, row: ProductModel, product: Product) -> None:
        category = session.scalar(
            select(CategoryModel).where(CategoryModel.name == product.category)
        )
        if category is None:
            raise EntityNotFoundError(f"Category not found: '{product.category}'")

        row.title = product.title
        row.description = product.description
        row.image = product.image
        row.price = product.price
        row.category_id = category.id
        row.subcategory = product.subcategory or None
        row.highlights = list(product.highlights)
        row.tags = list(product.tags)
        row.brand = product.brand
        row.condition = product.condition
        row.inventory = product.inventory
        row.seo_title = product.seo_title
        row.seo_description = product.seo_description

    @staticmethod
    def _to_domain(row: ProductModel) -> Product:
        return Product(
            id=row.id,
            handle=row.handle,
            title=row.title,
            description=row.description,
            image=row.image,
            price=row.price,
            category=row.category.name,
            subcategory=row.subcategory or "",
            highlights=tuple(row.highlights or ()),
            tags=tuple(row.tags or ()),
            brand=row.brand,
            condition=row.condition,
            inventory=row.inventory or 0,
            seo_title=row.seo_title,
            seo_description=row.seo_description,
        )
