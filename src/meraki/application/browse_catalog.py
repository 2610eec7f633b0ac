"""Application services: catalog queries."""

from __future__ import annotations

from meraki.application.dto import CategoryDTO, ProductPageDTO
from meraki.application.mappers import to_product_summary
from meraki.domain.exceptions import EntityNotFoundError
from meraki.domain.model.product import Product
from meraki.domain.repository.category_repository import CategoryRepository
from meraki.domain.repository.product_repository import ProductRepository
from meraki.domain.service.catalog_filter import CatalogFilter, apply_filter, paginate


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        catalog_filter: CatalogFilter | None = None,
        page: int = 1,
        limit: int = 100,
    ) -> ProductPageDTO:
        products = apply_filter(
            self._product_repo.list_all(), catalog_filter or CatalogFilter()
        )
        result = paginate(products, page=page, limit=limit)
        return ProductPageDTO(
            products=[to_product_summary(p) for p in result.items],
            total=result.total,
            pages=result.pages,
            page=result.page,
        )


class ShowProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, handle: str) -> Product:
        product = self._product_repo.get_by_handle(handle)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{handle}'")
        return product


class ListCategoriesHandler:

    def __init__(self, category_repo: CategoryRepository) -> None:
        self._category_repo = category_repo

    def handle(self) -> list[CategoryDTO]:
        return [
            CategoryDTO(
                id=c.id,  # type: ignore[arg-type]
                name=c.name,
                description=c.description,
                product_count=c.product_count,
            )
            for c in self._category_repo.list_all()
        ]
