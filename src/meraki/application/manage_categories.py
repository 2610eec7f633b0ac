"""Application services: admin category management."""

from __future__ import annotations

from meraki.application.admin_auth import AdminGuard
from meraki.domain.exceptions import EntityNotFoundError, ValidationError
from meraki.domain.model.product import Category
from meraki.domain.repository.category_repository import CategoryRepository
from meraki.domain.repository.product_repository import ProductRepository


class AddCategoryHandler:

    def __init__(self, guard: AdminGuard, category_repo: CategoryRepository) -> None:
        self._guard = guard
        self._category_repo = category_repo

    def handle(self, token: str | None, name: str, description: str | None = None) -> Category:
        self._guard.require(token)

        if not name or not name.strip():
            raise ValidationError("Category name is required")
        if self._category_repo.get_by_name(name.strip()) is not None:
            raise ValidationError(f"Category '{name.strip()}' already exists")

        return self._category_repo.add(
            Category(id=None, name=name.strip(), description=description)
        )


class DeleteCategoryHandler:

    def __init__(
        self,
        guard: AdminGuard,
        category_repo: CategoryRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._guard = guard
        self._category_repo = category_repo
        self._product_repo = product_repo

    def handle(self, token: str | None, category_id: int) -> None:
        """Delete an empty category. Categories still in use are refused."""
        self._guard.require(token)

        category = self._category_repo.get_by_id(category_id)
        if category is None:
            raise EntityNotFoundError(f"Category with ID '{category_id}' not found")

        in_use = sum(1 for p in self._product_repo.list_all() if p.category == category.name)
        if in_use:
            raise ValidationError(
                f"Category '{category.name}' still has {in_use} product(s)"
            )
        self._category_repo.delete(category_id)
