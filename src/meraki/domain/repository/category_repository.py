"""Abstract repository for Category aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from meraki.domain.model.product import Category


class CategoryRepository(ABC):

    @abstractmethod
    def get_by_id(self, category_id: int) -> Category | None:
        """Return a category by its ID, or None."""

    @abstractmethod
    def get_by_name(self, name: str) -> Category | None:
        """Return a category by its exact name, or None."""

    @abstractmethod
    def list_all(self) -> list[Category]:
        """Return every category ordered by name, with product counts."""

    @abstractmethod
    def add(self, category: Category) -> Category:
        """Insert a new category and return it with its assigned ID."""

    @abstractmethod
    def delete(self, category_id: int) -> None:
        """Remove a category."""
