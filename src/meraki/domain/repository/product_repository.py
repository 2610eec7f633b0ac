"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, in-memory)
live in the infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from meraki.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_handle(self, handle: str) -> Product | None:
        """Return a product by its unique handle, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in catalog order."""

    @abstractmethod
    def add(self, product: Product) -> Product:
        """Insert a new product and return it with its assigned ID.

        The ``id`` of the product passed in is ignored.
        """

    @abstractmethod
    def update(self, product: Product) -> None:
        """Persist changes to an existing product."""

    @abstractmethod
    def delete(self, product_id: int) -> None:
        """Remove a product from the catalog."""
