"""Application services: admin product management.

Every handler checks the admin token before touching the catalog.
"""

from __future__ import annotations

import dataclasses
import logging

from meraki.application.admin_auth import AdminGuard
from meraki.application.dto import ImportResultDTO, ProductSpec, SkippedRecordDTO
from meraki.domain.exceptions import DomainException, EntityNotFoundError, ValidationError
from meraki.domain.model.product import Product, slugify
from meraki.domain.repository.category_repository import CategoryRepository
from meraki.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("title", "description", "image", "brand", "condition")

# Fields an admin may change after creation. The handle is stable so
# links and saved carts keep resolving.
UPDATABLE_FIELDS = frozenset({
    "title", "description", "image", "price", "category", "subcategory",
    "highlights", "tags", "brand", "condition", "inventory",
    "seo_title", "seo_description",
})


class AddProductHandler:

    def __init__(
        self,
        guard: AdminGuard,
        product_repo: ProductRepository,
        category_repo: CategoryRepository,
    ) -> None:
        self._guard = guard
        self._product_repo = product_repo
        self._category_repo = category_repo

    def handle(self, token: str | None, spec: ProductSpec) -> Product:
        """Add a new product to the catalog."""
        self._guard.require(token)

        for name in _REQUIRED_FIELDS:
            value = getattr(spec, name)
            if not value or not value.strip():
                raise ValidationError(f"Product {name} is required")

        if self._category_repo.get_by_name(spec.category) is None:
            raise EntityNotFoundError(f"Category not found: '{spec.category}'")

        handle = slugify(spec.title)
        if not handle:
            raise ValidationError(f"Cannot derive a handle from title '{spec.title}'")
        if self._product_repo.get_by_handle(handle) is not None:
            raise ValidationError(f"Product with handle '{handle}' already exists")

        product = Product(
            id=0,  # assigned by the repository
            handle=handle,
            title=spec.title.strip(),
            description=spec.description.strip(),
            image=spec.image.strip(),
            price=spec.price,
            category=spec.category,
            subcategory=spec.subcategory,
            highlights=tuple(spec.highlights),
            tags=tuple(spec.tags),
            brand=spec.brand.strip(),
            condition=spec.condition.strip(),
            inventory=spec.inventory,
            seo_title=spec.seo_title,
            seo_description=spec.seo_description,
        )
        return self._product_repo.add(product)


class UpdateProductHandler:

    def __init__(
        self,
        guard: AdminGuard,
        product_repo: ProductRepository,
        category_repo: CategoryRepository,
    ) -> None:
        self._guard = guard
        self._product_repo = product_repo
        self._category_repo = category_repo

    def handle(self, token: str | None, product_id: int, **changes) -> Product:
        """Apply a partial update to a product.

        This does NOT affect carts or purchases — they hold a snapshot
        taken when the product was added.
        """
        self._guard.require(token)

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        for name in _REQUIRED_FIELDS:
            if name in changes and not str(changes[name]).strip():
                raise ValidationError(f"Product {name} is required")

        category = changes.get("category")
        if category is not None and self._category_repo.get_by_name(category) is None:
            raise EntityNotFoundError(f"Category not found: '{category}'")

        updated = dataclasses.replace(product, **changes)
        self._product_repo.update(updated)
        return updated


class DeleteProductHandler:

    def __init__(self, guard: AdminGuard, product_repo: ProductRepository) -> None:
        self._guard = guard
        self._product_repo = product_repo

    def handle(self, token: str | None, product_id: int) -> None:
        self._guard.require(token)

        if self._product_repo.get_by_id(product_id) is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        self._product_repo.delete(product_id)


def _text(raw: dict, name: str) -> str:
    value = raw.get(name)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Product {name} is required")
    return value.strip()


def _optional_text(raw: dict, name: str) -> str | None:
    value = raw.get(name)
    if value is None or isinstance(value, str):
        return value
    raise ValidationError(f"Product {name} must be text")


def _whole_number(raw: dict, name: str, default: int | None) -> int | None:
    """Accept ints, integral floats and digit strings; blank means *default*."""
    value = raw.get(name)
    if value is None or value == "":
        return default
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise ValidationError(f"Product {name} must be a whole number, got {value!r}")


def _text_list(raw: dict, name: str) -> tuple[str, ...]:
    value = raw.get(name) or ()
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f"Product {name} must be a list of text")
    return tuple(value)


class ImportProductsHandler:
    """Upsert products from catalog records keyed by handle.

    Records use the storefront's product JSON shape. Every record is
    validated before anything is written. A record that fails validation
    or names an unknown category is skipped and reported, not fatal.
    """

    def __init__(
        self,
        guard: AdminGuard,
        product_repo: ProductRepository,
        category_repo: CategoryRepository,
    ) -> None:
        self._guard = guard
        self._product_repo = product_repo
        self._category_repo = category_repo

    def handle(self, token: str | None, records: list) -> ImportResultDTO:
        self._guard.require(token)

        valid: list[Product] = []
        skipped: list[SkippedRecordDTO] = []
        for position, raw in enumerate(records, start=1):
            label = self._label(raw, position)
            try:
                valid.append(self._parse(raw))
            except DomainException as exc:
                logger.warning("Skipping product %s: %s", label, exc)
                skipped.append(SkippedRecordDTO(label=label, reason=str(exc)))

        created = updated = 0
        for product in valid:
            existing = self._product_repo.get_by_handle(product.handle)
            if existing is None:
                self._product_repo.add(product)
                created += 1
            else:
                self._product_repo.update(dataclasses.replace(product, id=existing.id))
                updated += 1

        return ImportResultDTO(created=created, updated=updated, skipped=skipped)

    @staticmethod
    def _label(raw, position: int) -> str:
        if isinstance(raw, dict):
            for key in ("handle", "title"):
                if isinstance(raw.get(key), str) and raw[key].strip():
                    return raw[key].strip()
        return f"record {position}"

    def _parse(self, raw) -> Product:
        if not isinstance(raw, dict):
            raise ValidationError("Product record must be a JSON object")

        fields = {name: _text(raw, name) for name in _REQUIRED_FIELDS}
        category = raw.get("category")
        if not isinstance(category, str) or self._category_repo.get_by_name(category) is None:
            raise EntityNotFoundError(f"Category not found: '{category}'")

        handle = raw.get("handle") or slugify(fields["title"])
        if not isinstance(handle, str) or not handle:
            raise ValidationError(f"Cannot derive a handle from title '{fields['title']}'")

        return Product(
            id=0,
            handle=handle,
            price=_whole_number(raw, "price", None),
            category=category,
            subcategory=_optional_text(raw, "subcategory") or "",
            highlights=_text_list(raw, "highlights"),
            tags=_text_list(raw, "tags"),
            inventory=_whole_number(raw, "inventory", 0),
            seo_title=_optional_text(raw, "seo_title"),
            seo_description=_optional_text(raw, "seo_description"),
            **fields,
        )
