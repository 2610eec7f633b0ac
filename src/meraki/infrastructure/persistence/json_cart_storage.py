"""JSON-file-backed implementation of CartStorage.

The file is a small scoped key-value store. Each of the two keys holds
a JSON-encoded string, the same shape a browser keeps in localStorage:

    {"meraki-cart": "[...]", "meraki-purchases": "[...]"}

Anything that cannot be decoded into valid domain objects is treated as
empty for that key, so one damaged entry never costs the whole session.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from decimal import Decimal, InvalidOperation
from pathlib import Path

from meraki.domain.exceptions import DomainException
from meraki.domain.model.cart import CartItem, Purchase
from meraki.domain.model.product import Product
from meraki.domain.model.value_objects import Money, Quantity
from meraki.domain.repository.cart_storage import CartStorage, StoredCart

logger = logging.getLogger(__name__)

CART_KEY = "meraki-cart"
PURCHASES_KEY = "meraki-purchases"

_DECODE_ERRORS = (
    ValueError,
    TypeError,
    KeyError,
    AttributeError,
    InvalidOperation,
    DomainException,
)


class JsonCartStorage(CartStorage):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    # --- CartStorage interface ------------------------------------------------

    def load(self) -> StoredCart | None:
        store = self._load_store()
        if CART_KEY not in store and PURCHASES_KEY not in store:
            return None
        return StoredCart(
            items=self._decode_key(store, CART_KEY, cart_item_from_raw),
            purchases=self._decode_key(store, PURCHASES_KEY, purchase_from_raw),
        )

    def save(self, items: tuple[CartItem, ...]) -> None:
        self._set_items({CART_KEY: [cart_item_to_raw(item) for item in items]})

    def save_purchases(self, purchases: tuple[Purchase, ...]) -> None:
        self._set_items({PURCHASES_KEY: [purchase_to_raw(p) for p in purchases]})

    def save_snapshot(
        self, items: tuple[CartItem, ...], purchases: tuple[Purchase, ...]
    ) -> None:
        self._set_items({
            CART_KEY: [cart_item_to_raw(item) for item in items],
            PURCHASES_KEY: [purchase_to_raw(p) for p in purchases],
        })

    # --- Decoding -------------------------------------------------------------

    @staticmethod
    def _decode_key(store: dict, key: str, decode) -> tuple:
        value = store.get(key)
        if value is None:
            return ()
        try:
            records = json.loads(value)
            if not isinstance(records, list):
                raise TypeError(f"expected a list, got {type(records).__name__}")
            return tuple(decode(raw) for raw in records)
        except _DECODE_ERRORS as exc:
            logger.warning("Discarding unreadable '%s' entry: %s", key, exc)
            return ()

    # --- File helpers ---------------------------------------------------------

    def _load_store(self) -> dict:
        if not self._file_path.exists():
            return {}
        try:
            store = json.loads(self._file_path.read_text(encoding="utf-8"))
        except ValueError as exc:
            logger.warning("Cart storage %s is corrupt, starting empty: %s", self._file_path, exc)
            return {}
        if not isinstance(store, dict):
            logger.warning("Cart storage %s has an unexpected shape, starting empty", self._file_path)
            return {}
        return store

    def _set_items(self, entries: dict[str, list[dict]]) -> None:
        """Update one or more keys in a single replace of the store file."""
        store = self._load_store()
        for key, records in entries.items():
            store[key] = json.dumps(records, ensure_ascii=False)
        self._write_store(store)

    def _write_store(self, store: dict) -> None:
        # Write a sibling temp file, then swap it in with os.replace.
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._file_path.parent, prefix=f".{self._file_path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(store, fh, indent=2, ensure_ascii=False)
                fh.write("\n")
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self._file_path)
        finally:
            # No-op after a successful replace.
            Path(tmp_name).unlink(missing_ok=True)


# --- Serialization ------------------------------------------------------------


def _number(amount: Decimal) -> int | float:
    return int(amount) if amount == amount.to_integral_value() else float(amount)


def product_to_raw(product: Product) -> dict:
    return {
        "id": product.id,
        "handle": product.handle,
        "title": product.title,
        "description": product.description,
        "image": product.image,
        "price": product.price,
        "category": product.category,
        "subcategory": product.subcategory,
        "highlights": list(product.highlights),
        "tags": list(product.tags),
        "brand": product.brand,
        "condition": product.condition,
        "inventory": product.inventory,
        "seo_title": product.seo_title,
        "seo_description": product.seo_description,
    }


def product_from_raw(raw: dict) -> Product:
    return Product(
        id=int(raw["id"]),
        handle=raw["handle"],
        title=raw["title"],
        description=raw.get("description", ""),
        image=raw.get("image", ""),
        price=raw.get("price"),
        category=raw.get("category", ""),
        subcategory=raw.get("subcategory") or "",
        highlights=tuple(raw.get("highlights") or ()),
        tags=tuple(raw.get("tags") or ()),
        brand=raw.get("brand", ""),
        condition=raw.get("condition", ""),
        inventory=raw.get("inventory") or 0,
        seo_title=raw.get("seo_title"),
        seo_description=raw.get("seo_description"),
    )


def cart_item_to_raw(item: CartItem) -> dict:
    return {
        "product": product_to_raw(item.product),
        "quantity": item.quantity.value,
        "addedAt": item.added_at,
    }


def cart_item_from_raw(raw: dict) -> CartItem:
    return CartItem(
        product=product_from_raw(raw["product"]),
        quantity=Quantity(raw["quantity"]),
        added_at=int(raw["addedAt"]),
    )


def purchase_to_raw(purchase: Purchase) -> dict:
    return {
        "id": purchase.id,
        "items": [cart_item_to_raw(item) for item in purchase.items],
        "total": _number(purchase.total.amount),
        "timestamp": purchase.timestamp,
        "whatsappSent": purchase.whatsapp_sent,
    }


def purchase_from_raw(raw: dict) -> Purchase:
    return Purchase(
        id=str(raw["id"]),
        items=tuple(cart_item_from_raw(item) for item in raw["items"]),
        total=Money(Decimal(str(raw["total"]))),
        timestamp=int(raw["timestamp"]),
        whatsapp_sent=bool(raw.get("whatsappSent", True)),
    )
