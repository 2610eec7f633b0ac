"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from meraki.application.admin_auth import AdminGuard
from meraki.application.cart_session import CartSession
from meraki.domain.model.admin import AdminAccount
from meraki.domain.repository.purchase_tracker import PurchaseTracker
from meraki.domain.service.order_composer import PricingPolicy
from meraki.infrastructure.config import Settings
from meraki.infrastructure.persistence.database import Database
from meraki.infrastructure.persistence.json_cart_storage import JsonCartStorage
from meraki.infrastructure.persistence.sql_admin_repository import SqlAdminRepository
from meraki.infrastructure.persistence.sql_category_repository import (
    SqlCategoryRepository,
)
from meraki.infrastructure.persistence.sql_product_repository import (
    SqlProductRepository,
)
from meraki.infrastructure.security import BcryptPasswordHasher, JwtTokenService
from meraki.infrastructure.tracking.http_purchase_tracker import (
    HttpPurchaseTracker,
    NullPurchaseTracker,
)

logger = logging.getLogger(__name__)


@dataclass
class Container:
    settings: Settings
    database: Database
    products: SqlProductRepository
    categories: SqlCategoryRepository
    admins: SqlAdminRepository
    session: CartSession
    tracker: PurchaseTracker
    hasher: BcryptPasswordHasher
    tokens: JwtTokenService

    @property
    def policy(self) -> PricingPolicy:
        return self.settings.pricing_policy

    @property
    def guard(self) -> AdminGuard:
        return AdminGuard(self.tokens)


def purchase_tracker(settings: Settings) -> PurchaseTracker:
    if settings.TRACKING_URL:
        return HttpPurchaseTracker(settings.TRACKING_URL, timeout=settings.TRACKING_TIMEOUT)
    return NullPurchaseTracker()


def ensure_admin(admins: SqlAdminRepository, hasher: BcryptPasswordHasher, settings: Settings) -> None:
    """Seed the shared admin account on first start."""
    if admins.count() > 0:
        return
    admins.add(
        AdminAccount(
            id=None,
            email=settings.ADMIN_EMAIL,
            password_hash=hasher.hash(settings.ADMIN_PASSWORD),
            name=settings.ADMIN_NAME,
        )
    )
    logger.info("Seeded admin account %s", settings.ADMIN_EMAIL)


@contextmanager
def open_container(settings: Settings | None = None) -> Iterator[Container]:
    """Open the database, restore the cart session, and close on exit."""
    settings = settings or Settings()

    with Database(settings.DATABASE_URL) as database:
        hasher = BcryptPasswordHasher(rounds=settings.BCRYPT_ROUNDS)
        admins = SqlAdminRepository(database)
        ensure_admin(admins, hasher, settings)

        session = CartSession(JsonCartStorage(settings.CART_FILE))
        session.load()

        yield Container(
            settings=settings,
            database=database,
            products=SqlProductRepository(database),
            categories=SqlCategoryRepository(database),
            admins=admins,
            session=session,
            tracker=purchase_tracker(settings),
            hasher=hasher,
            tokens=JwtTokenService(settings.JWT_SECRET, settings.TOKEN_TTL_HOURS),
        )
