"""Application service: admin dashboard statistics (query)."""

from __future__ import annotations

from meraki.application.admin_auth import AdminGuard
from meraki.application.cart_session import CartSession
from meraki.application.dto import DashboardStatsDTO
from meraki.application.mappers import to_purchase_dto
from meraki.domain.repository.category_repository import CategoryRepository
from meraki.domain.repository.product_repository import ProductRepository

RECENT_PURCHASES = 5


class DashboardStatsHandler:

    def __init__(
        self,
        guard: AdminGuard,
        product_repo: ProductRepository,
        category_repo: CategoryRepository,
        session: CartSession,
    ) -> None:
        self._guard = guard
        self._product_repo = product_repo
        self._category_repo = category_repo
        self._session = session

    def handle(self, token: str | None) -> DashboardStatsDTO:
        self._guard.require(token)

        products = self._product_repo.list_all()
        purchases = self._session.state.purchases
        recent = sorted(purchases, key=lambda p: p.timestamp, reverse=True)

        return DashboardStatsDTO(
            total_products=len(products),
            total_categories=len(self._category_repo.list_all()),
            total_purchases=len(purchases),
            total_inventory=sum(p.inventory for p in products),
            recent_purchases=[to_purchase_dto(p) for p in recent[:RECENT_PURCHASES]],
        )
