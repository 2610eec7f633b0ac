"""SQLAlchemy-backed implementation of AdminRepository."""

from __future__ import annotations

from sqlalchemy import func, select

from meraki.domain.model.admin import AdminAccount
from meraki.domain.repository.admin_repository import AdminRepository
from meraki.infrastructure.persistence.database import Database
from meraki.infrastructure.persistence.sql_models import AdminModel


class SqlAdminRepository(AdminRepository):

    def __init__(self, database: Database) -> None:
        self._db = database

    def get_by_email(self, email: str) -> AdminAccount | None:
        with self._db.session() as session:
            row = session.scalar(select(AdminModel).where(AdminModel.email == email))
            return self._to_domain(row) if row is not None else None

    def add(self, admin: AdminAccount) -> AdminAccount:
        with self._db.session() as session:
            row = AdminModel(
                email=admin.email,
                password_hash=admin.password_hash,
                name=admin.name,
            )
            session.add(row)
            session.flush()
            return self._to_domain(row)

    def count(self) -> int:
        with self._db.session() as session:
            return session.scalar(select(func.count()).select_from(AdminModel)) or 0

    @staticmethod
    def _to_domain(row: AdminModel) -> AdminAccount:
        return AdminAccount(
            id=row.id,
            email=row.email,
            password_hash=row.password_hash,
            name=row.name,
        )
