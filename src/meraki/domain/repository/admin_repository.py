"""Abstract repository for the admin account."""

from __future__ import annotations

from abc import ABC, abstractmethod

from meraki.domain.model.admin import AdminAccount


class AdminRepository(ABC):

    @abstractmethod
    def get_by_email(self, email: str) -> AdminAccount | None:
        """Return the admin account with this email, or None."""

    @abstractmethod
    def add(self, admin: AdminAccount) -> AdminAccount:
        """Insert an admin account and return it with its assigned ID."""

    @abstractmethod
    def count(self) -> int:
        """Number of admin accounts."""
