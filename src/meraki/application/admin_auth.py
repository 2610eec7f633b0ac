"""Application services: admin login and token checks.

There is exactly one shared admin credential. Every admin use case
takes the bearer token and calls ``AdminGuard.require`` before touching
the catalog.
"""

from __future__ import annotations

import logging

from meraki.application.dto import LoginResultDTO
from meraki.domain.exceptions import AuthenticationError, ValidationError
from meraki.domain.repository.admin_repository import AdminRepository
from meraki.domain.repository.credentials import PasswordHasher, TokenService

logger = logging.getLogger(__name__)


class AdminLoginHandler:

    def __init__(
        self,
        admin_repo: AdminRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self._admin_repo = admin_repo
        self._hasher = hasher
        self._tokens = tokens

    def handle(self, email: str, password: str) -> LoginResultDTO:
        if not email or not password:
            raise ValidationError("Email and password required")

        admin = self._admin_repo.get_by_email(email.strip())
        if admin is None or not self._hasher.verify(password, admin.password_hash):
            logger.warning("Failed admin login for %s", email)
            raise AuthenticationError("Invalid credentials")

        return LoginResultDTO(
            token=self._tokens.issue(admin.id, admin.email),  # type: ignore[arg-type]
            admin_id=admin.id,  # type: ignore[arg-type]
            email=admin.email,
            name=admin.name,
        )


class AdminGuard:

    def __init__(self, tokens: TokenService) -> None:
        self._tokens = tokens

    def require(self, token: str | None) -> dict:
        """Return the token claims or raise AuthenticationError."""
        if not token:
            raise AuthenticationError("Access token required")
        return self._tokens.verify(token)
